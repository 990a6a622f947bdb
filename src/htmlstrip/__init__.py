"""Strip elements from HTML documents while preserving template syntax.

Foreign spans such as ``{% ... %}`` are hidden inside base64 placeholder
comments before the document is parsed, and restored verbatim after the
stripped tree has been serialized.  See :mod:`htmlstrip.pipeline` for the
entry point and :mod:`htmlstrip.cli` for the command line interface.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
