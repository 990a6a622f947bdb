"""Typed exceptions for every failure the strip pipeline can report.

None of these are recovered from.  The CLI maps each one to exit status ``1``
and writes nothing to stdout.
"""


class HtmlStripError(Exception):
    """Base class for all pipeline errors."""


class UsageError(HtmlStripError):
    """Raised when the command line is malformed (e.g. wrong argument count)."""


class InputError(HtmlStripError):
    """Raised when the input document cannot be read."""


class ConfigError(HtmlStripError, ValueError):
    """Raised for malformed tag lists, selectors or parser settings."""


class ParseError(HtmlStripError):
    """Raised when the HTML tree cannot be constructed."""


class SerializeError(HtmlStripError):
    """Raised when the mutated tree cannot be turned back into text."""


class DecodeError(HtmlStripError, ValueError):
    """Raised when a placeholder token cannot be decoded."""


class ResidualPlaceholderError(DecodeError):
    """Raised when placeholder metadata survives restoration."""
