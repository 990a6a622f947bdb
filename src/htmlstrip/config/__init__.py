"""Configuration loading utilities.

Precedence of configuration sources:
    1. Package defaults (``defaults.yml``)
    2. Optional user-provided YAML passed to :func:`load_config`
    3. Command line flags, applied by :mod:`htmlstrip.cli`
"""

from .schema import (
    StripConfig,
    TagPair,
    load_config,
    parse_selector_list,
    parse_tag_list,
)

__all__ = [
    "StripConfig",
    "TagPair",
    "load_config",
    "parse_selector_list",
    "parse_tag_list",
]
