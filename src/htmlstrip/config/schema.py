"""Typed configuration schema and loader for the strip pipeline."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, conint, constr, field_validator

from htmlstrip.utils.errors import ConfigError

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class TagPair(BaseModel):
    """Start and end markers delimiting foreign syntax to keep verbatim.

    Markers are trimmed of surrounding whitespace and must not be empty.
    """

    start: str
    end: str

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("start", "end")
    @classmethod
    def _non_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("tag markers must not be empty")
        return value


class StripConfig(BaseModel):
    """Top-level configuration model.

    ``tag_pairs`` is ordered; a pair's position is the index embedded in its
    placeholders.
    """

    schema_version: conint(ge=1) = 1
    namespace: constr(min_length=1, pattern=r"^\S+$") = "HTML_STRIP"
    strip_selectors: list[str]
    tag_pairs: list[TagPair]
    parser: Literal["html.parser", "lxml", "html5lib"] = "html.parser"
    formatter: Literal["minimal", "html", "html5"] = "minimal"
    encoding: str = "utf-8"
    fail_on_residual: bool = True

    model_config = ConfigDict(extra="forbid")

    @field_validator("strip_selectors")
    @classmethod
    def _drop_blank_selectors(cls, value: list[str]) -> list[str]:
        return [s.strip() for s in value if s.strip()]


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def layer_settings(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Fold ``layers`` left to right; later layers win key by key.

    Nested mappings are folded recursively.  Lists such as ``tag_pairs`` are
    replaced wholesale, never concatenated.
    """

    folded: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            current = folded.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                value = layer_settings(current, value)
            folded[key] = value
    return folded


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> StripConfig:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    ``overrides`` (used by the CLI for flags that were given explicitly).
    Invalid values raise :class:`pydantic.ValidationError`.
    """

    with (
        importlib_resources.files("htmlstrip.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        layers: list[Mapping[str, Any]] = [yaml.safe_load(f) or {}]

    if path is not None:
        with Path(path).open("r", encoding="utf-8") as f:
            user = yaml.safe_load(f) or {}
        if not isinstance(user, dict):
            raise ConfigError(f"{path}: top level of a config file must be a mapping")
        layers.append(user)

    if overrides:
        layers.append(overrides)

    return StripConfig.model_validate(layer_settings(*layers))


def _split_top_level(value: str) -> list[str]:
    """Split ``value`` on commas outside brackets, parentheses and quotes."""

    parts: list[str] = []
    buf: list[str] = []
    depth = 0
    quote: str | None = None
    for ch in value:
        if quote is not None:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "[(":
            depth += 1
        elif ch in "])" and depth > 0:
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(buf))
            buf = []
            continue
        buf.append(ch)
    parts.append("".join(buf))
    return parts


def parse_selector_list(value: str) -> list[str]:
    """Return the selectors in a comma separated list.

    Commas inside attribute selectors or ``:is(...)`` style arguments do not
    split.  Blank entries are dropped, so ``""`` disables stripping.
    """

    return [part.strip() for part in _split_top_level(value) if part.strip()]


def parse_tag_list(value: str) -> list[TagPair]:
    """Return tag pairs from a flat ``start1,end1,start2,end2`` list.

    Raises
    ------
    ConfigError
        If the list has an odd number of entries or a marker is blank.
    """

    tags = value.split(",")
    if len(tags) % 2 == 1:
        raise ConfigError("ignore tags must be in pairs")
    pairs: list[TagPair] = []
    for i in range(0, len(tags), 2):
        start, end = tags[i].strip(), tags[i + 1].strip()
        if not start or not end:
            raise ConfigError(f"invalid tags '{tags[i]},{tags[i + 1]}'")
        pairs.append(TagPair(start=start, end=end))
    return pairs


__all__ = [
    "StripConfig",
    "TagPair",
    "layer_settings",
    "load_config",
    "parse_selector_list",
    "parse_tag_list",
]
