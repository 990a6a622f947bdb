"""Span restorer.

A placeholder can reach the serialized output in exactly two textual forms:

* raw: ``<!-- ___NS_0___ <base64> -->``, the usual case for comments;
* entity-escaped: ``&lt;!-- ___NS_0___ <base64> --&gt;``, produced when the
  comment text ended up inside an attribute value or other escaped context.

For each tag pair, in configured order, the raw form is restored first and
the escaped form second.  A span of pair ``i`` may itself contain placeholders
of pairs ``0..i-1`` (protection is layered), so those are restored inside each
decoded payload.  A token that does not decode aborts the run; there is no
partial output.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from htmlstrip import codec
from htmlstrip.config import TagPair
from htmlstrip.protect import TEXT_ERRORS
from htmlstrip.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class RestoreResult:
    """Restored text plus per-pair counts of raw and escaped tokens.

    ``raw_counts`` and ``escaped_counts`` only cover tokens found in the text
    handed to :func:`restore_spans`; ``nested`` counts tokens restored inside
    other payloads.
    """

    text: str
    raw_counts: list[int] = field(default_factory=list)
    escaped_counts: list[int] = field(default_factory=list)
    nested: int = 0

    def consumed(self, pair_index: int) -> int:
        return self.raw_counts[pair_index] + self.escaped_counts[pair_index]

    @property
    def total(self) -> int:
        return sum(self.raw_counts) + sum(self.escaped_counts) + self.nested


def token_pattern(namespace: str, pair_index: int, *, escaped: bool = False) -> re.Pattern[str]:
    """Return the regular expression locating one placeholder token."""

    prefix = codec.placeholder_prefix(namespace, pair_index, escaped=escaped)
    suffix = codec.placeholder_suffix(escaped=escaped)
    return re.compile(f"{re.escape(prefix)}[^ ]+{re.escape(suffix)}")


def _restore_form(
    text: str,
    pairs: Sequence[TagPair],
    namespace: str,
    pair_index: int,
    *,
    escaped: bool,
    encoding: str,
) -> tuple[str, int, int]:
    """Return ``(text, matched, nested)`` for one pair in one textual form."""

    nested = 0

    def _reveal(match: re.Match[str]) -> str:
        nonlocal nested
        payload = codec.decode(match.group(0), namespace, pair_index, escaped=escaped)
        span = payload.decode(encoding, TEXT_ERRORS)
        if pair_index:
            inner = restore_spans(span, pairs[:pair_index], namespace, encoding=encoding)
            nested += inner.total
            span = inner.text
        return span

    text, matched = token_pattern(namespace, pair_index, escaped=escaped).subn(_reveal, text)
    return text, matched, nested


def restore_spans(
    text: str,
    pairs: Sequence[TagPair],
    namespace: str,
    *,
    encoding: str = "utf-8",
) -> RestoreResult:
    """Replace every placeholder in ``text`` with the span it carries.

    Raises
    ------
    DecodeError
        If any token's payload is not valid base64.
    """

    result = RestoreResult(text=text)
    for index in range(len(pairs)):
        for escaped in (False, True):
            text, matched, nested = _restore_form(
                text, pairs, namespace, index, escaped=escaped, encoding=encoding
            )
            (result.escaped_counts if escaped else result.raw_counts).append(matched)
            result.nested += nested
        logger.debug(
            "pair %d: restored %d raw and %d escaped token(s)",
            index,
            result.raw_counts[index],
            result.escaped_counts[index],
        )
    result.text = text
    return result


def count_unrestored(
    source: str,
    mutated: str,
    restored: RestoreResult,
    pairs: Sequence[TagPair],
    namespace: str,
) -> list[int]:
    """Return, per pair, placeholders created by this run that were not restored.

    ``source`` is the decoded input and ``mutated`` the serialized tree before
    restoration.  Markers the input already contained are subtracted, so
    document text that only looks like a placeholder is never reported.
    """

    missing: list[int] = []
    for index in range(len(pairs)):
        marker = codec.placeholder_marker(namespace, index)
        from_document = source.count(marker)
        leftover = mutated.count(marker) - restored.consumed(index) - from_document
        missing.append(max(0, leftover))
    return missing


__all__ = ["RestoreResult", "token_pattern", "restore_spans", "count_unrestored"]
