"""Span protector.

Every span opened by a configured start marker and closed by its end marker
is swapped for an opaque placeholder comment before the document reaches the
HTML parser.  A span is the start marker, one or more characters that are not
the end marker's first character, then the end marker.  This is a heuristic:
nested markers, or content containing the end marker's first character, are
not matched as a template engine would.

Pairs are processed in configured order.  Once a span has been replaced its
text is base64, so markers of later pairs cannot match inside it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Sequence

from htmlstrip import codec
from htmlstrip.config import TagPair
from htmlstrip.utils.logging import get_logger

logger = get_logger(__name__)

# Input is decoded with this handler so bytes that are not valid UTF-8
# round-trip through the payload unchanged.
TEXT_ERRORS = "surrogateescape"


@dataclass(slots=True)
class ProtectResult:
    """Protected text plus the number of spans replaced for each pair."""

    text: str
    counts: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts)


def span_pattern(pair: TagPair) -> re.Pattern[str]:
    """Return the regular expression matching one span of ``pair``."""

    stop = re.escape(pair.end[0])
    return re.compile(f"{re.escape(pair.start)}[^{stop}]+{re.escape(pair.end)}")


def protect_spans(
    text: str,
    pairs: Sequence[TagPair],
    namespace: str,
    *,
    encoding: str = "utf-8",
) -> ProtectResult:
    """Replace every matched span in ``text`` with its placeholder."""

    counts: list[int] = []
    for index, pair in enumerate(pairs):

        def _hide(match: re.Match[str], index: int = index) -> str:
            payload = match.group(0).encode(encoding, TEXT_ERRORS)
            return codec.encode(namespace, index, payload)

        text, n = span_pattern(pair).subn(_hide, text)
        counts.append(n)
        logger.debug("pair %d (%s ... %s): protected %d span(s)", index, pair.start, pair.end, n)
    return ProtectResult(text=text, counts=counts)


__all__ = ["TEXT_ERRORS", "ProtectResult", "span_pattern", "protect_spans"]
