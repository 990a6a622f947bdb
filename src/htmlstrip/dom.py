"""HTML tree mutation: parse, strip matching elements, serialize.

By the time text reaches this module every foreign span is an inert comment,
so elements can be removed freely without disturbing protected content.  A
placeholder inside a removed element is discarded together with it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import soupsieve
from bs4 import BeautifulSoup, FeatureNotFound
from bs4.builder import ParserRejectedMarkup

from htmlstrip.utils.errors import ConfigError, ParseError, SerializeError
from htmlstrip.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class MutateResult:
    """Serialized document and number of elements removed."""

    text: str
    removed: int


def parse_document(text: str, parser: str = "html.parser") -> BeautifulSoup:
    """Build a mutable tree from ``text`` with the named BeautifulSoup backend."""

    try:
        return BeautifulSoup(text, parser)
    except FeatureNotFound as exc:
        raise ConfigError(f"HTML parser '{parser}' is not available: {exc}") from exc
    except (ParserRejectedMarkup, AssertionError) as exc:
        raise ParseError(f"could not parse document: {exc}") from exc


def strip_elements(soup: BeautifulSoup, selectors: Sequence[str]) -> int:
    """Remove every element matching each selector, in order.

    Each selector is applied exhaustively before the next one runs.  Returns
    the number of elements removed; descendants removed along with a matched
    ancestor are not counted twice.
    """

    removed = 0
    for selector in selectors:
        selector = selector.strip()
        if not selector:
            continue
        try:
            matches = soup.select(selector)
        except soupsieve.SelectorSyntaxError as exc:
            raise ConfigError(f"invalid selector '{selector}': {exc}") from exc
        count = 0
        for element in matches:
            # already gone with an ancestor matched earlier in this list
            if element.decomposed:
                continue
            element.decompose()
            count += 1
        logger.debug("selector %r removed %d element(s)", selector, count)
        removed += count
    return removed


def serialize_document(soup: BeautifulSoup, formatter: str = "minimal") -> str:
    try:
        return soup.decode(formatter=formatter)
    except (RecursionError, ValueError, TypeError) as exc:
        raise SerializeError(f"could not serialize document: {exc}") from exc


def mutate(
    text: str,
    selectors: Sequence[str],
    *,
    parser: str = "html.parser",
    formatter: str = "minimal",
) -> MutateResult:
    """Parse ``text``, strip ``selectors`` and serialize the result."""

    soup = parse_document(text, parser)
    removed = strip_elements(soup, selectors)
    return MutateResult(text=serialize_document(soup, formatter), removed=removed)


__all__ = [
    "MutateResult",
    "parse_document",
    "strip_elements",
    "serialize_document",
    "mutate",
]
