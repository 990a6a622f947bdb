"""The strip pipeline: ``Raw -> Protected -> Mutated -> Restored``.

The whole input is buffered and every stage runs to completion before the
next one starts.  Placeholders must be complete before they are decoded, so
nothing is streamed.  Any :class:`~htmlstrip.utils.errors.HtmlStripError`
propagates to the caller; a :class:`PipelineResult` exists only for a run
that reached ``RESTORED``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from time import perf_counter

from htmlstrip import codec
from htmlstrip.config import StripConfig
from htmlstrip.dom import mutate
from htmlstrip.protect import TEXT_ERRORS, protect_spans
from htmlstrip.restore import count_unrestored, restore_spans
from htmlstrip.utils.errors import ResidualPlaceholderError
from htmlstrip.utils.logging import get_logger

logger = get_logger(__name__)


class Stage(Enum):
    """States of a single run.  No state is revisited."""

    RAW = "raw"
    PROTECTED = "protected"
    MUTATED = "mutated"
    RESTORED = "restored"
    ABORTED = "aborted"


@dataclass(slots=True, frozen=True)
class PipelineResult:
    """Outcome of a successful run."""

    text: str
    stage: Stage
    protected: int
    removed: int
    restored: int
    timings: dict[Stage, float] = field(default_factory=dict)

    @property
    def discarded(self) -> int:
        """Placeholders that disappeared together with stripped elements."""

        return self.protected - self.restored


@contextmanager
def _stage(timings: dict[Stage, float], reached: Stage) -> Iterator[None]:
    """Record milliseconds spent until ``reached`` in ``timings``."""

    started = perf_counter()
    yield
    timings[reached] = (perf_counter() - started) * 1000.0


def decode_input(raw: bytes, encoding: str = "utf-8") -> str:
    """Decode ``raw`` so that undecodable bytes survive a round trip."""

    return raw.decode(encoding, TEXT_ERRORS)


def encode_output(text: str, encoding: str = "utf-8") -> bytes:
    return text.encode(encoding, TEXT_ERRORS)


def run_pipeline(raw: bytes, cfg: StripConfig) -> PipelineResult:
    """Strip ``cfg.strip_selectors`` from ``raw`` preserving protected spans.

    Raises
    ------
    ParseError, SerializeError, ConfigError
        From the HTML tree stage.
    DecodeError
        If a placeholder cannot be decoded, or a placeholder created by this
        run is left unrestored while ``cfg.fail_on_residual`` is set.
    """

    stage = Stage.RAW
    timings: dict[Stage, float] = {}
    try:
        text = decode_input(raw, cfg.encoding)

        with _stage(timings, Stage.PROTECTED):
            protected = protect_spans(text, cfg.tag_pairs, cfg.namespace, encoding=cfg.encoding)
        stage = Stage.PROTECTED
        logger.info("Protected %d span(s) in %.1f ms", protected.total, timings[stage])

        with _stage(timings, Stage.MUTATED):
            mutated = mutate(
                protected.text,
                cfg.strip_selectors,
                parser=cfg.parser,
                formatter=cfg.formatter,
            )
        stage = Stage.MUTATED
        logger.info("Removed %d element(s) in %.1f ms", mutated.removed, timings[stage])

        with _stage(timings, Stage.RESTORED):
            restored = restore_spans(
                mutated.text, cfg.tag_pairs, cfg.namespace, encoding=cfg.encoding
            )
            missing = count_unrestored(
                text, mutated.text, restored, cfg.tag_pairs, cfg.namespace
            )
        if any(missing):
            index = next(i for i, n in enumerate(missing) if n)
            msg = (
                f"{sum(missing)} placeholder(s) could not be restored: "
                f"{codec.placeholder_marker(cfg.namespace, index)}"
            )
            if cfg.fail_on_residual:
                raise ResidualPlaceholderError(msg)
            logger.warning(msg)
        stage = Stage.RESTORED
        logger.info("Restored %d span(s) in %.1f ms", restored.total, timings[stage])
    except Exception:
        logger.debug("run %s after stage %s", Stage.ABORTED.value, stage.value)
        raise

    result = PipelineResult(
        text=restored.text,
        stage=stage,
        protected=protected.total,
        removed=mutated.removed,
        restored=restored.total,
        timings=timings,
    )
    if result.discarded:
        logger.info("%d placeholder(s) discarded with stripped elements", result.discarded)
    return result


__all__ = [
    "Stage",
    "PipelineResult",
    "decode_input",
    "encode_output",
    "run_pipeline",
]
