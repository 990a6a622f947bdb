"""Typer-based command line interface for the strip pipeline.

``html-strip FILE`` reads ``FILE``, removes the configured elements while
keeping template spans such as ``{% ... %}`` byte-for-byte, and writes the
result to stdout.  The input file is never modified.

Exit codes
----------
0 success
1 any failure: wrong argument count, unreadable input, bad configuration,
  parse/serialize failure or an undecodable placeholder.  Nothing is written
  to stdout in that case.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer
import yaml
from pydantic import ValidationError

from .config import StripConfig, load_config, parse_selector_list, parse_tag_list
from .pipeline import encode_output, run_pipeline
from .utils.errors import ConfigError, HtmlStripError, InputError, UsageError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

EXIT_FAILURE = 1

app = typer.Typer(
    name="html-strip",
    help="Strip elements from an HTML file without corrupting template tags.",
    add_completion=False,
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(f"error: {msg}", err=True)
    raise typer.Exit(code)


def _collect_overrides(
    *,
    hidden: str | None,
    strip: str | None,
    ignore: str | None,
) -> dict[str, Any]:
    """Return config overrides for the flags that were given explicitly."""

    overrides: dict[str, Any] = {}
    if hidden is not None:
        overrides["namespace"] = hidden
    if strip is not None:
        overrides["strip_selectors"] = parse_selector_list(strip)
    if ignore is not None:
        overrides["tag_pairs"] = [p.model_dump() for p in parse_tag_list(ignore)]
    return overrides


def _build_config(
    config_path: Path | None,
    *,
    hidden: str | None,
    strip: str | None,
    ignore: str | None,
) -> StripConfig:
    try:
        overrides = _collect_overrides(hidden=hidden, strip=strip, ignore=ignore)
        return load_config(config_path, overrides=overrides)
    except ValidationError as exc:
        first = exc.errors()[0]
        loc = ".".join(str(part) for part in first["loc"])
        raise ConfigError(f"invalid configuration: {loc}: {first['msg']}") from exc
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"could not load config: {exc}") from exc


def _read_input(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InputError(str(exc)) from exc


@app.command()
def run(
    files: Optional[list[Path]] = typer.Argument(  # noqa: B008
        None, metavar="FILE", help="HTML file to process", show_default=False
    ),
    hidden: Optional[str] = typer.Option(  # noqa: B008
        None, "-h", "--hidden", help="Hidden comment name [default: HTML_STRIP]"
    ),
    strip: Optional[str] = typer.Option(  # noqa: B008
        None,
        "-s",
        "--strip",
        help='Elements to strip [default: script,noscript,link[rel="preload"][as="style"]]',
    ),
    ignore: Optional[str] = typer.Option(  # noqa: B008
        None, "-i", "--ignore", help="Special tags to ignore, as start,end pairs [default: {%,%}]"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Strip elements from FILE and write the result to stdout."""

    configure_logging(verbose)
    try:
        if not files or len(files) != 1:
            raise UsageError("please specify exactly one file to operate on")
        cfg = _build_config(config_path, hidden=hidden, strip=strip, ignore=ignore)
        raw = _read_input(files[0])
        result = run_pipeline(raw, cfg)
    except HtmlStripError as exc:
        _safe_exit(EXIT_FAILURE, str(exc))

    typer.echo(encode_output(result.text, cfg.encoding), nl=False)


def main() -> None:
    """Console script entry point."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
