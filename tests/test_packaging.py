"""Tests for packaging metadata and optional dependencies."""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path
from typing import Any, cast


def _load_pyproject() -> dict[str, Any]:
    path = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with path.open("rb") as fh:
        return tomllib.load(fh)


def test_optional_dependency_groups() -> None:
    extras = cast(dict[str, list[str]], _load_pyproject()["project"]["optional-dependencies"])
    assert {"dev", "lxml", "html5lib", "all"}.issubset(extras)
    assert set(extras["all"]).issuperset(extras["lxml"] + extras["html5lib"])


def test_console_script_entrypoint() -> None:
    scripts = _load_pyproject()["project"]["scripts"]
    assert scripts["html-strip"] == "htmlstrip.cli:main"


def test_defaults_shipped_as_package_data() -> None:
    package_data = _load_pyproject()["tool"]["setuptools"]["package-data"]
    assert "defaults.yml" in package_data["htmlstrip.config"]


def test_import_smoke() -> None:
    importlib.import_module("htmlstrip")
    importlib.import_module("htmlstrip.cli")
