"""Checks on the installed package surface: modules, exports and version."""

from __future__ import annotations

import importlib
import pkgutil
import tomllib
from pathlib import Path

import pytest

import htmlstrip

MODULES = sorted(
    info.name for info in pkgutil.walk_packages(htmlstrip.__path__, htmlstrip.__name__ + ".")
)


def test_version_matches_pyproject() -> None:
    pyproject = Path(__file__).resolve().parents[1] / "pyproject.toml"
    with pyproject.open("rb") as fh:
        declared = tomllib.load(fh)["project"]["version"]
    assert htmlstrip.__version__ == declared


@pytest.mark.parametrize("name", MODULES)
def test_module_documented(name: str) -> None:
    module = importlib.import_module(name)
    assert (module.__doc__ or "").strip(), f"{name} has no module docstring"


@pytest.mark.parametrize("name", MODULES)
def test_exports_resolve(name: str) -> None:
    module = importlib.import_module(name)
    for attr in getattr(module, "__all__", ()):
        assert hasattr(module, attr), f"{name}.__all__ lists missing {attr!r}"


def test_pipeline_stages_importable() -> None:
    for name in ("codec", "protect", "dom", "restore", "pipeline", "cli"):
        assert f"htmlstrip.{name}" in MODULES
