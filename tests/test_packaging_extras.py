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


def _extras(pyproject: dict[str, Any]) -> dict[str, list[str]]:
    return cast(dict[str, list[str]], pyproject.get("project", {}).get("optional-dependencies", {}))


def test_dev_extra_has_pytest() -> None:
    extras = _extras(_load_pyproject())
    assert "dev" in extras
    assert any(dep.startswith("pytest") for dep in extras["dev"])


def test_runtime_dependencies() -> None:
    deps = _load_pyproject()["project"]["dependencies"]
    names = {dep.split(">")[0].split("=")[0].strip().lower() for dep in deps}
    assert {"pydantic", "pyyaml", "typer"} <= names


def test_console_script_entrypoint() -> None:
    pyproject = _load_pyproject()
    scripts = pyproject.get("project", {}).get("scripts", {})
    assert scripts.get("randutf8") == "randutf8.cli:app"


def test_defaults_shipped_as_package_data() -> None:
    pyproject = _load_pyproject()
    package_data = pyproject["tool"]["setuptools"]["package-data"]
    assert "defaults.yml" in package_data["randutf8.config"]


def test_import_smoke() -> None:
    importlib.import_module("randutf8")
    importlib.import_module("randutf8.cli")
