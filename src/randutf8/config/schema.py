"""Typed configuration schema and loader for the randutf8 package."""

from __future__ import annotations

import os
from collections.abc import Mapping
from importlib import resources as importlib_resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint

from randutf8.utils.errors import ConfigError

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class GeneratorSettings(BaseModel):
    """Tuning constants for :func:`randutf8.generator.rand_utf8`.

    The defaults are the calibrated values; the distribution check in
    :mod:`randutf8.evaluation.distribution` should be re-run after changing
    them.
    """

    buffer_size: conint(ge=1) = 32
    small_weight: conint(ge=1) = 4
    full_weight: conint(ge=0) = 1
    tail_threshold: conint(ge=0) = 4

    model_config = ConfigDict(extra="forbid", frozen=True)


class SeedSettings(BaseModel):
    """Seed for the CLI random source."""

    seed_env: str
    value: int | None = None

    model_config = ConfigDict(extra="forbid")


class EvaluationSettings(BaseModel):
    """Sample size and pass bounds for the byte distribution check."""

    count: conint(ge=1)
    length: conint(ge=0)
    low_min_ratio: confloat(ge=0.0, le=1.0) = 0.5
    lead_min_ratio: confloat(ge=0.0, le=1.0) = 0.04

    model_config = ConfigDict(extra="forbid")


class ConfigModel(BaseModel):
    """Top-level configuration model."""

    schema_version: conint(ge=1)
    generator: GeneratorSettings
    seed: SeedSettings
    evaluation: EvaluationSettings

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Loader utilities
# ---------------------------------------------------------------------------


def deep_merge_dicts(a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge mapping ``b`` onto ``a`` returning a new dict."""

    result: dict[str, Any] = dict(a)
    for key, b_val in b.items():
        if key in result and isinstance(result[key], dict) and isinstance(b_val, dict):
            result[key] = deep_merge_dicts(result[key], b_val)
        else:
            result[key] = b_val
    return result


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read config {path}: {exc.strerror or exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config {path} must contain a mapping at the top level")
    return data


def load_config(
    path: str | os.PathLike[str] | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ConfigModel:
    """Load configuration from defaults and optional user overrides.

    Precedence of sources: package ``defaults.yml`` < user-provided YAML <
    environment variable named by ``seed.seed_env``.  Schema violations raise
    :class:`pydantic.ValidationError`; unreadable files and malformed seeds
    raise :class:`~randutf8.utils.errors.ConfigError`.
    """

    with (
        importlib_resources.files("randutf8.config")
        .joinpath("defaults.yml")
        .open("r", encoding="utf-8") as f
    ):
        defaults = yaml.safe_load(f) or {}

    if path is not None:
        merged = deep_merge_dicts(defaults, _read_yaml(Path(path)))
    else:
        merged = defaults

    cfg = ConfigModel.model_validate(merged)

    environ = env if env is not None else os.environ
    seed_env = cfg.seed.seed_env
    raw = environ.get(seed_env, "").strip()
    if raw:
        try:
            cfg.seed.value = int(raw, 0)
        except ValueError as exc:
            raise ConfigError(f"{seed_env} must be an integer, got {raw!r}") from exc

    return cfg


__all__ = [
    "ConfigModel",
    "GeneratorSettings",
    "SeedSettings",
    "EvaluationSettings",
    "deep_merge_dicts",
    "load_config",
]
