"""Typer-based command line interface for the random UTF-8 generator.

``generate`` prints exact-length random strings, ``distribution`` tallies the
byte values of many generated strings and prints the per-byte report used to
calibrate the sampler mix.

Exit codes
----------
0 success
2 usage error (reported by typer)
4 configuration error
6 distribution check failure (strict mode)
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import NoReturn, Optional

import typer
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .evaluation.distribution import (
    check_bounds,
    format_report,
    naive_code_points,
    sample_histogram,
    summarize,
)
from .generator import rand_utf8
from .rng import rng_from_seed
from .utils.errors import ConfigError
from .utils.logging import configure

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")
    os.environ.setdefault("RICH_DISABLE_NO_COLOR", "1")

app = typer.Typer(
    name="randutf8",
    help="Random UTF-8 strings of an exact byte length. Use 'randutf8 generate' to emit strings.",
)


class OutputFormat(str, Enum):
    text = "text"
    hex = "hex"
    json = "json"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> NoReturn:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _load(config_path: Path | None) -> ConfigModel:
    try:
        return load_config(config_path)
    except (ValidationError, ConfigError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])


def _render(text: str, fmt: OutputFormat) -> str:
    if fmt is OutputFormat.hex:
        return text.encode("utf-8").hex()
    if fmt is OutputFormat.json:
        return json.dumps(text)
    return text


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


@app.callback()
def main() -> None:
    """Entry point for the randutf8 command group."""
    pass


@app.command()
def generate(  # noqa: PLR0913
    length: int = typer.Option(  # noqa: B008
        ..., "--length", "-n", min=0, help="Encoded size of each string in bytes"
    ),
    count: int = typer.Option(1, "--count", "-c", min=0, help="Number of strings"),  # noqa: B008
    seed: Optional[int] = typer.Option(  # noqa: B008
        None, "--seed", help="Seed for reproducible output (overrides config)"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    fmt: OutputFormat = typer.Option(  # noqa: B008
        OutputFormat.hex, "--format", "-f", help="Output encoding of each string"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Print ``count`` random strings of exactly ``length`` UTF-8 bytes."""

    if verbose:
        configure(verbose=True)
    cfg = _load(config_path)
    rng = rng_from_seed(seed if seed is not None else cfg.seed.value)

    with Timing() as t_gen:
        strings = [rand_utf8(rng, length, settings=cfg.generator) for _ in range(count)]
    if verbose:
        typer.echo(f"Generated {len(strings)} strings in {t_gen.ms:.1f} ms", err=True)

    for text in strings:
        typer.echo(_render(text, fmt))


@app.command()
def distribution(  # noqa: PLR0913
    count: Optional[int] = typer.Option(  # noqa: B008
        None, "--count", "-c", min=1, help="Number of strings to sample"
    ),
    length: Optional[int] = typer.Option(  # noqa: B008
        None, "--length", "-n", min=0, help="Encoded size of each string in bytes"
    ),
    seed: Optional[int] = typer.Option(  # noqa: B008
        None, "--seed", help="Seed for reproducible output (overrides config)"
    ),
    naive: bool = typer.Option(  # noqa: B008
        False, "--naive", help="Sample uniform code points instead, for comparison"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    strict: bool = typer.Option(  # noqa: B008
        False,
        "--strict/--no-strict",
        help="Exit non-zero when a byte value falls outside its bound",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Print the byte-value histogram of many generated strings."""

    if verbose:
        configure(verbose=True)
    cfg = _load(config_path)
    rng = rng_from_seed(seed if seed is not None else cfg.seed.value)
    n_strings = count if count is not None else cfg.evaluation.count
    n_bytes = length if length is not None else cfg.evaluation.length

    with Timing() as t_sample:
        if naive:
            histogram = sample_histogram(
                rng, count=n_strings, length=n_bytes, generator=naive_code_points
            )
        else:
            histogram = sample_histogram(
                rng,
                count=n_strings,
                length=n_bytes,
                generator=lambda r, n: rand_utf8(r, n, settings=cfg.generator),
            )
    if verbose:
        typer.echo(f"Sampled {n_strings} strings in {t_sample.ms:.1f} ms", err=True)

    report = summarize(histogram)
    for line in format_report(report):
        typer.echo(line)

    failures = check_bounds(
        report,
        low_min_ratio=cfg.evaluation.low_min_ratio,
        lead_min_ratio=cfg.evaluation.lead_min_ratio,
    )
    if failures:
        typer.echo(f"{len(failures)} byte values outside bounds", err=True)
        if strict:
            _safe_exit(6, None)
