"""Byte-value distribution harness.

Generated strings are encoded to UTF-8 and every byte is tallied into a
256-slot histogram.  Each slot is compared to the mean slot count with a
symmetric ratio ``min(count, mean) / max(count, mean)``: ``1.0`` means the
slot is exactly average, values near ``0`` mean the byte is (nearly) absent or
heavily over-represented.  The ``score`` is the sum of all ratios, so a
perfectly flat histogram scores 256.

Some bytes can never appear in well-formed UTF-8 (``0xC0``, ``0xC1`` and
``0xF5``-``0xFF``) and ``0x00`` is filtered by the generator, so the pass
bounds in :func:`check_bounds` only cover two ranges:

* ``1``-``191``: ASCII plus continuation bytes, held to ``low_min_ratio``;
* ``194``-``244``: multi-byte lead bytes, held to the looser
  ``lead_min_ratio``.

:func:`naive_code_points` is the baseline the generator is measured against.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from randutf8.generator import rand_utf8
from randutf8.rng import RandomSource
from randutf8.sampler import CodePointSampler

__all__ = [
    "LOW_RANGE",
    "LEAD_RANGE",
    "DistributionReport",
    "byte_histogram",
    "sample_histogram",
    "naive_code_points",
    "summarize",
    "check_bounds",
    "format_report",
]

LOW_RANGE = range(1, 192)
LEAD_RANGE = range(194, 245)

Generator = Callable[[RandomSource, int], str]


@dataclass(slots=True, frozen=True)
class DistributionReport:
    """Summary statistics of a byte histogram."""

    counts: tuple[int, ...]
    min: int
    max: int
    mean: float
    ratios: tuple[float, ...]

    @property
    def score(self) -> float:
        """Sum of per-byte ratios; 256 for a perfectly flat histogram."""

        return sum(self.ratios)


def byte_histogram(strings: Iterable[str]) -> list[int]:
    """Count every UTF-8 byte of ``strings`` into 256 slots."""

    counts = [0] * 256
    for text in strings:
        for b in text.encode("utf-8"):
            counts[b] += 1
    return counts


def sample_histogram(
    rng: RandomSource,
    *,
    count: int,
    length: int,
    generator: Generator = rand_utf8,
) -> list[int]:
    """Histogram of ``count`` strings produced by ``generator(rng, length)``."""

    return byte_histogram(generator(rng, length) for _ in range(count))


def naive_code_points(rng: RandomSource, length: int) -> str:
    """Return ``length`` uniformly random scalar values (not bytes).

    This is the skewed baseline: nearly all of the code point space encodes to
    four bytes, each at or above ``0x80``.
    """

    sampler = CodePointSampler()
    return "".join(sampler.next(rng) for _ in range(length))


def _ratio(count: float, mean: float) -> float:
    if count == mean:
        return 1.0
    if count > mean:
        return mean / count
    return count / mean


def summarize(histogram: Iterable[int]) -> DistributionReport:
    """Build a :class:`DistributionReport` from a 256-slot histogram."""

    counts = tuple(histogram)
    if len(counts) != 256:
        raise ValueError(f"histogram must have 256 slots, got {len(counts)}")
    mean = sum(counts) / len(counts)
    return DistributionReport(
        counts=counts,
        min=min(counts),
        max=max(counts),
        mean=mean,
        ratios=tuple(_ratio(c, mean) for c in counts),
    )


def check_bounds(
    report: DistributionReport,
    *,
    low_min_ratio: float,
    lead_min_ratio: float,
) -> list[int]:
    """Return the byte values whose ratio falls at or below its bound."""

    failures = [b for b in LOW_RANGE if report.ratios[b] <= low_min_ratio]
    failures.extend(b for b in LEAD_RANGE if report.ratios[b] <= lead_min_ratio)
    return failures


def format_report(report: DistributionReport) -> list[str]:
    """Render ``report`` as printable lines, one per byte value."""

    lines = [f"min: {report.min}, max: {report.max}, mean: {report.mean:.2f}"]
    lines.extend(
        f"{i:03}: {count:04} {ratio:0.2f}"
        for i, (count, ratio) in enumerate(zip(report.counts, report.ratios))
    )
    lines.append(f"-- score_sum: {report.score:0.2f} --")
    return lines
