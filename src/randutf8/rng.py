"""Randomness source protocol and seeding helpers.

The generator never owns its randomness: callers inject a
:class:`RandomSource`, which only has to provide uniform bytes and bounded
integers.  Any :class:`random.Random` satisfies the protocol structurally, so
``random.Random(0)`` yields fully reproducible output.  A source is not
synchronized; give each thread its own instance.
"""

from __future__ import annotations

import random
from typing import MutableSequence, Protocol, TypeVar, runtime_checkable

from randutf8.config import ConfigModel

__all__ = ["RandomSource", "rng_from_seed", "rng_from_config", "shuffle"]

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Capability consumed by the samplers and the generator."""

    def randbytes(self, n: int) -> bytes:
        """Return ``n`` uniformly random bytes."""

        ...

    def randint(self, a: int, b: int) -> int:
        """Return a uniform integer ``N`` with ``a <= N <= b``."""

        ...


def rng_from_seed(seed: int | None) -> random.Random:
    """Return a deterministic :class:`~random.Random` seeded with ``seed``.

    ``None`` seeds from the operating system instead.
    """

    return random.Random(seed)


def rng_from_config(cfg: ConfigModel) -> random.Random:
    """Random source for the seed configured in ``cfg``."""

    return rng_from_seed(cfg.seed.value)


def shuffle(rng: RandomSource, items: MutableSequence[T]) -> None:
    """Shuffle ``items`` in place (Fisher-Yates) using only ``rng.randint``."""

    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
