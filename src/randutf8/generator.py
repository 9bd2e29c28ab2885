"""Exact-length random UTF-8 strings.

:func:`rand_utf8` mixes the two samplers from :mod:`randutf8.sampler` so that
the encoded bytes of the result are spread across the whole 0-255 range,
rather than clustering above 127 the way uniformly random code points do.

Algorithm
---------
Characters are drawn one at a time until their UTF-8 lengths add up to the
requested byte count:

* while at least ``tail_threshold`` bytes remain, the small-range sampler is
  picked with odds ``small_weight : full_weight`` (4:1 by default);
* below that only the small-range sampler is used;
* a candidate whose encoding would overshoot the budget is discarded.

The collected characters are shuffled before joining so that position in the
output does not reveal which sampler produced a character.  Byte coverage is
poor for lengths below about 8.
"""

from __future__ import annotations

from randutf8.config import GeneratorSettings
from randutf8.rng import RandomSource, shuffle
from randutf8.sampler import CodePointSampler, Utf8Sampler, utf8_len
from randutf8.utils.errors import InvalidLengthError
from randutf8.utils.logging import get_logger

__all__ = ["DEFAULT_SETTINGS", "rand_utf8"]

DEFAULT_SETTINGS = GeneratorSettings()

log = get_logger(__name__)


def rand_utf8(
    rng: RandomSource,
    length: int,
    *,
    settings: GeneratorSettings | None = None,
) -> str:
    """Return a random valid string whose UTF-8 encoding is ``length`` bytes.

    Parameters
    ----------
    rng:
        Source of randomness; a seeded :class:`random.Random` makes the
        result reproducible.
    length:
        Exact encoded size in bytes.  ``0`` returns ``""`` without touching
        ``rng``.
    settings:
        Sampler mix and buffer size; defaults to the calibrated values.

    Raises
    ------
    TypeError
        If ``length`` is not an ``int``.
    InvalidLengthError
        If ``length`` is negative.
    """

    if isinstance(length, bool) or not isinstance(length, int):
        raise TypeError(f"length must be an int, not {type(length).__name__}")
    if length < 0:
        raise InvalidLengthError(f"length must be non-negative, got {length}")
    if length == 0:
        return ""

    opts = settings if settings is not None else DEFAULT_SETTINGS
    small = Utf8Sampler(opts.buffer_size)
    full = CodePointSampler()
    last_choice = opts.small_weight + opts.full_weight - 1

    chars: list[str] = []
    byte_count = 0
    discarded = 0
    while byte_count < length:
        if length - byte_count < opts.tail_threshold:
            ch = small.next(rng)
        elif rng.randint(0, last_choice) < opts.small_weight:
            ch = small.next(rng)
        else:
            ch = full.next(rng)

        ch_len = utf8_len(ch)
        if byte_count + ch_len > length:
            discarded += 1
            continue
        byte_count += ch_len
        chars.append(ch)

    shuffle(rng, chars)
    log.debug(
        "generated %d chars for %d bytes (%d candidates discarded)",
        len(chars),
        length,
        discarded,
    )
    return "".join(chars)
