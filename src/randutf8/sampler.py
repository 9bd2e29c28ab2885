"""Character samplers feeding :func:`randutf8.generator.rand_utf8`.

Two strategies are mixed by the generator:

* :class:`Utf8Sampler` decodes buffers of random bytes as UTF-8.  Uniform bytes
  mostly decode to ASCII, with the occasional valid 2-4 byte sequence, so this
  sampler favours short encodings and byte values below 128.
* :class:`CodePointSampler` draws code points uniformly over the whole scalar
  value space.  Most of that space needs 4 bytes, all of them above 127.

Both samplers retry internally and never fail.  Characters are returned as
one-character ``str`` objects.
"""

from __future__ import annotations

from typing import Final

from randutf8.rng import RandomSource

__all__ = [
    "MAX_CODE_POINT",
    "REPLACEMENT_CHARACTER",
    "CodePointSampler",
    "Utf8Sampler",
    "is_scalar_value",
    "utf8_len",
]

MAX_CODE_POINT: Final = 0x10FFFF
SURROGATE_MIN: Final = 0xD800
SURROGATE_MAX: Final = 0xDFFF
REPLACEMENT_CHARACTER: Final = "\ufffd"


def is_scalar_value(cp: int) -> bool:
    """Return ``True`` if ``cp`` is a Unicode scalar value."""

    return 0 <= cp <= MAX_CODE_POINT and not SURROGATE_MIN <= cp <= SURROGATE_MAX


def utf8_len(ch: str) -> int:
    """Number of bytes ``ch`` occupies in UTF-8."""

    cp = ord(ch)
    if cp < 0x80:
        return 1
    if cp < 0x800:
        return 2
    if cp < 0x10000:
        return 3
    return 4


class _CharRing:
    """Fixed-capacity FIFO of characters backed by a preallocated list."""

    __slots__ = ("_slots", "_head", "_size")

    def __init__(self, capacity: int) -> None:
        self._slots: list[str] = [""] * capacity
        self._head = 0
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def push(self, ch: str) -> None:
        capacity = len(self._slots)
        if self._size == capacity:
            raise OverflowError("character ring is full")
        self._slots[(self._head + self._size) % capacity] = ch
        self._size += 1

    def pop(self) -> str:
        if not self._size:
            raise IndexError("pop from empty character ring")
        ch = self._slots[self._head]
        self._slots[self._head] = ""
        self._head = (self._head + 1) % len(self._slots)
        self._size -= 1
        return ch


class Utf8Sampler:
    """Sample characters by lossily decoding random byte buffers.

    Each refill decodes ``buffer_size`` bytes, which yields at most
    ``buffer_size`` characters, so the pending queue never grows past that.
    NUL and the replacement character are dropped: the former is filtered on
    purpose, the latter only marks malformed input.
    """

    def __init__(self, buffer_size: int = 32) -> None:
        if buffer_size < 1:
            raise ValueError("buffer_size must be positive")
        self._buf = bytearray(buffer_size)
        self._pending = _CharRing(buffer_size)

    def _refill(self, rng: RandomSource) -> None:
        self._buf[:] = rng.randbytes(len(self._buf))
        for ch in self._buf.decode("utf-8", errors="replace"):
            if ch != "\x00" and ch != REPLACEMENT_CHARACTER:
                self._pending.push(ch)

    def next(self, rng: RandomSource) -> str:
        """Return the next pending character, refilling as often as needed."""

        while not self._pending:
            self._refill(rng)
        return self._pending.pop()


class CodePointSampler:
    """Sample scalar values uniformly from ``[1, 0x10FFFF]``, minus surrogates."""

    def next(self, rng: RandomSource) -> str:
        """Rejection-sample until a scalar value comes up."""

        while True:
            cp = rng.randint(1, MAX_CODE_POINT + 1)
            if is_scalar_value(cp):
                return chr(cp)
