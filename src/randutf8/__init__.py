"""Random UTF-8 test strings of an exact encoded byte length.

Example::

    >>> import random
    >>> from randutf8 import rand_utf8
    >>> s = rand_utf8(random.Random(0), 32)
    >>> len(s.encode("utf-8"))
    32
"""

from .generator import rand_utf8
from .rng import RandomSource, rng_from_seed

__version__ = "0.1.0"

__all__ = ["RandomSource", "__version__", "rand_utf8", "rng_from_seed"]
