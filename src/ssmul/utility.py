# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import operator
from collections.abc import Sequence


class UserInputError(Exception):
    pass


class NoSuitableRing(Exception):
    """No Fermat ring satisfies the selector constraints for ``bit_size``."""

    def __init__(self, bit_size: int):
        super().__init__(f"failed to find ring for size {bit_size}")
        self.bit_size = bit_size


# --- Integer construction ----------------------------------------------------


def of(value) -> int:
    """Plain ``int`` from anything implementing ``__index__`` (int, bool, gmpy2.mpz, numpy ints)."""
    if type(value) is int:
        return value
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"expected an integer, got {type(value).__name__}") from None


# --- Bit-length helpers ------------------------------------------------------


def ceil_lg2(n: int) -> int:
    """Smallest k with 2**k >= n (0 for n <= 1)."""
    if n <= 1:
        return 0
    return (n - 1).bit_length()


def floor_lg2(n: int) -> int:
    """Largest k with 2**k <= n."""
    if n <= 0:
        raise ValueError(f"floor_lg2 needs a positive argument, got {n}")
    return n.bit_length() - 1


def split_into_pieces(x: int, count: int, bits: int) -> list[int]:
    """
    Cut a non-negative x into `count` pieces of `bits` bits, least significant first.
    x must fit in count * bits bits.
    """
    if x < 0:
        raise ValueError("cannot split a negative value")
    if x >> (count * bits):
        raise ValueError(f"{x.bit_length()}-bit value does not fit {count} pieces of {bits} bits")
    mask = (1 << bits) - 1
    return [(x >> (i * bits)) & mask for i in range(count)]


def shift_sum(pieces: Sequence[int], bits: int) -> int:
    """Inverse of split_into_pieces; pieces may be negative or wider than `bits`."""
    total = 0
    for piece in reversed(pieces):
        total = (total << bits) + piece
    return total


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    # floor(log10(n)) ~= floor(bitlen*log10(2))
    bl = n.bit_length()
    # 0.30102999566 ~ log10(2)
    est = int((bl * 30103) // 100000)
    p10 = 10 ** est
    while n < p10:
        est -= 1
        p10 //= 10
    while n >= p10 * 10:
        est += 1
        p10 *= 10
    return est + 1
