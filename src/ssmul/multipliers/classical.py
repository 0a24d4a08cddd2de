# src/ssmul/multipliers/classical.py
"""Pure-Python multipliers for rings too small to split."""

from __future__ import annotations

from ssmul.registry import base_case
from ssmul.runtime import CFG
from ssmul.utility import shift_sum, split_into_pieces

LIMB_BITS = 32
# below this the half-sums are as wide as the operands
MIN_CUTOFF_BITS = 4


@base_case(name="builtin", description="Python int multiplication")
def builtin(a: int, b: int) -> int:
    return a * b


@base_case(name="schoolbook", description="Quadratic limb-by-limb product over 32-bit limbs")
def schoolbook(a: int, b: int) -> int:
    if a < 0:
        return -schoolbook(-a, b)
    if b < 0:
        return -schoolbook(a, -b)
    if not a or not b:
        return 0

    la = -(-a.bit_length() // LIMB_BITS)
    lb = -(-b.bit_length() // LIMB_BITS)
    limbs_a = split_into_pieces(a, la, LIMB_BITS)
    limbs_b = split_into_pieces(b, lb, LIMB_BITS)

    acc = [0] * (la + lb)
    for i, x in enumerate(limbs_a):
        if not x:
            continue
        for j, y in enumerate(limbs_b):
            acc[i + j] += x * y
    return shift_sum(acc, LIMB_BITS)


def _karatsuba(a: int, b: int, cutoff: int) -> int:
    n = max(a.bit_length(), b.bit_length())
    if n <= cutoff:
        return a * b

    half = n >> 1
    mask = (1 << half) - 1
    a1, a0 = a >> half, a & mask
    b1, b0 = b >> half, b & mask

    z0 = _karatsuba(a0, b0, cutoff)
    z2 = _karatsuba(a1, b1, cutoff)
    z1 = _karatsuba(a0 + a1, b0 + b1, cutoff) - z0 - z2
    return (z2 << (2 * half)) + (z1 << half) + z0


@base_case(name="karatsuba", description="Karatsuba halving; native product at or below the cutoff")
def karatsuba(a: int, b: int) -> int:
    if a < 0:
        return -karatsuba(-a, b)
    if b < 0:
        return -karatsuba(a, -b)
    cutoff = max(MIN_CUTOFF_BITS, int(CFG("MULTIPLY.KARATSUBA_CUTOFF_BITS", 64)))
    return _karatsuba(a, b, cutoff)
