# src/ssmul/transform.py
"""
Number-theoretic transform over a Fermat ring.

Every root used here is a power of sqrt(2), so multiplying by a root is a
shift (plus one subtraction for odd powers) instead of a full product. The
only real multiplications are the pointwise ones, which the caller supplies.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from ssmul.ring import FermatRing
from ssmul.utility import floor_lg2


def forward_transform(ring: FermatRing, values: Sequence[int], root_exponent: int) -> list[int]:
    """DFT of `values` at the root sqrt(2)**root_exponent (radix 2, decimation in time)."""
    size = len(values)
    if size <= 1:
        return [ring.canonicalize(v) for v in values]
    if size & (size - 1):
        raise ValueError(f"transform length must be a power of 2, got {size}")

    evens = forward_transform(ring, values[::2], 2 * root_exponent)
    odds = forward_transform(ring, values[1::2], 2 * root_exponent)

    half = size >> 1
    out = [0] * size
    for i, (e, o) in enumerate(zip(evens, odds)):
        t = ring.mul_sqrt2_power(o, i * root_exponent) if i else o
        out[i] = ring.canonicalize(e + t)
        out[i + half] = ring.canonicalize(e - t)
    return out


def inverse_transform(ring: FermatRing, values: Sequence[int], root_exponent: int) -> list[int]:
    """Undo forward_transform(ring, ., root_exponent)."""
    size = len(values)
    n4 = 4 * ring.bit_capacity
    out = forward_transform(ring, values, n4 - root_exponent)
    # 1/size == sqrt(2)**(-2 lg size)
    scale = n4 - 2 * floor_lg2(size) if size else 0
    return [ring.mul_sqrt2_power(v, scale) for v in out]


def negacyclic_convolution(
    ring: FermatRing,
    a: Sequence[int],
    b: Sequence[int],
    pointwise: Callable[[int, int], int],
) -> list[int]:
    """
    Coefficients of a(x) * b(x) mod (x**N + 1), N = ring.principal_root_order,
    as canonical residues of `ring`. `pointwise` multiplies two ring elements.
    """
    size = ring.principal_root_order
    if len(a) != size or len(b) != size:
        raise ValueError(f"expected {size} pieces, got {len(a)} and {len(b)}")

    n4 = 4 * ring.bit_capacity
    # psi has order 2N, so psi**N == -1 absorbs the wrap-around sign
    psi = n4 // (2 * size)

    weighted_a = [ring.mul_sqrt2_power(v, i * psi) for i, v in enumerate(a)]
    weighted_b = [ring.mul_sqrt2_power(v, i * psi) for i, v in enumerate(b)]

    fa = forward_transform(ring, weighted_a, 2 * psi)
    fb = forward_transform(ring, weighted_b, 2 * psi)
    fc = [pointwise(x, y) for x, y in zip(fa, fb)]
    c = inverse_transform(ring, fc, 2 * psi)

    return [ring.mul_sqrt2_power(v, n4 - i * psi) for i, v in enumerate(c)]


def negacyclic_reference(a: Sequence[int], b: Sequence[int]) -> list[int]:
    """Schoolbook a(x) * b(x) mod (x**N + 1) over the integers (no modular reduction)."""
    size = len(a)
    if len(b) != size:
        raise ValueError(f"length mismatch: {len(a)} vs {len(b)}")
    out = [0] * size
    for i, x in enumerate(a):
        if not x:
            continue
        for j, y in enumerate(b):
            k = i + j
            if k < size:
                out[k] += x * y
            else:
                out[k - size] -= x * y
    return out
