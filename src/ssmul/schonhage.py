# src/ssmul/schonhage.py
"""
Schönhage–Strassen multiplication.

Integer multiplication becomes multiplication modulo 2**n + 1; that in turn
splits both operands into pieces, convolves the pieces negacyclically in a
smaller Fermat ring (recursing for the pointwise products) and adds the
pieces back together.

Complexity: O(N lg N lg lg N).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache

from ssmul.registry import Multiplier, get_base_case
from ssmul.ring import FermatRing
from ssmul.utility import NoSuitableRing, ceil_lg2, of, shift_sum, split_into_pieces

_logger = logging.getLogger(__name__)


@dataclass
class RecursionStats:
    """Per-call bookkeeping; pass one in to see how a multiplication recursed."""
    calls: int = 0
    base_cases: int = 0
    splits: int = 0
    minus_ones: int = 0                                              # -1 operand shortcuts
    max_depth: int = 0
    capacities: dict[int, set[int]] = field(default_factory=dict)   # depth -> ring capacities seen

    def record(self, depth: int, capacity: int, kind: str) -> None:
        self.calls += 1
        if kind == "split":
            self.splits += 1
        elif kind == "base":
            self.base_cases += 1
        else:
            self.minus_ones += 1
        self.max_depth = max(self.max_depth, depth)
        self.capacities.setdefault(depth, set()).add(capacity)


# --- Entry -------------------------------------------------------------------


def multiply(a, b, *, base_case: str | Multiplier | None = None,
             stats: RecursionStats | None = None) -> int:
    """
    Exact product of two integers of any sign.

    base_case: name of a registered base-case multiplier (or the function
    itself); None uses the MULTIPLY.BASE_CASE setting.
    """
    a = of(a)
    b = of(b)
    if a < 0:
        return -multiply(-a, b, base_case=base_case, stats=stats)
    if b < 0:
        return -multiply(a, -b, base_case=base_case, stats=stats)

    n = max(a.bit_length(), b.bit_length()) * 2
    ring = FermatRing(ceil_lg2(n), 1)
    return multiply_in_ring(a, b, ring, base_case=base_case, stats=stats)


# --- Ring selection ----------------------------------------------------------


def is_smaller(ring: FermatRing, bit_size: int) -> bool:
    """Pieces must live in a strictly smaller ring, or recursion would not shrink."""
    return ring.bit_capacity < bit_size


def is_even(s: int, bit_size: int) -> bool:
    """bit_size splits on 2**(s+2) boundaries."""
    return bit_size & ((1 << (s + 2)) - 1) == 0


def has_room(ring: FermatRing, s: int, bit_size: int) -> bool:
    """A piece product, the carries of summing them, and a sign bit all fit."""
    per_piece = -(-bit_size // ring.principal_root_order)
    return ring.bit_capacity >= per_piece * 2 + s + 1


def can_do_sqrt2(s: int, p: int) -> bool:
    """
    The transform needs sqrt(2) = 2**(3n/4) - 2**(n/4), i.e. 4 | bit_capacity.
    Every s == 2 ring has bit_capacity 4*(p-1), so no condition on p is needed there.
    """
    return s >= 2


@lru_cache(maxsize=None)
def ring_for_size(bit_size: int) -> FermatRing:
    """
    Smallest Fermat ring allowing a carry-preserving negacyclic convolution
    over pieces totalling bit_size bits.

    Raises NoSuitableRing when no (s, p) candidate passes all four checks.
    """
    best: FermatRing | None = None
    for s in range(ceil_lg2(bit_size), 0, -1):
        for p in range(max(2, s), 4 * s + 1):
            r = FermatRing(s, p - 1)
            if not (is_smaller(r, bit_size) and is_even(s, bit_size)
                    and has_room(r, s, bit_size) and can_do_sqrt2(s, p)):
                continue
            if best is None or r.bit_capacity < best.bit_capacity:
                best = r
    if best is None:
        raise NoSuitableRing(bit_size)
    _logger.debug("ring for %d bits: %s", bit_size, best)
    return best


# --- Recursive engine --------------------------------------------------------


def is_base_case_capacity(bit_capacity: int) -> bool:
    """Capacities where splitting would not produce smaller sub-multiplications."""
    return (bit_capacity != 16 and bit_capacity < 32) or bit_capacity == 40


def _unwrap_negative(pieces: list[int], inner: FermatRing, bits_per_piece: int) -> list[int]:
    # Coefficient k sums at most k+1 positive piece products; anything above
    # that is a negative coefficient that wrapped around the modulus.
    largest_product = ((1 << bits_per_piece) - 1) ** 2
    d = inner.divisor()
    return [
        v - d if v > (k + 1) * largest_product else v
        for k, v in enumerate(pieces)
    ]


def _multiply_in_ring(a: int, b: int, ring: FermatRing, base: Multiplier,
                      stats: RecursionStats | None, depth: int) -> int:
    a = ring.canonicalize(a)
    b = ring.canonicalize(b)

    if is_base_case_capacity(ring.bit_capacity):
        if stats is not None:
            stats.record(depth, ring.bit_capacity, "base")
        return ring.canonicalize(base(a, b))

    # -1 is in the ring but takes one bit more than the capacity to store
    if a == ring.minus_one or b == ring.minus_one:
        if stats is not None:
            stats.record(depth, ring.bit_capacity, "minus_one")
        return ring.canonicalize(-b if a == ring.minus_one else -a)
    if stats is not None:
        stats.record(depth, ring.bit_capacity, "split")

    inner = ring_for_size(ring.bit_capacity)
    piece_count = inner.principal_root_order
    bits_per_piece = ring.bit_capacity >> (inner.principal_root_exponent + 1)
    pieces_a = split_into_pieces(a, piece_count, bits_per_piece)
    pieces_b = split_into_pieces(b, piece_count, bits_per_piece)

    def inner_multiply(x: int, y: int) -> int:
        return _multiply_in_ring(x, y, inner, base, stats, depth + 1)

    pieces_c = inner.negacyclic_convolution(pieces_a, pieces_b, inner_multiply)
    pieces_d = _unwrap_negative(pieces_c, inner, bits_per_piece)
    return ring.canonicalize(shift_sum(pieces_d, bits_per_piece))


def multiply_in_ring(a, b, ring: FermatRing, *, base_case: str | Multiplier | None = None,
                     stats: RecursionStats | None = None) -> int:
    """a * b modulo 2**ring.bit_capacity + 1, as a canonical ring element."""
    base: Callable[[int, int], int] = base_case if callable(base_case) else get_base_case(base_case)
    return _multiply_in_ring(of(a), of(b), ring, base, stats, 0)
