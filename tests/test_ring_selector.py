# tests/test_ring_selector.py
"""
Tests for ring_for_size and its four acceptance checks.

Run: pytest -v
"""

from __future__ import annotations

import pytest

from ssmul.ring import FermatRing
from ssmul.schonhage import (
    can_do_sqrt2,
    has_room,
    is_base_case_capacity,
    is_even,
    is_smaller,
    ring_for_size,
)
from ssmul.utility import NoSuitableRing, ceil_lg2

# ---------- helpers -----------------------------------------------------------


def _valid_candidates(bit_size: int) -> list[FermatRing]:
    """Every (s, p) candidate of the sweep that passes all four checks."""
    out = []
    for s in range(ceil_lg2(bit_size), 0, -1):
        for p in range(max(2, s), 4 * s + 1):
            r = FermatRing(s, p - 1)
            if (is_smaller(r, bit_size) and is_even(s, bit_size)
                    and has_room(r, s, bit_size) and can_do_sqrt2(s, p)):
                out.append(r)
    return out


def _reachable_capacities(max_lg: int) -> list[int]:
    """Ring capacities the engine actually splits, starting from every top-level size."""
    seen: set[int] = set()
    todo = [1 << k for k in range(max_lg + 1)]
    while todo:
        cap = todo.pop()
        if cap in seen or is_base_case_capacity(cap):
            continue
        seen.add(cap)
        todo.append(ring_for_size(cap).bit_capacity)
    return sorted(seen)


# ---------- the four checks ---------------------------------------------------


def test_is_smaller():
    assert is_smaller(FermatRing(3, 2), 32)
    assert not is_smaller(FermatRing(3, 2), 16)
    assert not is_smaller(FermatRing(3, 2), 8)


def test_is_even():
    assert is_even(3, 32)
    assert is_even(3, 64)
    assert not is_even(3, 48)
    assert is_even(2, 48)
    assert not is_even(1, 4)


def test_has_room():
    # 64 bits in 16 pieces: 4-bit pieces, 8-bit products, 4 carry bits + 1
    assert has_room(FermatRing(3, 2), 3, 64)
    # 128 bits in 16 pieces needs 2*8 + 4 = 20 > 16
    assert not has_room(FermatRing(3, 2), 3, 128)
    assert has_room(FermatRing(3, 3), 3, 160)       # exactly 24 bits needed
    assert not has_room(FermatRing(3, 3), 3, 192)


@pytest.mark.parametrize(("s", "p", "ok"), [
    (1, 2, False), (1, 3, False), (2, 2, True), (2, 3, True), (3, 3, True), (7, 20, True),
])
def test_can_do_sqrt2(s, p, ok):
    assert can_do_sqrt2(s, p) is ok


def test_every_sqrt2_capable_ring_has_a_shift_sqrt2():
    for s in range(1, 8):
        for p in range(max(2, s), 4 * s + 1):
            if can_do_sqrt2(s, p):
                assert FermatRing(s, p - 1).supports_sqrt2


# ---------- selection ---------------------------------------------------------


@pytest.mark.parametrize(("bit_size", "expected"), [
    (16, FermatRing(2, 2)),
    (32, FermatRing(2, 3)),
    (48, FermatRing(2, 4)),
    (64, FermatRing(3, 2)),
    (80, FermatRing(2, 6)),
    (128, FermatRing(3, 3)),
    (160, FermatRing(3, 3)),
    (256, FermatRing(3, 5)),
    (512, FermatRing(4, 3)),
    (1024, FermatRing(4, 5)),
    (2048, FermatRing(5, 4)),
])
def test_known_rings(bit_size, expected):
    assert ring_for_size(bit_size) == expected


def test_selected_ring_is_valid_and_minimal():
    for cap in _reachable_capacities(24):
        r = ring_for_size(cap)
        s = r.principal_root_exponent
        assert is_smaller(r, cap)
        assert is_even(s, cap)
        assert has_room(r, s, cap)
        assert r.supports_sqrt2
        # splitting is exact
        assert cap % r.principal_root_order == 0
        assert min(c.bit_capacity for c in _valid_candidates(cap)) == r.bit_capacity


def test_capacity_strictly_shrinks():
    for cap in _reachable_capacities(24):
        assert ring_for_size(cap).bit_capacity < cap


def test_selection_is_deterministic():
    first = ring_for_size(1 << 14)
    ring_for_size.cache_clear()
    assert ring_for_size(1 << 14) == first


def test_ties_keep_first_found():
    # Among equal capacities the sweep (s descending, p ascending) keeps the earliest.
    for cap in _reachable_capacities(20):
        candidates = _valid_candidates(cap)
        best = min(c.bit_capacity for c in candidates)
        first = next(c for c in candidates if c.bit_capacity == best)
        assert ring_for_size(cap) == first


@pytest.mark.parametrize("bit_size", [1, 2, 36, 40, 56])
def test_no_suitable_ring(bit_size):
    with pytest.raises(NoSuitableRing) as exc:
        ring_for_size(bit_size)
    assert exc.value.bit_size == bit_size


def test_base_case_band():
    for cap in range(1, 32):
        assert is_base_case_capacity(cap) is (cap != 16)
    assert is_base_case_capacity(40)
    assert not is_base_case_capacity(32)
    assert not is_base_case_capacity(48)
