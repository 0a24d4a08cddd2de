# tests/test_utility.py
"""
Tests for the integer helpers in ssmul.utility.

Run: pytest -v
"""

from __future__ import annotations

import gmpy2
import pytest

from ssmul.utility import (
    NoSuitableRing,
    ceil_lg2,
    dec_digits,
    floor_lg2,
    of,
    shift_sum,
    split_into_pieces,
)

# ---------- bit lengths -------------------------------------------------------


@pytest.mark.parametrize(("n", "expected"), [
    (0, 0), (1, 0), (2, 1), (3, 2), (4, 2), (5, 3), (8, 3), (9, 4), (1024, 10), (1025, 11),
])
def test_ceil_lg2(n, expected):
    assert ceil_lg2(n) == expected


@pytest.mark.parametrize(("n", "expected"), [
    (1, 0), (2, 1), (3, 1), (4, 2), (7, 2), (8, 3), (1023, 9), (1024, 10),
])
def test_floor_lg2(n, expected):
    assert floor_lg2(n) == expected


def test_floor_lg2_rejects_non_positive():
    with pytest.raises(ValueError):
        floor_lg2(0)


# ---------- pieces ------------------------------------------------------------


def test_split_is_least_significant_first():
    assert split_into_pieces(0x1234, 4, 4) == [4, 3, 2, 1]
    assert split_into_pieces(0x1234, 3, 8) == [0x34, 0x12, 0]


def test_shift_sum_inverts_split():
    x = 0xDEADBEEF_CAFEBABE_0123
    pieces = split_into_pieces(x, 5, 16)
    assert shift_sum(pieces, 16) == x


def test_shift_sum_accepts_negative_and_wide_pieces():
    assert shift_sum([5, -1], 4) == 5 - 16
    assert shift_sum([0x1FF, 1], 8) == 0x1FF + 0x100
    assert shift_sum([], 8) == 0


def test_split_rejects_negative_and_oversized():
    with pytest.raises(ValueError):
        split_into_pieces(-1, 2, 4)
    with pytest.raises(ValueError):
        split_into_pieces(1 << 8, 2, 4)


# ---------- construction ------------------------------------------------------


def test_of_accepts_index_types():
    assert of(5) == 5
    assert of(True) == 1
    value = of(gmpy2.mpz(12345678901234567890))
    assert value == 12345678901234567890
    assert type(value) is int


@pytest.mark.parametrize("bad", [2.5, "3", None, [1]])
def test_of_rejects_non_integers(bad):
    with pytest.raises(TypeError):
        of(bad)


# ---------- misc --------------------------------------------------------------


@pytest.mark.parametrize(("n", "digits"), [
    (0, 1), (9, 1), (10, 2), (99, 2), (100, 3), (-12345, 5), (10**50 - 1, 50), (10**50, 51),
])
def test_dec_digits(n, digits):
    assert dec_digits(n) == digits


def test_no_suitable_ring_carries_size():
    err = NoSuitableRing(36)
    assert err.bit_size == 36
    assert "36" in str(err)
