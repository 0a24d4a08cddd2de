# src/ssmul/ring.py
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class FermatRing:
    """
    Arithmetic modulo 2**bit_capacity + 1, laid out for a negacyclic
    convolution of 2**(s+1) pieces.

    Canonical representatives live in [0, 2**bit_capacity]; the top value
    2**bit_capacity is -1 and needs one bit more than the capacity.
    """
    s: int
    p: int

    @property
    def principal_root_exponent(self) -> int:
        return self.s

    @property
    def principal_root_order(self) -> int:
        return 1 << (self.s + 1)

    @property
    def bit_capacity(self) -> int:
        return self.p << self.s

    @property
    def modulus(self) -> int:
        return (1 << self.bit_capacity) + 1

    @property
    def minus_one(self) -> int:
        return 1 << self.bit_capacity

    @property
    def supports_sqrt2(self) -> bool:
        return self.bit_capacity % 4 == 0

    def divisor(self) -> int:
        return self.modulus

    def canonicalize(self, x: int) -> int:
        n = self.bit_capacity
        if x.bit_length() > 2 * n + 1:
            return x % self.modulus
        mask = (1 << n) - 1
        # 2**n == -1: fold the high part back onto the low part
        while x.bit_length() > n:
            x = (x & mask) - (x >> n)
        if x < 0:
            x += self.modulus
        return x

    def sqrt2(self) -> int:
        """2**(3n/4) - 2**(n/4), which squares to 2."""
        if not self.supports_sqrt2:
            raise ValueError(f"no shift-only sqrt(2) modulo 2**{self.bit_capacity} + 1")
        q = self.bit_capacity >> 2
        return (1 << 3 * q) - (1 << q)

    def mul_sqrt2_power(self, x: int, k: int) -> int:
        """x * sqrt(2)**k using shifts only; sqrt(2) has order 4n."""
        n = self.bit_capacity
        k %= 4 * n
        if k & 1:
            if not self.supports_sqrt2:
                raise ValueError(f"odd power of sqrt(2) modulo 2**{n} + 1")
            q = n >> 2
            x = self.canonicalize((x << 3 * q) - (x << q))
        j = k >> 1
        if j >= n:
            return self.canonicalize(-(x << (j - n)))
        return self.canonicalize(x << j)

    def root_of_unity(self, order: int) -> int:
        """Principal root of the given power-of-two order, as a power of sqrt(2)."""
        n4 = 4 * self.bit_capacity
        if order <= 0 or order & (order - 1) or n4 % order:
            raise ValueError(f"no root of order {order} modulo 2**{self.bit_capacity} + 1")
        return self.mul_sqrt2_power(1, n4 // order)

    def negacyclic_convolution(
        self,
        a: Sequence[int],
        b: Sequence[int],
        pointwise: Callable[[int, int], int],
    ) -> list[int]:
        from ssmul.transform import negacyclic_convolution

        return negacyclic_convolution(self, a, b, pointwise)

    def __str__(self) -> str:
        return f"Z/(2^{self.bit_capacity}+1) [s={self.s}, p={self.p}, order={self.principal_root_order}]"
