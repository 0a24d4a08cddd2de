# src/ssmul/multipliers/native.py
from __future__ import annotations

import gmpy2

from ssmul.registry import base_case


@base_case(name="gmpy2", description="GMP product via gmpy2")
def gmp(a: int, b: int) -> int:
    return int(gmpy2.mul(a, b))
