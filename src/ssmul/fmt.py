# src/ssmul/fmt.py
from __future__ import annotations

from ssmul.ring import FermatRing
from ssmul.schonhage import RecursionStats
from ssmul.utility import dec_digits


def abbr_int_fast(n: int, head: int = 10, tail: int = 10, threshold: int = 35, ellipsis: str = "…") -> str:
    """Abbreviate very large ints as first<head>…last<tail> without str(n)."""
    # Keep non-ints and small ints simple
    if not isinstance(n, int):
        return str(n)
    if n == 0:
        return "0"

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10 ** tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}  ({d} digits)"


def format_duration(seconds: float) -> str:
    """ms if <1s; s with millis if <60s; else mm:ss.mmm."""
    MAX_SECONDS = 60
    if seconds < 1:
        ms = round(seconds * 1000)
        return f"{ms} ms"
    if seconds < MAX_SECONDS:
        return f"{seconds:.3f} s"
    m, s = divmod(seconds, MAX_SECONDS)
    return f"{int(m)}:{s:06.3f}"


def format_ring(ring: FermatRing) -> str:
    return (f"2^{ring.bit_capacity}+1  (s={ring.s}, p={ring.p}, "
            f"{ring.principal_root_order} pieces)")


def format_stats(stats: RecursionStats) -> list[str]:
    lines = [
        f"calls {stats.calls}: {stats.splits} split, {stats.base_cases} base case, "
        f"{stats.minus_ones} minus-one",
        f"depth {stats.max_depth}",
    ]
    for depth in sorted(stats.capacities):
        caps = ", ".join(str(c) for c in sorted(stats.capacities[depth]))
        lines.append(f"  level {depth}: capacity {caps}")
    return lines
