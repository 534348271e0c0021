"""Fixed-point helpers.

Monetary and probability quantities are integers scaled by ``SCALE`` (stroops).
Intermediate pricing math runs on floats; anything a caller sees as money is
rounded back to a whole stroop with ``round_half_up``.
"""

from __future__ import annotations

import math
from typing import Iterable

SCALE = 10_000_000  # 1 unit = 10^7 stroops


def to_real(x: int) -> float:
    return x / SCALE


def to_fixed(x: float) -> int:
    return round_half_up(x * SCALE)


def round_half_up(x: float) -> int:
    """Nearest integer, halves rounded towards +inf.

    Python's ``round`` is banker's rounding, which would make equal-looking
    costs land on different stroops depending on parity.
    """
    return math.floor(x + 0.5)


def trunc_div(a: int, b: int) -> int:
    """Integer division truncating toward zero (``//`` floors toward -inf)."""
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q


def ln(x: float) -> float:
    if x <= 0:
        raise ValueError(f"ln undefined for non-positive argument {x!r}")
    return math.log(x)


def exp(x: float) -> float:
    return math.exp(x)


def logsumexp(xs: Iterable[float]) -> float:
    """Stable log(sum(exp(xs)))."""
    vals = list(xs)
    if not vals:
        raise ValueError("logsumexp of empty sequence")
    m = max(vals)
    return m + math.log(sum(math.exp(x - m) for x in vals))
