"""Proportional splitting of a trade across seeders.

A trade of ``delta`` share units on one outcome is attributed to seeder j as
``trunc(b_j * delta / B)``. Truncation is toward zero, so a buy and an equal
sell produce exactly opposite per-seeder deltas and the attributed total never
exceeds the requested one. Under ``REMAINDER_TO_LARGEST`` the stroops lost to
truncation go to the seeder with the largest b (first registered on ties) and
the split sums to ``delta`` exactly.
"""

from __future__ import annotations

from typing import Dict, Mapping

from ..core.fixed_point import trunc_div
from ..core.types import SeederRecord, SplitPolicy


def split_delta(
    delta: int,
    seeders: Mapping[str, SeederRecord],
    policy: SplitPolicy = SplitPolicy.REMAINDER_TO_LARGEST,
) -> Dict[str, int]:
    total_b = sum(s.liquidity_param for s in seeders.values())
    if total_b <= 0:
        return {}
    parts = {
        addr: trunc_div(rec.liquidity_param * delta, total_b)
        for addr, rec in seeders.items()
    }
    if policy == SplitPolicy.REMAINDER_TO_LARGEST:
        remainder = delta - sum(parts.values())
        if remainder:
            largest = max(seeders, key=lambda a: seeders[a].liquidity_param)
            parts[largest] += remainder
    return parts
