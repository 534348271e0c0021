"""Fee distribution to seeders."""

from __future__ import annotations

from typing import Dict, Mapping

from ..core.types import SeederRecord


def distribute_fee(fee: int, seeders: Mapping[str, SeederRecord]) -> Dict[str, int]:
    """Split ``fee`` stroops in proportion to each seeder's b.

    Every seeder but the last (registration order) gets ``floor(fee * b_j / B)``;
    the last one takes whatever is left, so the payouts add up to ``fee``.
    Seeders whose share rounds to zero are left out.
    """
    total_b = sum(s.liquidity_param for s in seeders.values())
    if total_b == 0 or fee == 0:
        return {}
    out: Dict[str, int] = {}
    distributed = 0
    entries = list(seeders.items())
    for idx, (addr, rec) in enumerate(entries):
        if idx == len(entries) - 1:
            share = fee - distributed
        else:
            share = fee * rec.liquidity_param // total_b
            distributed += share
        if share > 0:
            out[addr] = share
    return out
