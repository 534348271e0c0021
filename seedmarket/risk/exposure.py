"""Seeder exposure and position marks."""

from __future__ import annotations

import math
from typing import Sequence

from ..core.fixed_point import SCALE, ln, round_half_up, to_real
from ..core.types import SeederRecord
from ..pricing.lmsr import prices
from ..state.market import MarketState


def seeder_max_loss(record: SeederRecord) -> int:
    """Worst-case loss of one seeder's sub-market, in stroops.

    An LMSR with prior pi loses at most b * -ln(pi_min), reached when the
    least likely outcome (under the prior) resolves true.
    """
    return round_half_up(record.liquidity_param * -ln(to_real(record.min_prior)))


def market_max_loss(state: MarketState) -> int:
    return sum(seeder_max_loss(r) for r in state.seeders.values())


def position_value(state: MarketState, actor: str) -> int:
    """Mark-to-market value of an actor's shares at current prices, in stroops."""
    holdings = state.positions.holdings(actor)
    if not holdings:
        return 0
    p = prices(state)
    return round_half_up(sum(s * p[o] * SCALE for o, s in holdings.items()))


def entropy(probs: Sequence[float]) -> float:
    """Shannon entropy of a price vector in nats; ln(n) for a uniform market."""
    return math.fsum(-p * math.log(p) for p in probs if p > 0)
