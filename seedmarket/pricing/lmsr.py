"""Multi-seeder LMSR with per-seeder priors.

Each seeder j runs its own sub-market

    C_j(q) = b_j * ln( sum_i pi_j(i) * exp(q_i / b_j) )

and the market cost is the sum over seeders. Prices aggregate the seeders'
weighted terms:

    p_i = sum_j b_j pi_j(i) exp(q_j(i)/b_j) / sum_j sum_k b_j pi_j(k) exp(q_j(k)/b_j)

Everything is evaluated in log space with a max shift, so large q/b ratios
do not overflow ``exp``.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from ..core.errors import DegenerateMarket
from ..core.fixed_point import logsumexp, to_real
from ..state.market import MarketState
from .base import PricingModel


class PriorLMSR(PricingModel):
    """Single seeder's sub-market. ``b`` and ``quantities`` share a unit (stroops)."""

    def __init__(self, b: float, prior: Sequence[float]):
        assert b > 0, "b must be positive"
        self.b = b
        self.prior = list(prior)

    def log_terms(self, quantities: Sequence[float]) -> List[float]:
        # ln(pi_i) + q_i / b; outcomes with zero prior weight drop out
        return [
            math.log(pi) + q / self.b if pi > 0 else -math.inf
            for pi, q in zip(self.prior, quantities)
        ]

    def cost(self, quantities: Sequence[float]) -> float:
        return self.b * logsumexp(self.log_terms(quantities))

    def prices(self, quantities: Sequence[float]) -> List[float]:
        terms = self.log_terms(quantities)
        m = max(terms)
        weights = [math.exp(t - m) for t in terms]
        denom = sum(weights)
        return [w / denom for w in weights]


def _models(state: MarketState):
    if not state.seeders or state.total_liquidity() <= 0:
        raise DegenerateMarket("market has no seeded liquidity")
    for address, rec in state.seeders.items():
        yield address, PriorLMSR(rec.liquidity_param, [to_real(p) for p in rec.prior])


def cost(state: MarketState) -> float:
    """Aggregate cost C(q) in currency units (multiply by SCALE for stroops)."""
    total = 0.0
    for address, model in _models(state):
        total += model.cost(state.q_for(address))
    return to_real(total)


def prices(state: MarketState) -> List[float]:
    terms: List[List[float]] = []
    for address, model in _models(state):
        log_b = math.log(model.b)
        terms.append([log_b + t for t in model.log_terms(state.q_for(address))])
    m = max(max(row) for row in terms)
    numerators = [0.0] * state.num_outcomes
    for row in terms:
        for i, t in enumerate(row):
            numerators[i] += math.exp(t - m)
    denom = sum(numerators)
    return [x / denom for x in numerators]


def price(state: MarketState, outcome: int) -> float:
    state.check_outcome(outcome)
    return prices(state)[outcome]
