"""Seeder onboarding and market creation.

A new seeder's prior is the market's current price vector, so registering
them does not move prices. Their liquidity parameter is sized so that the
worst-case loss of their sub-market equals the seed:

    b = seed / -ln(pi_min)

For the first seeder of a market the prior is uniform and this reduces to
``seed / ln(n)``.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

from ..core.config import EngineConfig, get_config
from ..core.errors import (
    BelowMinimumSeed,
    DegenerateMarket,
    DuplicateSeeder,
    InvalidOutcome,
    InvalidPrior,
    MarketError,
)
from ..core.fixed_point import SCALE, ln, to_fixed, to_real
from ..core.types import MarketMetadata, SeederRecord, SeedQuote
from ..io import metrics
from ..pricing.lmsr import prices
from ..state.market import MarketState

logger = logging.getLogger(__name__)


def uniform_prior(n: int) -> Tuple[int, ...]:
    prior = [SCALE // n] * n
    prior[-1] += SCALE - sum(prior)
    return tuple(prior)


def prior_from_prices(price_vector: Sequence[float]) -> Tuple[int, ...]:
    """Round prices to fixed point; the rounding residual lands on the last outcome."""
    prior = [to_fixed(p) for p in price_vector]
    prior[-1] += SCALE - sum(prior)
    return tuple(prior)


def validate_prior(prior: Sequence[int], n: int):
    if len(prior) != n:
        raise InvalidPrior(f"prior has {len(prior)} entries, market has {n} outcomes")
    if sum(prior) != SCALE:
        raise InvalidPrior(f"prior sums to {sum(prior)}, expected {SCALE}")
    if min(prior) <= 0:
        raise InvalidPrior(
            "every outcome needs a positive prior weight, got " + repr(list(prior))
        )


def liquidity_param(seed_amount: int, prior: Sequence[int]) -> int:
    pi_min = min(prior)
    return seed_amount * SCALE // to_fixed(-ln(to_real(pi_min)))


def _entry_terms(
    address: str, seed_amount: int, state: MarketState, config: EngineConfig
) -> SeederRecord:
    if seed_amount < config.min_seed:
        raise BelowMinimumSeed(
            f"seed of {seed_amount} stroops is below the minimum of {config.min_seed}"
        )
    if address in state.seeders:
        raise DuplicateSeeder(f"{address} already seeds this market")
    if state.seeders:
        prior = prior_from_prices(prices(state))
    else:
        prior = uniform_prior(state.num_outcomes)
    validate_prior(prior, state.num_outcomes)
    b = liquidity_param(seed_amount, prior)
    if b <= 0:
        raise InvalidPrior(f"prior {list(prior)} yields non-positive liquidity {b}")
    return SeederRecord(liquidity_param=b, prior=prior, contributed_amount=seed_amount)


def quote_seed(
    seed_amount: int, state: MarketState, config: Optional[EngineConfig] = None
) -> SeedQuote:
    """Preview the terms a new seeder would get, without registering them."""
    cfg = config or get_config()
    rec = _entry_terms("", seed_amount, state, cfg)
    total_b = state.total_liquidity() + rec.liquidity_param
    return SeedQuote(
        liquidity_param=rec.liquidity_param,
        prior=rec.prior,
        fee_share=rec.liquidity_param / total_b,
    )


def add_seeder(
    address: str,
    seed_amount: int,
    state: MarketState,
    config: Optional[EngineConfig] = None,
) -> MarketState:
    cfg = config or get_config()
    try:
        rec = _entry_terms(address, seed_amount, state, cfg)
    except MarketError as e:
        logger.info("seed by %s rejected [%s]: %s", address, e.code, e)
        metrics.inc_rejection(e.code)
        raise
    state.register(address, rec)
    metrics.inc_seed()
    logger.info(
        "seeder %s joined with %d stroops, b=%d, B=%d",
        address,
        seed_amount,
        rec.liquidity_param,
        state.total_liquidity(),
    )
    return state


def create_market(
    outcomes: Sequence[str],
    initial_seeders: Iterable[Tuple[str, int]],
    metadata: Optional[MarketMetadata] = None,
    config: Optional[EngineConfig] = None,
) -> MarketState:
    """Create a market and register its initial seeders in order."""
    labels: List[str] = list(outcomes)
    if len(labels) < 2:
        raise InvalidOutcome(f"a market needs at least 2 outcomes, got {len(labels)}")
    seeders = list(initial_seeders)
    if not seeders:
        raise DegenerateMarket("a market needs at least one seeder")
    md = metadata or MarketMetadata(options=list(labels))
    state = MarketState(outcomes=labels, metadata=md)
    for address, amount in seeders:
        add_seeder(address, amount, state, config)
    return state
