"""Trade execution against a multi-seeder LMSR market.

``buy``/``sell`` validate, price the trade on copies of the split-share
vectors and only then write the result back into ``state``. A rejected trade
(``MarketError``) or a failed numeric check leaves ``state`` untouched.
``simulate_buy``/``simulate_sell`` run the same pricing without committing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.config import EngineConfig, get_config
from ..core.errors import (
    BelowMinimumShares,
    InsufficientShares,
    MarketError,
    NumericInvariantError,
)
from ..core.fixed_point import SCALE, round_half_up
from ..core.types import BuyResult, SellResult, TradeSide
from ..io import metrics
from ..pricing.fees import distribute_fee
from ..pricing.lmsr import cost, prices
from ..pricing.split import split_delta
from ..state.market import MarketState

logger = logging.getLogger(__name__)


@dataclass
class _Fill:
    amount: int  # cost (buy) or refund (sell), stroops
    split_shares: Dict[str, List[int]]
    new_prices: List[float]


def _check(condition: bool, message: str):
    if not condition:
        logger.error("numeric invariant violated: %s", message)
        raise NumericInvariantError(message)


def _price_trade(
    side: TradeSide,
    actor: str,
    outcome: int,
    shares: int,
    state: MarketState,
    config: EngineConfig,
) -> _Fill:
    if shares < config.min_shares:
        raise BelowMinimumShares(
            f"{shares} shares is below the minimum of {config.min_shares}"
        )
    state.check_outcome(outcome)
    if side == TradeSide.SELL:
        held = state.positions.get(actor, outcome)
        if held < shares:
            raise InsufficientShares(
                f"{actor} holds {held} shares of outcome {outcome}, cannot sell {shares}"
            )

    before = cost(state)
    delta = shares * SCALE if side == TradeSide.BUY else -shares * SCALE
    parts = split_delta(delta, state.seeders, config.split_policy)
    after_q = {addr: list(state.q_for(addr)) for addr in state.seeders}
    for addr, dq in parts.items():
        after_q[addr][outcome] += dq

    trial = MarketState(
        outcomes=state.outcomes, seeders=state.seeders, split_shares=after_q
    )
    after = cost(trial)
    new_prices = prices(trial)

    diff = after - before if side == TradeSide.BUY else before - after
    amount = round_half_up(diff * SCALE)
    _check(
        abs(sum(new_prices) - 1.0) <= config.price_tolerance,
        f"prices sum to {sum(new_prices)!r} after {side.value} of {shares} on {outcome}",
    )
    # a longshot buy can cost less than half a stroop and round to 0
    if side == TradeSide.BUY:
        _check(diff > 0, f"non-positive buy cost {diff!r} for {shares} shares")
    _check(amount >= 0, f"negative {side.value} amount {amount} for {shares} shares")
    return _Fill(amount=amount, split_shares=after_q, new_prices=new_prices)


def simulate_buy(
    actor: str,
    outcome: int,
    shares: int,
    state: MarketState,
    config: Optional[EngineConfig] = None,
) -> BuyResult:
    cfg = config or get_config()
    fill = _price_trade(TradeSide.BUY, actor, outcome, shares, state, cfg)
    fee = cfg.fee_per_share * shares
    return BuyResult(
        cost=fill.amount,
        fee=fee,
        new_prices=fill.new_prices,
        fee_distribution=distribute_fee(fee, state.seeders),
    )


def simulate_sell(
    actor: str,
    outcome: int,
    shares: int,
    state: MarketState,
    config: Optional[EngineConfig] = None,
) -> SellResult:
    cfg = config or get_config()
    fill = _price_trade(TradeSide.SELL, actor, outcome, shares, state, cfg)
    return SellResult(refund=fill.amount, new_prices=fill.new_prices)


def buy(
    actor: str,
    outcome: int,
    shares: int,
    state: MarketState,
    config: Optional[EngineConfig] = None,
) -> BuyResult:
    cfg = config or get_config()
    try:
        fill = _price_trade(TradeSide.BUY, actor, outcome, shares, state, cfg)
    except MarketError as e:
        logger.info("buy rejected [%s]: %s", e.code, e)
        metrics.inc_rejection(e.code)
        raise

    fee = cfg.fee_per_share * shares
    payout = distribute_fee(fee, state.seeders)
    state.split_shares.update(fill.split_shares)
    state.positions.credit(actor, outcome, shares)
    for addr, amount in payout.items():
        state.fees_earned[addr] = state.fees_earned.get(addr, 0) + amount

    metrics.inc_trade(TradeSide.BUY.value)
    metrics.inc_fees(fee)
    logger.debug(
        "buy %s x%d outcome=%d cost=%d fee=%d prices=%s",
        actor,
        shares,
        outcome,
        fill.amount,
        fee,
        fill.new_prices,
    )
    return BuyResult(
        cost=fill.amount, fee=fee, new_prices=fill.new_prices, fee_distribution=payout
    )


def sell(
    actor: str,
    outcome: int,
    shares: int,
    state: MarketState,
    config: Optional[EngineConfig] = None,
) -> SellResult:
    cfg = config or get_config()
    try:
        fill = _price_trade(TradeSide.SELL, actor, outcome, shares, state, cfg)
    except MarketError as e:
        logger.info("sell rejected [%s]: %s", e.code, e)
        metrics.inc_rejection(e.code)
        raise

    state.split_shares.update(fill.split_shares)
    state.positions.debit(actor, outcome, shares)

    metrics.inc_trade(TradeSide.SELL.value)
    logger.debug(
        "sell %s x%d outcome=%d refund=%d prices=%s",
        actor,
        shares,
        outcome,
        fill.amount,
        fill.new_prices,
    )
    return SellResult(refund=fill.amount, new_prices=fill.new_prices)
