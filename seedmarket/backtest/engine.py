"""Replay a scenario against a market state."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..core.config import EngineConfig
from ..core.events import MarketEvent, SeedEvent, TradeEvent
from ..core.types import BuyResult, TradeRequest, TradeSide
from ..exec.router import route_one
from ..exec.seeding import add_seeder
from ..io.logging_config import get_logger
from ..pricing.lmsr import prices
from ..state.market import MarketState
from .scenarios import Step

logger = get_logger("backtest")


def run_scenario(
    state: MarketState,
    scenario: Iterable[Step],
    config: Optional[EngineConfig] = None,
) -> List[MarketEvent]:
    events: List[MarketEvent] = []
    for step in scenario:
        seq = len(events)
        if step.kind == "seed":
            add_seeder(step.actor, step.amount, state, config)
            events.append(
                SeedEvent(
                    seq=seq,
                    actor=step.actor,
                    amount=step.amount,
                    liquidity_param=state.seeders[step.actor].liquidity_param,
                    prices=prices(state),
                )
            )
            continue
        side = TradeSide.BUY if step.kind == "buy" else TradeSide.SELL
        held = state.positions.get(step.actor, step.outcome)
        if side == TradeSide.SELL and held < step.shares:
            logger.debug(
                "skipping sell of %d by %s, holds %d", step.shares, step.actor, held
            )
            continue
        result = route_one(
            state, TradeRequest(step.actor, step.outcome, step.shares, side), config
        )
        if isinstance(result, BuyResult):
            amount, fee = result.cost, result.fee
        else:
            amount, fee = result.refund, 0
        events.append(
            TradeEvent(
                seq=seq,
                actor=step.actor,
                outcome=step.outcome,
                side=side,
                shares=step.shares,
                amount=amount,
                fee=fee,
                prices=result.new_prices,
            )
        )
    return events
