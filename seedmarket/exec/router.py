"""Simple trade request router."""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from ..core.config import EngineConfig
from ..core.types import BuyResult, SellResult, TradeRequest, TradeSide
from ..state.market import MarketState
from .executor import buy, sell

TradeResult = Union[BuyResult, SellResult]


def route_one(
    state: MarketState,
    request: TradeRequest,
    config: Optional[EngineConfig] = None,
) -> TradeResult:
    if request.side == TradeSide.BUY:
        return buy(request.actor, request.outcome, request.shares, state, config)
    return sell(request.actor, request.outcome, request.shares, state, config)


def route(
    state: MarketState,
    requests: Iterable[TradeRequest],
    config: Optional[EngineConfig] = None,
) -> List[TradeResult]:
    """Apply requests in order; the first rejection stops the batch and propagates."""
    return [route_one(state, r, config) for r in requests]
