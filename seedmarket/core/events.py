"""History records emitted while replaying a market."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Union

from .types import TradeSide


@dataclass
class TradeEvent:
    seq: int
    actor: str
    outcome: int
    side: TradeSide
    shares: int
    amount: int  # cost for buys, refund for sells (stroops)
    fee: int
    prices: List[float] = field(default_factory=list)


@dataclass
class SeedEvent:
    seq: int
    actor: str
    amount: int  # stroops
    liquidity_param: int
    prices: List[float] = field(default_factory=list)


MarketEvent = Union[TradeEvent, SeedEvent]
