"""Core type definitions for the pricing engine.

Seeders, priors and split shares are integers in stroops (see ``fixed_point``);
prices handed back to callers are floats in [0, 1].
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class TradeSide(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


class SplitPolicy(str, Enum):
    """What to do with the stroops lost when a trade is split across seeders."""

    TRUNCATE = "truncate"
    REMAINDER_TO_LARGEST = "remainder_to_largest"


@dataclass
class MarketMetadata:
    title: str = ""
    description: str = ""
    category: str = ""
    end_date: Optional[float] = None  # seconds since epoch
    resolution_source: str = ""
    options: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SeederRecord:
    liquidity_param: int  # b_j, stroops
    prior: Tuple[int, ...]  # sums to SCALE
    contributed_amount: int  # stroops

    @property
    def min_prior(self) -> int:
        return min(self.prior)


@dataclass
class TradeRequest:
    actor: str
    outcome: int
    shares: int
    side: TradeSide = TradeSide.BUY


@dataclass
class BuyResult:
    cost: int  # stroops, pure market-maker cost
    fee: int  # stroops, charged on top of cost
    new_prices: List[float]
    fee_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return self.cost + self.fee


@dataclass
class SellResult:
    refund: int  # stroops
    new_prices: List[float]


@dataclass
class SeedQuote:
    liquidity_param: int
    prior: Tuple[int, ...]
    fee_share: float  # fraction of future fees the new seeder would receive
