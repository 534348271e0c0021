"""In-memory market store with one writer lock per market.

The engine functions are not thread-safe on a shared ``MarketState``; the
store serializes every mutation of a market behind its own lock and hands
out copies for reads that must not block writers.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List, TypeVar

from .market import MarketState

T = TypeVar("T")


@dataclass
class MarketStore:
    markets: Dict[str, MarketState] = field(default_factory=dict)
    _locks: Dict[str, threading.RLock] = field(default_factory=dict, repr=False)
    _guard: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def _lock_for(self, market_id: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(market_id)
            if lock is None:
                lock = self._locks[market_id] = threading.RLock()
            return lock

    def upsert_market(self, market_id: str, state: MarketState):
        with self._lock_for(market_id):
            self.markets[market_id] = state

    def ids(self) -> List[str]:
        return list(self.markets)

    def transact(self, market_id: str, fn: Callable[[MarketState], T]) -> T:
        """Run ``fn`` against the market while holding its writer lock."""
        with self._lock_for(market_id):
            return fn(self.markets[market_id])

    def snapshot(self, market_id: str) -> MarketState:
        with self._lock_for(market_id):
            return self.markets[market_id].copy()
