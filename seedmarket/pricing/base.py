"""Cost-function market maker interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence


class PricingModel(ABC):
    """Prices and cost of one sub-market over a share vector in stroops."""

    @abstractmethod
    def cost(self, quantities: Sequence[float]) -> float:
        ...

    @abstractmethod
    def prices(self, quantities: Sequence[float]) -> List[float]:
        ...

    def trade_cost(
        self, quantities: Sequence[float], outcome: int, delta: float
    ) -> float:
        after = list(quantities)
        after[outcome] += delta
        return self.cost(after) - self.cost(quantities)
