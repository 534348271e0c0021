"""Trader positions keyed by (actor, outcome)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from ..core.errors import InsufficientShares

PositionKey = Tuple[str, int]


@dataclass
class PositionLedger:
    positions: Dict[PositionKey, int] = field(default_factory=dict)

    def get(self, actor: str, outcome: int) -> int:
        return self.positions.get((actor, outcome), 0)

    def credit(self, actor: str, outcome: int, shares: int):
        key = (actor, outcome)
        self.positions[key] = self.positions.get(key, 0) + shares

    def debit(self, actor: str, outcome: int, shares: int):
        held = self.get(actor, outcome)
        if held < shares:
            raise InsufficientShares(
                f"{actor} holds {held} shares of outcome {outcome}, cannot sell {shares}"
            )
        if held == shares:
            self.positions.pop((actor, outcome), None)
        else:
            self.positions[(actor, outcome)] = held - shares

    def holdings(self, actor: str) -> Dict[int, int]:
        return {o: s for (a, o), s in self.positions.items() if a == actor}

    def outstanding(self, outcome: int) -> int:
        return sum(s for (_, o), s in self.positions.items() if o == outcome)

    def __iter__(self) -> Iterator[Tuple[PositionKey, int]]:
        return iter(self.positions.items())

    def copy(self) -> "PositionLedger":
        return PositionLedger(dict(self.positions))
