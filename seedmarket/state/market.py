"""Market state: seeder registry, split-share vectors and trader positions.

A ``MarketState`` is the unit every engine operation reads and writes. The
engine never keeps state of its own, so a state can be wrapped in whatever
locking or transaction scheme the caller uses (see ``store.MarketStore``).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List

from ..core.errors import InvalidOutcome
from ..core.types import MarketMetadata, SeederRecord
from .ledger import PositionLedger


@dataclass
class MarketState:
    outcomes: List[str]
    metadata: MarketMetadata = field(default_factory=MarketMetadata)
    seeders: Dict[str, SeederRecord] = field(default_factory=dict)
    split_shares: Dict[str, List[int]] = field(default_factory=dict)
    positions: PositionLedger = field(default_factory=PositionLedger)
    fees_earned: Dict[str, int] = field(default_factory=dict)

    @property
    def num_outcomes(self) -> int:
        return len(self.outcomes)

    def total_liquidity(self) -> int:
        """B = sum of b_j over all seeders."""
        return sum(s.liquidity_param for s in self.seeders.values())

    def q_for(self, address: str) -> List[int]:
        return self.split_shares.get(address) or [0] * self.num_outcomes

    def aggregate_q(self) -> List[int]:
        """Sum of every seeder's split-share vector, per outcome."""
        total = [0] * self.num_outcomes
        for address in self.seeders:
            for i, qi in enumerate(self.q_for(address)):
                total[i] += qi
        return total

    def check_outcome(self, outcome: int):
        if not 0 <= outcome < self.num_outcomes:
            raise InvalidOutcome(
                f"outcome {outcome} out of range for {self.num_outcomes} outcomes"
            )

    def register(self, address: str, record: SeederRecord):
        self.seeders[address] = record
        self.split_shares[address] = [0] * self.num_outcomes
        self.fees_earned.setdefault(address, 0)

    def copy(self) -> "MarketState":
        return MarketState(
            outcomes=list(self.outcomes),
            metadata=replace(self.metadata, options=list(self.metadata.options)),
            seeders=dict(self.seeders),
            split_shares={a: list(q) for a, q in self.split_shares.items()},
            positions=self.positions.copy(),
            fees_earned=dict(self.fees_earned),
        )

    def to_dict(self) -> Dict[str, Any]:
        md = self.metadata
        return {
            "outcomes": list(self.outcomes),
            "metadata": {
                "title": md.title,
                "description": md.description,
                "category": md.category,
                "end_date": md.end_date,
                "resolution_source": md.resolution_source,
                "options": list(md.options),
            },
            "seeders": [
                {
                    "address": addr,
                    "liquidity_param": rec.liquidity_param,
                    "prior": list(rec.prior),
                    "contributed_amount": rec.contributed_amount,
                    "fees_earned": self.fees_earned.get(addr, 0),
                    "split_shares": list(self.q_for(addr)),
                }
                for addr, rec in self.seeders.items()
            ],
            "positions": [
                {"actor": actor, "outcome": outcome, "shares": shares}
                for (actor, outcome), shares in self.positions
            ],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketState":
        state = cls(
            outcomes=list(data["outcomes"]),
            metadata=MarketMetadata(**data.get("metadata", {})),
        )
        # list order is registration order, which fee distribution depends on
        for s in data.get("seeders", []):
            state.register(
                s["address"],
                SeederRecord(
                    liquidity_param=int(s["liquidity_param"]),
                    prior=tuple(int(p) for p in s["prior"]),
                    contributed_amount=int(s["contributed_amount"]),
                ),
            )
            state.split_shares[s["address"]] = [int(q) for q in s["split_shares"]]
            state.fees_earned[s["address"]] = int(s.get("fees_earned", 0))
        for p in data.get("positions", []):
            state.positions.credit(p["actor"], int(p["outcome"]), int(p["shares"]))
        return state
