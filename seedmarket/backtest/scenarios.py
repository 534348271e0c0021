"""Scenario generators."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from ..core.fixed_point import SCALE


@dataclass
class Step:
    kind: str  # "buy", "sell" or "seed"
    actor: str
    outcome: int = 0
    shares: int = 0
    amount: int = 0  # seed amount in stroops


def random_flow(
    steps: int,
    n_outcomes: int = 2,
    seed: int | None = None,
    max_shares: int = 50,
    sell_prob: float = 0.3,
    traders: int = 5,
) -> Iterable[Step]:
    """Random buys and sells from a small pool of traders.

    Sells may ask for more than the trader holds; the engine skips those.
    """
    rng = random.Random(seed)
    for _ in range(steps):
        actor = f"trader{rng.randrange(traders)}"
        outcome = rng.randrange(n_outcomes)
        shares = rng.randint(1, max_shares)
        kind = "sell" if rng.random() < sell_prob else "buy"
        yield Step(kind=kind, actor=actor, outcome=outcome, shares=shares)


def binary_election() -> List[Step]:
    """Scripted two-outcome market: early trading, then two late seeders."""
    return [
        Step("buy", "trader1", 0, 1000),
        Step("buy", "trader2", 1, 500),
        Step("buy", "trader3", 0, 2000),
        Step("buy", "trader4", 0, 500),
        Step("seed", "seeder2", amount=3000 * SCALE),
        Step("buy", "trader5", 1, 1500),
        Step("sell", "trader1", 0, 500),
        Step("buy", "trader6", 0, 1000),
        Step("buy", "trader7", 1, 800),
        Step("seed", "seeder3", amount=2000 * SCALE),
        Step("buy", "trader8", 0, 1200),
        Step("sell", "trader2", 1, 300),
    ]


def _multi_outcome(
    n: int,
    rng: random.Random,
    opening: Tuple[int, int],
    later: Tuple[int, int],
    extra_shares: int,
    seed_amount: int,
    max_sell: int,
) -> List[Step]:
    steps = [
        Step("buy", f"trader{i + 1}", i, rng.randint(*opening)) for i in range(n)
    ]
    steps.append(Step("buy", "trader_extra", 0, extra_shares))
    steps.append(Step("seed", "seeder2", amount=seed_amount))
    steps += [
        Step("buy", f"trader{i + 10}", i, rng.randint(*later)) for i in range(n)
    ]
    steps += [
        Step("sell", f"trader{i + 1}", i, rng.randint(1, max_sell))
        for i in range(min(3, n))
    ]
    return steps


def tournament(n: int = 5, seed: int | None = None) -> List[Step]:
    """Scripted n-way categorical market with a second seeder mid-way."""
    return _multi_outcome(
        n,
        random.Random(seed),
        opening=(500, 1499),
        later=(300, 1499),
        extra_shares=1000,
        seed_amount=5000 * SCALE,
        max_sell=300,
    )


def price_ranges(n: int = 5, seed: int | None = None) -> List[Step]:
    """Scripted market over n adjacent price ranges."""
    return _multi_outcome(
        n,
        random.Random(seed),
        opening=(400, 1199),
        later=(200, 1199),
        extra_shares=800,
        seed_amount=4000 * SCALE,
        max_sell=200,
    )
