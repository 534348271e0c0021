"""App bootstrap for demo simulations."""

from __future__ import annotations

from ..core.fixed_point import SCALE
from ..core.types import MarketMetadata
from ..exec.seeding import create_market
from ..state.store import MarketStore

DEMO_MARKET_ID = "ELECTION_2026"


def build_demo_environment(seed_amount: int = 10_000 * SCALE) -> MarketStore:
    store = MarketStore()
    metadata = MarketMetadata(
        title="Will the candidate win the election?",
        description="Simulated market",
        category="Simulation",
        resolution_source="Oracle",
        options=["Yes", "No"],
    )
    state = create_market(["Yes", "No"], [("initial_seeder", seed_amount)], metadata)
    store.upsert_market(DEMO_MARKET_ID, state)
    return store
