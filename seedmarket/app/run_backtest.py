"""Entry point for market simulations."""

from __future__ import annotations

from .main import DEMO_MARKET_ID, build_demo_environment
from ..backtest.engine import run_scenario
from ..backtest.scenarios import binary_election
from ..core.fixed_point import to_real
from ..io.logging_config import configure_logging
from ..pricing.lmsr import prices
from ..risk.exposure import entropy, market_max_loss


def main():  # pragma: no cover - manual run
    configure_logging()
    store = build_demo_environment()
    events = store.transact(
        DEMO_MARKET_ID, lambda state: run_scenario(state, binary_election())
    )
    state = store.snapshot(DEMO_MARKET_ID)
    final = prices(state)
    print(f"Replayed {len(events)} events on {state.metadata.title!r}")
    for label, p in zip(state.outcomes, final):
        print(f"  {label:>5}: {p:.4f}")
    print(f"  entropy: {entropy(final):.4f}")
    print(f"  B: {to_real(state.total_liquidity()):.2f}")
    print(f"  max seeder loss: {to_real(market_max_loss(state)):.2f}")
    for addr, fees in state.fees_earned.items():
        print(f"  fees {addr}: {to_real(fees):.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
