"""Metrics instrumentation."""

from __future__ import annotations

from prometheus_client import Counter

trades_total = Counter(
    "seedmarket_trades_total", "Trades committed by the engine", ["side"]
)
seeds_total = Counter("seedmarket_seeds_total", "Seeders registered")
fees_stroops_total = Counter(
    "seedmarket_fees_stroops_total", "Buy fees collected, in stroops"
)
rejections_total = Counter(
    "seedmarket_rejections_total", "Operations rejected with a MarketError", ["code"]
)


def inc_trade(side: str) -> None:
    trades_total.labels(side=side).inc()


def inc_seed() -> None:
    seeds_total.inc()


def inc_fees(stroops: int) -> None:
    if stroops > 0:
        fees_stroops_total.inc(stroops)


def inc_rejection(code: str) -> None:
    rejections_total.labels(code=code).inc()
