import dataclasses
import math

import pytest

from seedmarket.core.config import EngineConfig
from seedmarket.core.errors import (
    BelowMinimumShares,
    InsufficientShares,
    InvalidOutcome,
    NumericInvariantError,
)
from seedmarket.core.fixed_point import SCALE
from seedmarket.core.types import SplitPolicy
from seedmarket.exec.executor import buy, sell, simulate_buy, simulate_sell
from seedmarket.exec.seeding import add_seeder, create_market
from seedmarket.pricing.lmsr import prices

CFG = EngineConfig()
SEED = 1000 * SCALE


def _binary():
    return create_market(["Yes", "No"], [("alice", SEED)], config=CFG)


def test_buy_moves_price_and_charges_flat_fee():
    state = _binary()
    res = buy("trader", 0, 100, state, CFG)
    assert res.new_prices[0] > 0.5
    assert res.new_prices[1] < 0.5
    assert sum(res.new_prices) == pytest.approx(1.0, abs=1e-12)
    assert res.fee == 100 * 200_000 == 20_000_000
    assert res.cost > 0
    assert res.total == res.cost + res.fee
    assert state.positions.get("trader", 0) == 100
    assert state.split_shares["alice"] == [100 * SCALE, 0]


def test_buy_cost_matches_closed_form_for_single_seeder():
    state = _binary()
    b = state.seeders["alice"].liquidity_param / SCALE
    expected = b * math.log(0.5 * math.exp(100 / b) + 0.5)
    res = buy("trader", 0, 100, state, CFG)
    assert res.cost == pytest.approx(expected * SCALE, abs=1)


def test_fee_is_credited_to_seeders():
    state = _binary()
    add_seeder("bob", 3 * SEED, state, CFG)
    res = buy("trader", 1, 10, state, CFG)
    assert sum(res.fee_distribution.values()) == res.fee
    assert state.fees_earned == res.fee_distribution
    assert state.fees_earned["bob"] > state.fees_earned["alice"]


def test_cost_is_positive_for_any_size():
    state = _binary()
    for shares in (1, 7, 1000, 50_000):
        assert simulate_buy("t", 1, shares, state, CFG).cost > 0


def test_longshot_buy_may_round_to_zero_cost():
    state = create_market(["Y", "N"], [("s", SEED)], config=CFG)
    buy("whale", 0, 30_000, state, CFG)
    res = buy("t", 1, 1, state, CFG)
    assert res.cost == 0
    assert res.fee == CFG.fee_per_share
    assert state.positions.get("t", 1) == 1
    assert sum(state.fees_earned.values()) == 30_001 * CFG.fee_per_share


def test_buy_then_sell_restores_prices():
    state = _binary()
    add_seeder("bob", 2 * SEED + 17, state, CFG)
    buy("x", 1, 40, state, CFG)
    before_q = {a: list(q) for a, q in state.split_shares.items()}
    before = prices(state)

    bought = buy("trader", 0, 250, state, CFG)
    sold = sell("trader", 0, 250, state, CFG)

    assert sold.new_prices == pytest.approx(before, abs=1e-9)
    assert state.split_shares == before_q
    assert 0 < sold.refund <= bought.cost
    assert state.positions.get("trader", 0) == 0


def test_sell_without_fee_returns_less_than_paid():
    state = _binary()
    bought = buy("trader", 1, 30, state, CFG)
    sold = sell("trader", 1, 30, state, CFG)
    assert sold.refund < bought.total


def test_below_minimum_shares_is_rejected():
    state = _binary()
    snapshot = state.to_dict()
    with pytest.raises(BelowMinimumShares):
        buy("trader", 0, 0, state, CFG)
    with pytest.raises(BelowMinimumShares):
        sell("trader", 0, 0, state, CFG)
    assert state.to_dict() == snapshot


def test_sell_more_than_held_is_rejected():
    state = _binary()
    buy("trader", 0, 5, state, CFG)
    snapshot = state.to_dict()
    with pytest.raises(InsufficientShares):
        sell("trader", 0, 6, state, CFG)
    with pytest.raises(InsufficientShares):
        sell("trader", 1, 1, state, CFG)
    assert state.to_dict() == snapshot


def test_unknown_outcome_is_rejected():
    state = _binary()
    with pytest.raises(InvalidOutcome):
        buy("trader", 2, 1, state, CFG)


def test_simulations_do_not_mutate():
    state = _binary()
    buy("trader", 0, 20, state, CFG)
    snapshot = state.to_dict()

    quote = simulate_buy("trader", 1, 10, state, CFG)
    simulate_sell("trader", 0, 20, state, CFG)
    assert state.to_dict() == snapshot

    assert buy("trader", 1, 10, state, CFG).cost == quote.cost
    refund_quote = simulate_sell("trader", 0, 20, state, CFG)
    assert sell("trader", 0, 20, state, CFG).refund == refund_quote.refund


def test_prices_stay_normalized_with_many_seeders():
    state = create_market(["A", "B", "C", "D"], [("s0", SEED)], config=CFG)
    for k, outcome in enumerate([0, 0, 2, 3, 1, 0]):
        buy(f"t{k}", outcome, 37 * (k + 1), state, CFG)
        add_seeder(f"s{k + 1}", SEED + k * 999_999, state, CFG)
        assert sum(prices(state)) == pytest.approx(1.0, abs=1e-9)
    sell("t0", 0, 37, state, CFG)
    assert sum(prices(state)) == pytest.approx(1.0, abs=1e-9)


def test_truncate_policy_drops_remainder():
    cfg = dataclasses.replace(CFG, split_policy=SplitPolicy.TRUNCATE)
    state = create_market(
        ["Yes", "No"], [("alice", SEED), ("bob", SEED + 1)], config=cfg
    )
    buy("trader", 0, 3, state, cfg)
    assert sum(state.aggregate_q()) <= 3 * SCALE
    sell("trader", 0, 3, state, cfg)
    assert state.aggregate_q() == [0, 0]


def test_numeric_invariant_breach_leaves_state_alone():
    state = _binary()
    snapshot = state.to_dict()
    strict = dataclasses.replace(CFG, price_tolerance=-1.0)
    with pytest.raises(NumericInvariantError):
        buy("trader", 0, 1, state, strict)
    assert state.to_dict() == snapshot
