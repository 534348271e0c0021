import math

import pytest

from seedmarket.backtest.engine import run_scenario
from seedmarket.backtest.scenarios import random_flow
from seedmarket.core.config import EngineConfig
from seedmarket.core.errors import (
    BelowMinimumSeed,
    DegenerateMarket,
    DuplicateSeeder,
    InvalidOutcome,
    InvalidPrior,
)
from seedmarket.core.fixed_point import SCALE
from seedmarket.exec.executor import buy
from seedmarket.exec.seeding import (
    add_seeder,
    create_market,
    liquidity_param,
    prior_from_prices,
    quote_seed,
    uniform_prior,
    validate_prior,
)
from seedmarket.pricing.lmsr import prices

CFG = EngineConfig()
SEED = 1000 * SCALE


def test_uniform_prior_sums_to_scale():
    assert uniform_prior(2) == (5_000_000, 5_000_000)
    assert uniform_prior(3) == (3_333_333, 3_333_333, 3_333_334)
    assert sum(uniform_prior(7)) == SCALE


def test_bootstrap_seeder():
    state = create_market(["Yes", "No"], [("alice", SEED)], config=CFG)
    rec = state.seeders["alice"]
    assert rec.prior == (5_000_000, 5_000_000)
    assert rec.contributed_amount == SEED
    assert rec.liquidity_param == SEED * SCALE // 6_931_472
    assert rec.liquidity_param == pytest.approx(SEED / math.log(2), rel=1e-6)
    assert state.split_shares["alice"] == [0, 0]
    assert prices(state) == pytest.approx([0.5, 0.5])


def test_create_market_validates_shape():
    with pytest.raises(InvalidOutcome):
        create_market(["Only"], [("alice", SEED)], config=CFG)
    with pytest.raises(DegenerateMarket):
        create_market(["Yes", "No"], [], config=CFG)


def test_create_market_with_several_seeders_keeps_uniform_prices():
    state = create_market(
        ["A", "B", "C"], [("s1", SEED), ("s2", 2 * SEED)], config=CFG
    )
    assert list(state.seeders) == ["s1", "s2"]
    assert prices(state) == pytest.approx([1 / 3] * 3, abs=1e-6)
    assert state.metadata.options == ["A", "B", "C"]


def test_second_seeder_does_not_move_prices():
    state = create_market(["Yes", "No"], [("alice", SEED)], config=CFG)
    b_initial = state.seeders["alice"].liquidity_param
    buy("trader", 0, 100, state, CFG)
    before = prices(state)

    add_seeder("bob", SEED, state, CFG)

    after = prices(state)
    assert after == pytest.approx(before, abs=1e-6)
    b_new = state.seeders["bob"].liquidity_param
    assert state.total_liquidity() == b_initial + b_new
    assert state.seeders["bob"].prior == prior_from_prices(before)
    # the favourite is more likely, so pi_min < 0.5 and b_new < b_initial
    assert b_new < b_initial


def test_onboarding_is_price_neutral_along_random_paths():
    state = create_market(["A", "B", "C"], [("s0", SEED)], config=CFG)
    for k in range(1, 5):
        run_scenario(state, random_flow(40, n_outcomes=3, seed=k), CFG)
        before = prices(state)
        b_before = state.total_liquidity()
        add_seeder(f"s{k}", SEED + k * 123_456_789, state, CFG)
        assert prices(state) == pytest.approx(before, abs=1e-6)
        assert state.total_liquidity() > b_before


def test_seed_below_minimum_is_rejected():
    state = create_market(["Yes", "No"], [("alice", SEED)], config=CFG)
    snapshot = state.to_dict()
    with pytest.raises(BelowMinimumSeed):
        add_seeder("bob", SEED - 1, state, CFG)
    assert state.to_dict() == snapshot


def test_seeder_cannot_register_twice():
    state = create_market(["Yes", "No"], [("alice", SEED)], config=CFG)
    with pytest.raises(DuplicateSeeder):
        add_seeder("alice", SEED, state, CFG)
    assert state.seeders["alice"].contributed_amount == SEED


def test_quote_seed_matches_registration():
    state = create_market(["Yes", "No"], [("alice", SEED)], config=CFG)
    buy("trader", 1, 250, state, CFG)
    total_before = state.total_liquidity()

    quote = quote_seed(2 * SEED, state, CFG)
    assert state.total_liquidity() == total_before
    assert "bob" not in state.seeders

    add_seeder("bob", 2 * SEED, state, CFG)
    assert quote.liquidity_param == state.seeders["bob"].liquidity_param
    assert quote.prior == state.seeders["bob"].prior
    assert quote.fee_share == pytest.approx(
        quote.liquidity_param / state.total_liquidity()
    )


def test_prior_from_prices_forces_exact_sum():
    prior = prior_from_prices([0.123456789, 0.333333333, 0.543209878])
    assert sum(prior) == SCALE
    assert prior[:2] == (1_234_568, 3_333_333)


def test_validate_prior():
    validate_prior((5_000_000, 5_000_000), 2)
    with pytest.raises(InvalidPrior):
        validate_prior((5_000_000, 4_999_999), 2)
    with pytest.raises(InvalidPrior):
        validate_prior((SCALE, 0), 2)
    with pytest.raises(InvalidPrior):
        validate_prior((SCALE,), 2)


def test_skewed_prior_gets_less_liquidity():
    flat = liquidity_param(SEED, (5_000_000, 5_000_000))
    skewed = liquidity_param(SEED, (9_000_000, 1_000_000))
    assert skewed < flat
