"""Errors raised by the pricing engine.

Every ``MarketError`` is raised before any state is touched, so a caller can
reject the request and keep using the same ``MarketState``. ``code`` is a
stable identifier suitable for showing a rejection reason.
"""

from __future__ import annotations


class MarketError(Exception):
    code = "market_error"


class BelowMinimumShares(MarketError):
    code = "below_minimum_shares"


class BelowMinimumSeed(MarketError):
    code = "below_minimum_seed"


class InsufficientShares(MarketError):
    code = "insufficient_shares"


class InvalidPrior(MarketError):
    code = "invalid_prior"


class DegenerateMarket(MarketError):
    code = "degenerate_market"


class InvalidOutcome(MarketError):
    code = "invalid_outcome"


class DuplicateSeeder(MarketError):
    code = "duplicate_seeder"


class NumericInvariantError(AssertionError):
    """Pricing produced an impossible value (negative cost, prices not summing to 1).

    This is a bug in the engine, not a user error.
    """
