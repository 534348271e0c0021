"""Engine configuration.

Protocol constants default to the values the market contract uses. Any of
them can be overridden through the environment (or a ``.env`` file):

* ``SEEDMARKET_MIN_SHARES``      minimum shares per trade
* ``SEEDMARKET_MIN_SEED``        minimum seed, in stroops
* ``SEEDMARKET_FEE_PER_SHARE``   flat buy fee per share, in stroops
* ``SEEDMARKET_SPLIT_POLICY``    ``remainder_to_largest`` or ``truncate``
* ``SEEDMARKET_PRICE_TOLERANCE`` allowed deviation of sum(prices) from 1
* ``LOG_LEVEL``                  logging level name
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv  # type: ignore

from .fixed_point import SCALE
from .types import SplitPolicy

MIN_SHARES = 1
MIN_SEED = 1000 * SCALE  # 1000 units
FEE_PER_SHARE_STROOPS = 200_000  # 0.02 units per share


@dataclass(frozen=True)
class EngineConfig:
    min_shares: int = MIN_SHARES
    min_seed: int = MIN_SEED
    fee_per_share: int = FEE_PER_SHARE_STROOPS
    split_policy: SplitPolicy = SplitPolicy.REMAINDER_TO_LARGEST
    price_tolerance: float = 1e-6
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        load_dotenv()
        defaults = cls()
        policy = os.getenv("SEEDMARKET_SPLIT_POLICY") or defaults.split_policy.value
        return cls(
            min_shares=int(os.getenv("SEEDMARKET_MIN_SHARES", defaults.min_shares)),
            min_seed=int(os.getenv("SEEDMARKET_MIN_SEED", defaults.min_seed)),
            fee_per_share=int(
                os.getenv("SEEDMARKET_FEE_PER_SHARE", defaults.fee_per_share)
            ),
            split_policy=SplitPolicy(policy.lower()),
            price_tolerance=float(
                os.getenv("SEEDMARKET_PRICE_TOLERANCE", defaults.price_tolerance)
            ),
            log_level=(os.getenv("LOG_LEVEL") or defaults.log_level).upper(),
        )


@lru_cache()
def get_config() -> EngineConfig:
    return EngineConfig.from_env()
