"""JSON snapshots of market state."""

from __future__ import annotations

from pathlib import Path
import json
from typing import Any

from ..state.market import MarketState


def write_json(path: str | Path, obj: Any):
    """Write through a sibling temp file so readers never see a partial snapshot."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_text(json.dumps(obj, indent=2, sort_keys=True))
    tmp.replace(target)


def read_json(path: str | Path) -> Any:
    with Path(path).open() as f:
        return json.load(f)


def save_state(state: MarketState, path: str | Path):
    write_json(path, state.to_dict())


def load_state(path: str | Path) -> MarketState:
    return MarketState.from_dict(read_json(path))
