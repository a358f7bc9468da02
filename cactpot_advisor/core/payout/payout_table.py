from __future__ import annotations

from pathlib import Path
from typing import Mapping

import yaml


DEFAULT_PAYOUTS: dict[int, int] = {
    # Mini Cactpot MGP schedule; keep in sync with the in-game table.
    6: 10000,
    7: 36,
    8: 720,
    9: 360,
    10: 80,
    11: 252,
    12: 108,
    13: 72,
    14: 54,
    15: 180,
    16: 72,
    17: 180,
    18: 119,
    19: 36,
    20: 306,
    21: 1080,
    22: 144,
    23: 1800,
    24: 3600,
}

MIN_SUM = 6
MAX_SUM = 24


class PayoutConfigError(ValueError):
    pass


def payout(payouts: Mapping[int, int], total: int) -> int:
    """MGP for a line sum; sums with no entry pay 0."""
    return payouts.get(total, 0)


def load_payout_file(path: str | Path) -> dict[int, int]:
    """Load payout overrides from a YAML file.

    Format:
      <sum>: <mgp>

    Sums must be integers in 6..24 and rewards non-negative integers.
    """
    p = Path(path)
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise PayoutConfigError(f"payout file is not valid YAML: {e}") from e
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise PayoutConfigError("payout file must be a mapping of sum -> mgp")

    out: dict[int, int] = {}
    for k, v in raw.items():
        if isinstance(k, bool) or not isinstance(k, int):
            raise PayoutConfigError(f"payout sums must be integers, got {k!r}")
        if not MIN_SUM <= k <= MAX_SUM:
            raise PayoutConfigError(f"payout sum {k} is outside {MIN_SUM}..{MAX_SUM}")
        if isinstance(v, bool) or not isinstance(v, int) or v < 0:
            raise PayoutConfigError(f"payout for sum {k} must be a non-negative integer")
        out[k] = v
    return out


def merged_payouts(overrides: dict[int, int] | None = None) -> dict[int, int]:
    """Return DEFAULT_PAYOUTS with optional overrides applied per sum."""
    merged = dict(DEFAULT_PAYOUTS)
    if overrides:
        merged.update(overrides)
    return merged


def load_and_merge(payout_file: str | None) -> dict[int, int]:
    if not payout_file:
        return merged_payouts()
    overrides = load_payout_file(payout_file)
    return merged_payouts(overrides)
