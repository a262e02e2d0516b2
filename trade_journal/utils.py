from __future__ import annotations

import math
from numbers import Real
from typing import Any, Mapping


def to_number(value: Any) -> float | None:
    """Parse a user-entered numeric field; None when missing, malformed or non-finite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Real):
        try:
            out = float(value)
        except (OverflowError, ValueError):
            return None
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            out = float(s)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(out):
        return None
    return out


TRADE_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "entry": ("entryPrice", "entry"),
    "exit": ("exitPrice", "exit"),
    "stop_loss": ("stopLoss",),
    "take_profit": ("takeProfit",),
    "lot_size": ("lotSize", "lots", "quantity"),
    "quantity": ("quantity", "lotSize", "lots"),
    "direction": ("direction",),
    "market": ("market",),
    "symbol": ("symbol", "pair"),
    "instrument_subtype": ("instrumentSubtype", "instrumentType"),
}


def first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return v
    return None


def trade_field(raw: Mapping[str, Any], name: str) -> Any:
    return first_present(raw, *TRADE_FIELD_ALIASES[name])


def normalize_key(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip().upper()


def round_half_up(x: float) -> int:
    # Math.round semantics; inputs here are never negative
    return int(math.floor(x + 0.5))


def round_money(x: float) -> float:
    # + 0.0 folds -0.0 into 0.0
    return float(round(x, 2)) + 0.0
