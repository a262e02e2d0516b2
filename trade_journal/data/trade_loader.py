from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any

import pandas as pd

from trade_journal.errors import InvalidInputError

_TRUE = {"true", "yes", "y", "1"}
_FALSE = {"false", "no", "n", "0"}

# identifiers and labels stay strings even when they look numeric
_TEXT_COLUMNS = ("tradeId", "market", "symbol", "pair", "instrumentSubtype", "instrumentType", "direction")


def _parse_bool(value: Any) -> Any:
    if isinstance(value, bool) or value is None:
        return value
    s = str(value).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return value


def load_trades_csv(path: str | Path) -> list[dict[str, Any]]:
    p = Path(path)
    # journals exported from spreadsheets are often still open (locked)
    retries = 3
    while retries > 0:
        try:
            df = pd.read_csv(p, dtype={c: str for c in _TEXT_COLUMNS})
            break
        except PermissionError:
            retries -= 1
            if retries == 0:
                raise
            time.sleep(0.5)
        except pd.errors.EmptyDataError:
            return []
    df.columns = [str(c).strip() for c in df.columns]
    df = df.astype(object).where(pd.notna(df), None)
    if "ruleFollowed" in df.columns:
        df["ruleFollowed"] = df["ruleFollowed"].map(_parse_bool)
    return df.to_dict(orient="records")


def load_trades_json(path: str | Path) -> list[Any]:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        if "trades" in raw:
            trades = raw["trades"]
            if not isinstance(trades, list):
                raise InvalidInputError('"trades" must be an array', field="trades")
            return trades
        if "trade" in raw:
            return [raw["trade"]]
        return [raw]
    raise InvalidInputError(f"Unsupported JSON document in {Path(path).name}", field="trades")


def load_trades(path: str | Path) -> list[Any]:
    p = Path(path)
    if p.suffix.lower() == ".csv":
        return load_trades_csv(p)
    return load_trades_json(p)
