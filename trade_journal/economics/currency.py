from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Mapping

from trade_journal.instruments.registry import INDIAN_INDEX_SYMBOLS
from trade_journal.types import Market
from trade_journal.utils import normalize_key, to_number

logger = logging.getLogger(__name__)

_PAIR_SEPARATORS = re.compile(r"[/\s-]")


def trade_currency(market: str | None, symbol: str | None = None, pair: str | None = None) -> str:
    if normalize_key(market) == Market.INDIAN.value:
        return "INR"
    sym = normalize_key(symbol)
    if sym and any(s in sym for s in INDIAN_INDEX_SYMBOLS):
        return "INR"
    if pair and _PAIR_SEPARATORS.sub("", pair.upper()).endswith("INR"):
        return "INR"
    return "USD"


def convert_to_account_currency(
    pnl: object,
    trade_ccy: str,
    account_ccy: str,
    rate_at_execution: object = None,
) -> float:
    """Convert a native P&L using the rate stored with the trade; never looks a rate up."""
    amount = to_number(pnl)
    if amount is None:
        return 0.0
    if trade_ccy == account_ccy:
        return amount

    rate = to_number(rate_at_execution)
    if rate is None or rate <= 0:
        rate = 1.0

    if trade_ccy == "USD" and account_ccy == "INR":
        return amount * rate
    if trade_ccy == "INR" and account_ccy == "USD":
        return amount / rate

    logger.warning("unhandled_currency_conversion from=%s to=%s", trade_ccy, account_ccy)
    return amount


def _converted(trade: Mapping[str, Any], account_ccy: str) -> float:
    return convert_to_account_currency(
        trade.get("pnl"),
        trade.get("tradeCurrency") or "USD",
        account_ccy,
        trade.get("exchangeRateAtExecution") or 1,
    )


def convert_trades(trades: Any, account_ccy: str) -> list[dict[str, Any]]:
    """Copy each trade with ``convertedPnl`` in the account currency.

    Trades stored before currencies were tracked have no ``tradeCurrency``
    (USD) or ``exchangeRateAtExecution`` (1).
    """
    if not isinstance(trades, (list, tuple)):
        return []
    return [{**t, "convertedPnl": _converted(t, account_ccy)} for t in trades if isinstance(t, Mapping)]


def total_pnl(trades: Any, account_ccy: str | None = None) -> float:
    return float(sum(t["convertedPnl"] for t in convert_trades(trades, account_ccy or "USD")))


@dataclass(frozen=True)
class WinLossStats:
    wins: int
    losses: int
    win_rate: float


def win_loss_stats(trades: Any, account_ccy: str | None = None) -> WinLossStats:
    # breakeven trades count as neither
    converted = [t["convertedPnl"] for t in convert_trades(trades, account_ccy or "USD")]
    wins = sum(1 for p in converted if p > 0)
    losses = sum(1 for p in converted if p < 0)
    decided = wins + losses
    return WinLossStats(wins=wins, losses=losses, win_rate=wins / decided * 100.0 if decided else 0.0)
