from __future__ import annotations

import pytest

from trade_journal.economics.currency import (
    convert_to_account_currency,
    convert_trades,
    total_pnl,
    trade_currency,
    win_loss_stats,
)


def test_trade_currency():
    assert trade_currency("INDIAN", "RELIANCE") == "INR"
    assert trade_currency("FOREX", "banknifty") == "INR"
    assert trade_currency("FOREX", None, pair="USD/INR") == "INR"
    assert trade_currency("FOREX", "EURUSD", pair="EUR/USD") == "USD"
    assert trade_currency(None) == "USD"


def test_convert_usd_inr_both_ways():
    assert convert_to_account_currency(100, "USD", "INR", 83.0) == pytest.approx(8300.0)
    assert convert_to_account_currency(8300, "INR", "USD", 83.0) == pytest.approx(100.0)


def test_convert_same_currency_and_bad_inputs():
    assert convert_to_account_currency(12.5, "USD", "USD", 83.0) == 12.5
    assert convert_to_account_currency("oops", "USD", "INR", 83.0) == 0
    assert convert_to_account_currency(10, "USD", "INR", None) == 10
    assert convert_to_account_currency(10, "EUR", "INR", 90) == 10


TRADES = [
    {"tradeId": "A", "pnl": 100, "tradeCurrency": "USD", "exchangeRateAtExecution": 80},
    {"tradeId": "B", "pnl": -1600, "tradeCurrency": "INR", "exchangeRateAtExecution": 80},
    {"tradeId": "C", "pnl": 0},
    {"tradeId": "D", "pnl": 50},
]


def test_convert_trades_adds_converted_pnl():
    out = convert_trades(TRADES, "INR")
    assert [t["tradeId"] for t in out] == ["A", "B", "C", "D"]
    assert out[0]["convertedPnl"] == pytest.approx(8000.0)
    assert out[1]["convertedPnl"] == -1600
    # no currency or rate stored: USD at rate 1
    assert out[3]["convertedPnl"] == 50
    assert "convertedPnl" not in TRADES[0]


def test_convert_trades_rejects_non_list():
    assert convert_trades(None, "USD") == []
    assert convert_trades({"pnl": 1}, "USD") == []


def test_total_pnl_in_account_currency():
    assert total_pnl(TRADES, "USD") == pytest.approx(100 - 20 + 0 + 50)
    assert total_pnl([None, {"pnl": "x"}], "USD") == 0
    assert total_pnl([], "USD") == 0


def test_win_loss_stats_ignores_breakeven():
    stats = win_loss_stats(TRADES, "USD")
    assert (stats.wins, stats.losses) == (2, 1)
    assert stats.win_rate == pytest.approx(200 / 3)
    assert win_loss_stats("nope").win_rate == 0
