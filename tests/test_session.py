from __future__ import annotations

import logging

import pytest

from trade_journal.errors import InvalidInputError
from trade_journal.session import session_evaluator
from trade_journal.session.session_evaluator import evaluate_session

from test_evaluator import BAD_TRADE, GOOD_TRADE


def test_empty_session():
    res = evaluate_session([])
    assert res.total_trades == 0
    assert res.consistency_score == 0
    assert res.session_verdict == "BAD"
    assert res.dominant_failure_reasons == ()
    assert res.trade_evaluations == ()
    assert res.verdict_counts == {"GOOD": 0, "AVERAGE": 0, "BAD": 0}


def test_all_none_session_is_empty():
    res = evaluate_session([None, None])
    assert res.total_trades == 0
    assert res.session_verdict == "BAD"


def test_mixed_session():
    res = evaluate_session([GOOD_TRADE, BAD_TRADE])
    assert res.total_trades == 2
    assert res.verdict_counts == {"GOOD": 1, "AVERAGE": 0, "BAD": 1}
    assert res.verdict_percentages == {"GOOD": 50, "AVERAGE": 0, "BAD": 50}
    assert 60 <= res.consistency_score < 80
    assert res.session_verdict == "AVERAGE"


def test_non_list_input_raises():
    with pytest.raises(InvalidInputError):
        evaluate_session({"trades": []})  # type: ignore[arg-type]
    with pytest.raises(InvalidInputError):
        evaluate_session("T001")  # type: ignore[arg-type]


def test_bad_trades_are_isolated_and_order_kept(caplog):
    trades = [
        {**GOOD_TRADE, "tradeId": "A"},
        None,
        {"entryPrice": 1},
        {**BAD_TRADE, "tradeId": "B"},
        "not a trade",
    ]
    with caplog.at_level(logging.WARNING):
        res = evaluate_session(trades)
    assert [ev.trade_id for ev in res.trade_evaluations] == ["A", "B"]
    assert res.total_trades == 2
    assert "trade_evaluation_failed" in caplog.text


def test_all_failed_trades_is_empty_session():
    res = evaluate_session([{"pnl": 5}, {"tradeId": ""}])
    assert res.total_trades == 0
    assert res.session_verdict == "BAD"


def test_dominant_failure_reasons_top_three():
    no_stop = {**GOOD_TRADE, "stopLoss": None}
    trades = [
        {**no_stop, "tradeId": "1", "ruleFollowed": False},
        {**no_stop, "tradeId": "2", "rrRatio": 0.5},
        {**no_stop, "tradeId": "3", "riskPercent": 5, "ruleFollowed": False},
        {**GOOD_TRADE, "tradeId": "4", "rrRatio": 0.2},
    ]
    res = evaluate_session(trades)
    reasons = res.dominant_failure_reasons
    assert len(reasons) == 3
    assert reasons[0].rule_id == "STOP_LOSS"
    assert reasons[0].count == 3
    # RULE_DISCIPLINE and RISK_REWARD both fail twice; first seen wins the tie
    assert [r.rule_id for r in reasons[1:]] == ["RULE_DISCIPLINE", "RISK_REWARD"]
    assert [r.count for r in reasons[1:]] == [2, 2]


def test_consistency_score_rounding():
    # GOOD, GOOD, BAD -> (100 + 100 + 20) / 3 = 73.33
    res = evaluate_session([{**GOOD_TRADE, "tradeId": "a"}, {**GOOD_TRADE, "tradeId": "b"}, BAD_TRADE])
    assert res.consistency_score == 73
    assert res.verdict_percentages == {"GOOD": 67, "AVERAGE": 0, "BAD": 33}
    assert res.session_verdict == "AVERAGE"


def test_session_is_deterministic():
    assert evaluate_session([GOOD_TRADE, BAD_TRADE]) == evaluate_session([GOOD_TRADE, BAD_TRADE])


def test_unexpected_trade_error_logged_as_warning_with_traceback(monkeypatch, caplog):
    real = session_evaluator.evaluate_trade

    def flaky(trade, cfg):
        if trade["tradeId"] == "boom":
            raise RuntimeError("broken")
        return real(trade, cfg)

    monkeypatch.setattr(session_evaluator, "evaluate_trade", flaky)
    with caplog.at_level(logging.WARNING):
        res = evaluate_session([{**GOOD_TRADE, "tradeId": "boom"}, GOOD_TRADE])
    assert res.total_trades == 1
    [record] = [r for r in caplog.records if "trade_evaluation_error" in r.getMessage()]
    assert record.levelno == logging.WARNING
    assert record.exc_info is not None
