from __future__ import annotations

import json

import pytest

from trade_journal.api import evaluate_session_request, evaluate_trade_request, to_payload
from trade_journal.errors import InvalidInputError, InvalidTradeError
from trade_journal.instruments.registry import resolve_spec

from test_evaluator import BAD_TRADE, GOOD_TRADE


def test_trade_request_payload_is_camel_case_json():
    out = evaluate_trade_request({"trade": GOOD_TRADE})
    assert out["tradeId"] == "T001"
    assert out["verdict"] == "GOOD"
    assert out["metrics"]["hasStopLoss"] is True
    assert out["ruleResults"][0] == {"ruleId": "STOP_LOSS", "passed": True, "message": "Stop loss was set"}
    assert out["reasons"] == []
    json.dumps(out)


@pytest.mark.parametrize(
    "body,field",
    [({}, "trade"), ({"trade": None}, "trade"), ({"trade": "x"}, "trade"), ({"trade": {"pnl": 1}}, "tradeId")],
)
def test_trade_request_rejects_bad_bodies(body, field):
    with pytest.raises(InvalidTradeError) as exc:
        evaluate_trade_request(body)
    assert exc.value.field == field


def test_session_request():
    out = evaluate_session_request({"trades": [GOOD_TRADE, BAD_TRADE]})
    assert out["totalTrades"] == 2
    assert out["sessionVerdict"] == "AVERAGE"
    assert out["verdictCounts"] == {"GOOD": 1, "AVERAGE": 0, "BAD": 1}
    assert out["dominantFailureReasons"][0]["ruleId"] == "STOP_LOSS"
    assert len(out["tradeEvaluations"]) == 2


@pytest.mark.parametrize("body", [{}, {"trades": "T001"}, {"trades": {"a": 1}}, None])
def test_session_request_rejects_non_arrays(body):
    with pytest.raises(InvalidInputError):
        evaluate_session_request(body)  # type: ignore[arg-type]


def test_derive_economics_fills_missing_fields():
    trade = {
        "tradeId": "FX1",
        "market": "FOREX",
        "symbol": "EURUSD",
        "direction": "Buy",
        "entryPrice": 1.1000,
        "exitPrice": 1.1050,
        "stopLoss": 1.0980,
        "takeProfit": 1.1060,
        "lotSize": 0.1,
        "riskPercent": 0.5,
        "ruleFollowed": True,
    }
    plain = evaluate_trade_request({"trade": trade})
    derived = evaluate_trade_request({"trade": trade}, derive_economics=True)
    assert plain["metrics"]["pnl"] == 0
    assert derived["metrics"]["pnl"] == 50.0
    assert derived["metrics"]["rrRatio"] == 3.0
    assert derived["verdict"] == "GOOD"
    assert plain["verdict"] == "GOOD"
    assert plain["score"] == 85


def test_to_payload_converts_enums():
    out = to_payload(resolve_spec("INDIAN", "NIFTY", "INDEX"))
    assert out["lotKind"] == "FLEXIBLE"
    assert out["contractSize"] == 50
    assert out["instrumentSubtype"] == "INDEX"


def test_scores_serialize_as_integers():
    out = evaluate_trade_request({"trade": GOOD_TRADE})
    assert json.dumps(out["score"]) == "100"
    assert all(isinstance(r["penalty"], int) for r in evaluate_trade_request({"trade": BAD_TRADE})["reasons"])
