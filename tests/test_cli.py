from __future__ import annotations

import json

from trade_journal.pipelines.evaluate import main

from test_evaluator import BAD_TRADE, GOOD_TRADE


def test_cli_session(tmp_path, capsys):
    p = tmp_path / "session.json"
    p.write_text(json.dumps({"trades": [GOOD_TRADE, BAD_TRADE]}), encoding="utf-8")
    assert main(["--trades", str(p), "--session"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["totalTrades"] == 2
    assert out["sessionVerdict"] == "AVERAGE"


def test_cli_single_trades_with_threshold_override(tmp_path, capsys):
    p = tmp_path / "trades.json"
    p.write_text(json.dumps([BAD_TRADE]), encoding="utf-8")
    assert main(["--trades", str(p), "--max-risk-percent", "3", "--min-rr", "0.5"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert len(out) == 1
    assert out[0]["score"] == 45
    assert [r["ruleId"] for r in out[0]["reasons"]] == ["STOP_LOSS", "RULE_DISCIPLINE"]


def test_cli_rejects_trade_without_id(tmp_path, capsys):
    p = tmp_path / "trades.json"
    p.write_text(json.dumps([{"pnl": 1}]), encoding="utf-8")
    assert main(["--trades", str(p)]) == 2
    assert "tradeId" in capsys.readouterr().err
