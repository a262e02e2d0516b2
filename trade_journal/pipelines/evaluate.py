from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace

from trade_journal.api import evaluate_session_request, evaluate_trade_request
from trade_journal.config import DEFAULT_CONFIG, EvaluationConfig
from trade_journal.data.trade_loader import load_trades
from trade_journal.errors import TradeJournalError


def _build_config(args: argparse.Namespace) -> EvaluationConfig:
    cfg = DEFAULT_CONFIG
    th = cfg.thresholds
    if args.max_risk_percent is not None:
        th = replace(th, max_risk_percent=float(args.max_risk_percent))
    if args.min_rr is not None:
        th = replace(th, min_rr_ratio=float(args.min_rr))
    return replace(cfg, thresholds=th)


def _configure_logging(log_file: str) -> None:
    log_level = os.environ.get("TRADE_JOURNAL_LOG_LEVEL", "INFO").upper()
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        handlers=handlers,
        format="%(asctime)s %(levelname)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Score journal trades and sessions.")
    ap.add_argument("--trades", required=True, help="JSON (list, {trades}, {trade}) or CSV file")
    ap.add_argument("--session", action="store_true", help="aggregate all trades into one session verdict")
    ap.add_argument("--derive", action="store_true", help="fill pnl/rrRatio/riskPercent from prices when missing")
    ap.add_argument("--max-risk-percent", type=float, default=None)
    ap.add_argument("--min-rr", type=float, default=None)
    ap.add_argument("--log-file", default="")
    args = ap.parse_args(argv)

    _configure_logging(args.log_file)
    cfg = _build_config(args)

    try:
        trades = load_trades(args.trades)
        if args.session:
            out = evaluate_session_request({"trades": trades}, cfg, derive_economics=args.derive)
        else:
            out = [evaluate_trade_request({"trade": t}, cfg, derive_economics=args.derive) for t in trades]
    except TradeJournalError as e:
        logging.error("evaluation_rejected field=%s error=%s", e.field, e)
        print(str(e), file=sys.stderr)
        return 2

    print(json.dumps(out, separators=(",", ":"), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
