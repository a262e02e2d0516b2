from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from trade_journal.config import DEFAULT_CONFIG, DEFAULT_SESSION_CONFIG, EvaluationConfig, SessionConfig
from trade_journal.engine.evaluator import evaluate_trade
from trade_journal.errors import InvalidInputError, InvalidTradeError
from trade_journal.policy.verdict import classify_verdict
from trade_journal.session.aggregate import aggregate_session_metrics, empty_counts
from trade_journal.types import SessionEvaluation, TradeEvaluation

logger = logging.getLogger(__name__)


def empty_session() -> SessionEvaluation:
    # no evidence is scored as the worst case
    return SessionEvaluation(
        total_trades=0,
        verdict_counts=empty_counts(),
        verdict_percentages=empty_counts(),
        consistency_score=0,
        session_verdict="BAD",
        dominant_failure_reasons=(),
        trade_evaluations=(),
    )


def _trade_label(trade: Any) -> str:
    if isinstance(trade, Mapping):
        return str(trade.get("tradeId") or "unknown")
    return "unknown"


def evaluate_trades(trades: Sequence[Any], cfg: EvaluationConfig = DEFAULT_CONFIG) -> list[TradeEvaluation]:
    out: list[TradeEvaluation] = []
    for i, trade in enumerate(trades):
        if trade is None:
            continue
        try:
            out.append(evaluate_trade(trade, cfg))
        except InvalidTradeError as e:
            logger.warning("trade_evaluation_failed index=%d trade_id=%s error=%s", i, _trade_label(trade), e)
        except Exception:  # noqa: BLE001
            logger.warning("trade_evaluation_error index=%d trade_id=%s", i, _trade_label(trade), exc_info=True)
    return out


def evaluate_session(
    trades: Sequence[Any],
    cfg: EvaluationConfig = DEFAULT_CONFIG,
    session_cfg: SessionConfig = DEFAULT_SESSION_CONFIG,
) -> SessionEvaluation:
    if not isinstance(trades, (list, tuple)):
        raise InvalidInputError("Invalid input: trades must be an array", field="trades")

    evaluations = evaluate_trades(trades, cfg)
    if not evaluations:
        return empty_session()

    m = aggregate_session_metrics(evaluations, session_cfg)
    return SessionEvaluation(
        total_trades=m.total_trades,
        verdict_counts=m.verdict_counts,
        verdict_percentages=m.verdict_percentages,
        consistency_score=m.consistency_score,
        session_verdict=classify_verdict(m.consistency_score, session_cfg.verdicts),
        dominant_failure_reasons=m.dominant_failure_reasons,
        trade_evaluations=tuple(evaluations),
    )
