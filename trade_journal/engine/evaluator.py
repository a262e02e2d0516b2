"""Single-trade pipeline: raw trade -> metrics -> rules -> score -> verdict."""
from __future__ import annotations

from typing import Any, Mapping

from trade_journal.config import DEFAULT_CONFIG, EvaluationConfig
from trade_journal.engine.metrics import compute_metrics
from trade_journal.engine.rules import evaluate_rules
from trade_journal.engine.scoring import compute_score, penalty_reasons
from trade_journal.errors import InvalidTradeError
from trade_journal.policy.verdict import classify_verdict, verdict_description
from trade_journal.types import TradeEvaluation


def require_trade_id(raw: object) -> str:
    if not isinstance(raw, Mapping):
        raise InvalidTradeError("Invalid trade object: expected a mapping", field="trade")
    trade_id = raw.get("tradeId")
    if trade_id is None or isinstance(trade_id, bool):
        raise InvalidTradeError("Invalid trade object: tradeId is required", field="tradeId")
    trade_id = str(trade_id).strip()
    if not trade_id:
        raise InvalidTradeError("Invalid trade object: tradeId is required", field="tradeId")
    return trade_id


def evaluate_trade(raw: Mapping[str, Any], cfg: EvaluationConfig = DEFAULT_CONFIG) -> TradeEvaluation:
    """Evaluate one trade.

    Raises ``InvalidTradeError`` when ``raw`` is not a mapping or has no
    usable ``tradeId``. Every later step is total: malformed numbers are
    coerced, never raised.
    """
    trade_id = require_trade_id(raw)

    metrics = compute_metrics(raw)
    rule_results = evaluate_rules(metrics, cfg)
    score = compute_score(rule_results, cfg)
    verdict = classify_verdict(score, cfg.verdicts)

    return TradeEvaluation(
        trade_id=trade_id,
        metrics=metrics,
        rule_results=rule_results,
        score=score,
        verdict=verdict,
        verdict_description=verdict_description(verdict),
        reasons=penalty_reasons(rule_results, cfg),
    )
