from __future__ import annotations

from typing import Sequence

from trade_journal.config import DEFAULT_CONFIG, EvaluationConfig
from trade_journal.types import PenaltyReason, RuleResult


def _failed(rule: object) -> bool:
    return isinstance(rule, RuleResult) and rule.passed is False


def compute_score(rule_results: Sequence[RuleResult] | None, cfg: EvaluationConfig = DEFAULT_CONFIG) -> float:
    if not isinstance(rule_results, (list, tuple)) or not rule_results:
        # no rules evaluated: nothing to deduct
        return cfg.base_score

    score = cfg.base_score
    for rule in rule_results:
        if _failed(rule):
            score -= cfg.penalties.get(rule.rule_id, 0)
    return max(0, min(100, score))


def penalty_reasons(
    rule_results: Sequence[RuleResult] | None,
    cfg: EvaluationConfig = DEFAULT_CONFIG,
) -> tuple[PenaltyReason, ...]:
    if not isinstance(rule_results, (list, tuple)):
        return ()
    return tuple(
        PenaltyReason(rule_id=r.rule_id, penalty=cfg.penalties.get(r.rule_id, 0), message=r.message)
        for r in rule_results
        if _failed(r)
    )
