from __future__ import annotations

from trade_journal.config import DEFAULT_CONFIG, EvaluationConfig
from trade_journal.types import RuleResult, TradeMetrics


STOP_LOSS = "STOP_LOSS"
RISK_LIMIT = "RISK_LIMIT"
RISK_REWARD = "RISK_REWARD"
RULE_DISCIPLINE = "RULE_DISCIPLINE"

RULE_ORDER = (STOP_LOSS, RISK_LIMIT, RISK_REWARD, RULE_DISCIPLINE)


def check_stop_loss(metrics: TradeMetrics) -> RuleResult:
    passed = metrics.has_stop_loss
    return RuleResult(
        rule_id=STOP_LOSS,
        passed=passed,
        message="Stop loss was set" if passed else "No valid stop loss was set - high risk exposure",
    )


def check_risk_limit(metrics: TradeMetrics, max_risk: float) -> RuleResult:
    risk = metrics.risk_percent
    passed = risk <= max_risk
    return RuleResult(
        rule_id=RISK_LIMIT,
        passed=passed,
        message=f"Risk {risk:g}% within limit" if passed else f"Risk {risk:g}% exceeds {max_risk:g}% limit",
    )


def check_risk_reward(metrics: TradeMetrics, min_rr: float) -> RuleResult:
    rr = metrics.rr_ratio
    passed = rr >= min_rr
    return RuleResult(
        rule_id=RISK_REWARD,
        passed=passed,
        message=f"R:R {rr:g} meets minimum" if passed else f"R:R {rr:g} below {min_rr:g} minimum",
    )


def check_rule_discipline(metrics: TradeMetrics) -> RuleResult:
    passed = metrics.rule_followed
    return RuleResult(
        rule_id=RULE_DISCIPLINE,
        passed=passed,
        message="Trading rules were followed" if passed else "Trading rules were violated",
    )


def evaluate_rules(metrics: TradeMetrics, cfg: EvaluationConfig = DEFAULT_CONFIG) -> tuple[RuleResult, ...]:
    th = cfg.thresholds
    return (
        check_stop_loss(metrics),
        check_risk_limit(metrics, th.max_risk_percent),
        check_risk_reward(metrics, th.min_rr_ratio),
        check_rule_discipline(metrics),
    )
