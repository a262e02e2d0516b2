from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping


DEFAULT_PENALTIES: Mapping[str, int] = MappingProxyType(
    {
        "STOP_LOSS": 25,  # no stop loss
        "RISK_LIMIT": 20,  # risking more than allowed
        "RISK_REWARD": 15,  # poor R:R setup
        "RULE_DISCIPLINE": 30,  # violated own trading rules
    }
)

DEFAULT_VERDICT_SCORES: Mapping[str, int] = MappingProxyType(
    {
        "GOOD": 100,
        "AVERAGE": 60,
        "BAD": 20,
    }
)


@dataclass(frozen=True)
class RuleThresholds:
    max_risk_percent: float = 1.0
    min_rr_ratio: float = 1.5


@dataclass(frozen=True)
class VerdictThresholds:
    good: float = 80.0
    average: float = 60.0


@dataclass(frozen=True)
class EvaluationConfig:
    base_score: float = 100
    thresholds: RuleThresholds = RuleThresholds()
    penalties: Mapping[str, float] = field(default_factory=lambda: DEFAULT_PENALTIES)
    verdicts: VerdictThresholds = VerdictThresholds()


@dataclass(frozen=True)
class SessionConfig:
    verdicts: VerdictThresholds = VerdictThresholds()
    verdict_scores: Mapping[str, float] = field(default_factory=lambda: DEFAULT_VERDICT_SCORES)
    top_failure_reasons: int = 3


DEFAULT_CONFIG = EvaluationConfig()
DEFAULT_SESSION_CONFIG = SessionConfig()
