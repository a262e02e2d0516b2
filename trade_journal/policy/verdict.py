from __future__ import annotations

from trade_journal.config import DEFAULT_CONFIG, VerdictThresholds
from trade_journal.types import Verdict


VERDICT_DESCRIPTIONS: dict[str, str] = {
    "GOOD": "Well-executed trade following risk management rules",
    "AVERAGE": "Acceptable trade with minor rule violations",
    "BAD": "Poor trade execution with significant rule violations",
}


def classify_verdict(score: float, th: VerdictThresholds = DEFAULT_CONFIG.verdicts) -> Verdict:
    if score >= th.good:
        return "GOOD"
    if score >= th.average:
        return "AVERAGE"
    return "BAD"


def verdict_description(verdict: str) -> str:
    return VERDICT_DESCRIPTIONS.get(verdict, "Unknown verdict")
