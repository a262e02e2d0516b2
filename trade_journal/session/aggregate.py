from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from trade_journal.config import DEFAULT_SESSION_CONFIG, SessionConfig
from trade_journal.types import VERDICTS, FailureReason, TradeEvaluation
from trade_journal.utils import round_half_up


@dataclass(frozen=True)
class SessionMetrics:
    total_trades: int
    verdict_counts: dict[str, int]
    verdict_percentages: dict[str, int]
    consistency_score: int
    dominant_failure_reasons: tuple[FailureReason, ...]


def empty_counts() -> dict[str, int]:
    return {v: 0 for v in VERDICTS}


def count_verdicts(evaluations: Sequence[TradeEvaluation]) -> dict[str, int]:
    counts = empty_counts()
    for ev in evaluations:
        if ev.verdict in counts:
            counts[ev.verdict] += 1
    return counts


def verdict_percentages(counts: dict[str, int], total: int) -> dict[str, int]:
    if total <= 0:
        return empty_counts()
    return {v: round_half_up(counts.get(v, 0) / total * 100.0) for v in VERDICTS}


def consistency_score(evaluations: Sequence[TradeEvaluation], cfg: SessionConfig = DEFAULT_SESSION_CONFIG) -> int:
    if not evaluations:
        return 0
    scores = np.array([cfg.verdict_scores.get(ev.verdict, 0.0) for ev in evaluations], dtype=float)
    return round_half_up(float(np.mean(scores)))


def dominant_failure_reasons(evaluations: Sequence[TradeEvaluation], top_n: int = 3) -> tuple[FailureReason, ...]:
    counts: Counter[str] = Counter()
    first_message: dict[str, str] = {}
    for ev in evaluations:
        for reason in ev.reasons:
            if not reason.rule_id:
                continue
            counts[reason.rule_id] += 1
            first_message.setdefault(reason.rule_id, reason.message or "No message provided")
    # most_common keeps first-seen order on ties
    return tuple(
        FailureReason(rule_id=rule_id, count=n, message=first_message[rule_id])
        for rule_id, n in counts.most_common(max(0, top_n))
    )


def aggregate_session_metrics(
    evaluations: Sequence[TradeEvaluation],
    cfg: SessionConfig = DEFAULT_SESSION_CONFIG,
) -> SessionMetrics:
    total = len(evaluations)
    counts = count_verdicts(evaluations)
    return SessionMetrics(
        total_trades=total,
        verdict_counts=counts,
        verdict_percentages=verdict_percentages(counts, total),
        consistency_score=consistency_score(evaluations, cfg),
        dominant_failure_reasons=dominant_failure_reasons(evaluations, cfg.top_failure_reasons),
    )
