from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Optional


Verdict = Literal["GOOD", "AVERAGE", "BAD"]
VERDICTS: tuple[Verdict, ...] = ("GOOD", "AVERAGE", "BAD")

ResolutionSource = Literal["SYMBOL", "SUBTYPE", "MARKET_DEFAULT", "UNIVERSAL_DEFAULT"]


class Side(str, Enum):
    BUY = "Buy"
    SELL = "Sell"

    @classmethod
    def parse(cls, value: object) -> Optional["Side"]:
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        v = value.strip().lower()
        if v in ("buy", "long"):
            return cls.BUY
        if v in ("sell", "short"):
            return cls.SELL
        return None


class Market(str, Enum):
    FOREX = "FOREX"
    COMMODITY = "COMMODITY"
    CRYPTO = "CRYPTO"
    INDIAN = "INDIAN"


class LotKind(str, Enum):
    FIXED = "FIXED"
    FLEXIBLE = "FLEXIBLE"
    NONE = "NONE"


@dataclass(frozen=True)
class InstrumentSpec:
    symbol: str
    market: str
    lot_kind: LotKind
    contract_size: float
    min_lot_size: float | None = None
    lot_increment: float | None = None
    instrument_subtype: str | None = None
    name: str = ""
    quote_currency: str | None = None


@dataclass(frozen=True)
class SpecResolution:
    spec: InstrumentSpec
    source: ResolutionSource

    @property
    def fallback(self) -> bool:
        return self.source not in ("SYMBOL", "SUBTYPE")


@dataclass(frozen=True)
class TradeMetrics:
    has_stop_loss: bool
    risk_percent: float
    rr_ratio: float
    pnl: float
    is_profitable: bool
    rule_followed: bool
    entry_price: float
    exit_price: float
    quantity: float
    defaulted: tuple[str, ...] = ()


@dataclass(frozen=True)
class RuleResult:
    rule_id: str
    passed: bool
    message: str


@dataclass(frozen=True)
class PenaltyReason:
    rule_id: str
    penalty: float
    message: str


@dataclass(frozen=True)
class TradeEvaluation:
    trade_id: str
    metrics: TradeMetrics
    rule_results: tuple[RuleResult, ...]
    score: float
    verdict: Verdict
    verdict_description: str
    reasons: tuple[PenaltyReason, ...]


@dataclass(frozen=True)
class FailureReason:
    rule_id: str
    count: int
    message: str


@dataclass(frozen=True)
class SessionEvaluation:
    total_trades: int
    verdict_counts: dict[str, int]
    verdict_percentages: dict[str, int]
    consistency_score: int
    session_verdict: Verdict
    dominant_failure_reasons: tuple[FailureReason, ...]
    trade_evaluations: tuple[TradeEvaluation, ...]
