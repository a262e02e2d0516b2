"""Factual measurements of one raw trade. No scoring happens here."""
from __future__ import annotations

from typing import Any, Mapping

from trade_journal.types import Side, TradeMetrics
from trade_journal.utils import to_number, trade_field


def _stop_on_correct_side(entry: float | None, exit_: float | None, stop: float | None, side: Side | None) -> bool:
    if stop is None:
        return False
    if entry is None:
        return True
    if side is None:
        if exit_ is None:
            return True
        # direction inferred from outcome when not given
        side = Side.BUY if exit_ >= entry else Side.SELL
    if side == Side.BUY:
        return stop < entry
    return stop > entry


def compute_metrics(raw: Mapping[str, Any]) -> TradeMetrics:
    if not isinstance(raw, Mapping):
        raw = {}
    defaulted: list[str] = []

    def num(name: str, value: Any, default: float = 0.0) -> float:
        out = to_number(value)
        if out is None:
            defaulted.append(name)
            return default
        return out

    entry = to_number(trade_field(raw, "entry"))
    exit_ = to_number(trade_field(raw, "exit"))
    stop = to_number(trade_field(raw, "stop_loss"))
    side = Side.parse(trade_field(raw, "direction"))

    risk_percent = min(max(num("riskPercent", raw.get("riskPercent")), 0.0), 100.0)
    rr_ratio = max(num("rrRatio", raw.get("rrRatio")), 0.0)
    pnl = num("pnl", raw.get("pnl"))
    entry_price = num("entryPrice", entry)
    exit_price = num("exitPrice", exit_)
    quantity = num("quantity", trade_field(raw, "quantity"))

    return TradeMetrics(
        has_stop_loss=_stop_on_correct_side(entry, exit_, stop, side),
        risk_percent=risk_percent,
        rr_ratio=rr_ratio,
        pnl=pnl,
        is_profitable=pnl > 0,
        rule_followed=raw.get("ruleFollowed") is True,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        defaulted=tuple(sorted(defaulted)),
    )
