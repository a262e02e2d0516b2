"""Money amounts from prices and lot sizes.

Lot-based instruments (Forex, Commodity, Crypto, Indian F&O)::

    pnl = (exit - entry) * contract_size * lots * direction

Quantity-based instruments (Indian cash equity)::

    pnl = (exit - entry) * quantity * direction

with direction +1 for Buy and -1 otherwise. Every function returns 0 instead
of raising when its inputs are missing or malformed.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Any, Mapping

from trade_journal.instruments.registry import resolve_spec
from trade_journal.types import InstrumentSpec, LotKind, Side
from trade_journal.utils import normalize_key, round_money, to_number, trade_field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PnLRequest:
    market: str | None
    entry_price: Any
    exit_price: Any
    lot_size: Any
    direction: Side | str | None = None
    symbol: str | None = None
    instrument_subtype: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "PnLRequest":
        return cls(
            market=trade_field(raw, "market"),
            entry_price=trade_field(raw, "entry"),
            exit_price=trade_field(raw, "exit"),
            lot_size=trade_field(raw, "lot_size"),
            direction=trade_field(raw, "direction"),
            symbol=trade_field(raw, "symbol"),
            instrument_subtype=trade_field(raw, "instrument_subtype"),
        )


@dataclass(frozen=True)
class RiskRewardRequest:
    entry_price: Any
    stop_loss: Any
    take_profit: Any
    direction: Side | str | None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RiskRewardRequest":
        return cls(
            entry_price=trade_field(raw, "entry"),
            stop_loss=trade_field(raw, "stop_loss"),
            take_profit=trade_field(raw, "take_profit"),
            direction=trade_field(raw, "direction"),
        )


@dataclass(frozen=True)
class PositionRequest:
    market: str | None
    lot_size: Any
    symbol: str | None = None
    instrument_subtype: str | None = None
    entry_price: Any = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "PositionRequest":
        return cls(
            market=trade_field(raw, "market"),
            lot_size=trade_field(raw, "lot_size"),
            symbol=trade_field(raw, "symbol"),
            instrument_subtype=trade_field(raw, "instrument_subtype"),
            entry_price=trade_field(raw, "entry"),
        )


@dataclass(frozen=True)
class TradeEconomics:
    pnl: float | None
    rr_ratio: float | None
    risk_amount: float | None
    reward_amount: float | None
    position_value: float
    spec: InstrumentSpec


@dataclass(frozen=True)
class TradeParamValidation:
    valid: bool
    errors: tuple[str, ...]


def position_size(req: PositionRequest) -> float:
    lot = to_number(req.lot_size)
    if lot is None or lot <= 0:
        return 0.0
    spec = resolve_spec(req.market, req.symbol, req.instrument_subtype)
    return (spec.contract_size or 1) * lot


def compute_pnl(req: PnLRequest) -> float:
    if not normalize_key(req.market) or req.entry_price is None or req.exit_price is None:
        logger.debug("pnl_missing_inputs market=%s", req.market)
        return 0.0

    entry = to_number(req.entry_price)
    exit_ = to_number(req.exit_price)
    size = to_number(req.lot_size) if req.lot_size is not None else 0.0
    if entry is None or exit_ is None or size is None or size <= 0:
        logger.debug("pnl_invalid_inputs entry=%r exit=%r lot_size=%r", req.entry_price, req.exit_price, req.lot_size)
        return 0.0

    spec = resolve_spec(req.market, req.symbol, req.instrument_subtype)
    direction_multiplier = 1.0 if Side.parse(req.direction) == Side.BUY else -1.0
    price_diff = (exit_ - entry) * direction_multiplier

    if spec.lot_kind == LotKind.NONE:
        pnl = price_diff * size
    else:
        pnl = price_diff * (spec.contract_size or 1) * size
    return round_money(pnl)


def compute_risk_reward(req: RiskRewardRequest) -> float:
    entry = to_number(req.entry_price)
    sl = to_number(req.stop_loss)
    tp = to_number(req.take_profit)
    side = Side.parse(req.direction)
    if entry is None or sl is None or tp is None or side is None:
        return 0.0

    if side == Side.BUY:
        risk = entry - sl
        reward = tp - entry
    else:
        risk = sl - entry
        reward = entry - tp

    # a stop on the wrong side (or at entry) has no meaningful ratio
    if risk <= 0:
        return 0.0
    return round_money(reward / risk)


def risk_amount(req: PnLRequest, stop_loss: Any) -> float:
    return abs(compute_pnl(replace(req, exit_price=stop_loss)))


def reward_amount(req: PnLRequest, take_profit: Any) -> float:
    return abs(compute_pnl(replace(req, exit_price=take_profit)))


def position_value(req: PositionRequest) -> float:
    if not normalize_key(req.market) or req.entry_price is None or req.lot_size is None:
        return 0.0
    entry = to_number(req.entry_price)
    if entry is None:
        return 0.0
    return round_money(entry * position_size(req))


def trade_economics(raw: Mapping[str, Any]) -> TradeEconomics:
    pnl_req = PnLRequest.from_mapping(raw)
    rr_req = RiskRewardRequest.from_mapping(raw)
    has_exit = to_number(pnl_req.exit_price) is not None
    has_sl = to_number(rr_req.stop_loss) is not None
    has_tp = to_number(rr_req.take_profit) is not None
    return TradeEconomics(
        pnl=compute_pnl(pnl_req) if has_exit else None,
        rr_ratio=compute_risk_reward(rr_req) if (has_sl and has_tp) else None,
        risk_amount=risk_amount(pnl_req, rr_req.stop_loss) if has_sl else None,
        reward_amount=reward_amount(pnl_req, rr_req.take_profit) if has_tp else None,
        position_value=position_value(PositionRequest.from_mapping(raw)),
        spec=resolve_spec(pnl_req.market, pnl_req.symbol, pnl_req.instrument_subtype),
    )


def build_trade_inputs(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Fill ``pnl``, ``rrRatio`` and ``riskPercent`` from prices where the caller left them out.

    ``riskPercent`` is derived only when an ``accountBalance`` is supplied.
    Explicit values are never overwritten.
    """
    out = dict(raw)
    econ = trade_economics(raw)
    if to_number(raw.get("pnl")) is None and econ.pnl is not None:
        out["pnl"] = econ.pnl
    if to_number(raw.get("rrRatio")) is None and econ.rr_ratio is not None:
        out["rrRatio"] = econ.rr_ratio
    balance = to_number(raw.get("accountBalance"))
    if to_number(raw.get("riskPercent")) is None and econ.risk_amount is not None and balance and balance > 0:
        out["riskPercent"] = round_money(econ.risk_amount / balance * 100.0)
    return out


def validate_trade_params(raw: Mapping[str, Any]) -> TradeParamValidation:
    errors: list[str] = []
    if not normalize_key(trade_field(raw, "market")):
        errors.append("Market type is required")
    if to_number(trade_field(raw, "entry")) is None:
        errors.append("Valid entry price is required")
    exit_ = trade_field(raw, "exit")
    if exit_ is not None and to_number(exit_) is None:
        errors.append("Exit price must be a valid number")
    lot = to_number(trade_field(raw, "lot_size"))
    if lot is None or lot <= 0:
        errors.append("Valid lot size/quantity is required (must be greater than 0)")
    if Side.parse(trade_field(raw, "direction")) is None:
        errors.append('Direction must be either "Buy" or "Sell"')
    return TradeParamValidation(valid=not errors, errors=tuple(errors))


def format_pnl(pnl: float | None, currency: str = "USD") -> str:
    if pnl is None or isinstance(pnl, bool) or not isinstance(pnl, (int, float)) or math.isnan(pnl):
        return "N/A"
    sign = "+" if pnl >= 0 else "-"
    symbol = "₹" if currency == "INR" else "$"
    return f"{sign}{symbol}{abs(pnl):.2f}"
