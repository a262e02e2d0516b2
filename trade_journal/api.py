"""JSON request boundary for the evaluation engine.

Request and response bodies are plain dicts with camelCase keys, so an HTTP
layer can pass them straight through. Caller contract violations raise
``InvalidTradeError`` / ``InvalidInputError``; ``.field`` names the offending
request field for a 400 response.
"""
from __future__ import annotations

from dataclasses import fields, is_dataclass
from enum import Enum
from typing import Any, Mapping

from trade_journal.config import DEFAULT_CONFIG, DEFAULT_SESSION_CONFIG, EvaluationConfig, SessionConfig
from trade_journal.economics.pnl import build_trade_inputs
from trade_journal.engine.evaluator import evaluate_trade, require_trade_id
from trade_journal.errors import InvalidInputError, InvalidTradeError
from trade_journal.session.session_evaluator import evaluate_session


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(p[:1].upper() + p[1:] for p in rest)


def to_payload(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return {_camel(f.name): to_payload(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Mapping):
        return {str(k): to_payload(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_payload(v) for v in obj]
    return obj


def evaluate_trade_request(
    body: Mapping[str, Any],
    cfg: EvaluationConfig = DEFAULT_CONFIG,
    *,
    derive_economics: bool = False,
) -> dict[str, Any]:
    if not isinstance(body, Mapping) or not isinstance(body.get("trade"), Mapping):
        raise InvalidTradeError('Request body must contain a "trade" object', field="trade")
    trade = body["trade"]
    require_trade_id(trade)
    if derive_economics:
        trade = build_trade_inputs(trade)
    return to_payload(evaluate_trade(trade, cfg))


def evaluate_session_request(
    body: Mapping[str, Any],
    cfg: EvaluationConfig = DEFAULT_CONFIG,
    session_cfg: SessionConfig = DEFAULT_SESSION_CONFIG,
    *,
    derive_economics: bool = False,
) -> dict[str, Any]:
    trades = body.get("trades") if isinstance(body, Mapping) else None
    if trades is None:
        raise InvalidInputError('Request body must contain a "trades" array', field="trades")
    if not isinstance(trades, (list, tuple)):
        raise InvalidInputError('"trades" must be an array', field="trades")
    if derive_economics:
        trades = [build_trade_inputs(t) if isinstance(t, Mapping) else t for t in trades]
    return to_payload(evaluate_session(trades, cfg, session_cfg))
