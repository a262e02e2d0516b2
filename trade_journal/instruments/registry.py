"""Per-instrument contract economics for FOREX, COMMODITY, CRYPTO and INDIAN markets.

Lookup is an ordered chain of resolvers; the first one that answers wins and
the last one always answers, so every (market, symbol, subtype) resolves to a
spec. ``resolve_spec_detailed`` reports which resolver answered.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

from trade_journal.errors import UnknownInstrumentError
from trade_journal.types import InstrumentSpec, LotKind, Market, SpecResolution
from trade_journal.utils import normalize_key, to_number

logger = logging.getLogger(__name__)

DEFAULT_KEY = "DEFAULT"

INDIAN_FNO_SUBTYPES = ("INDEX", "FNO")
INDIAN_EQUITY_SUBTYPE = "EQUITY"
INDIAN_INDEX_SYMBOLS = ("NIFTY", "BANKNIFTY", "FINNIFTY", "MIDCPNIFTY", "SENSEX", "BANKEX")


def _lot_spec(
    symbol: str,
    market: Market,
    contract_size: float,
    *,
    name: str,
    quote: str | None = "USD",
    lot_kind: LotKind = LotKind.FIXED,
    min_lot: float = 0.01,
    increment: float = 0.01,
    subtype: str | None = None,
) -> InstrumentSpec:
    return InstrumentSpec(
        symbol=symbol,
        market=market.value,
        lot_kind=lot_kind,
        contract_size=contract_size,
        min_lot_size=min_lot,
        lot_increment=increment,
        instrument_subtype=subtype,
        name=name,
        quote_currency=quote,
    )


# Standard lot = 100,000 units of base currency
FOREX_SPECS: Mapping[str, InstrumentSpec] = {
    "EURUSD": _lot_spec("EURUSD", Market.FOREX, 100_000, name="Euro / US Dollar"),
    "GBPUSD": _lot_spec("GBPUSD", Market.FOREX, 100_000, name="British Pound / US Dollar"),
    "USDJPY": _lot_spec("USDJPY", Market.FOREX, 100_000, name="US Dollar / Japanese Yen", quote="JPY"),
    "AUDUSD": _lot_spec("AUDUSD", Market.FOREX, 100_000, name="Australian Dollar / US Dollar"),
    "USDCAD": _lot_spec("USDCAD", Market.FOREX, 100_000, name="US Dollar / Canadian Dollar", quote="CAD"),
    "USDCHF": _lot_spec("USDCHF", Market.FOREX, 100_000, name="US Dollar / Swiss Franc", quote="CHF"),
    "NZDUSD": _lot_spec("NZDUSD", Market.FOREX, 100_000, name="New Zealand Dollar / US Dollar"),
    DEFAULT_KEY: _lot_spec(DEFAULT_KEY, Market.FOREX, 100_000, name="Default Forex Pair", quote=None),
}

COMMODITY_SPECS: Mapping[str, InstrumentSpec] = {
    "XAUUSD": _lot_spec("XAUUSD", Market.COMMODITY, 100, name="Gold vs US Dollar"),  # 100 troy oz
    "XAGUSD": _lot_spec("XAGUSD", Market.COMMODITY, 5_000, name="Silver vs US Dollar"),  # 5000 troy oz
    DEFAULT_KEY: _lot_spec(DEFAULT_KEY, Market.COMMODITY, 100, name="Default Commodity", quote=None),
}

# CFD assumption: 1 lot = 1 coin
CRYPTO_SPECS: Mapping[str, InstrumentSpec] = {
    "BTCUSD": _lot_spec("BTCUSD", Market.CRYPTO, 1, name="Bitcoin / US Dollar"),
    "ETHUSD": _lot_spec("ETHUSD", Market.CRYPTO, 1, name="Ethereum / US Dollar"),
    "BTCUSDT": _lot_spec("BTCUSDT", Market.CRYPTO, 1, name="Bitcoin / Tether", quote="USDT"),
    "ETHUSDT": _lot_spec("ETHUSDT", Market.CRYPTO, 1, name="Ethereum / Tether", quote="USDT"),
    DEFAULT_KEY: _lot_spec(DEFAULT_KEY, Market.CRYPTO, 1, name="Default Crypto Pair", quote=None),
}


def _fno_spec(symbol: str, contract_size: float, name: str) -> InstrumentSpec:
    return _lot_spec(
        symbol,
        Market.INDIAN,
        contract_size,
        name=name,
        quote="INR",
        lot_kind=LotKind.FLEXIBLE,
        min_lot=1,
        increment=1,
        subtype="INDEX",
    )


# NSE/BSE exchange lot sizes; exchanges revise these periodically
INDIAN_FNO_SPECS: Mapping[str, InstrumentSpec] = {
    "NIFTY": _fno_spec("NIFTY", 50, "NIFTY 50 Index"),
    "BANKNIFTY": _fno_spec("BANKNIFTY", 15, "Bank NIFTY Index"),
    "FINNIFTY": _fno_spec("FINNIFTY", 40, "Financial Services Index"),
    "MIDCPNIFTY": _fno_spec("MIDCPNIFTY", 75, "Midcap NIFTY Index"),
    "SENSEX": _fno_spec("SENSEX", 10, "BSE SENSEX Index"),
}

INDIAN_EQUITY_DEFAULT = InstrumentSpec(
    symbol="CASH_EQUITY",
    market=Market.INDIAN.value,
    lot_kind=LotKind.NONE,
    contract_size=1,
    min_lot_size=1,
    lot_increment=1,
    instrument_subtype=INDIAN_EQUITY_SUBTYPE,
    name="Indian Cash Equity",
    quote_currency="INR",
)

MARKET_SPECS: Mapping[str, Mapping[str, InstrumentSpec]] = {
    Market.FOREX.value: FOREX_SPECS,
    Market.COMMODITY.value: COMMODITY_SPECS,
    Market.CRYPTO.value: CRYPTO_SPECS,
}


@dataclass(frozen=True)
class SpecKey:
    market: str
    symbol: str
    subtype: str

    @classmethod
    def normalize(cls, market: object, symbol: object = None, subtype: object = None) -> "SpecKey":
        return cls(market=normalize_key(market), symbol=normalize_key(symbol), subtype=normalize_key(subtype))


Resolver = Callable[[SpecKey], Optional[SpecResolution]]


def _resolve_indian(key: SpecKey) -> SpecResolution | None:
    if key.market != Market.INDIAN.value:
        return None
    if key.subtype == INDIAN_EQUITY_SUBTYPE:
        return SpecResolution(spec=INDIAN_EQUITY_DEFAULT, source="SUBTYPE")
    if key.subtype in INDIAN_FNO_SUBTYPES and key.symbol:
        spec = INDIAN_FNO_SPECS.get(key.symbol)
        if spec is not None:
            return SpecResolution(spec=spec, source="SYMBOL")
        tagged = replace(INDIAN_EQUITY_DEFAULT, instrument_subtype=key.subtype)
        return SpecResolution(spec=tagged, source="MARKET_DEFAULT")
    # missing or unrecognised subtype, or F&O without a symbol
    return SpecResolution(spec=INDIAN_EQUITY_DEFAULT, source="MARKET_DEFAULT")


def _resolve_symbol(key: SpecKey) -> SpecResolution | None:
    table = MARKET_SPECS.get(key.market)
    if table is None or not key.symbol or key.symbol == DEFAULT_KEY:
        return None
    spec = table.get(key.symbol)
    return SpecResolution(spec=spec, source="SYMBOL") if spec is not None else None


def _resolve_market_default(key: SpecKey) -> SpecResolution | None:
    table = MARKET_SPECS.get(key.market)
    if table is None or DEFAULT_KEY not in table:
        return None
    return SpecResolution(spec=table[DEFAULT_KEY], source="MARKET_DEFAULT")


def _resolve_universal(key: SpecKey) -> SpecResolution:
    spec = InstrumentSpec(
        symbol=key.symbol or DEFAULT_KEY,
        market=key.market or "UNKNOWN",
        lot_kind=LotKind.FIXED,
        contract_size=1,
    )
    return SpecResolution(spec=spec, source="UNIVERSAL_DEFAULT")


RESOLVERS: tuple[Resolver, ...] = (
    _resolve_indian,
    _resolve_symbol,
    _resolve_market_default,
    _resolve_universal,
)


def resolve_spec_detailed(
    market: str | None,
    symbol: str | None = None,
    instrument_subtype: str | None = None,
    *,
    strict: bool = False,
    resolvers: tuple[Resolver, ...] = RESOLVERS,
) -> SpecResolution:
    key = SpecKey.normalize(market, symbol, instrument_subtype)
    for resolver in resolvers:
        res = resolver(key)
        if res is None:
            continue
        if res.fallback:
            if strict:
                raise UnknownInstrumentError(
                    f"No contract spec for market={key.market or '?'} symbol={key.symbol or '?'} "
                    f"subtype={key.subtype or '?'} (resolved via {res.source})",
                    field="symbol",
                )
            logger.debug(
                "spec_fallback market=%s symbol=%s subtype=%s source=%s",
                key.market,
                key.symbol,
                key.subtype,
                res.source,
            )
        return res
    # the chain ends in _resolve_universal, custom chains may not
    return _resolve_universal(key)


def resolve_spec(
    market: str | None,
    symbol: str | None = None,
    instrument_subtype: str | None = None,
) -> InstrumentSpec:
    return resolve_spec_detailed(market, symbol, instrument_subtype).spec


def contract_size(market: str | None, symbol: str | None = None, instrument_subtype: str | None = None) -> float:
    return resolve_spec(market, symbol, instrument_subtype).contract_size or 1


def is_lot_based(market: str | None, symbol: str | None = None, instrument_subtype: str | None = None) -> bool:
    return resolve_spec(market, symbol, instrument_subtype).lot_kind != LotKind.NONE


def lot_field_label(market: str | None, instrument_subtype: str | None = None) -> str:
    m = normalize_key(market)
    if not m:
        return "Quantity"
    if m == Market.INDIAN.value:
        return "Quantity" if normalize_key(instrument_subtype) == INDIAN_EQUITY_SUBTYPE else "Lots"
    return "Lot Size"


@dataclass(frozen=True)
class LotValidation:
    valid: bool
    message: str


def validate_lot_size(
    market: str | None,
    symbol: str | None,
    instrument_subtype: str | None,
    lot_size: object,
) -> LotValidation:
    spec = resolve_spec(market, symbol, instrument_subtype)
    lot = to_number(lot_size)
    if lot is None:
        return LotValidation(valid=False, message="Lot size must be a valid number")
    if lot <= 0:
        return LotValidation(valid=False, message="Lot size must be greater than 0")
    if spec.min_lot_size and lot < spec.min_lot_size:
        return LotValidation(valid=False, message=f"Minimum lot size is {spec.min_lot_size:g}")
    if spec.lot_increment:
        steps = lot / spec.lot_increment
        if abs(steps - round(steps)) > 1e-6:
            return LotValidation(valid=False, message=f"Lot size must be in increments of {spec.lot_increment:g}")
    if spec.market == Market.INDIAN.value and spec.instrument_subtype in INDIAN_FNO_SUBTYPES:
        if lot != int(lot):
            return LotValidation(valid=False, message="Lots must be whole numbers for Indian F&O")
    return LotValidation(valid=True, message="Valid")
