from __future__ import annotations


class TradeJournalError(ValueError):
    """Base class for caller contract violations."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class InvalidTradeError(TradeJournalError):
    pass


class InvalidInputError(TradeJournalError):
    pass


class UnknownInstrumentError(TradeJournalError):
    """Raised by strict spec resolution when only a fallback spec matched."""
