"""Exceptions raised by TradeMind."""


class TradeMindError(Exception):
    """Base exception for TradeMind."""


class TradeValidationError(TradeMindError, ValueError):
    """A trade record violates the ledger invariants."""


class TradeNotFoundError(TradeMindError, LookupError):
    """No trade with the given id exists in the ledger."""


class SnapshotError(TradeMindError):
    """A profile snapshot file could not be read or parsed."""
