"""TradeMind - options trading journal with discipline analytics."""

__version__ = "0.1.0"
