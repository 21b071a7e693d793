"""CLI commands for TradeMind.

This package provides the command-line interface for TradeMind,
including trade logging, analytics and session management commands.
"""

from trademind.cli.main import cli, main

__all__ = ["cli", "main"]
