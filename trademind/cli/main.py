"""Main CLI entry point for TradeMind.

This module provides the main click group and lazy loading
for command modules to keep startup fast.
"""

import logging
from pathlib import Path
from typing import Optional

import click


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.

    Command modules are only imported when one of their
    commands is actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.

        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]

        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)

        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib

        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)

        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break

        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")

        self.add_command(cmd)
        return cmd


LAZY_SUBCOMMANDS = {
    # Journal
    "log": "trademind.cli.journal",
    "close": "trademind.cli.journal",
    "reopen": "trademind.cli.journal",
    "trades": "trademind.cli.journal",
    # Analytics
    "metrics": "trademind.cli.analytics",
    "equity": "trademind.cli.analytics",
    "calendar": "trademind.cli.analytics",
    "breakdown": "trademind.cli.analytics",
    # Sessions and settings
    "init": "trademind.cli.session",
    "reset": "trademind.cli.session",
    "archives": "trademind.cli.session",
    "settings": "trademind.cli.session",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="trademind")
@click.option(
    "--profile",
    "profile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Profile snapshot file (defaults to the configured path).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, profile_path: Optional[Path], verbose: bool) -> None:
    """TradeMind - options trading journal with discipline analytics.

    Log trades against a pre-trade checklist, review performance
    and drawdown, and archive trading periods.

    \b
    Quick Start:
      trademind init "My Name" --capital 10000
      trademind log SPY --direction Short --type Put --entry-price 2.5 --quantity 5
      trademind metrics
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["profile_path"] = profile_path


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
