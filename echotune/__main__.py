"""
Entry point for `echotune` and `python -m echotune`.

Typer runs in non-standalone mode so Ctrl+C, usage errors and application
errors all come back here and are rendered the same way.
"""

import asyncio
import logging
import os
import sys

import click
import typer
from rich.console import Console

from echotune.cli.app import app
from echotune.cli.formatters import format_error_with_suggestions
from echotune.exceptions import EchoTuneError


def main() -> None:
    """Runs the CLI and maps its outcome to a process exit code."""
    if os.name == "nt":
        try:
            sys.stdout.reconfigure(encoding="utf-8")
            sys.stderr.reconfigure(encoding="utf-8")
        except (TypeError, AttributeError):
            pass

    log = logging.getLogger("echotune")
    console = Console()

    try:
        exit_code = app(standalone_mode=False)
    except (typer.Abort, KeyboardInterrupt, asyncio.CancelledError):
        # Click turns Ctrl+C into Abort; playback handles its own SIGINT.
        console.print("\n[yellow]⚠️  Operation cancelled by user.[/yellow]")
        sys.exit(0)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except EchoTuneError as e:
        console.print()
        console.print(format_error_with_suggestions(e))
        sys.exit(1)
    except Exception as e:
        console.print()
        console.print(format_error_with_suggestions(e, {"type": "Unexpected"}))
        log.debug("Full traceback:", exc_info=True)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
