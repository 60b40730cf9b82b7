"""
Functions for formatting and displaying data in the console using Rich.
"""

from collections.abc import Sequence
from pathlib import Path

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from echotune.models.config import AppConfig
from echotune.models.station import Station


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "PlayerNotFoundError": [
            "• Install VLC from https://www.videolan.org/vlc/.",
            "• Or point to the binary with --player or `player_path` in config.ini.",
        ],
        "DataDirectoryError": [
            "• Make sure HOME (or XDG_DATA_HOME / LOCALAPPDATA) is set.",
            "• Check that the data directory is writable.",
        ],
        "FetchError": [
            "• Check your internet connection.",
            "• radio-browser.info might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
        "CatalogParseError": [
            "• The cached dataset may be incomplete or corrupted.",
            "• Run `echotune --clear-cache` to download it again.",
        ],
        "ConfigurationError": [
            "• Review the values in your config.ini.",
            "• Volume must be between 0 and 255.",
        ],
        "SpawnError": [
            "• Check that the player binary is executable.",
            "• Try passing a different binary with --player.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def build_choice_table(items: Sequence[object], title: str) -> Table:
    """Numbered table of candidates for the interactive picker."""
    table = Table(title=title, box=box.SIMPLE, title_justify="left")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name", style="cyan")
    for i, item in enumerate(items, 1):
        table.add_row(str(i), Text(str(item)))
    return table


def print_station_panel(console: Console, station: Station) -> None:
    """Displays the selected station before connecting."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row("Station:", Text(str(station)))
    table.add_row("Stream:", Text(station.stream_url, style="dim"))
    if station.codec:
        bitrate = f" @ {station.bitrate} kbps" if station.bitrate else ""
        table.add_row("Format:", f"{station.codec}{bitrate}")
    if station.tags:
        table.add_row("Tags:", Text(station.tags, style="dim"))
    if station.homepage:
        table.add_row("Homepage:", Text(station.homepage, style="dim"))

    console.print(
        Panel(table, title="[bold green]Selected station[/bold green]", expand=False)
    )


def print_config(console: Console, config: AppConfig) -> None:
    """Displays the effective configuration."""
    content = ""
    for key in sorted(AppConfig.get_ini_keys()):
        content += f"{key} = {getattr(config, key)}\n"
    content += f"data_dir = {config.data_dir}"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{Path(config.config_path)}[/dim])",
            border_style="cyan",
        )
    )
