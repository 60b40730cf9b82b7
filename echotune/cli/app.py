"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from echotune import __version__
from echotune.catalog import is_large_catalog, load_and_filter, load_countries
from echotune.models.config import AppConfig
from echotune.player import PlayerSupervisor, find_player
from echotune.storage import ConfigManager, DatasetCache
from echotune.utils.path import get_config_dir, get_data_dir

from .formatters import print_config, print_station_panel
from .picker import pick_item

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("echotune")

app = typer.Typer(
    name="echotune",
    help="Browse internet radio stations from radio-browser.info and play them with VLC.",
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _make_cache(config: AppConfig) -> DatasetCache:
    return DatasetCache(
        Path(config.data_dir),
        stations_url=config.stations_url,
        countries_url=config.countries_url,
        user_agent=config.user_agent,
        timeout=config.request_timeout,
    )


async def _ensure_datasets(config: AppConfig) -> None:
    async with _make_cache(config) as cache:
        fetched = await cache.ensure_all()
    for name, was_fetched in fetched.items():
        if was_fetched:
            console.print(f"[green]✓ Downloaded the {name} dataset.[/green]")


@app.command()
def main(
    countries: bool = typer.Option(
        False, "--countries", help="Pick a country interactively before the station."
    ),
    country: str | None = typer.Option(
        None, "-c", "--country", help="Filter by country code (e.g. US)."
    ),
    language: str | None = typer.Option(
        None, "-l", "--language", help="Filter by language code (e.g. en)."
    ),
    volume: int | None = typer.Option(
        None, "-V", "--volume", help="Player volume, 0-255 (default: 10)."
    ),
    player: Path | None = typer.Option(  # noqa: B008
        None, "--player", help="Path to the VLC binary, skipping auto-detection."
    ),
    clear_cache: bool = typer.Option(
        False, "--clear-cache", help="Delete the cached datasets and exit."
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the effective configuration and exit."
    ),
    verbose: int = typer.Option(
        0,
        "-v",
        "--verbose",
        count=True,
        help="-v logs echotune at debug level, -vv adds aiohttp and other libraries.",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Pick a radio station and play it."""
    if version:
        console.print(f"[bold]echotune[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    if verbose >= 1:
        logging.getLogger("echotune").setLevel(logging.DEBUG)
    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)

    cli_options = {
        key: value
        for key, value in {
            "volume": volume,
            "player_path": str(player) if player else None,
        }.items()
        if value is not None
    }
    config_manager = ConfigManager(get_config_dir() / "config.ini")
    config = config_manager.load_config(cli_options, data_dir=get_data_dir())

    if show_config:
        print_config(console, config)
        raise typer.Exit()

    if clear_cache:
        removed = _make_cache(config).clear()
        console.print(
            f"[green]✓ Cache cleared successfully ({removed} files removed).[/green]"
        )
        raise typer.Exit()

    player_path = find_player(config.player_path or None)
    log.debug(f"Using player '{player_path}'.")

    asyncio.run(_ensure_datasets(config))
    cache = _make_cache(config)

    selected_country = None
    if countries:
        country_list = load_countries(cache.countries_path)
        console.print(f"Country count: {len(country_list)}")
        if country_list:
            selected_country = pick_item(
                console, country_list, "Select a country"
            ).iso_code

    stations = load_and_filter(
        cache.stations_path,
        country_code=country,
        selected_country=selected_country,
        language=language,
    )
    console.print(f"Station count: {len(stations)}")

    if not stations:
        console.print("[yellow]No stations match the given filters.[/yellow]")
        raise typer.Exit()

    if is_large_catalog(stations, config.large_catalog_threshold):
        console.print(
            "[yellow]WARNING[/yellow] - Station count is excessively large! "
            "Searching will be very slow."
        )
        console.input("[dim]Press Enter to continue...[/dim]")

    station = pick_item(console, stations, "Select a station")
    print_station_panel(console, station)
    console.print(f"Attempting to connect to {station.stream_url}...")

    supervisor = PlayerSupervisor(
        player_path, volume=config.volume, watchdog_interval=config.watchdog_interval
    )
    asyncio.run(supervisor.play(station.stream_url))
    console.print("Exited VLC")
