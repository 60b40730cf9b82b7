"""
Loading and filtering of the cached station catalog.

Filters always return new lists in input order; stations are never mutated.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from echotune.exceptions import CatalogParseError
from echotune.models.station import UNKNOWN_STATION_NAME, Country, Station

log = logging.getLogger(__name__)

LARGE_CATALOG_THRESHOLD = 100

_STATION_LIST = TypeAdapter(list[Station])
_COUNTRY_LIST = TypeAdapter(list[Country])


def _load_records(path: Path, adapter: TypeAdapter, kind: str) -> list:
    path = Path(path)
    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise CatalogParseError(
            f"The {kind} dataset was not found at '{path}'."
        ) from e
    except OSError as e:
        raise CatalogParseError(f"Could not read the {kind} dataset: {e}") from e

    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise CatalogParseError(
            f"The {kind} dataset at '{path}' is malformed: "
            f"{e.error_count()} validation error(s), first: {e.errors()[0]['msg']}"
        ) from e


def load_stations(path: Path) -> list[Station]:
    """Parses the cached stations file."""
    stations = _load_records(path, _STATION_LIST, "stations")
    log.debug(f"Loaded {len(stations)} stations from '{path}'.")
    return stations


def load_countries(path: Path) -> list[Country]:
    """Parses the cached countries file."""
    countries = _load_records(path, _COUNTRY_LIST, "countries")
    log.debug(f"Loaded {len(countries)} countries from '{path}'.")
    return countries


def normalize_names(stations: Iterable[Station]) -> list[Station]:
    """Replaces blank station names with "Unknown"."""
    return [
        station.model_copy(update={"name": UNKNOWN_STATION_NAME})
        if station.has_blank_name
        else station
        for station in stations
    ]


def filter_by_country_code(stations: Iterable[Station], code: str) -> list[Station]:
    """Keeps stations whose country code equals code exactly (case-sensitive)."""
    return [station for station in stations if station.country_code == code]


def filter_by_language(stations: Iterable[Station], code: str) -> list[Station]:
    """Keeps stations that list code among their comma-separated language codes."""
    return [
        station
        for station in stations
        if code in (c.strip() for c in station.language_codes.split(","))
    ]


def load_and_filter(
    path: Path,
    country_code: str | None = None,
    selected_country: str | None = None,
    language: str | None = None,
) -> list[Station]:
    """
    Loads the station catalog and narrows it down.

    The stages run in a fixed order: name normalization, the explicit country
    code, the interactively selected country, then the language code. A stage
    whose argument is None is skipped; an empty string is matched literally.

    Raises:
        CatalogParseError: If the file is missing or malformed.
    """
    stations = normalize_names(load_stations(path))

    if country_code is not None:
        stations = filter_by_country_code(stations, country_code)
        log.debug(f"{len(stations)} stations match country code '{country_code}'.")

    if selected_country is not None:
        stations = filter_by_country_code(stations, selected_country)
        log.debug(
            f"{len(stations)} stations match selected country '{selected_country}'."
        )

    if language is not None:
        stations = filter_by_language(stations, language)
        log.debug(f"{len(stations)} stations match language '{language}'.")

    return stations


def is_large_catalog(
    stations: Sequence, threshold: int = LARGE_CATALOG_THRESHOLD
) -> bool:
    """True when interactive searching over the list is expected to be slow."""
    return len(stations) > threshold
