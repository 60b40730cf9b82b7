"""
Catalog Layer.

Loads the cached station and country datasets and filters the station list.
"""

from .filters import (
    LARGE_CATALOG_THRESHOLD,
    filter_by_country_code,
    filter_by_language,
    is_large_catalog,
    load_and_filter,
    load_countries,
    load_stations,
    normalize_names,
)

__all__ = [
    "LARGE_CATALOG_THRESHOLD",
    "filter_by_country_code",
    "filter_by_language",
    "is_large_catalog",
    "load_and_filter",
    "load_countries",
    "load_stations",
    "normalize_names",
]
