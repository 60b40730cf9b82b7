"""Shared fixtures for the echotune test suite."""

import json
import os
from pathlib import Path

import pytest


def station_record(**overrides):
    """A radio-browser station record using the wire field names."""
    record = {
        "changeuuid": "c-1",
        "stationuuid": "s-1",
        "name": "Radio One",
        "url": "http://stream.example/one",
        "url_resolved": "http://stream.example/one.mp3",
        "homepage": "http://example.com",
        "favicon": "",
        "tags": "rock,indie",
        "country": "The United States Of America",
        "countrycode": "US",
        "state": "",
        "language": "english",
        "languagecodes": "en",
        "votes": 12,
        "lastchangetime": "2024-01-01 00:00:00",
        "lastchangetime_iso8601": "2024-01-01T00:00:00Z",
        "codec": "MP3",
        "bitrate": 128,
        "hls": 0,
        "lastcheckok": 1,
        "clickcount": 40,
        "clicktrend": -2,
        "ssl_error": 0,
        "geo_lat": None,
        "geo_long": None,
        "has_extended_info": False,
    }
    record.update(overrides)
    return record


STATIONS = [
    station_record(stationuuid="s-1", name="Radio One", countrycode="US"),
    station_record(stationuuid="s-2", name="   ", countrycode="FR", country="France",
                   languagecodes="fr"),
    station_record(stationuuid="s-3", name="Jazz Radio", countrycode="US",
                   languagecodes="en,es"),
    station_record(stationuuid="s-4", name="", countrycode="", country=""),
    station_record(stationuuid="s-5", name="Radio Paris", countrycode="FR",
                   country="France", languagecodes="fr"),
]

COUNTRIES = [
    {"name": "France", "iso_3166_1": "FR", "stationcount": 2},
    {"name": "The United States Of America", "iso_3166_1": "US", "stationcount": 2},
]


@pytest.fixture
def data_dir(tmp_path) -> Path:
    """A data directory holding both cached datasets."""
    directory = tmp_path / "data"
    directory.mkdir()
    (directory / "stations.db").write_text(json.dumps(STATIONS), encoding="utf-8")
    (directory / "countries.json").write_text(json.dumps(COUNTRIES), encoding="utf-8")
    return directory


@pytest.fixture
def stations_file(data_dir) -> Path:
    return data_dir / "stations.db"


def _write_script(path: Path, body: str) -> Path:
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(0o755)
    return path


@pytest.fixture
def long_running_player(tmp_path) -> Path:
    """Stands in for VLC: ignores its arguments and plays 'forever'."""
    if os.name == "nt":
        pytest.skip("shell script players need a POSIX host")
    return _write_script(tmp_path / "fake-vlc", "exec sleep 30")


@pytest.fixture
def quick_exit_player(tmp_path) -> Path:
    """Stands in for VLC: exits immediately with status 3."""
    if os.name == "nt":
        pytest.skip("shell script players need a POSIX host")
    return _write_script(tmp_path / "fake-vlc-quick", "exit 3")
