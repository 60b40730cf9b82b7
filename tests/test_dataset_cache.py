"""Tests for the fetch-if-absent dataset cache, served by a local aiohttp app."""

import asyncio
import json
from unittest.mock import patch

import pytest
from aiohttp import test_utils, web

from echotune.catalog import load_and_filter
from echotune.exceptions import DataDirectoryError, FetchError
from echotune.storage import DatasetCache

from .conftest import COUNTRIES

UNREACHABLE = "http://127.0.0.1:1/json"


def make_app(requests, stations, stations_status=200):
    """A stand-in for the radio-browser API that records each request."""

    async def stations_handler(request):
        requests.append(("stations", dict(request.headers)))
        if stations_status != 200:
            return web.Response(status=stations_status, text="unavailable")
        return web.json_response(stations)

    async def countries_handler(request):
        requests.append(("countries", dict(request.headers)))
        return web.json_response(COUNTRIES)

    app = web.Application()
    app.router.add_get("/json/stations", stations_handler)
    app.router.add_get("/json/countries", countries_handler)
    return app


def run_against_server(app, data_dir, body):
    """Runs body(cache) with a cache pointed at a local server hosting app."""

    async def scenario():
        async with test_utils.TestServer(app) as server:
            async with DatasetCache(
                data_dir,
                stations_url=str(server.make_url("/json/stations")),
                countries_url=str(server.make_url("/json/countries")),
                user_agent="EchoTune/test",
            ) as cache:
                return await body(cache)

    return asyncio.run(scenario())


class TestEnsureDataset:
    """Tests for DatasetCache.ensure_dataset / ensure_all."""

    def test_fetches_each_dataset_once(self, tmp_path):
        requests = []
        app = make_app(requests, [{"name": "Radio One", "countrycode": "US"}])

        async def body(cache):
            return await cache.ensure_all(), await cache.ensure_all()

        first, second = run_against_server(app, tmp_path / "data", body)

        assert first == {"stations": True, "countries": True}
        assert second == {"stations": False, "countries": False}
        assert [name for name, _ in requests] == ["stations", "countries"]
        assert json.loads((tmp_path / "data" / "countries.json").read_text()) == COUNTRIES

    def test_sends_fixed_headers(self, tmp_path):
        requests = []
        app = make_app(requests, [])

        async def body(cache):
            return await cache.ensure_all()

        run_against_server(app, tmp_path, body)

        _, headers = requests[0]
        assert headers["User-Agent"] == "EchoTune/test"
        assert headers["Accept"] == "application/json"

    def test_non_success_status_leaves_no_file(self, tmp_path):
        requests = []
        app = make_app(requests, [], stations_status=503)

        async def body(cache):
            return await cache.ensure_all()

        result = run_against_server(app, tmp_path, body)

        assert result == {"stations": False, "countries": True}
        assert not (tmp_path / "stations.db").exists()
        assert not (tmp_path / "stations.db.part").exists()
        assert (tmp_path / "countries.json").exists()

    def test_transport_failure_raises_fetch_error(self, tmp_path):
        async def scenario():
            async with DatasetCache(tmp_path, timeout=5) as cache:
                await cache.ensure_dataset(
                    "stations", f"{UNREACHABLE}/stations", tmp_path / "stations.db"
                )

        with pytest.raises(FetchError, match="stations"):
            asyncio.run(scenario())
        assert list(tmp_path.iterdir()) == []

    def test_local_write_failure_raises_data_directory_error(self, tmp_path):
        requests = []
        app = make_app(requests, [{"name": "Radio One"}])

        async def body(cache):
            return await cache.ensure_all()

        with patch(
            "echotune.storage.dataset_cache.os.replace",
            side_effect=OSError(28, "No space left on device"),
        ):
            with pytest.raises(DataDirectoryError, match="stations"):
                run_against_server(app, tmp_path, body)

        assert not (tmp_path / "stations.db").exists()
        assert not (tmp_path / "stations.db.part").exists()

    def test_existing_file_skips_network(self, data_dir):
        """Cached files are used as-is, even when the remote is unreachable."""

        async def scenario():
            async with DatasetCache(
                data_dir,
                stations_url=f"{UNREACHABLE}/stations",
                countries_url=f"{UNREACHABLE}/countries",
            ) as cache:
                return await cache.ensure_all()

        assert asyncio.run(scenario()) == {"stations": False, "countries": False}

        stations = load_and_filter(data_dir / "stations.db", country_code="FR")
        assert [s.station_id for s in stations] == ["s-2", "s-5"]

    def test_creates_missing_directories(self, tmp_path):
        requests = []
        app = make_app(requests, [])
        target = tmp_path / "a" / "b" / "stations.db"

        async def body(cache):
            return await cache.ensure_dataset(
                "stations", cache.datasets[0].remote_url, target
            )

        assert run_against_server(app, tmp_path, body) is True
        assert json.loads(target.read_text()) == []


class TestEndToEnd:
    """Fetch, load and filter in one go."""

    def test_blank_name_station_is_fetched_and_filtered(self, tmp_path):
        requests = []
        app = make_app(requests, [{"name": "", "country_code": "US"}])

        async def body(cache):
            await cache.ensure_all()
            return cache.stations_path

        stations_path = run_against_server(app, tmp_path, body)

        (station,) = load_and_filter(stations_path)
        assert station.name == "Unknown"
        assert len(load_and_filter(stations_path, country_code="US")) == 1
        assert load_and_filter(stations_path, country_code="FR") == []


class TestClear:
    """Tests for DatasetCache.clear."""

    def test_removes_cached_files(self, data_dir):
        cache = DatasetCache(data_dir)
        assert cache.clear() == 2
        assert not cache.stations_path.exists()
        assert cache.clear() == 0
