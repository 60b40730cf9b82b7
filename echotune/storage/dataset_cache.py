"""
Fetch-if-absent cache for the remote radio-browser datasets.

A dataset is downloaded at most once: if its file exists on disk it is used
as-is, without any staleness or content check.
"""

import asyncio
import logging
import os
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

import aiofiles
import aiohttp

from echotune.exceptions import DataDirectoryError, FetchError
from echotune.models.config import (
    DEFAULT_COUNTRIES_URL,
    DEFAULT_STATIONS_URL,
    DEFAULT_USER_AGENT,
)
from echotune.utils.path import create_dir

log = logging.getLogger(__name__)

STATIONS_FILENAME = "stations.db"
COUNTRIES_FILENAME = "countries.json"


@dataclass(frozen=True)
class Dataset:
    """A named remote dataset and the file it is cached in."""

    name: str
    remote_url: str
    filename: str


class DatasetCache:
    """
    Ensures the station and country datasets exist in the data directory.

    Use as an async context manager so the underlying HTTP session is closed.
    """

    CHUNK_SIZE = 262144  # 256 KB

    def __init__(
        self,
        data_dir: Path,
        stations_url: str = DEFAULT_STATIONS_URL,
        countries_url: str = DEFAULT_COUNTRIES_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 60.0,
    ):
        self.data_dir = Path(data_dir)
        self.user_agent = user_agent
        self.timeout = timeout
        self.datasets = [
            Dataset("stations", stations_url, STATIONS_FILENAME),
            Dataset("countries", countries_url, COUNTRIES_FILENAME),
        ]
        self._session: aiohttp.ClientSession | None = None

    @property
    def stations_path(self) -> Path:
        return self.data_dir / STATIONS_FILENAME

    @property
    def countries_path(self) -> Path:
        return self.data_dir / COUNTRIES_FILENAME

    async def __aenter__(self) -> "DatasetCache":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Ensures an active aiohttp session with the fixed request headers."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={
                    "User-Agent": self.user_agent,
                    "Accept": "application/json",
                },
                timeout=aiohttp.ClientTimeout(total=self.timeout, sock_connect=15),
            )
        return self._session

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def ensure_dataset(self, name: str, remote_url: str, local_path: Path) -> bool:
        """
        Downloads a dataset unless a file already exists at local_path.

        Returns:
            True if the dataset was fetched, False if the cached copy was kept or
            the server answered with a non-success status.

        Raises:
            DataDirectoryError: If the parent directory cannot be created or the
                dataset file cannot be written.
            FetchError: If the request fails at the transport level.
        """
        local_path = Path(local_path)
        if await asyncio.to_thread(local_path.exists):
            log.debug(f"Using cached {name} dataset at '{local_path}'.")
            return False

        create_dir(local_path.parent)

        partial_path = local_path.with_name(local_path.name + ".part")
        log.info(f"Downloading {name} dataset from {remote_url}")
        session = await self._get_session()
        try:
            async with session.get(remote_url) as response:
                if response.status < 200 or response.status >= 300:
                    log.warning(
                        f"[yellow]Server returned {response.status} for the {name} "
                        "dataset, nothing cached.[/yellow]"
                    )
                    return False

                bytes_written = 0
                async with aiofiles.open(partial_path, "wb") as f:
                    async for chunk in response.content.iter_chunked(self.CHUNK_SIZE):
                        await f.write(chunk)
                        bytes_written += len(chunk)
            os.replace(partial_path, local_path)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            with suppress(FileNotFoundError):
                partial_path.unlink()
            raise FetchError(f"Failed to download the {name} dataset: {e}") from e
        except OSError as e:
            # aiohttp.ClientOSError is caught above; this is the local disk.
            with suppress(FileNotFoundError):
                partial_path.unlink()
            raise DataDirectoryError(
                f"Could not write the {name} dataset to '{local_path}': {e}"
            ) from e

        log.debug(f"Cached {bytes_written} bytes of {name} data at '{local_path}'.")
        return True

    async def ensure_all(self) -> dict[str, bool]:
        """Ensures every known dataset, each cached independently."""
        results = {}
        for dataset in self.datasets:
            results[dataset.name] = await self.ensure_dataset(
                dataset.name, dataset.remote_url, self.data_dir / dataset.filename
            )
        return results

    def clear(self) -> int:
        """Removes the cached dataset files. Returns how many were removed."""
        removed = 0
        for dataset in self.datasets:
            path = self.data_dir / dataset.filename
            try:
                path.unlink()
                removed += 1
            except FileNotFoundError:
                continue
        log.debug(f"Removed {removed} cached dataset file(s).")
        return removed
