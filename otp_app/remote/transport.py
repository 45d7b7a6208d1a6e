"""
Fetch transports.

A transport turns a locator into raw document bytes. HTTP(S) locators are
fetched with an httpx async client, retrying server and network errors;
``file://`` locators are read from disk. ``DefaultRemoteResolver`` picks the
transport by URL scheme.
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname

import httpx

from ..config.defaults import FetchParams
from ..errors import FetchError, ResourceNotFoundError
from ..logging.config import get_resolution_logger

logger = get_resolution_logger(__name__)


class RemoteResolver(ABC):
    """Base class for fetch transports."""

    @abstractmethod
    async def fetch(self, locator: str) -> bytes:
        """
        Fetch the document behind ``locator``.

        Raises:
            FetchError: If the document cannot be fetched
        """

    async def aclose(self) -> None:
        """Release any held connections."""

    async def __aenter__(self) -> "RemoteResolver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class HttpRemoteResolver(RemoteResolver):
    """HTTP(S) transport with fixed-delay retries for retryable failures."""

    def __init__(self, params: Optional[FetchParams] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.params = params or FetchParams()
        self.logger = logger
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"User-Agent": self.params.user_agent}
            headers.update(self.params.headers)
            self._client = httpx.AsyncClient(
                timeout=self.params.timeout_seconds,
                headers=headers,
                follow_redirects=self.params.follow_redirects,
            )
        return self._client

    async def fetch(self, locator: str) -> bytes:
        attempt = 0

        while True:
            try:
                return await self._fetch_once(locator)
            except FetchError as e:
                if not e.retryable or attempt >= self.params.retry_attempts:
                    raise
                attempt += 1
                self.logger.warning(
                    f"Fetch attempt {attempt} failed, retrying in {self.params.retry_delay_seconds}s",
                    locator=locator,
                    status_code=e.status_code,
                    error=str(e)
                )
                await asyncio.sleep(self.params.retry_delay_seconds)

    async def _fetch_once(self, locator: str) -> bytes:
        try:
            response = await self._get_client().get(locator)
        except httpx.InvalidURL as e:
            raise FetchError(f"Invalid URL {locator}: {e}", locator=locator) from e
        except httpx.TimeoutException as e:
            raise FetchError(f"Timed out fetching {locator}: {e}", locator=locator, retryable=True) from e
        except httpx.RequestError as e:
            raise FetchError(f"Network error fetching {locator}: {e}", locator=locator, retryable=True) from e

        status_code = response.status_code
        if status_code == 404 or status_code == 410:
            raise ResourceNotFoundError(f"HTTP {status_code}: {locator} not found",
                                        locator=locator, status_code=status_code)
        if status_code >= 500:
            raise FetchError(f"HTTP {status_code}: {response.reason_phrase}",
                             locator=locator, status_code=status_code, retryable=True)
        if status_code >= 400:
            raise FetchError(f"HTTP {status_code}: {response.reason_phrase}",
                             locator=locator, status_code=status_code)

        self.logger.debug("Document fetched", locator=locator, status_code=status_code,
                          byte_count=len(response.content))
        return response.content

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class FileRemoteResolver(RemoteResolver):
    """Reads ``file://`` locators from the local file system."""

    async def fetch(self, locator: str) -> bytes:
        parsed = urlparse(locator)
        if parsed.scheme != "file":
            raise FetchError(f"Not a file locator: {locator}", locator=locator)

        path = Path(url2pathname(parsed.path))
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise ResourceNotFoundError(f"File not found: {path}", locator=locator) from e
        except OSError as e:
            raise FetchError(f"Failed to read {path}: {e}", locator=locator) from e


class DefaultRemoteResolver(RemoteResolver):
    """Dispatches to the HTTP or file transport by locator scheme."""

    def __init__(self, params: Optional[FetchParams] = None,
                 http: Optional[HttpRemoteResolver] = None,
                 files: Optional[FileRemoteResolver] = None):
        self.http = http or HttpRemoteResolver(params)
        self.files = files or FileRemoteResolver()

    async def fetch(self, locator: str) -> bytes:
        scheme = urlparse(locator).scheme.lower()
        if scheme in ("http", "https"):
            return await self.http.fetch(locator)
        if scheme == "file":
            return await self.files.fetch(locator)
        raise FetchError(f"Unsupported locator scheme: {scheme!r}", locator=locator)

    async def aclose(self) -> None:
        await self.http.aclose()
        await self.files.aclose()
