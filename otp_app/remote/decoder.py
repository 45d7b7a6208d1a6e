"""
Resolution session decoder.

A ``RemoteDecoder`` owns everything that lives for one top-level load: the
document format, the fetch transport, the decode context and the locator
cache. It fetches and decodes referenced documents, memoizes them per
locator, and decides whether sibling references resolve one after another
or concurrently.
"""

import asyncio
import time
from collections.abc import Awaitable
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Optional, TypeVar, Union

from ..config.defaults import ResolverParams
from ..errors import ContractViolation, DecodeError, FetchError, ResolutionError
from ..logging.config import get_resolution_logger, log_fetch
from .documents import DocumentDecoder
from .resolvable import Resolvable
from .transport import RemoteResolver

T = TypeVar("T")

logger = get_resolution_logger(__name__)


@dataclass
class _CacheEntry:
    """A locator's requested type and the task loading its value."""
    value_type: type
    task: "asyncio.Future[Any]"


class RemoteDecoder:
    """
    Fetch, decode and cache referenced documents for one resolution session.

    The cache maps each locator to the node type it was first requested as.
    Requesting the same locator as a different type is a contract violation.
    Concurrent requests for a locator share a single in-flight fetch.
    """

    def __init__(
        self,
        document_decoder: DocumentDecoder,
        resolver: RemoteResolver,
        context: Any = None,
        params: Optional[ResolverParams] = None,
    ) -> None:
        self.document_decoder = document_decoder
        self.resolver = resolver
        self.context = context
        self.params = params or ResolverParams()
        self.logger = logger

        self._entries: dict[str, _CacheEntry] = {}
        self._semaphore: Optional[asyncio.Semaphore] = None
        if self.params.concurrent:
            self._semaphore = asyncio.Semaphore(self.params.max_concurrent_fetches)

        self.fetch_count = 0
        self.cache_hits = 0

    def decode_data(self, value_type: type[T], data: Union[bytes, str]) -> T:
        """
        Decode a document synchronously with the session's format and context.

        Raises:
            DecodeError: If the document is malformed
        """
        return self.document_decoder.decode(value_type, data, self.context)

    async def decode(self, locator: str, value_type: type[T]) -> T:
        """
        Load the value behind ``locator``, fetching it at most once per session.

        Raises:
            ResolutionError: If fetching or decoding the document fails
            ContractViolation: If the locator was already requested as another type
        """
        entry = self._entries.get(locator)
        if entry is not None:
            if entry.value_type is not value_type:
                raise ContractViolation(
                    f"Locator {locator} requested as {value_type.__name__} but cached as "
                    f"{entry.value_type.__name__}",
                    context={"locator": locator},
                )
            self.cache_hits += 1
            value = await entry.task
            log_fetch(self.logger, locator, cache_hit=True, type_name=value_type.__name__)
            return value

        task = asyncio.ensure_future(self._load(locator, value_type))
        self._entries[locator] = _CacheEntry(value_type=value_type, task=task)
        return await task

    def cached(self, locator: str) -> Optional[Any]:
        """The cached value for ``locator`` if it finished loading successfully."""
        entry = self._entries.get(locator)
        if entry is None or not entry.task.done() or entry.task.cancelled():
            return None
        if entry.task.exception() is not None:
            return None
        return entry.task.result()

    async def _load(self, locator: str, value_type: type[T]) -> T:
        start_time = time.perf_counter()

        try:
            data = await self._fetch(locator)
        except FetchError as e:
            self.logger.warning(
                "Reference fetch failed",
                locator=locator,
                value_type=value_type.__name__,
                status_code=e.status_code,
                error=str(e)
            )
            raise ResolutionError(locator, e) from e

        try:
            value = self.document_decoder.decode(value_type, data, self.context)
        except DecodeError as e:
            self.logger.warning(
                "Referenced document failed to decode",
                locator=locator,
                value_type=value_type.__name__,
                error=str(e)
            )
            raise ResolutionError(locator, e) from e

        log_fetch(
            self.logger,
            locator,
            cache_hit=False,
            type_name=value_type.__name__,
            byte_count=len(data),
            duration_ms=(time.perf_counter() - start_time) * 1000,
        )
        return value

    async def _fetch(self, locator: str) -> bytes:
        self.fetch_count += 1
        if self._semaphore is None:
            return await self.resolver.fetch(locator)
        async with self._semaphore:
            return await self.resolver.fetch(locator)

    async def resolve_each(self, resolvables: list[Resolvable]) -> None:
        """Resolve each node, sequentially or concurrently per the session params."""
        await self.run_all([partial(resolvable.resolve, self) for resolvable in resolvables])

    async def run_all(self, factories: list[Callable[[], Awaitable[T]]]) -> list[T]:
        """
        Run coroutine factories and return their results in the given order.

        Sequential sessions await one after another. Concurrent sessions run
        them together and fail fast: on the first failure the remaining
        work is cancelled and the earliest failure in list order is raised.
        """
        if not self.params.concurrent or len(factories) < 2:
            results = []
            for factory in factories:
                results.append(await factory())
            return results

        tasks = [asyncio.ensure_future(factory()) for factory in factories]
        try:
            await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            pending = [task for task in tasks if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.gather(*pending, return_exceptions=True)

        errors = [task.exception() for task in tasks
                  if not task.cancelled() and task.exception() is not None]
        if errors:
            raise errors[0]
        return [task.result() for task in tasks]

    def get_stats(self) -> dict[str, Any]:
        """Get session fetch statistics."""
        return {
            "locators": len(self._entries),
            "fetch_count": self.fetch_count,
            "cache_hits": self.cache_hits,
            "concurrent": self.params.concurrent,
        }
