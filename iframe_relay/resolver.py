"""Cache-backed fetch-or-refresh of iframe URLs."""

from __future__ import annotations

import asyncio
import logging
from logging import Logger
from typing import Callable, Dict, Optional, Protocol

from .errors import ExtractionError
from .utils.cache_filesys import CACHE_EXPIRY_MS, CacheFileSys, now_ms


class Extractor(Protocol):
    async def extract(self, page_url: str) -> str: ...


class IframeResolver:
    """Return a fresh iframe URL for a source page, extracting it when needed.

    A cached entry younger than ``expiry_ms`` is returned as is. Otherwise the
    extractor runs once and its result is written to the cache. Concurrent
    callers asking for the same source URL wait on the same extraction instead
    of launching their own browser.
    """

    def __init__(
        self,
        cache: CacheFileSys,
        extractor: Extractor,
        logger: Optional[Logger] = None,
        expiry_ms: int = CACHE_EXPIRY_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self.cache = cache
        self.extractor = extractor
        self.logger = logger or logging.getLogger(__name__)
        self.expiry_ms = expiry_ms
        self.clock = clock
        self._in_flight: Dict[str, asyncio.Future] = {}

    def lookup(self, source_url: str) -> Optional[str]:
        """Fresh cached iframe URL for ``source_url``, or None."""
        entry = self.cache.get(source_url)
        if entry is not None and entry.is_fresh(self.clock(), self.expiry_ms):
            return entry.url
        return None

    async def resolve(self, source_url: str) -> str:
        """Return the iframe URL for ``source_url``.

        Raises:
            ExtractionError: If a refresh was needed and extraction failed.
        """
        cached = self.lookup(source_url)
        if cached is not None:
            self.logger.info("Cache hit", extra={"cache": "hit", "source_url": source_url, "iframe_url": cached})
            return cached

        pending = self._in_flight.get(source_url)
        if pending is not None:
            self.logger.info("Waiting for running extraction", extra={"cache": "shared", "source_url": source_url})
            try:
                return await asyncio.shield(pending)
            except asyncio.CancelledError:
                # Owner request was cancelled; this waiter was not
                if pending.cancelled():
                    raise ExtractionError("Shared extraction was cancelled", page_url=source_url) from None
                raise

        self.logger.info("Cache miss, extracting", extra={"cache": "miss", "source_url": source_url})
        future = asyncio.get_running_loop().create_future()
        self._in_flight[source_url] = future
        try:
            iframe_url = await self.extractor.extract(source_url)
            self.cache.put(source_url, iframe_url, timestamp=self.clock())
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as e:
            future.set_exception(e)
            # Mark retrieved so an unawaited failure does not warn at shutdown
            future.exception()
            raise
        else:
            future.set_result(iframe_url)
        finally:
            self._in_flight.pop(source_url, None)

        return iframe_url
