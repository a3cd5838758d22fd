from __future__ import annotations

import logging
import os
import json
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..errors import PersistenceError

logger = logging.getLogger(__name__)

# One hour, in milliseconds
CACHE_EXPIRY_MS = 3_600_000


def now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)


def read_json_file(path: str) -> Optional[Any]:
    """Load a JSON document, returning None when the file does not exist.

    Raises:
        PersistenceError: If the file exists but cannot be read or parsed.
    """
    if not os.path.exists(path):
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise PersistenceError(f"Failed to read {path}: {e}", path=path) from e


def write_json_file(path: str, data: Any) -> None:
    """Write a JSON document wholesale, pretty-printed with two-space indent.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    try:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
    except (OSError, TypeError, ValueError) as e:
        raise PersistenceError(f"Failed to write {path}: {e}", path=path) from e


@dataclass
class CacheEntry:
    """A captured iframe URL for one source page."""
    source_url: str
    url: str
    timestamp: int  # epoch ms

    def age_ms(self, now: int) -> int:
        return now - self.timestamp

    def is_fresh(self, now: int, expiry_ms: int = CACHE_EXPIRY_MS) -> bool:
        return self.age_ms(now) < expiry_ms

    def to_json(self) -> Dict[str, Any]:
        return {"url": self.url, "timestamp": self.timestamp}


class CacheFileSys:
    """Flat JSON cache of extracted iframe URLs, keyed by source page URL.

    The whole file is read on every lookup and rewritten on every update::

        {
          "https://yandex.ru/video/preview/123": {
            "url": "https://rutube.ru/play/embed/abc",
            "timestamp": 1718000000000
          }
        }

    Read failures fall back to an empty cache. Write failures are logged and
    otherwise ignored, so a failed write only costs a future re-extraction.
    """

    def __init__(self, cache_file: str):
        self.cache_file = os.path.abspath(cache_file)

    def _load(self) -> Dict[str, Any]:
        try:
            data = read_json_file(self.cache_file)
        except PersistenceError as e:
            logger.warning(f"{e}. Starting with empty cache.")
            return {}
        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Cache file {self.cache_file} is not a JSON object. Starting with empty cache.")
            return {}
        return data

    def _save(self, data: Dict[str, Any]) -> bool:
        try:
            write_json_file(self.cache_file, data)
        except PersistenceError as e:
            logger.error(str(e))
            return False
        return True

    @staticmethod
    def _parse_entry(source_url: str, raw: Any) -> Optional[CacheEntry]:
        if not isinstance(raw, dict):
            return None
        url = raw.get("url")
        timestamp = raw.get("timestamp")
        if not isinstance(url, str) or not url:
            return None
        if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
            return None
        return CacheEntry(source_url=source_url, url=url, timestamp=int(timestamp))

    # Public API methods
    def get(self, source_url: str) -> Optional[CacheEntry]:
        """Return the stored entry for ``source_url``, fresh or not."""
        raw = self._load().get(source_url)
        if raw is None:
            return None
        entry = self._parse_entry(source_url, raw)
        if entry is None:
            logger.warning(f"Ignoring malformed cache entry for {source_url}")
        return entry

    def put(self, source_url: str, iframe_url: str, timestamp: Optional[int] = None) -> CacheEntry:
        """Store ``iframe_url`` for ``source_url``, replacing any previous entry."""
        entry = CacheEntry(
            source_url=source_url,
            url=iframe_url,
            timestamp=now_ms() if timestamp is None else timestamp,
        )
        data = self._load()
        data[source_url] = entry.to_json()
        self._save(data)
        return entry

    def has(self, source_url: str) -> bool:
        return self.get(source_url) is not None
