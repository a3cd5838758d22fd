from .cache_filesys import CacheEntry, CacheFileSys, CACHE_EXPIRY_MS, now_ms
from .config_store import ConfigStore
from .logging_setup import create_logger, cleanup_logger, create_sub_logger
from .page_info_retrieval import IframeExtractor
from .url_tools import (
    TRACKED_URL_PREFIX,
    IFRAME_SRC_MARKER,
    is_allowed_tracked_url,
    iframe_selector,
    display_host,
)

__all__ = [
    "CacheEntry",
    "CacheFileSys",
    "CACHE_EXPIRY_MS",
    "now_ms",
    "ConfigStore",
    "create_logger",
    "cleanup_logger",
    "create_sub_logger",
    "IframeExtractor",
    "TRACKED_URL_PREFIX",
    "IFRAME_SRC_MARKER",
    "is_allowed_tracked_url",
    "iframe_selector",
    "display_host",
]
