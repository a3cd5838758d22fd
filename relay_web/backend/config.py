"""Configuration for the iframe relay web server."""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass

from iframe_relay.utils.cache_filesys import CACHE_EXPIRY_MS

logger = logging.getLogger(__name__)

# Files
DEFAULT_CONFIG_FILE = "./config.json"
DEFAULT_CACHE_FILE = "./video_cache.json"
DEFAULT_LOG_DIR = "./logs"

# Server
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000
CORS_ORIGINS = ["*"]

# Logging
LOGGER_NAME = "iframe_relay"


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() not in ("0", "false", "no", "off", "")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{name}={value!r} is not an integer, using default {default}")
        return default


@dataclass
class RelaySettings:
    config_file: str = DEFAULT_CONFIG_FILE
    cache_file: str = DEFAULT_CACHE_FILE
    log_dir: str = DEFAULT_LOG_DIR
    log_console: bool = True
    cache_expiry_ms: int = CACHE_EXPIRY_MS

    @classmethod
    def from_env(cls) -> "RelaySettings":
        """Build settings from RELAY_* environment variables."""
        return cls(
            config_file=os.environ.get("RELAY_CONFIG_FILE", DEFAULT_CONFIG_FILE),
            cache_file=os.environ.get("RELAY_CACHE_FILE", DEFAULT_CACHE_FILE),
            log_dir=os.environ.get("RELAY_LOG_DIR", DEFAULT_LOG_DIR),
            log_console=_env_flag("RELAY_LOG_CONSOLE", True),
            cache_expiry_ms=_env_int("RELAY_CACHE_EXPIRY_MS", CACHE_EXPIRY_MS),
        )
