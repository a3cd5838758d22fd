"""Persistent storage for the tracked source URL."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from ..errors import PersistenceError, ValidationError
from .cache_filesys import read_json_file, write_json_file
from .url_tools import TRACKED_URL_PREFIX, is_allowed_tracked_url

logger = logging.getLogger(__name__)

TRACKED_URL_KEY = "defaultVideoUrl"


class ConfigStore:
    """Read/write ``{"defaultVideoUrl": ...}`` in a JSON file.

    The file is re-read on every call. Other keys in the document are kept
    when the tracked URL is updated.
    """

    def __init__(self, config_file: str, prefix: str = TRACKED_URL_PREFIX):
        self.config_file = os.path.abspath(config_file)
        self.prefix = prefix

    def load(self) -> Dict[str, Any]:
        try:
            data = read_json_file(self.config_file)
        except PersistenceError as e:
            logger.warning(f"{e}. Using default config.")
            data = None
        if not isinstance(data, dict):
            data = {}
        data.setdefault(TRACKED_URL_KEY, "")
        return data

    def get_tracked_url(self) -> str:
        """Return the tracked URL, or an empty string if none is configured."""
        value = self.load().get(TRACKED_URL_KEY)
        return value if isinstance(value, str) else ""

    def set_tracked_url(self, url) -> str:
        """Validate and persist a new tracked URL.

        Raises:
            ValidationError: If ``url`` does not start with the accepted prefix.
        """
        if not is_allowed_tracked_url(url, self.prefix):
            logger.error(f"Rejected tracked URL: {url!r}")
            raise ValidationError(f"Invalid URL format, expected a URL starting with {self.prefix}")

        data = self.load()
        data[TRACKED_URL_KEY] = url
        try:
            write_json_file(self.config_file, data)
        except PersistenceError as e:
            logger.error(str(e))
        else:
            logger.info(f"Tracked URL updated: {url}")
        return url
