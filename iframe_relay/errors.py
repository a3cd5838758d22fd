"""Exception hierarchy shared by the stores, the extractor and the web layer."""

from __future__ import annotations


class RelayError(Exception):
    """Base class for every error raised by iframe_relay."""


class ValidationError(RelayError):
    """A tracked URL was rejected before being persisted."""


class NotConfiguredError(RelayError):
    """No tracked URL is configured."""


class ExtractionError(RelayError):
    """The browser could not produce an iframe URL for a page."""

    def __init__(self, message: str, page_url: str = ""):
        super().__init__(message)
        self.page_url = page_url


class PersistenceError(RelayError):
    """A JSON file could not be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
