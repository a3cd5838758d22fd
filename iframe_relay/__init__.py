"""Headless-browser iframe URL extraction with a flat-file cache."""

from .errors import (
    ExtractionError,
    NotConfiguredError,
    PersistenceError,
    RelayError,
    ValidationError,
)
from .resolver import Extractor, IframeResolver

__all__ = [
    "ExtractionError",
    "NotConfiguredError",
    "PersistenceError",
    "RelayError",
    "ValidationError",
    "Extractor",
    "IframeResolver",
]
