from urllib.parse import urlparse

import validators

# Only Yandex video preview pages are accepted as tracked URLs
TRACKED_URL_PREFIX = "https://yandex.ru/video/preview/"

# Substring that identifies the embedded player iframe
IFRAME_SRC_MARKER = "rutube"


def _is_valid_url(u: str) -> bool:
    return validators.url(u) is True


def is_allowed_tracked_url(url, prefix: str = TRACKED_URL_PREFIX) -> bool:
    """Check that ``url`` is a well-formed URL starting with the tracked prefix."""
    if not isinstance(url, str) or not url:
        return False
    if not url.startswith(prefix):
        return False
    return _is_valid_url(url)


def iframe_selector(marker: str = IFRAME_SRC_MARKER) -> str:
    """CSS selector for an iframe whose src contains ``marker``."""
    return f'iframe[src*="{marker}"]'


def display_host(url: str) -> str:
    """Host part of a URL for log lines, without a leading ``www.``."""
    try:
        netloc = urlparse(url).netloc
    except ValueError:
        return url[:40]
    if netloc.startswith("www."):
        netloc = netloc[4:]
    return netloc or url[:40]
