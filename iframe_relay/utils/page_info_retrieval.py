# Standard library imports
import logging
import random
import time
from logging import Logger
from typing import Iterable, Optional

# Third-party imports
from rebrowser_playwright.async_api import (
    Error as PlaywrightError,
    Route,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from ..errors import ExtractionError
from .url_tools import IFRAME_SRC_MARKER, display_host, iframe_selector


# ================================ Constants ================================

NAVIGATION_TIMEOUT_MS = 20_000
LAUNCH_TIMEOUT_MS = 30_000

# Frame documents report the "document" resource type too
ALLOWED_RESOURCE_TYPES = frozenset({"document"})

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]

# User-agent pool
DEFAULT_USER_AGENTS = [
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
    'Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 '
    '(KHTML, like Gecko) Version/17.4 Safari/605.1.15',
    'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36',
]


class IframeExtractor:
    """Pull the embedded player iframe URL out of a page with headless Chromium.

    Every call runs in its own browser: nothing survives between calls, and
    the browser is closed whether extraction succeeds, fails or is cancelled.
    Only document requests (the page and its frames) are let through, so the
    page parses quickly and no media is fetched.
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        headless: bool = True,
        marker: str = IFRAME_SRC_MARKER,
        navigation_timeout: int = NAVIGATION_TIMEOUT_MS,
        launch_timeout: int = LAUNCH_TIMEOUT_MS,
        allowed_resource_types: Iterable[str] = ALLOWED_RESOURCE_TYPES,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.headless = headless
        self.selector = iframe_selector(marker)
        self.navigation_timeout = navigation_timeout
        self.launch_timeout = launch_timeout
        self.allowed_resource_types = frozenset(allowed_resource_types)

    async def _filter_request(self, route: Route):
        if route.request.resource_type in self.allowed_resource_types:
            await route.continue_()
        else:
            await route.abort()

    async def extract(self, page_url: str) -> str:
        """Return the ``src`` of the first matching iframe on ``page_url``.

        Raises:
            ExtractionError: On an empty URL, launch or navigation failure,
                timeout, or when no matching iframe is present.
        """
        if not page_url:
            raise ExtractionError("No page URL given", page_url=page_url)

        self.logger.info(f"Start extracting iframe from {display_host(page_url)}", extra={"source_url": page_url})
        started = time.monotonic()

        playwright = None
        browser = None
        context = None
        try:
            playwright = await async_playwright().start()
            browser = await playwright.chromium.launch(
                headless=self.headless,
                args=LAUNCH_ARGS,
                timeout=self.launch_timeout,
            )
            context = await browser.new_context(
                user_agent=random.choice(DEFAULT_USER_AGENTS),
                ignore_https_errors=True,
            )
            page = await context.new_page()
            await page.route("**/*", self._filter_request)

            await page.goto(page_url, wait_until="domcontentloaded", timeout=self.navigation_timeout)

            element = await page.query_selector(self.selector)
            if element is None:
                raise ExtractionError(f"No iframe matching {self.selector} on page", page_url=page_url)
            iframe_url = await element.evaluate("el => el.src")
            if not iframe_url:
                raise ExtractionError(f"Iframe matching {self.selector} has an empty src", page_url=page_url)

        except PlaywrightTimeoutError as e:
            self.logger.error(f"Timed out loading {page_url}: {e}")
            raise ExtractionError(f"Timed out loading page: {e}", page_url=page_url) from e
        except PlaywrightError as e:
            self.logger.error(f"Browser error while loading {page_url}: {e}")
            raise ExtractionError(f"Browser error: {e}", page_url=page_url) from e
        except ExtractionError as e:
            self.logger.error(str(e), extra={"source_url": page_url})
            raise
        finally:
            await self._close(playwright, browser, context)

        elapsed_ms = int((time.monotonic() - started) * 1000)
        self.logger.info(
            "Extracted iframe URL",
            extra={"source_url": page_url, "iframe_url": iframe_url, "elapsed_ms": elapsed_ms},
        )
        return iframe_url

    async def _close(self, playwright, browser, context):
        """Release browser resources; cleanup failures are logged, not raised."""
        if context is not None:
            try:
                await context.close()
            except PlaywrightError as e:
                self.logger.debug(f"Context close failed: {e}")
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as e:
                self.logger.debug(f"Browser close failed: {e}")
        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as e:
                self.logger.debug(f"Playwright stop failed: {e}")
