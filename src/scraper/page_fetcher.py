"""
Browser-backed page fetcher.

One Chromium page is kept open for a whole run and reused for every probe,
so the returned HTML is the rendered DOM after client-side scripts ran.
"""

import sys
import logging
from pathlib import Path

from playwright.sync_api import sync_playwright, Error as PlaywrightError, TimeoutError as PlaywrightTimeout
from playwright_stealth import Stealth

# Add parent directory to path for imports
sys.path.append(str(Path(__file__).parent.parent.parent))
from config.settings import HEADERS, HEADLESS, PAGE_TIMEOUT_MS, USER_AGENT
from src.scraper.models import FetchedPage

logger = logging.getLogger(__name__)

# Resource types not needed to read links and text
BLOCKED_RESOURCES = {'image', 'stylesheet', 'font', 'media'}


class FetchError(Exception):
    """Navigation to a URL failed (timeout, DNS, TLS, aborted navigation...)."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url


class PlaywrightPageFetcher:
    """
    Fetch rendered pages with a single headless Chromium tab.

    Usage:
        with PlaywrightPageFetcher() as fetcher:
            page = fetcher.fetch("https://www.example.com/sustainability")
    """

    def __init__(self, headless: bool = HEADLESS, block_resources: bool = True):
        self.headless = headless
        self.block_resources = block_resources
        self._playwright = None
        self._browser = None
        self._page = None

    def start(self):
        logger.info("Launching browser...")
        self._playwright = sync_playwright().start()
        try:
            self._browser = self._playwright.chromium.launch(
                headless=self.headless,
                args=[
                    '--disable-blink-features=AutomationControlled',
                    '--no-sandbox',
                    '--disable-dev-shm-usage'
                ]
            )
            context = self._browser.new_context(
                viewport={'width': 1366, 'height': 768},
                user_agent=USER_AGENT,
                extra_http_headers={k: v for k, v in HEADERS.items() if k != 'User-Agent'}
            )
            self._page = context.new_page()
            Stealth().apply_stealth_sync(self._page)
            if self.block_resources:
                self._page.route('**/*', self._route)
        except Exception as e:
            logger.error(f"✗ Browser launch failed: {e}")
            self.close()
            raise
        logger.info("✓ Browser ready")
        return self

    @staticmethod
    def _route(route):
        if route.request.resource_type in BLOCKED_RESOURCES:
            route.abort()
        else:
            route.continue_()

    def fetch(self, url: str, timeout_ms: int = PAGE_TIMEOUT_MS) -> FetchedPage:
        """
        Navigate to a URL and return its title, rendered HTML and final URL.

        Raises:
            FetchError: if navigation fails or times out
        """
        if self._page is None:
            raise RuntimeError("Fetcher not started, call start() or use it as a context manager")

        try:
            self._page.goto(url, wait_until='domcontentloaded', timeout=timeout_ms)
            # Give client-side rendering a moment, but don't fail on busy pages
            try:
                self._page.wait_for_load_state('networkidle', timeout=3000)
            except PlaywrightTimeout:
                pass
            title = self._page.title()
            html = self._page.content()
        except PlaywrightTimeout as e:
            raise FetchError(url, f"Timed out after {timeout_ms}ms") from e
        except PlaywrightError as e:
            raise FetchError(url, str(e).splitlines()[0] if str(e) else type(e).__name__) from e

        return FetchedPage(title=title, html=html, final_url=self._page.url)

    def close(self):
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None
        self._page = None
        logger.info("Browser closed")

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
