"""
Article Extractor - Render an X article in a headless browser and extract it.

Uses Playwright (Chromium) to load the page with the user's session
cookies, then hands the rendered HTML to the snapshot and classifier
modules.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from playwright.sync_api import Browser, Page, Playwright, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from .classifier import classify_article
from .config import USER_AGENT, Settings
from .models import ArticleData
from .snapshot import (
    SIZE_ATTR,
    WEIGHT_ATTR,
    extract_metadata,
    find_container,
    parse_html,
    snapshot_elements,
)

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-software-rasterizer",
]

COOKIE_DOMAIN = ".x.com"

READY_SELECTOR = 'article, [data-testid="article"], main'

# Scroll through the page so lazy-loaded blocks get rendered
SCROLL_SCRIPT = """
async () => {
    await new Promise((resolve) => {
        let total = 0;
        const step = 500;
        const timer = setInterval(() => {
            window.scrollBy(0, step);
            total += step;
            if (total >= document.body.scrollHeight || total > 10000) {
                clearInterval(timer);
                window.scrollTo(0, 0);
                resolve();
            }
        }, 100);
    });
}
"""

# Copy computed font metrics onto the nodes so they survive page.content()
STAMP_STYLES_SCRIPT = """
([weightAttr, sizeAttr]) => {
    const nodes = document.querySelectorAll('h1, h2, h3, h4, p, div, span');
    for (const el of nodes) {
        const style = window.getComputedStyle(el);
        el.setAttribute(weightAttr, String(parseInt(style.fontWeight) || 400));
        el.setAttribute(sizeAttr, String(parseFloat(style.fontSize) || 16));
    }
    return nodes.length;
}
"""


@dataclass
class AuthCookies:
    """Session cookies copied from a logged-in browser."""

    auth_token: Optional[str] = None
    csrf_token: Optional[str] = None

    def to_cookies(self) -> list[dict]:
        cookies = []
        if self.auth_token:
            cookies.append(
                {
                    "name": "auth_token",
                    "value": self.auth_token,
                    "domain": COOKIE_DOMAIN,
                    "path": "/",
                    "httpOnly": True,
                    "secure": True,
                }
            )
        if self.csrf_token:
            cookies.append(
                {
                    "name": "ct0",
                    "value": self.csrf_token,
                    "domain": COOKIE_DOMAIN,
                    "path": "/",
                    "secure": True,
                }
            )
        return cookies


class ArticleExtractor:
    """Extract article content from X article URLs."""

    VIEWPORT = {"width": 1200, "height": 800}
    BODY_PREVIEW_LENGTH = 800
    CONTENT_PREVIEW_ITEMS = 5

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize extractor; the browser is started on first use."""
        self.settings = settings or Settings()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    @property
    def browser(self) -> Browser:
        """Lazy-launch Chromium."""
        if self._browser is None:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(
                headless=self.settings.headless,
                executable_path=self.settings.browser_executable,
                args=LAUNCH_ARGS,
            )
        return self._browser

    def close(self):
        """Shut the browser down."""
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def extract(self, url: str, auth: Optional[AuthCookies] = None) -> ArticleData:
        """
        Extract an article from a URL.

        Args:
            url: The article URL
            auth: Session cookies; articles are not shown to logged-out visitors

        Returns:
            ArticleData (may be empty; the caller decides whether that is fatal)
        """
        html = self.capture(url, auth)
        return self.extract_from_html(html, url)

    def extract_from_html(self, html: str, url: str = "") -> ArticleData:
        """Run snapshot, metadata and classification over rendered HTML."""
        soup = parse_html(html)
        metadata = extract_metadata(soup, url)
        elements = snapshot_elements(find_container(soup), url)
        logger.info(
            "Snapshot has %d elements; title=%r author=%r",
            len(elements),
            metadata.title,
            metadata.author_handle,
        )

        article = classify_article(elements, metadata)
        logger.info("Extracted %d content items", len(article.content))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Extraction diagnostics: %s", self.diagnostics(soup, article))
        return article

    def diagnostics(self, soup, article: ArticleData) -> dict:
        """Summarise what the page offered and what was kept from it."""
        body = soup.body
        body_text = body.get_text(" ", strip=True) if body is not None else ""
        return {
            "hasArticle": soup.select_one("article") is not None,
            "hasMain": soup.select_one("main") is not None,
            "bodyText": body_text[: self.BODY_PREVIEW_LENGTH],
            "contentPreview": [
                item.marked_text
                for item in article.content[: self.CONTENT_PREVIEW_ITEMS]
            ],
        }

    def capture(self, url: str, auth: Optional[AuthCookies] = None) -> str:
        """
        Load a page and return its rendered HTML.

        Args:
            url: Page to load
            auth: Optional session cookies

        Returns:
            HTML of the page after scripts ran, with computed font
            metrics stamped on candidate nodes
        """
        context = self.browser.new_context(
            user_agent=USER_AGENT,
            viewport=self.VIEWPORT,
        )
        try:
            if auth is not None:
                cookies = auth.to_cookies()
                if cookies:
                    context.add_cookies(cookies)

            page = context.new_page()
            page.goto(
                url,
                wait_until="domcontentloaded",
                timeout=self.settings.navigation_timeout_ms,
            )
            self._wait_for_content(page)

            page.evaluate(SCROLL_SCRIPT)
            page.wait_for_timeout(self.settings.settle_ms)

            logger.info("Page loaded: %s Title: %s", page.url, page.title())
            stamped = page.evaluate(STAMP_STYLES_SCRIPT, [WEIGHT_ATTR, SIZE_ATTR])
            logger.debug("Stamped font metrics on %d nodes", stamped)

            if self.settings.debug_screenshot:
                page.screenshot(path=self.settings.debug_screenshot, full_page=True)
                logger.info("Debug screenshot saved to %s", self.settings.debug_screenshot)

            return page.content()
        finally:
            context.close()

    def _wait_for_content(self, page: Page) -> None:
        try:
            page.wait_for_selector(
                READY_SELECTOR, timeout=self.settings.selector_timeout_ms
            )
        except PlaywrightTimeoutError:
            # Carry on with whatever rendered; the body is the last-resort container
            logger.warning("No article container appeared on %s", page.url)
