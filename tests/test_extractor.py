"""Tests for postprint.extractor browser capture."""

from unittest.mock import MagicMock

from postprint.config import Settings
from postprint.extractor import READY_SELECTOR, ArticleExtractor, AuthCookies


def make_extractor():
    extractor = ArticleExtractor(Settings(settle_ms=0))
    browser = MagicMock()
    page = browser.new_context.return_value.new_page.return_value
    page.url = "https://x.com/i/article/1"
    page.title.return_value = "Article"
    page.evaluate.return_value = 0
    page.content.return_value = "<html><body><article></article></body></html>"
    extractor._browser = browser
    return extractor, browser, page


class TestCapture:
    def test_navigates_without_waiting_for_idle_network(self) -> None:
        extractor, _browser, page = make_extractor()

        html = extractor.capture("https://x.com/i/article/1")

        assert html == "<html><body><article></article></body></html>"
        page.goto.assert_called_once_with(
            "https://x.com/i/article/1",
            wait_until="domcontentloaded",
            timeout=30000,
        )
        page.wait_for_selector.assert_called_once_with(READY_SELECTOR, timeout=20000)

    def test_session_cookies_are_installed_and_context_closed(self) -> None:
        extractor, browser, _page = make_extractor()
        context = browser.new_context.return_value

        extractor.capture("https://x.com/i/article/1", AuthCookies("abc", "def"))

        (cookies,) = context.add_cookies.call_args.args
        assert [c["name"] for c in cookies] == ["auth_token", "ct0"]
        context.close.assert_called_once()
