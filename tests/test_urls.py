"""Tests for postprint.urls."""

import pytest

from postprint.errors import InvalidURLError
from postprint.urls import PostKind, is_valid_post_url, parse_post_url


class TestParsePostURL:
    @pytest.mark.parametrize(
        "url",
        [
            "https://x.com/jack/status/20",
            "https://twitter.com/jack/status/20?s=20",
            "https://www.x.com/jack/status/20/photo/1",
            "http://www.twitter.com/jack/status/20",
        ],
    )
    def test_accepts_post_urls(self, url: str) -> None:
        post = parse_post_url(url)
        assert post.kind is PostKind.TWEET
        assert post.id == "20"
        assert post.filename == "tweet-20.pdf"
        assert not post.is_article

    def test_accepts_article_urls(self) -> None:
        post = parse_post_url("https://x.com/i/article/1876543210")
        assert post.kind is PostKind.ARTICLE
        assert post.id == "1876543210"
        assert post.filename == "article-1876543210.pdf"
        assert post.is_article

    def test_adds_missing_scheme(self) -> None:
        post = parse_post_url("  x.com/jack/status/20 ")
        assert post.url == "https://x.com/jack/status/20"

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/jack/status/20",
            "https://x.com/jack",
            "https://x.com/i/article/abc",
            "ftp://x.com/jack/status/20",
            "https://mobile.x.com/jack/status/20",
        ],
    )
    def test_rejects_unsupported_urls(self, url: str) -> None:
        with pytest.raises(InvalidURLError):
            parse_post_url(url)
        assert not is_valid_post_url(url)

    def test_rejects_empty_url(self) -> None:
        with pytest.raises(InvalidURLError, match="URL is required"):
            parse_post_url("   ")
