"""
URL handling - Validate X/Twitter links and pull out post/article IDs.
"""

import re
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urlparse

from .errors import InvalidURLError

VALID_HOSTS = ("twitter.com", "www.twitter.com", "x.com", "www.x.com")

POST_PATH = re.compile(r"^/\w+/status/(\d+)")
ARTICLE_PATH = re.compile(r"^/i/article/(\d+)")


class PostKind(str, Enum):
    TWEET = "tweet"
    ARTICLE = "article"


@dataclass(frozen=True)
class PostURL:
    """A validated post or article link."""

    kind: PostKind
    id: str
    url: str

    @property
    def is_article(self) -> bool:
        return self.kind is PostKind.ARTICLE

    @property
    def filename(self) -> str:
        """Download name for the generated PDF."""
        return f"{self.kind.value}-{self.id}.pdf"


def normalize_url(url: str) -> str:
    """Strip whitespace and add a scheme when one is missing."""
    url = url.strip()
    if url and not urlparse(url).scheme:
        url = f"https://{url}"
    return url


def parse_post_url(url: str) -> PostURL:
    """
    Validate a post or article URL.

    Args:
        url: The URL to check

    Returns:
        PostURL with the kind and numeric ID

    Raises:
        InvalidURLError: If the URL is not an X/Twitter post or article
    """
    if not url or not url.strip():
        raise InvalidURLError("URL is required")

    url = normalize_url(url)
    try:
        parsed = urlparse(url)
    except ValueError:
        raise InvalidURLError(f"Malformed URL: {url}") from None

    if parsed.scheme not in ("http", "https") or parsed.hostname not in VALID_HOSTS:
        raise InvalidURLError(
            "Invalid Twitter/X URL. Please provide a valid tweet or article URL."
        )

    match = ARTICLE_PATH.match(parsed.path)
    if match:
        return PostURL(PostKind.ARTICLE, match.group(1), url)

    match = POST_PATH.match(parsed.path)
    if match:
        return PostURL(PostKind.TWEET, match.group(1), url)

    raise InvalidURLError(
        "Invalid Twitter/X URL. Please provide a valid tweet or article URL."
    )


def is_valid_post_url(url: str) -> bool:
    try:
        parse_post_url(url)
    except InvalidURLError:
        return False
    return True
