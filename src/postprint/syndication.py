"""
Post Fetcher - Fetch a single post from the public syndication endpoint.

No browser needed: the endpoint returns the post as JSON.
"""

import logging
from typing import Optional

import httpx

from .config import USER_AGENT
from .errors import UpstreamError
from .models import TweetData
from .snapshot import upgrade_avatar

logger = logging.getLogger(__name__)


SYNDICATION_URL = "https://cdn.syndication.twimg.com/tweet-result"


class PostFetcher:
    """Fetch post data by ID."""

    def __init__(self, timeout: float = 30.0, transport: Optional[httpx.BaseTransport] = None):
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
                headers={
                    "User-Agent": USER_AGENT,
                    "Accept": "application/json",
                },
            )
        return self._client

    def close(self):
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def fetch(self, tweet_id: str) -> TweetData:
        """
        Fetch one post.

        Args:
            tweet_id: Numeric post ID

        Returns:
            TweetData (may be empty for deleted or protected posts)

        Raises:
            UpstreamError: If the endpoint answers with an error status
        """
        response = self.client.get(
            SYNDICATION_URL, params={"id": tweet_id, "token": "0"}
        )
        if response.is_error:
            raise UpstreamError(
                f"Failed to fetch tweet: {response.status_code}",
                status_code=response.status_code,
            )

        data = response.json()
        logger.info("Fetched tweet %s", tweet_id)
        return parse_tweet(data)


def parse_tweet(data: dict) -> TweetData:
    """Map a syndication payload onto TweetData."""
    images = []
    for media in data.get("mediaDetails") or []:
        if media.get("type") == "photo" and media.get("media_url_https"):
            images.append(f"{media['media_url_https']}?format=jpg&name=large")

    for photo in data.get("photos") or []:
        url = photo.get("url")
        if url and not any(url.split("?")[0] in img for img in images):
            images.append(url)

    user = data.get("user") or {}
    avatar = user.get("profile_image_url_https")

    return TweetData(
        author_name=user.get("name") or "Unknown",
        author_handle=f"@{user.get('screen_name') or 'unknown'}",
        author_avatar=upgrade_avatar(avatar) if avatar else None,
        text=data.get("text") or "",
        date=data.get("created_at") or "",
        images=images,
    )
