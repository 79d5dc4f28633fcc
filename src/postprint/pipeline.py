"""
Conversion Pipeline - URL in, PDF bytes out.

Posts go through the syndication endpoint; articles are rendered in a
headless browser and run through the content classifier.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import Settings
from .errors import AuthRequiredError, ExtractionEmptyError
from .extractor import ArticleExtractor, AuthCookies
from .layout import LayoutComposer
from .syndication import PostFetcher
from .urls import PostURL, parse_post_url

logger = logging.getLogger(__name__)


@dataclass
class ConversionResult:
    """Generated PDF plus the HTML it was rendered from."""

    filename: str
    pdf_bytes: bytes
    html: str


class Converter:
    """Convert X post and article URLs to PDF."""

    def __init__(self, settings: Optional[Settings] = None, renderer=None):
        self.settings = settings or Settings.from_env()
        self.composer = LayoutComposer()
        self._renderer = renderer

    @property
    def renderer(self):
        """Lazy-load the PDF renderer."""
        if self._renderer is None:
            from .renderer import PDFRenderer

            self._renderer = PDFRenderer()
        return self._renderer

    def convert(
        self,
        url: str,
        auth_token: Optional[str] = None,
        csrf_token: Optional[str] = None,
    ) -> ConversionResult:
        """
        Convert a post or article URL to PDF.

        Args:
            url: Post (/<user>/status/<id>) or article (/i/article/<id>) URL
            auth_token: auth_token cookie; required for articles
            csrf_token: ct0 cookie

        Returns:
            ConversionResult

        Raises:
            InvalidURLError: URL is not a supported X/Twitter link
            AuthRequiredError: Article requested without a session cookie
            ExtractionEmptyError: Nothing usable was extracted
        """
        post = parse_post_url(url)
        logger.info("Converting %s %s", post.kind.value, post.id)

        if post.is_article:
            html = self._article_html(post, AuthCookies(auth_token, csrf_token))
        else:
            html = self._tweet_html(post)

        pdf_bytes = self.renderer.render_html(html)
        logger.info("Rendered %s (%d bytes)", post.filename, len(pdf_bytes))
        return ConversionResult(filename=post.filename, pdf_bytes=pdf_bytes, html=html)

    def _article_html(self, post: PostURL, auth: AuthCookies) -> str:
        if not auth.auth_token:
            raise AuthRequiredError(
                "Articles require authentication. Please provide at least "
                "the auth_token cookie."
            )

        with ArticleExtractor(self.settings) as extractor:
            article = extractor.extract(post.url, auth)

        if article.is_empty:
            raise ExtractionEmptyError(
                "Could not extract article content. The article may be "
                "private or deleted."
            )
        return self.composer.compose_article(article)

    def _tweet_html(self, post: PostURL) -> str:
        with PostFetcher(timeout=self.settings.http_timeout) as fetcher:
            tweet = fetcher.fetch(post.id)

        if tweet.is_empty:
            raise ExtractionEmptyError(
                "Could not extract tweet content. The tweet may be private "
                "or deleted."
            )
        return self.composer.compose_tweet(tweet)
