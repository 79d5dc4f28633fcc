"""
Layout Composer - Turn extracted posts and articles into printable HTML.

Templates live in the package's templates/ directory and are rendered
with Jinja2 (autoescaped).
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from .models import ArticleData, TweetData


TCO_LINK = re.compile(r"https?://t\.co/\w+")

# Formats the syndication endpoint and the article <time> element use
DATE_FORMATS = [
    "%a %b %d %H:%M:%S %z %Y",
    "%Y-%m-%d",
]


def format_date(date_str: str) -> str:
    """Format an ISO (or syndication) timestamp as 'January 5, 2024 at 3:04 PM'."""
    if not date_str:
        return ""

    dt = _parse_date(date_str)
    if dt is None:
        return date_str

    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.strftime('%B')} {dt.day}, {dt.year} at {hour}:{dt.minute:02d} {meridiem}"


def _parse_date(date_str: str) -> Optional[datetime]:
    value = date_str.strip()
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    return None


def clean_tweet_text(text: str) -> str:
    """Drop t.co short links (media and quote links point at them)."""
    return TCO_LINK.sub("", text).strip()


def nl2br(text: str) -> Markup:
    """Escape text and keep its line breaks."""
    return Markup("<br>").join(escape(line) for line in text.split("\n"))


class LayoutComposer:
    """Compose print layouts from extracted content."""

    def __init__(self, templates_dir: Optional[Path] = None):
        """Initialize with optional custom templates directory."""
        if templates_dir is None:
            templates_dir = Path(__file__).parent / "templates"

        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(str(templates_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["nl2br"] = nl2br
        self.env.filters["format_date"] = format_date

    def compose_tweet(self, tweet: TweetData) -> str:
        """
        Compose the HTML document for a single post.

        Args:
            tweet: Post data from the syndication endpoint

        Returns:
            Complete HTML document ready for PDF rendering
        """
        template = self.env.get_template("tweet.html")
        return template.render(
            author_name=tweet.author_name,
            author_handle=tweet.author_handle,
            author_avatar=tweet.author_avatar,
            text=clean_tweet_text(tweet.text),
            images=tweet.images,
            date=tweet.date,
        )

    def compose_article(self, article: ArticleData) -> str:
        """
        Compose the HTML document for an article.

        Args:
            article: Classified article content

        Returns:
            Complete HTML document ready for PDF rendering
        """
        template = self.env.get_template("article.html")
        return template.render(
            title=article.title,
            author_name=article.author_name or "Unknown",
            author_handle=article.author_handle,
            author_avatar=article.author_avatar,
            content=article.content,
            date=article.date,
        )
