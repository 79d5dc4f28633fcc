"""
Data Model - Value records shared by extraction, layout and rendering.

Everything here is transient: created for one conversion request and
discarded once the PDF bytes are produced.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


HEADING_MARKER = "## "


class ContentKind(str, Enum):
    """Kind of an item in the article body."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"


@dataclass(frozen=True)
class ContentItem:
    """One block of the article body, in reading order."""

    kind: ContentKind
    value: str  # Text for headings/paragraphs, URL for images

    @classmethod
    def heading(cls, text: str) -> "ContentItem":
        return cls(ContentKind.HEADING, text)

    @classmethod
    def paragraph(cls, text: str) -> "ContentItem":
        return cls(ContentKind.PARAGRAPH, text)

    @classmethod
    def image(cls, url: str) -> "ContentItem":
        return cls(ContentKind.IMAGE, url)

    @property
    def is_text(self) -> bool:
        return self.kind is not ContentKind.IMAGE

    @property
    def marked_text(self) -> str:
        """Text with the heading marker applied to headings."""
        if self.kind is ContentKind.HEADING:
            return HEADING_MARKER + self.value
        return self.value


@dataclass
class ArticleData:
    """Extracted long-form article."""

    title: str = ""
    author_name: str = ""
    author_handle: str = ""
    author_avatar: Optional[str] = None
    content: list[ContentItem] = field(default_factory=list)
    date: str = ""  # ISO timestamp, may be empty

    @property
    def is_empty(self) -> bool:
        """Nothing usable was extracted."""
        return not self.title and not self.content


@dataclass
class TweetData:
    """Single post as returned by the syndication endpoint."""

    author_name: str
    author_handle: str
    author_avatar: Optional[str] = None
    text: str = ""
    date: str = ""
    images: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.text and not self.images


class TagKind(str, Enum):
    """Tag family of a snapshotted element."""

    HEADING = "heading"  # h1-h4
    PARAGRAPH = "paragraph"  # p
    BLOCK = "block"  # div
    INLINE = "inline"  # span
    IMAGE = "image"  # img


@dataclass(frozen=True)
class ElementView:
    """
    Read-only view of one DOM node, as seen by the classifier.

    The classifier never touches a live page; it only walks an ordered
    list of these records.
    """

    tag: TagKind
    text: str = ""
    font_weight: int = 400
    font_size: float = 16.0  # px
    src: str = ""
    has_block_descendant: bool = False


@dataclass
class PageMetadata:
    """Title, author and date found on the article page."""

    title: str = ""
    author_name: str = ""
    author_handle: str = ""
    author_avatar: Optional[str] = None
    date: str = ""
