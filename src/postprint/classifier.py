"""
Content Classifier - Turn a flat element snapshot into an article body.

Walks the page elements once, in document order, and sorts them into
headings, paragraphs and images while throwing away the UI chrome that
surrounds an X article (follow buttons, action labels, date stamps,
subscribe prompts, the "More from" footer).
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Optional

from .models import (
    ArticleData,
    ContentItem,
    ElementView,
    PageMetadata,
    TagKind,
)
from .noise_filter import NoiseFilter

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    """Where the classifier is in the article."""

    SEEKING_START = "seeking-start"
    COLLECTING = "collecting"
    HALTED = "halted"


@dataclass
class ClassifierState:
    """Running state threaded through a single classification pass."""

    phase: Phase = Phase.SEEKING_START
    lead_in_skipped: int = 0
    pre_content_images: int = 0
    seen_texts: set[str] = field(default_factory=set)
    seen_images: set[str] = field(default_factory=set)
    items: list[ContentItem] = field(default_factory=list)

    @property
    def content_started(self) -> bool:
        return self.phase is not Phase.SEEKING_START


# A text rule looks at one element and returns True when it should be skipped.
TextRule = Callable[[ElementView, ClassifierState, PageMetadata], bool]


class ContentClassifier:
    """Classify snapshotted page elements into article content."""

    # Texts shorter than this are never content
    MIN_TEXT_LENGTH = 3

    # Plain text at least this long marks the start of the article body
    SUBSTANTIAL_TEXT_LENGTH = 40

    # Short nodes discarded before the body starts
    MAX_LEAD_IN_SKIPS = 6

    # Styled-heading thresholds
    HEADING_MIN_WEIGHT = 600
    HEADING_MIN_SIZE = 20.0
    HEADING_MAX_LENGTH = 150

    FOOTER_MARKER = "More from"

    MEDIA_HOSTS = ("pbs.twimg.com", "ton.twimg.com")
    NON_CONTENT_IMAGE_MARKERS = ("profile_images", "emoji", "icon", "svg")

    # UI labels rendered inside the article container
    CHROME_PATTERNS = [
        re.compile(r"^To view keyboard", re.I),
        re.compile(r"^View keyboard", re.I),
        re.compile(r"^Log in$", re.I),
        re.compile(r"^Sign up$", re.I),
        re.compile(r"^@\w+$"),
        re.compile(r"^(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)\s+\d+$"),
        re.compile(r"^·$"),
        re.compile(r"^Follow$", re.I),
        re.compile(r"^Repost$", re.I),
        re.compile(r"^Quote$", re.I),
        re.compile(r"^Like$", re.I),
        re.compile(r"^Bookmark$", re.I),
        re.compile(r"^Share$", re.I),
        re.compile(r"^Copy link$", re.I),
    ]

    def __init__(self):
        # Evaluated in order; the first rule that fires skips the element.
        self._skip_rules: list[tuple[str, TextRule]] = [
            ("container", self._is_wrapping_container),
            ("too-short", self._is_too_short),
            ("duplicate", self._is_duplicate),
            ("ui-chrome", self._is_ui_chrome),
        ]

    def classify(
        self,
        elements: Iterable[ElementView],
        metadata: Optional[PageMetadata] = None,
    ) -> list[ContentItem]:
        """
        Classify elements into an ordered list of content items.

        Args:
            elements: Snapshot of the content container, in document order
            metadata: Title/author already extracted from the page, used to
                skip their repetitions and to detect the footer

        Returns:
            Content items in reading order (possibly empty)
        """
        if metadata is None:
            metadata = PageMetadata()

        state = ClassifierState()
        for element in elements:
            self.step(element, state, metadata)
            if state.phase is Phase.HALTED:
                break

        return self.finish(state)

    def step(
        self,
        element: ElementView,
        state: ClassifierState,
        metadata: PageMetadata,
    ) -> None:
        """Advance the pass by one element."""
        if state.phase is Phase.HALTED:
            return

        if element.tag is TagKind.IMAGE:
            self._accept_image(element.src, state)
            return

        for _name, rule in self._skip_rules:
            if rule(element, state, metadata):
                return

        text = element.text
        if text in (metadata.title, metadata.author_handle):
            return

        if self.is_footer(text, state, metadata):
            state.phase = Phase.HALTED
            return

        if text == metadata.author_name:
            return

        heading_like = self.is_heading_like(element)

        if state.phase is Phase.SEEKING_START:
            if heading_like or len(text) >= self.SUBSTANTIAL_TEXT_LENGTH:
                state.phase = Phase.COLLECTING
            else:
                state.lead_in_skipped += 1
                if state.lead_in_skipped <= self.MAX_LEAD_IN_SKIPS:
                    return

        state.seen_texts.add(text)
        if heading_like:
            state.items.append(ContentItem.heading(text))
        else:
            state.items.append(ContentItem.paragraph(text))

    def finish(self, state: ClassifierState) -> list[ContentItem]:
        """Close the pass and return the collected items."""
        items = list(state.items)
        # The last captured node is almost always footer residue
        if len(items) > 1:
            items.pop()
        return items

    def is_heading_like(self, element: ElementView) -> bool:
        """Native heading tag, or styled to look like one."""
        if element.tag is TagKind.HEADING:
            return True
        return (
            element.font_weight >= self.HEADING_MIN_WEIGHT
            and element.font_size >= self.HEADING_MIN_SIZE
            and len(element.text) < self.HEADING_MAX_LENGTH
        )

    def is_footer(
        self, text: str, state: ClassifierState, metadata: PageMetadata
    ) -> bool:
        """Check for the trailing "More from" block or a repeated byline."""
        if text.startswith(self.FOOTER_MARKER):
            return True
        return bool(
            state.content_started
            and metadata.author_name
            and text == metadata.author_name
        )

    def is_content_image(self, src: str) -> bool:
        """Check whether an image URL points at article media."""
        if not src:
            return False
        if any(marker in src for marker in self.NON_CONTENT_IMAGE_MARKERS):
            return False
        return any(host in src for host in self.MEDIA_HOSTS)

    def _accept_image(self, src: str, state: ClassifierState) -> None:
        if not self.is_content_image(src) or src in state.seen_images:
            return
        state.seen_images.add(src)

        if state.content_started:
            state.items.append(ContentItem.image(src))
            return

        # Only the first image before the body can be a hero image
        state.pre_content_images += 1
        if state.pre_content_images == 1:
            state.items.append(ContentItem.image(src))

    def _is_wrapping_container(self, element, state, metadata) -> bool:
        return element.tag is TagKind.BLOCK and element.has_block_descendant

    def _is_too_short(self, element, state, metadata) -> bool:
        return len(element.text) < self.MIN_TEXT_LENGTH

    def _is_duplicate(self, element, state, metadata) -> bool:
        return element.text in state.seen_texts

    def _is_ui_chrome(self, element, state, metadata) -> bool:
        return any(p.search(element.text) for p in self.CHROME_PATTERNS)


def classify_article(
    elements: Iterable[ElementView],
    metadata: Optional[PageMetadata] = None,
) -> ArticleData:
    """
    Run the classifier and the noise filter and assemble the article.

    Args:
        elements: Snapshot of the content container, in document order
        metadata: Title/author/date found on the page

    Returns:
        ArticleData; emptiness is for the caller to judge
    """
    if metadata is None:
        metadata = PageMetadata()

    classified = ContentClassifier().classify(elements, metadata)
    content = NoiseFilter().apply(classified)
    logger.debug(
        "Classified %d items, %d left after noise filter",
        len(classified),
        len(content),
    )

    return ArticleData(
        title=metadata.title,
        author_name=metadata.author_name,
        author_handle=metadata.author_handle,
        author_avatar=metadata.author_avatar,
        content=content,
        date=metadata.date,
    )
