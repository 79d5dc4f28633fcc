"""
Noise Filter - Second pass over classified content.

Strips call-to-action prompts anywhere in the body and short fragments
that precede the first real paragraph.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import ContentItem


class FilterPhase(str, Enum):
    SEEKING_REAL_PARAGRAPH = "seeking-real-paragraph"
    PASSTHROUGH = "passthrough"


@dataclass
class FilterState:
    phase: FilterPhase = FilterPhase.SEEKING_REAL_PARAGRAPH


class NoiseFilter:
    """Remove residual UI fragments the classifier let through."""

    # A text this long is a real paragraph
    REAL_PARAGRAPH_LENGTH = 50

    # Texts shorter than this are dropped until a real paragraph is seen
    MIN_LEAD_LENGTH = 10

    CALL_TO_ACTION_PATTERNS = [
        re.compile(r"^Subscribe$", re.I),
        re.compile(r"^Click to Subscribe", re.I),
        re.compile(r"^Click to Follow", re.I),
    ]

    def apply(self, items: Iterable[ContentItem]) -> list[ContentItem]:
        """
        Filter classified items, preserving order.

        Args:
            items: Classifier output

        Returns:
            The items that survive
        """
        state = FilterState()
        return [item for item in items if self.keep(item, state)]

    def keep(self, item: ContentItem, state: FilterState) -> bool:
        """Decide on one item, updating the running state."""
        if not item.is_text:
            return True

        text = item.value
        if self.is_call_to_action(text):
            return False

        if state.phase is FilterPhase.SEEKING_REAL_PARAGRAPH:
            if len(text) >= self.REAL_PARAGRAPH_LENGTH:
                state.phase = FilterPhase.PASSTHROUGH
            elif len(text) < self.MIN_LEAD_LENGTH:
                return False

        return True

    def is_call_to_action(self, text: str) -> bool:
        return any(p.search(text) for p in self.CALL_TO_ACTION_PATTERNS)
