"""
DOM Snapshot - Flatten rendered article HTML into classifier input.

The browser stamps each candidate node with its computed font weight and
size before handing over the page HTML; everything here works on that
static HTML through BeautifulSoup, so it can be exercised without a
browser.
"""

import re
from typing import Optional, Union
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .models import ElementView, PageMetadata, TagKind


# Attributes written by the browser capture step
WEIGHT_ATTR = "data-computed-font-weight"
SIZE_ATTR = "data-computed-font-size"

DEFAULT_FONT_WEIGHT = 400
DEFAULT_FONT_SIZE = 16.0

# Most specific first; body is the last resort
CONTAINER_SELECTORS = [
    "article",
    '[data-testid="article"]',
    "main",
    '[role="main"]',
    "body",
]

TITLE_SELECTORS = [
    "h1",
    '[data-testid="article-title"]',
    "article h1",
    "main h1",
]

CANDIDATE_TAGS = ["h1", "h2", "h3", "h4", "p", "div", "span", "img"]
BLOCK_TAGS = ["p", "div", "h1", "h2", "h3", "h4"]

TAG_KINDS = {
    "h1": TagKind.HEADING,
    "h2": TagKind.HEADING,
    "h3": TagKind.HEADING,
    "h4": TagKind.HEADING,
    "p": TagKind.PARAGRAPH,
    "div": TagKind.BLOCK,
    "span": TagKind.INLINE,
    "img": TagKind.IMAGE,
}

FONT_WEIGHT_KEYWORDS = {
    "normal": 400,
    "lighter": 400,
    "bold": 700,
    "bolder": 700,
}

# A profile link is https://x.com/<name> with nothing after it
PROFILE_ROOT = re.compile(r"(?:x|twitter)\.com/\w+$")

# Top-level app routes that look like profile links
RESERVED_PATHS = {
    "home",
    "explore",
    "notifications",
    "messages",
    "settings",
    "compose",
    "search",
    "login",
    "signup",
    "logout",
    "tos",
    "privacy",
}
PROFILE_IMAGE_MARKER = "profile_images"
MAX_AUTHOR_NAME_LENGTH = 50


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


def find_container(soup: BeautifulSoup) -> Union[BeautifulSoup, Tag]:
    """Return the most specific content container on the page."""
    for selector in CONTAINER_SELECTORS:
        container = soup.select_one(selector)
        if container is not None:
            return container
    return soup


def snapshot_elements(
    container: Union[BeautifulSoup, Tag], base_url: str = ""
) -> list[ElementView]:
    """
    Flatten a container into element views in document order.

    Args:
        container: Content container (see find_container)
        base_url: Page URL, used to resolve relative image sources

    Returns:
        One ElementView per h1-h4/p/div/span/img descendant
    """
    views = []
    for elem in container.find_all(CANDIDATE_TAGS):
        kind = TAG_KINDS[elem.name]

        if kind is TagKind.IMAGE:
            src = elem.get("src") or ""
            if src and base_url:
                src = urljoin(base_url, src)
            views.append(ElementView(tag=kind, src=src))
            continue

        weight, size = _font_metrics(elem)
        views.append(
            ElementView(
                tag=kind,
                text=elem.get_text().strip(),
                font_weight=weight,
                font_size=size,
                has_block_descendant=elem.find(BLOCK_TAGS) is not None,
            )
        )
    return views


def _font_metrics(elem: Tag) -> tuple[int, float]:
    """Font weight and size, preferring the values the browser computed."""
    inline = _parse_inline_style(elem.get("style") or "")

    weight = _parse_weight(elem.get(WEIGHT_ATTR))
    if weight is None:
        weight = _parse_weight(inline.get("font-weight"))

    size = _parse_size(elem.get(SIZE_ATTR))
    if size is None:
        size = _parse_size(inline.get("font-size"))

    return (
        weight if weight is not None else DEFAULT_FONT_WEIGHT,
        size if size is not None else DEFAULT_FONT_SIZE,
    )


def _parse_inline_style(style: str) -> dict[str, str]:
    declarations = {}
    for part in style.split(";"):
        if ":" not in part:
            continue
        name, value = part.split(":", 1)
        declarations[name.strip().lower()] = value.strip().lower()
    return declarations


def _parse_weight(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    value = value.strip().lower()
    if value in FONT_WEIGHT_KEYWORDS:
        return FONT_WEIGHT_KEYWORDS[value]
    match = re.match(r"\d+", value)
    return int(match.group()) if match else None


def _parse_size(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    match = re.match(r"^(\d+(?:\.\d+)?)(px)?$", value.strip().lower())
    return float(match.group(1)) if match else None


def extract_metadata(soup: BeautifulSoup, page_url: str = "") -> PageMetadata:
    """
    Find the title, author, avatar and date on an article page.

    Args:
        soup: The whole page
        page_url: Page URL, used to resolve relative profile links

    Returns:
        PageMetadata; missing fields stay empty
    """
    author_name, author_handle = _extract_author(soup, page_url)
    return PageMetadata(
        title=_extract_title(soup),
        author_name=author_name,
        author_handle=author_handle,
        author_avatar=_extract_avatar(soup),
        date=_extract_date(soup),
    )


def _extract_title(soup: BeautifulSoup) -> str:
    for selector in TITLE_SELECTORS:
        elem = soup.select_one(selector)
        if elem is not None:
            text = elem.get_text().strip()
            if text:
                return text
    return ""


def _extract_author(soup: BeautifulSoup, page_url: str) -> tuple[str, str]:
    name = ""
    handle = ""
    for link in soup.find_all("a", href=True):
        href = urljoin(page_url, link["href"]) if page_url else link["href"]
        if not _is_profile_link(href):
            continue

        text = link.get_text().strip()
        if text.startswith("@"):
            if not handle:
                handle = text
        elif text and not name and len(text) < MAX_AUTHOR_NAME_LENGTH:
            name = text

        if name and handle:
            break
    return name, handle


def _is_profile_link(href: str) -> bool:
    if not PROFILE_ROOT.search(href) or "/i/" in href:
        return False
    return href.rsplit("/", 1)[-1].lower() not in RESERVED_PATHS


def _extract_avatar(soup: BeautifulSoup) -> Optional[str]:
    for img in soup.find_all("img", src=True):
        src = img["src"]
        if PROFILE_IMAGE_MARKER in src:
            return upgrade_avatar(src)
    return None


def upgrade_avatar(url: str) -> str:
    """Swap the 48px thumbnail for the 400px variant."""
    return url.replace("_normal", "_400x400")


def _extract_date(soup: BeautifulSoup) -> str:
    time_elem = soup.find("time")
    if time_elem is None:
        return ""
    return time_elem.get("datetime") or ""
