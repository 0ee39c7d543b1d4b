"""Main content selection and content-item extraction.

Algorithm:
1. Collect candidate containers matching the priority selectors, once each,
   in document order.
2. Drop candidates that are noise or sit inside a noisy region.
3. Keep the candidate with the most text (first one wins ties); with no
   candidates fall back to ``<body>``.
4. Walk the container depth-first (iteratively), emitting text and image items.
"""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from pagedistill.extractors.noise import has_noisy_ancestor, is_noise
from pagedistill.items import ContentItem, image, text

logger = logging.getLogger(__name__)

# Paragraphs at or below this many characters are captions/boilerplate
_MIN_PARAGRAPH_CHARS = 20

# Priority CSS selectors for main-content containers
_CONTENT_SELECTORS: tuple[str, ...] = (
    "article",
    "main",
    '[role="main"]',
    '[itemprop="articleBody"]',
    "#content",
    "#main-content",
    "#article-content",
    "#post-content",
    ".post-content",
    ".article-content",
    ".entry-content",
    ".post-body",
    ".article-body",
    ".content-body",
    ".story-body",
    ".blog-post",
    ".content",
    ".post",
)

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

# Lazy-loading libraries park the real URL here; read when src is empty
# or only a data: placeholder
_LAZY_SRC_ATTRS: tuple[str, ...] = ("data-src",)


def _text_length(tag: Tag) -> int:
    return len(tag.get_text(strip=True))


def find_candidates(soup: BeautifulSoup) -> list[Tag]:
    """Return non-noisy main-content candidates in document order."""
    # A selector group yields each match once, in document order.
    matches = soup.select(", ".join(_CONTENT_SELECTORS))
    return [
        el for el in matches
        if isinstance(el, Tag) and not is_noise(el) and not has_noisy_ancestor(el)
    ]


def select_main_container(soup: BeautifulSoup) -> Tag:
    """Pick the extraction root for *soup*.

    The candidate with the longest text wins; ``max`` keeps the first of
    equal elements, so ties resolve to document order.
    """
    candidates = find_candidates(soup)
    if candidates:
        best = max(candidates, key=_text_length)
        logger.debug(
            "Main container <%s> chosen from %d candidates (%d chars)",
            best.name, len(candidates), _text_length(best),
        )
        return best

    body = soup.find("body")
    logger.debug("No content candidates; falling back to %s", "<body>" if body else "document root")
    return body if isinstance(body, Tag) else soup


def resolve_image_src(img: Tag, base_url: str) -> str | None:
    """Return the absolute URL for *img*, or None if it cannot be resolved."""
    src = str(img.get("src") or "").strip()
    if not src or src.startswith("data:"):
        for attr in _LAZY_SRC_ATTRS:
            lazy = str(img.get(attr) or "").strip()
            if lazy:
                src = lazy
                break
    if not src:
        return None

    try:
        resolved = urljoin(base_url, src) if base_url else src
        parsed = urlparse(resolved)
    except ValueError as exc:
        logger.debug("Could not resolve image src %r against %r: %s", src, base_url, exc)
        return None

    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return None
    return resolved


def _walk(root: Tag, base_url: str, items: list[ContentItem]) -> None:
    # Explicit stack; children are pushed in reverse to keep pre-order
    # document order at any nesting depth.
    stack: list[Tag] = [root]
    while stack:
        node = stack.pop()
        if is_noise(node):
            continue

        tag_name = node.name

        if tag_name in _HEADING_TAGS:
            heading = node.get_text().strip()
            if heading:
                items.append(text(heading))
            continue

        if tag_name == "img":
            src = resolve_image_src(node, base_url)
            if src:
                items.append(image(src))
            continue

        if tag_name == "p":
            paragraph = node.get_text().strip()
            if len(paragraph) > _MIN_PARAGRAPH_CHARS:
                items.append(text(paragraph))
            continue

        stack.extend(reversed([child for child in node.children if isinstance(child, Tag)]))


def extract_items(html: str | BeautifulSoup, base_url: str = "") -> list[ContentItem]:
    """Extract an ordered list of text/image items from *html*.

    *html* may be a markup string or an already-parsed soup.  Relative image
    URLs are resolved against *base_url*; images that cannot be made absolute
    are skipped.  Returns an empty list when nothing qualifies.
    """
    soup = html if isinstance(html, BeautifulSoup) else BeautifulSoup(html, "lxml")
    container = select_main_container(soup)

    items: list[ContentItem] = []
    _walk(container, base_url, items)
    logger.debug("Extracted %d items from <%s>", len(items), container.name)
    return items
