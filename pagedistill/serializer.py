"""Flatten content items into the plain-text form sent to the backend.

Text items become their trimmed content, images become ``[image: URL]``
markers, one item per line.  Neither newlines inside text nor literal
``[image: ...]`` sequences are escaped.
"""

from __future__ import annotations

from collections.abc import Iterable

from pagedistill.items import ContentItem, TextItem

IMAGE_MARKER = "[image: {src}]"


def item_to_line(item: ContentItem) -> str:
    if isinstance(item, TextItem):
        return item.content.strip()
    return IMAGE_MARKER.format(src=item.src)


def build_content_for_model(items: Iterable[ContentItem]) -> str:
    """Join *items* into a newline-separated string, preserving order."""
    return "\n".join(item_to_line(item) for item in items)
