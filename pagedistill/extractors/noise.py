"""Noise classification for DOM elements.

An element is noise when its tag is structural/interactive boilerplate, or
when its ``id``/``class`` contains a promotional or chrome keyword.  The
classifier looks at a single element only; callers prune whole subtrees.
"""

from __future__ import annotations

from bs4 import Tag

# Tags that never carry page content
NOISE_TAGS: frozenset[str] = frozenset(
    {
        "script",
        "style",
        "noscript",
        "iframe",
        "svg",
        "canvas",
        "nav",
        "footer",
        "header",
        "aside",
        "form",
        "button",
        "input",
        "select",
        "textarea",
        "label",
        "option",
    }
)

# Class/id substrings that indicate non-content elements
NOISE_SUBSTRINGS: tuple[str, ...] = (
    "ad",
    "ads",
    "advert",
    "promo",
    "cookie",
    "banner",
    "subscribe",
    "newsletter",
    "share",
    "social",
    "sidebar",
    "popup",
    "modal",
)


def _id_and_class(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return (str(tag.get("id") or "") + " " + " ".join(classes)).lower()


def is_noise(tag: Tag) -> bool:
    """Return True if *tag* (and therefore its subtree) should be ignored."""
    if tag.name in NOISE_TAGS:
        return True
    combined = _id_and_class(tag)
    return any(noise in combined for noise in NOISE_SUBSTRINGS)


def has_noisy_ancestor(tag: Tag) -> bool:
    """Return True if any ancestor element of *tag* is noise."""
    return any(isinstance(parent, Tag) and is_noise(parent) for parent in tag.parents)
