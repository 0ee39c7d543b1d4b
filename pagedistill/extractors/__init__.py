"""Extraction sub-package: noise classification and content-item extraction."""

from .main_content import extract_items, resolve_image_src, select_main_container
from .noise import has_noisy_ancestor, is_noise

__all__ = [
    "extract_items",
    "has_noisy_ancestor",
    "is_noise",
    "resolve_image_src",
    "select_main_container",
]
