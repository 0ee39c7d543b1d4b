"""Pydantic models for extracted content items and incoming requests."""

from __future__ import annotations

from typing import Annotated, Any, Literal
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Content items
# ---------------------------------------------------------------------------

class TextItem(BaseModel):
    type: Literal["text"] = "text"
    content: str


class ImageItem(BaseModel):
    type: Literal["image"] = "image"
    src: str  # absolute URL when produced by the extractor


ContentItem = Annotated[TextItem | ImageItem, Field(discriminator="type")]


def text(content: str) -> TextItem:
    return TextItem(content=content)


def image(src: str) -> ImageItem:
    return ImageItem(src=src)


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

class DistillRequest(BaseModel):
    """Body of ``POST /api/distill``: pre-extracted items plus optional model."""

    items: list[ContentItem] = Field(min_length=1)
    model: str | None = None


class UrlRequest(BaseModel):
    """Body of ``POST /api/extract``: a page to fetch and extract."""

    url: str

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            parsed = urlparse(v)
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise ValueError("url must be an absolute http(s) URL")
        return v


class UrlDistillRequest(UrlRequest):
    """Body of ``POST /api/distill/url``."""

    model: str | None = None
