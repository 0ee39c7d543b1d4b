"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pagedistill.config import Settings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def article_html() -> str:
    return _read_fixture("article.html")


@pytest.fixture
def no_container_html() -> str:
    return _read_fixture("no_container.html")


class FakeBackend:
    """In-memory backend returning a canned value and recording calls."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, str]] = []

    def generate(self, *, system: str, prompt: str, model: str) -> Any:
        self.calls.append({"system": system, "prompt": prompt, "model": model})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def quote_result() -> dict[str, Any]:
    return {"components": [{"type": "quote", "quote": "Bread is a living thing."}]}


@pytest.fixture
def fake_backend(quote_result) -> FakeBackend:
    return FakeBackend(response=quote_result)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key", default_model="test/model")


@pytest.fixture
def make_backend():
    """Factory for :class:`FakeBackend` instances with a custom response or error."""
    return FakeBackend
