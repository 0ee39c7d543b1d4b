"""pagedistill.query - fetch a page and extract its content items.

Uses only the stdlib (``urllib``) for HTTP.  Exactly one request is made per
call: failures are reported as :class:`FetchError` and never retried.

Basic usage::

    from pagedistill.query import extract_url

    items = extract_url("https://example.com/blog/some-post")
    for item in items:
        print(item.type, item.content if item.type == "text" else item.src)

Low-level access::

    from pagedistill.query import fetch_html
    from pagedistill.extractors import extract_items

    html = fetch_html("https://example.com/blog/post")
    items = extract_items(html, base_url="https://example.com/blog/post")
"""

from __future__ import annotations

import gzip
import logging
import urllib.error
import urllib.request
import zlib
from urllib.parse import urlparse

from pagedistill.config import DEFAULT_USER_AGENT
from pagedistill.errors import FetchError, NoContentError
from pagedistill.extractors.main_content import extract_items
from pagedistill.items import ContentItem

logger = logging.getLogger(__name__)


def _decode_response_body(raw: bytes, headers: object | None, url: str) -> str:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""

    try:
        if encoding == "gzip":
            raw = gzip.decompress(raw)
        elif encoding in ("deflate", "zlib"):
            raw = zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc

    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def fetch_page(url: str, *, user_agent: str | None = None) -> tuple[str, str]:
    """Fetch *url* and return ``(html, final_url)``.

    *final_url* is the address after redirects and is the right base for
    resolving relative links.

    Raises:
        FetchError: On unsupported schemes, HTTP error statuses, or
                    connection failures.  ``status`` is 0 when no response
                    was received.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    req = urllib.request.Request(
        url,
        headers={
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;"
                "q=0.9,image/avif,image/webp,*/*;q=0.8"
            ),
            "Accept-Language": "en-US,en;q=0.9",
            "Accept-Encoding": "gzip, deflate",
        },
    )

    logger.debug("Fetching %s", url)
    try:
        with urllib.request.urlopen(req) as resp:
            raw: bytes = resp.read()
            final_url = resp.geturl() or url
            return _decode_response_body(raw, resp.headers, url), final_url
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} fetching {url}: {exc.reason}",
            url=url,
            status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        raise FetchError(f"Network error fetching {url}: {exc}", url=url) from exc


def fetch_html(url: str, *, user_agent: str | None = None) -> str:
    """Fetch *url* and return the response body as a decoded string."""
    html, _ = fetch_page(url, user_agent=user_agent)
    return html


def extract_url(url: str, *, user_agent: str | None = None) -> list[ContentItem]:
    """Fetch *url* and extract its content items.

    Raises:
        FetchError:     the page could not be fetched
        NoContentError: the page was fetched but yielded no items
    """
    html, final_url = fetch_page(url, user_agent=user_agent)
    items = extract_items(html, base_url=final_url)
    logger.info("Extracted %d items from %s", len(items), final_url)
    if not items:
        raise NoContentError(f"No extractable content found at {url}")
    return items
