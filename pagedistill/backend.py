"""Generation backend client.

Any object with a matching ``generate()`` satisfies :class:`GenerationBackend`,
so tests and alternative providers need no base class.  The bundled
:class:`OpenRouterBackend` talks to an OpenAI-compatible chat-completions API
over ``urllib``.
"""

from __future__ import annotations

import json
import logging
import re
import urllib.error
import urllib.request
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from pagedistill.errors import BackendError, ConfigurationError, OutputValidationError

if TYPE_CHECKING:
    from pagedistill.config import Settings

logger = logging.getLogger(__name__)

# Greedy: from the first fence to the last, so fences inside the JSON survive
_JSON_FENCE_RE = re.compile(r"```(?:json)?\s*(.*)```", re.DOTALL)


@runtime_checkable
class GenerationBackend(Protocol):
    """Produces a candidate structured value from prompt text."""

    def generate(self, *, system: str, prompt: str, model: str) -> Any:
        """Return the parsed JSON value produced for *prompt*.

        Raises :class:`~pagedistill.errors.BackendError` on transport,
        authorization or model failures.
        """
        ...


def parse_json_output(text: str) -> Any:
    """Parse model output as JSON, tolerating a code fence around it.

    A bare JSON reply is parsed as is, so code spans inside string values are
    never mistaken for a fence.
    """
    text = text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        match = _JSON_FENCE_RE.search(text)
        if not match:
            raise OutputValidationError(f"Backend output is not valid JSON: {exc.msg}") from exc
    try:
        return json.loads(match.group(1).strip())
    except json.JSONDecodeError as exc:
        raise OutputValidationError(f"Backend output is not valid JSON: {exc.msg}") from exc


class OpenRouterBackend:
    """Chat-completions client for OpenRouter (or any compatible endpoint)."""

    def __init__(self, api_key: str, base_url: str) -> None:
        self._api_key = api_key
        self._endpoint = base_url.rstrip("/") + "/chat/completions"

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        req = urllib.request.Request(
            self._endpoint,
            data=json.dumps(payload).encode("utf-8"),
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
            method="POST",
        )
        try:
            with urllib.request.urlopen(req) as resp:
                body = resp.read().decode("utf-8", errors="replace")
        except urllib.error.HTTPError as exc:
            logger.warning("Backend returned HTTP %d: %s", exc.code, exc.reason)
            raise BackendError(
                f"Generation backend request failed (HTTP {exc.code})", status=exc.code,
            ) from exc
        except (urllib.error.URLError, OSError) as exc:
            logger.warning("Backend unreachable: %s", exc)
            raise BackendError("Generation backend is unreachable") from exc

        try:
            data = json.loads(body)
        except json.JSONDecodeError as exc:
            raise BackendError("Generation backend returned a malformed response") from exc
        if not isinstance(data, dict):
            raise BackendError("Generation backend returned a malformed response")
        return data

    def generate(self, *, system: str, prompt: str, model: str) -> Any:
        data = self._post(
            {
                "model": model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                "response_format": {"type": "json_object"},
            },
        )

        # OpenRouter reports some upstream failures inside a 200 body
        error = data.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            status = code if isinstance(code, int) else None
            logger.warning("Backend reported an error: %s", error)
            raise BackendError("Generation backend reported an error", status=status)

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise BackendError("Generation backend returned no choices") from exc
        if not isinstance(content, str):
            raise BackendError("Generation backend returned no content")

        logger.debug(
            "Backend %s finished (%s, usage=%s)",
            data.get("model", model),
            data["choices"][0].get("finish_reason"),
            data.get("usage"),
        )
        return parse_json_output(content)


def get_backend(settings: Settings) -> GenerationBackend:
    """Build the configured backend.

    Raises:
        ConfigurationError: no backend credential is configured.
    """
    if not settings.api_key:
        raise ConfigurationError("Missing OPENROUTER_API_KEY")
    return OpenRouterBackend(settings.api_key, settings.backend_url)
