"""End-to-end distillation: items -> prompt -> backend -> validated components."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pagedistill.backend import GenerationBackend
from pagedistill.components import DistillationResult, result_json_schema, validate_result
from pagedistill.config import DEFAULT_MODEL
from pagedistill.items import ContentItem
from pagedistill.prompts import DISTILLATION_SYSTEM_PROMPT, build_user_prompt
from pagedistill.query import extract_url
from pagedistill.serializer import build_content_for_model

logger = logging.getLogger(__name__)


def distill_items(
    items: Sequence[ContentItem],
    *,
    backend: GenerationBackend,
    model: str | None = None,
    default_model: str = DEFAULT_MODEL,
) -> DistillationResult:
    """Distill *items* into a validated component list.

    Raises whatever the backend raises (usually
    :class:`~pagedistill.errors.BackendError`) and
    :class:`~pagedistill.errors.OutputValidationError` when the generated
    value does not match the component catalogue.
    """
    content = build_content_for_model(items)
    logger.info("Content built (items=%d, length=%d)", len(items), len(content))

    model_id = model or default_model
    logger.info("Generating distilled content with %s", model_id)
    candidate = backend.generate(
        system=DISTILLATION_SYSTEM_PROMPT,
        prompt=build_user_prompt(content, result_json_schema()),
        model=model_id,
    )

    result = validate_result(candidate)
    logger.info(
        "Generation complete (components=%d, types=%s)",
        len(result.components),
        [c.type for c in result.components],
    )
    return result


def distill_url(
    url: str,
    *,
    backend: GenerationBackend,
    model: str | None = None,
    default_model: str = DEFAULT_MODEL,
    user_agent: str | None = None,
) -> DistillationResult:
    """Fetch and extract *url*, then distill the extracted items."""
    items = extract_url(url, user_agent=user_agent)
    return distill_items(items, backend=backend, model=model, default_model=default_model)
