"""pagedistill - turn web pages into validated, typed UI components.

Extraction only::

    from pagedistill import extract_items, build_content_for_model

    items = extract_items(html, base_url="https://example.com/post")
    print(build_content_for_model(items))

Validating generated output::

    from pagedistill import validate_result

    result = validate_result({"components": [{"type": "quote", "quote": "Less is more."}]})

Full pipeline::

    from pagedistill import Settings, distill_url, get_backend

    settings = Settings.from_env()
    result = distill_url("https://example.com/post", backend=get_backend(settings))
"""

from pagedistill.backend import GenerationBackend, OpenRouterBackend, get_backend
from pagedistill.components import (
    COMPONENT_TYPES,
    DistillationResult,
    dump_result,
    validate_component,
    validate_result,
)
from pagedistill.config import Settings
from pagedistill.errors import (
    BackendError,
    ConfigurationError,
    DistillError,
    FetchError,
    InternalError,
    MissingFieldError,
    NoContentError,
    OutputValidationError,
    RequestValidationError,
    TypeMismatchError,
    UnexpectedFieldError,
    UnknownVariantError,
)
from pagedistill.extractors import extract_items, is_noise
from pagedistill.items import ContentItem, ImageItem, TextItem
from pagedistill.pipeline import distill_items, distill_url
from pagedistill.query import extract_url, fetch_html
from pagedistill.serializer import build_content_for_model

__version__ = "0.1.0"
__all__ = [
    "COMPONENT_TYPES",
    "BackendError",
    "ConfigurationError",
    "ContentItem",
    "DistillError",
    "DistillationResult",
    "FetchError",
    "GenerationBackend",
    "ImageItem",
    "InternalError",
    "MissingFieldError",
    "NoContentError",
    "OpenRouterBackend",
    "OutputValidationError",
    "RequestValidationError",
    "Settings",
    "TextItem",
    "TypeMismatchError",
    "UnexpectedFieldError",
    "UnknownVariantError",
    "build_content_for_model",
    "distill_items",
    "distill_url",
    "dump_result",
    "extract_items",
    "extract_url",
    "fetch_html",
    "get_backend",
    "is_noise",
    "validate_component",
    "validate_result",
]
