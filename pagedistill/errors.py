"""Error taxonomy shared by the extraction core, the backend client and the
HTTP layer.

Every error carries the HTTP status it maps to and a ``to_dict()`` that
renders the public response body.  Handlers at the request boundary are the
only place these are translated into responses; nothing is retried.
"""

from __future__ import annotations

from typing import Any


class DistillError(Exception):
    """Base class for all errors raised by pagedistill."""

    status_code: int = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message}


class FetchError(DistillError):
    """Raised when a source URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    status_code = 502

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class NoContentError(DistillError):
    """Extraction walked the document but produced no content items."""

    status_code = 400


class RequestValidationError(DistillError):
    """Malformed request body.  ``details`` holds flattened field errors."""

    status_code = 400

    def __init__(self, message: str = "Invalid request body", details: Any = None) -> None:
        super().__init__(message)
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class ConfigurationError(DistillError):
    """A required setting (usually the backend credential) is missing."""

    status_code = 400


class BackendError(DistillError):
    """The generation backend failed; ``status_code`` is the upstream status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        # Only propagate statuses that are meaningful as HTTP error codes.
        code = status if status and 400 <= status < 600 else 500
        super().__init__(message, status_code=code)
        self.status = status


class InternalError(DistillError):
    """Uncategorized failure.  Never exposes internal detail."""

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(message)


# ---------------------------------------------------------------------------
# Output validation
# ---------------------------------------------------------------------------

class OutputValidationError(DistillError):
    """A generated value does not conform to the component catalogue.

    Attributes:
        path   -- dotted path of the first offending field ("" for the root)
        errors -- every diagnostic, as ``{"path", "type", "message"}`` dicts
    """

    status_code = 422

    def __init__(
        self,
        message: str,
        path: str = "",
        errors: list[dict[str, str]] | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.errors = errors if errors is not None else [
            {"path": path, "type": "invalid", "message": message},
        ]

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.errors}


class UnknownVariantError(OutputValidationError):
    """Discriminant missing or not one of the known component types."""


class MissingFieldError(OutputValidationError):
    """A required field is absent."""


class TypeMismatchError(OutputValidationError):
    """A field is present but has the wrong type or enumeration value."""


class UnexpectedFieldError(OutputValidationError):
    """A field not declared by the selected component shape is present."""
