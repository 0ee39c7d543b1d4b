"""HTTP service exposing extraction and distillation.

Run with ``python -m pagedistill serve`` or, for an ASGI server of your own,
``uvicorn pagedistill.server:create_app --factory``.

Routes::

    GET  /health             -> {"ok": true}
    POST /api/distill        {items, model?} -> {components}
    POST /api/cards          legacy alias of /api/distill
    POST /api/distill/url    {url, model?}   -> {components}
    POST /api/extract        {url}           -> {items}

Endpoints are plain ``def`` functions: FastAPI runs each request on a worker
thread, so the blocking fetch and backend calls never stall the event loop.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError as FastAPIRequestValidationError
from fastapi.responses import JSONResponse

from pagedistill.backend import GenerationBackend, get_backend
from pagedistill.components import dump_result
from pagedistill.config import Settings
from pagedistill.errors import DistillError, InternalError, RequestValidationError
from pagedistill.items import DistillRequest, UrlDistillRequest, UrlRequest
from pagedistill.pipeline import distill_items, distill_url
from pagedistill.query import extract_url

logger = logging.getLogger(__name__)


def flatten_errors(errors: list[dict[str, Any]]) -> dict[str, Any]:
    """Group pydantic errors into ``{"formErrors", "fieldErrors"}``.

    Errors attached to the body as a whole (including unparsable JSON) go to
    ``formErrors``; the rest are keyed by dotted field path.
    """
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] == "body":
            loc = loc[1:]
        msg = str(err.get("msg", "Invalid value"))
        if not loc or err.get("type") == "json_invalid":
            form_errors.append(msg)
            continue
        field_errors.setdefault(".".join(str(p) for p in loc), []).append(msg)
    return {"formErrors": form_errors, "fieldErrors": field_errors}


def _backend(request: Request) -> GenerationBackend:
    backend = request.app.state.backend
    if backend is not None:
        return backend
    return get_backend(request.app.state.settings)


def create_app(
    settings: Settings | None = None,
    backend: GenerationBackend | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Process configuration; read from the environment when omitted.
        backend:  Generation backend to use for every request.  When omitted
                  an :class:`~pagedistill.backend.OpenRouterBackend` is built
                  per request from *settings*, so a missing credential is
                  reported to the caller rather than at startup.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="pagedistill",
        description="Distill web pages into typed UI components",
        version="0.1.0",
    )
    app.state.settings = settings
    app.state.backend = backend

    @app.exception_handler(FastAPIRequestValidationError)
    async def request_validation_handler(
        request: Request, exc: FastAPIRequestValidationError,
    ) -> JSONResponse:
        details = flatten_errors(list(exc.errors()))
        logger.info("%s: validation failed %s", request.url.path, details)
        error = RequestValidationError(details=details)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(DistillError)
    async def distill_error_handler(request: Request, exc: DistillError) -> JSONResponse:
        logger.info(
            "%s: error (status=%d, %s: %s)",
            request.url.path, exc.status_code, type(exc).__name__, exc.message,
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("%s: unhandled exception", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=InternalError().to_dict(),
        )

    @app.get("/health")
    def health() -> dict[str, bool]:
        return {"ok": True}

    def _distill(body: DistillRequest, request: Request) -> dict[str, Any]:
        logger.info(
            "%s: validation passed (items=%d, model=%s)",
            request.url.path, len(body.items), body.model or settings.default_model,
        )
        result = distill_items(
            body.items,
            backend=_backend(request),
            model=body.model,
            default_model=settings.default_model,
        )
        return dump_result(result)

    @app.post("/api/distill")
    def distill(body: DistillRequest, request: Request) -> dict[str, Any]:
        logger.info("/api/distill: request received")
        return _distill(body, request)

    @app.post("/api/cards")
    def cards(body: DistillRequest, request: Request) -> dict[str, Any]:
        logger.info("/api/cards: legacy endpoint called, handling as /api/distill")
        return _distill(body, request)

    @app.post("/api/distill/url")
    def distill_from_url(body: UrlDistillRequest, request: Request) -> dict[str, Any]:
        logger.info("/api/distill/url: request received for %s", body.url)
        result = distill_url(
            body.url,
            backend=_backend(request),
            model=body.model,
            default_model=settings.default_model,
            user_agent=settings.user_agent,
        )
        return dump_result(result)

    @app.post("/api/extract")
    def extract(body: UrlRequest) -> dict[str, Any]:
        logger.info("/api/extract: request received for %s", body.url)
        items = extract_url(body.url, user_agent=settings.user_agent)
        return {"items": [item.model_dump() for item in items]}

    return app
