"""Exception handlers: domain and store errors -> RFC 7807 problem responses with localized detail."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from hydration_tracker.config import settings
from hydration_tracker.core.exceptions import (
    DuplicateTimestampError,
    InvalidFilterError,
    RecordNotFoundError,
    StoreError,
    UnknownUnitError,
)
from hydration_tracker.core.messages import render, resolve_locale

logger = logging.getLogger(__name__)

PROBLEM_TYPE_BASE = "/problems"


def _problem(
    request: Request,
    status: int,
    slug: str,
    title: str,
    message_key: str,
    errors: list[str] | None = None,
) -> JSONResponse:
    locale = resolve_locale(request.headers.get("Accept-Language"))
    params = {"max_days": settings.max_filter_range_days, "max_size": settings.max_page_size}
    body = {
        "type": f"{PROBLEM_TYPE_BASE}/{slug}",
        "title": title,
        "status": status,
        "detail": render(message_key, locale, **params),
        "instance": request.url.path,
    }
    if errors is not None:
        body["errors"] = [{"code": key, "message": render(key, locale, **params)} for key in errors]
    return JSONResponse(status_code=status, content=body, media_type="application/problem+json")


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InvalidFilterError)
    async def invalid_filter_handler(request: Request, exc: InvalidFilterError):
        return _problem(request, 400, "invalid-filter", "Invalid filter", exc.message_key, errors=exc.errors)

    @app.exception_handler(UnknownUnitError)
    async def unknown_unit_handler(request: Request, exc: UnknownUnitError):
        return _problem(request, 400, "unknown-unit", "Unknown unit", exc.message_key)

    @app.exception_handler(DuplicateTimestampError)
    async def duplicate_timestamp_handler(request: Request, exc: DuplicateTimestampError):
        return _problem(request, 409, "duplicate-timestamp", "Duplicate timestamp", exc.message_key)

    @app.exception_handler(RecordNotFoundError)
    async def not_found_handler(request: Request, exc: RecordNotFoundError):
        return _problem(request, 404, "intake-not-found", "Not found", exc.message_key)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        logger.error("Store failure during %s", exc.operation, exc_info=exc)
        return _problem(request, 500, "internal-server-error", "Internal server error", exc.message_key)
