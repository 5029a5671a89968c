"""
Error bodies for the relay API.

Every non-2xx response is RFC7807 problem JSON plus a `message` member: the
query console shows `message` verbatim and ignores the rest.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db.dynamodb.errors import DdbError
from .observability.logging import get_logger
from .settings import get_settings

PROBLEM_JSON = "application/problem+json"

_TITLES = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Validation Failed",
}


def error_response(
    request: Request,
    status_code: int,
    message: str,
    *,
    title: str | None = None,
    errors: list[dict[str, Any]] | None = None,
) -> ORJSONResponse:
    if title is None:
        title = _TITLES.get(status_code) or ("Internal Server Error" if status_code >= 500 else "Error")

    body: dict[str, Any] = {
        "type": "about:blank",
        "title": title,
        "status": status_code,
        "message": message,
        "detail": message,
        "instance": request.url.path,
    }
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        body["requestId"] = request_id
    if errors:
        body["errors"] = errors

    return ORJSONResponse(body, status_code=status_code, media_type=PROBLEM_JSON)


def _query_failed(request: Request, exc: DdbError) -> ORJSONResponse:
    # Category and code go to the access log only; the caller gets prose.
    request.state.query = {
        "error": type(exc).__name__,
        "error_code": exc.code,
        "retryable": exc.retryable,
    }
    return error_response(request, 500, exc.message, title="Query Failed")


def _http_error(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    if exc.status_code == 404:
        return error_response(request, 404, "Route not found")
    return error_response(request, exc.status_code, str(exc.detail))


def _invalid_body(request: Request, exc: RequestValidationError) -> ORJSONResponse:
    errors = [
        {
            "path": ".".join(str(p) for p in (e.get("loc") or ()) if p != "body"),
            "message": e.get("msg", "Invalid value"),
            "type": e.get("type"),
        }
        for e in exc.errors()
    ]
    return error_response(request, 422, "Request validation failed", errors=errors)


def _unexpected(request: Request, exc: Exception) -> ORJSONResponse:
    get_logger("unhandled").error(
        "unhandled_exception",
        http_method=request.method.upper(),
        path=request.url.path,
        exc_info=exc,
    )
    if get_settings().is_production:
        message = "Internal Server Error"
    else:
        message = f"{type(exc).__name__}: {exc}"
    return error_response(request, 500, message)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DdbError, _query_failed)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _http_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _invalid_body)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unexpected)
