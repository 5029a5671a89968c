from __future__ import annotations

import time
import uuid
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from ..observability.context import request_id_var
from ..observability.logging import get_logger

REQUEST_ID_HEADER = "X-Request-Id"


def _request_fields(request: Request, started: float) -> dict[str, Any]:
    client = request.client
    fields: dict[str, Any] = {
        "http_method": request.method.upper(),
        "path": request.url.path,
        "duration_ms": round((time.perf_counter() - started) * 1000.0, 2),
        "client_ip": client.host if client else None,
    }
    # Left behind by /submit-query (success) or the query-failure handler.
    summary = getattr(request.state, "query", None) or {}
    for k, v in summary.items():
        fields[f"query_{k}"] = v
    return fields


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    One middleware for per-request bookkeeping:

    - the caller's X-Request-Id is reused, otherwise a UUID4 is minted
    - the id is bound to a contextvar for the lifetime of the request, so
      relay log lines carry it, and echoed on the response
    - a single `request` line is logged per request; for queries it also
      carries pages fetched, rows returned and whether the bound cut the
      result short (or the error class when the query failed)
    """

    def __init__(self, app, *, quiet_paths: frozenset[str] = frozenset({"/"})):
        super().__init__(app)
        self._quiet_paths = quiet_paths
        self._log = get_logger("access")

    async def dispatch(self, request: Request, call_next):
        request_id = (request.headers.get(REQUEST_ID_HEADER) or "").strip() or str(uuid.uuid4())
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception:
                self._log.exception("request_error", **_request_fields(request, started))
                raise

            response.headers[REQUEST_ID_HEADER] = request_id
            if request.url.path not in self._quiet_paths:
                self._log.info(
                    "request",
                    status_code=response.status_code,
                    **_request_fields(request, started),
                )
            return response
        finally:
            request_id_var.reset(token)
