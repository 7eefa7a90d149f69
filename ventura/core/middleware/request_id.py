from __future__ import annotations

import time
import uuid
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ventura.core.middleware.context import clear_context, set_request_id


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Tags every request with an id, echoes it back and logs one line per request."""

    def __init__(self, app, header_name: str = "X-Request-ID") -> None:
        super().__init__(app)
        self.header_name = header_name
        self._log = structlog.get_logger(__name__)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        clear_context()
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        set_request_id(request_id)

        started = time.perf_counter()
        response = await call_next(request)
        response.headers[self.header_name] = request_id

        self._log.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
