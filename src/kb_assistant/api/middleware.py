"""Request timing and request-ID propagation."""

from __future__ import annotations

import time
from uuid import uuid4

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from kb_assistant.observability.logger import get_logger

logger = get_logger("middleware")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestTimingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        # Honor a caller-supplied ID so logs can be joined across services
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        start = time.monotonic()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                method=request.method,
                error=str(e),
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
            response = JSONResponse(status_code=500, content={"detail": "Internal server error"})

        duration_ms = round((time.monotonic() - start) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Duration-MS"] = str(duration_ms)

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "request_completed",
            method=request.method,
            status=response.status_code,
            duration_ms=duration_ms,
        )
        return response
