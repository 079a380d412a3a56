from __future__ import annotations

import logging
import time

from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import Settings

logger = logging.getLogger("app.requests")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            elapsed_ms = int((time.perf_counter() - start) * 1000)
            logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, elapsed_ms)
            raise
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, elapsed_ms)
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach fixed response headers.

    Room availability changes with every saved meeting, so API answers are
    marked ``no-store`` and never served from a browser or proxy cache.
    """

    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        headers = {
            "Cache-Control": "no-store",
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "Referrer-Policy": "no-referrer",
        }
        if settings.security_enable_hsts:
            headers["Strict-Transport-Security"] = f"max-age={max(1, settings.security_hsts_max_age_seconds)}"
        self._headers = headers

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers.setdefault(name, value)
        return response


class RequestSizeLimitMiddleware(BaseHTTPMiddleware):
    """Reject write requests whose declared body exceeds ``max_bytes``.

    Only bodies of POST, PUT and PATCH are checked. The 413 answer uses the
    same ``message``/``details`` shape as application errors.
    """

    WRITE_METHODS = frozenset({"POST", "PUT", "PATCH"})

    def __init__(self, app, *, max_bytes: int) -> None:
        super().__init__(app)
        self._max_bytes = max(1, max_bytes)

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.method not in self.WRITE_METHODS:
            return await call_next(request)

        declared = request.headers.get("content-length", "")
        received = int(declared) if declared.isdigit() else 0
        if received > self._max_bytes:
            logger.warning(
                "Rejected %s %s: body of %d bytes exceeds %d",
                request.method,
                request.url.path,
                received,
                self._max_bytes,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "message": "Request body too large",
                    "details": {"maxBytes": self._max_bytes, "receivedBytes": received},
                },
            )
        return await call_next(request)
