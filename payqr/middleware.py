"""Request tracing and access logging for the payqr service."""
from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .monitoring import observe_request

logger = logging.getLogger("payqr.http")

REQUEST_ID_HEADER = "X-Request-Id"


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return route.path if route else request.url.path


def _payload_kind(path: str) -> str | None:
    """Which payload family a route serves: ``emvco``, ``upi`` or None."""

    for kind in ("emvco", "upi"):
        if f"/{kind}/" in path or path.endswith(f"/{kind}"):
            return kind
    return None


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request id, then log and time every request against its route."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Response]) -> Response:  # type: ignore[override]
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start) * 1000
            route_path = _route_path(request)
            logger.exception(
                "request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "path": route_path,
                    "payload_kind": _payload_kind(route_path),
                    "duration_ms": round(duration_ms, 2),
                },
            )
            observe_request(request.method, route_path, 500, duration_ms)
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        route_path = _route_path(request)
        response.headers[REQUEST_ID_HEADER] = request_id

        extra = {
            "request_id": request_id,
            "method": request.method,
            "path": route_path,
            "payload_kind": _payload_kind(route_path),
            "authenticated": "x-api-key" in request.headers,
            "status_code": response.status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if response.status_code >= 500:
            logger.error("request completed", extra=extra)
        elif response.status_code >= 400:
            logger.warning("request completed", extra=extra)
        else:
            logger.info("request completed", extra=extra)
        observe_request(request.method, route_path, response.status_code, duration_ms)
        return response
