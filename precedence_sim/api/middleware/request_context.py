from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from precedence_sim.api.observability.metrics import (
    HTTP_REQUESTS_TOTAL,
    HTTP_REQUEST_DURATION_SECONDS,
    route_labels,
)

log = logging.getLogger("precedence.request")

REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request ID + HTTP metrics.

    Adds:
      request.state.request_id
      response header: X-Request-Id
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = rid

        start = time.perf_counter()
        resp = await call_next(request)
        elapsed = time.perf_counter() - start

        resp.headers[REQUEST_ID_HEADER] = rid

        route, version = route_labels(request.url.path)
        method = request.method.upper()
        status = str(resp.status_code)
        HTTP_REQUESTS_TOTAL.labels(method=method, route=route, api_version=version, status=status).inc()
        HTTP_REQUEST_DURATION_SECONDS.labels(method=method, route=route).observe(elapsed)

        if route.startswith("/precedence/"):
            # single structured line per simulation call
            log.info(
                "%s",
                {
                    "event": "request",
                    "request_id": rid,
                    "method": method,
                    "route": route,
                    "api_version": version,
                    "status": status,
                    "duration_ms": int(elapsed * 1000),
                },
            )
        return resp
