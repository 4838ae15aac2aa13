from __future__ import annotations

import logging
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from precedence_sim.core.errors import PrecedenceError, PrecedenceStructureError

log = logging.getLogger("precedence.errors")


def _error_code(exc: Exception) -> str:
    if isinstance(exc, PrecedenceStructureError):
        return "precedence.structure"
    if isinstance(exc, PrecedenceError):
        return "precedence.internal"
    return "internal"


class SafeErrorMiddleware(BaseHTTPMiddleware):
    """
    Last line of defence for errors the endpoints did not map to a 4xx.

    Input errors are answered with 400 by the endpoints themselves; whatever
    reaches this point is an invariant violation (e.g. a reduced graph
    without a highest-precedence advice) and becomes a 500 with a stable
    error code, the request id, and no stack trace. The traceback is logged.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            rid = getattr(request.state, "request_id", None) or request.headers.get("x-request-id")
            code = _error_code(e)
            log.exception("Unhandled error code=%s rid=%s path=%s: %s", code, rid, request.url.path, e)

            payload = {"detail": "Internal Server Error", "error": code}
            if rid:
                payload["request_id"] = rid
            return JSONResponse(status_code=500, content=payload)
