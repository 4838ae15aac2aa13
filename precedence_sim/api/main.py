from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import Response

from precedence_sim.api.versioning import LATEST_VERSION, is_deprecated_alias
from precedence_sim.api.endpoints import precedence
from precedence_sim.api.endpoints import metrics as metrics_ep
from precedence_sim.api.middleware.error_shaping import SafeErrorMiddleware
from precedence_sim.api.middleware.request_context import RequestContextMiddleware

app = FastAPI(
    title="Advice Precedence Simulator API",
    version="0.1.0",
)

# ------------------------------------------------------------
# Middleware stack (ORDER MATTERS)
# Starlette reverses add_middleware order: the LAST call = OUTERMOST wrapper.
#   SafeErrorMiddleware → RequestContext → handler
# ------------------------------------------------------------
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SafeErrorMiddleware)


# ------------------------------------------------------------
# Deprecation headers for unversioned endpoints
# ------------------------------------------------------------
@app.middleware("http")
async def add_deprecation_headers_for_unversioned(request: Request, call_next):
    resp: Response = await call_next(request)

    if is_deprecated_alias(request.url.path):
        resp.headers.setdefault("Deprecation", "true")
        resp.headers.setdefault("Link", f'</api/{LATEST_VERSION}>; rel="latest-version"')

    return resp


# Unversioned (backward-compat) aliases
app.include_router(precedence.router)
app.include_router(metrics_ep.router)

# Versioned (authoritative)
for prefix in ("/api/v1", "/api/v2"):
    app.include_router(precedence.router, prefix=prefix)


@app.get("/health")
def health_check():
    return {"status": "healthy"}
