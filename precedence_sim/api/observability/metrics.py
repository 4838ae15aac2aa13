from __future__ import annotations

from prometheus_client import Counter, Histogram

from precedence_sim.api.versioning import split_version

# Known route roots; anything else is folded into "other" to keep label cardinality bounded
_KNOWN_ROUTES = (
    "/precedence/rules",
    "/precedence/simulate",
    "/precedence/reduce",
    "/precedence/demo",
    "/precedence/export",
    "/metrics/snapshot",
    "/metrics",
    "/health",
)


def route_labels(path: str) -> tuple[str, str]:
    """(route, api_version) labels for a request path."""
    version, rest = split_version(path)
    route = next((r for r in _KNOWN_ROUTES if rest == r), "other")
    return route, version or "unversioned"


HTTP_REQUESTS_TOTAL = Counter(
    "precedence_http_requests_total",
    "Total HTTP requests",
    ["method", "route", "api_version", "status"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "precedence_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
)
