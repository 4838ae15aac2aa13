from __future__ import annotations

from typing import Optional

API_VERSIONS: tuple[str, ...] = ("v1", "v2")
LATEST_VERSION = "v2"

# Operational endpoints stay unversioned without deprecation
_OPERATIONAL_PREFIXES: tuple[str, ...] = ("/health", "/metrics", "/docs", "/openapi.json", "/redoc")


def split_version(path: str) -> tuple[Optional[str], str]:
    """'/api/v2/precedence/rules' -> ('v2', '/precedence/rules')."""
    for v in API_VERSIONS:
        prefix = f"/api/{v}"
        if path == prefix or path.startswith(prefix + "/"):
            return v, path[len(prefix):] or "/"
    return None, path or "/"


def is_deprecated_alias(path: str) -> bool:
    version, rest = split_version(path)
    if version is not None:
        return False
    return not any(rest.startswith(p) for p in _OPERATIONAL_PREFIXES)
