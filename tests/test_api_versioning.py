from fastapi.testclient import TestClient

from precedence_sim.api.main import app
from precedence_sim.api.middleware.error_shaping import SafeErrorMiddleware
from precedence_sim.api.observability.metrics import route_labels
from precedence_sim.api.versioning import is_deprecated_alias, split_version
from precedence_sim.core.errors import PrecedenceStructureError


def test_split_version():
    assert split_version("/api/v2/precedence/rules") == ("v2", "/precedence/rules")
    assert split_version("/api/v1") == ("v1", "/")
    assert split_version("/precedence/rules") == (None, "/precedence/rules")
    assert split_version("/api/v3/precedence/rules") == (None, "/api/v3/precedence/rules")


def test_deprecated_aliases():
    assert is_deprecated_alias("/precedence/simulate")
    assert not is_deprecated_alias("/api/v1/precedence/simulate")
    assert not is_deprecated_alias("/health")
    assert not is_deprecated_alias("/metrics/snapshot")


def test_route_labels_bound_cardinality():
    assert route_labels("/api/v1/precedence/reduce") == ("/precedence/reduce", "v1")
    assert route_labels("/precedence/demo") == ("/precedence/demo", "unversioned")
    assert route_labels("/api/v2/precedence/whatever/123") == ("other", "v2")


def test_invariant_violation_becomes_shaped_500():
    from fastapi import FastAPI

    broken = FastAPI()
    broken.add_middleware(SafeErrorMiddleware)

    @broken.get("/boom")
    def boom():
        raise PrecedenceStructureError("no highest precedence advice found")

    c = TestClient(broken, raise_server_exceptions=False)
    r = c.get("/boom", headers={"X-Request-Id": "rid-42"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal Server Error", "error": "precedence.structure", "request_id": "rid-42"}


def test_versioned_routes_share_behaviour():
    c = TestClient(app)
    body = {"rule": "chronological", "advices": ["before", "after"]}
    r1 = c.post("/api/v1/precedence/simulate", json=body)
    r2 = c.post("/api/v2/precedence/simulate", json=body)
    assert r1.status_code == r2.status_code == 200
    assert r1.json() == r2.json()
