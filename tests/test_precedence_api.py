from fastapi.testclient import TestClient

from precedence_sim.api.main import app


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}
    assert "Deprecation" not in r.headers


def test_rules_endpoint(client):
    r = client.get("/api/v2/precedence/rules")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["rules"] == ["CLASSICAL", "BEFORE_ALWAYS_WINS", "CHRONOLOGICAL"]
    assert body["default_rule"] == "CLASSICAL"


def test_default_rule_from_env(client, monkeypatch):
    monkeypatch.setenv("PRECEDENCE_DEFAULT_RULE", "chronological")
    assert client.get("/api/v1/precedence/rules").json()["default_rule"] == "CHRONOLOGICAL"
    r = client.post("/api/v1/precedence/simulate", json={"advices": ["before", "after", "before"]})
    assert r.json()["rule"] == "CHRONOLOGICAL"


def test_simulate_chain(client):
    r = client.post(
        "/api/v2/precedence/simulate",
        json={"rule": "CHRONOLOGICAL", "advices": ["before", "after", "before"]},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["outcome"] == "simulated"
    assert body["advices"] == ["before-1", "after-2", "before-3"]
    assert body["reduced_edges"] == [["before-1", "after-2"], ["after-2", "before-3"]]
    assert body["cycles"]["has_cycles"] is False
    assert [e["advice"] for e in body["trace"]] == ["before-1", "after-2", "before-3", None]
    assert body["lines"][-1] == "· after-2 → post-action"


def test_simulate_cycle(client):
    r = client.post("/api/v2/precedence/simulate", json={"rule": "classical", "advices": ["before", "after", "before"]})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["outcome"] == "cyclic"
    assert body["trace"] is None
    assert body["cycles"]["simple_cycles"] == [["before-1", "before-3", "after-2"]]


def test_simulate_rejects_bad_input(client, monkeypatch):
    r = client.post("/api/v2/precedence/simulate", json={"rule": "nope", "advices": ["before"]})
    assert r.status_code == 400
    assert "unknown precedence rule" in r.json()["detail"]

    r = client.post("/api/v2/precedence/simulate", json={"advices": ["before", "eventually"]})
    assert r.status_code == 400

    monkeypatch.setenv("PRECEDENCE_MAX_ADVICES", "2")
    r = client.post("/api/v2/precedence/simulate", json={"advices": ["before"] * 3})
    assert r.status_code == 400
    assert "too many advices" in r.json()["detail"]


def test_reduce_arbitrary_graph(client):
    r = client.post(
        "/api/v2/precedence/reduce",
        json={
            "vertices": ["before-1", "before-2"],
            "edges": [["before-1", "before-2"], ["before-2", "after-3"], ["before-1", "after-3"]],
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["vertices"] == ["before-1", "before-2", "after-3"]
    assert body["edges"] == [["before-1", "before-2"], ["before-2", "after-3"]]
    assert body["removed_edges"] == 1
    assert body["cycles"]["has_cycles"] is False


def test_reduce_keeps_cycle(client):
    r = client.post(
        "/api/v2/precedence/reduce",
        json={"edges": [["around-1", "around-2"], ["around-2", "around-1"]]},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["removed_edges"] == 0
    assert body["cycles"]["cyclic_vertices"] == ["around-1", "around-2"]


def test_reduce_rejects_bad_graph(client):
    assert client.post("/api/v2/precedence/reduce", json={"vertices": ["nothing"]}).status_code == 400
    assert client.post("/api/v2/precedence/reduce", json={"edges": [["before-1"]]}).status_code == 400
    assert client.post("/api/v2/precedence/reduce", json={"edges": [["before-1", "before-1"]]}).status_code == 400


def test_demo_endpoint(client):
    r = client.get("/api/v2/precedence/demo")
    assert r.status_code == 200, r.text
    results = r.json()["results"]
    assert len(results) == 9
    assert {res["aspect"] for res in results} == {"after_first", "around_first", "before_after_before"}


def test_export_endpoint(client):
    r = client.post("/api/v2/precedence/export", json={"rule": "chronological", "advices": ["before", "after", "before"]})
    assert r.status_code == 200, r.text
    assert r.headers["content-type"].startswith("text/csv")
    assert 'filename="CHRONOLOGICAL-' in r.headers["content-disposition"]
    assert r.text == "before-1,after-2,before-3\nafter-2,before-3\nbefore-3\n"


def test_unversioned_routes_are_deprecated(client):
    r = client.get("/precedence/rules")
    assert r.status_code == 200
    assert r.headers.get("Deprecation") == "true"
    assert "Link" in r.headers

    r2 = client.get("/api/v2/precedence/rules")
    assert "Deprecation" not in r2.headers


def test_request_id_roundtrip():
    c = TestClient(app)
    r = c.get("/health")
    assert len(r.headers["X-Request-Id"]) > 10

    r = c.get("/health", headers={"X-Request-Id": "test-rid-123"})
    assert r.headers.get("X-Request-Id") == "test-rid-123"


def test_unknown_route_does_not_leak_traceback(client):
    r = client.get("/api/v1/does/not/exist")
    assert r.status_code == 404
    assert "Traceback" not in r.text


def test_reduce_large_component_without_spanning_cycle(client, monkeypatch):
    monkeypatch.setenv("PRECEDENCE_MAX_CYCLES", "50")
    labels = [f"around-{i}" for i in range(1, 25)]
    edges = [[a, b] for a in labels[:-1] for b in labels[:-1] if a != b]
    edges += [[labels[0], labels[-1]], [labels[-1], labels[0]]]

    r = client.post("/api/v2/precedence/reduce", json={"edges": edges})
    assert r.status_code == 200, r.text
    body = r.json()
    assert len(body["edges"]) == 24
    assert body["removed_edges"] == len(edges) - 24
    assert len(body["cycles"]["cyclic_vertices"]) == 24
