from __future__ import annotations


def test_openapi_json_is_public(client):
    """
    A5: /openapi.json must be accessible without auth headers.
    """
    r = client.get("/openapi.json", headers={})
    assert r.status_code == 200, r.text
    j = r.json()
    assert "openapi" in j
    assert "paths" in j


def test_openapi_contains_resource_endpoints(client):
    paths = client.get("/openapi.json", headers={}).json().get("paths", {})

    expected = {
        "/resources/allocations": {"get", "post"},
        "/resources/allocations/{allocation_id}": {"get", "put", "delete"},
        "/resources/availability": {"get", "post"},
        "/resources/availability/{window_id}": {"put", "delete"},
        "/resources/timeoff": {"get", "post"},
        "/resources/timeoff/{request_id}": {"get", "put", "delete"},
        "/resources/calendar": {"get"},
    }
    for path, methods in expected.items():
        assert path in paths, list(paths.keys())
        assert methods <= set(paths[path]), (path, list(paths[path]))


def test_openapi_declares_header_security(client):
    j = client.get("/openapi.json", headers={}).json()
    schemes = j["components"]["securitySchemes"]
    assert schemes["XRole"]["name"] == "X-Role"
    assert schemes["XActorUserId"]["name"] == "X-Actor-User-Id"


def test_health_is_public(client):
    r = client.get("/health", headers={})
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
