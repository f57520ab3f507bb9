"""Tests for the FastAPI API."""

import pytest
from fastapi.testclient import TestClient

from forcesuper import __version__
from forcesuper.api import app

BASE = """class Base {
    @ForceSuperCall
    void start() {}
}
"""

SUB_OK = """class Sub extends Base {
    void start() {
        super.start();
    }
}
"""

SUB_BAD = """class Sub extends Base {
    void start() {}
}
"""


@pytest.fixture
def api_client():
    return TestClient(app)


def files(*pairs):
    return [{"path": path, "source": source} for path, source in pairs]


class TestHealthCheck:
    def test_health(self, api_client):
        response = api_client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["version"] == __version__
        assert "java" in data["languages"]


class TestCheck:
    def test_passing_sources(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("Sub.java", SUB_OK), ("Base.java", BASE))},
        )
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "files": 2, "classes": 2, "parse_errors": []}

    def test_empty_request(self, api_client):
        response = api_client.post("/api/check", json={"files": []})
        assert response.status_code == 200
        assert response.json()["classes"] == 0

    def test_missing_super_call(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("Base.java", BASE), ("Sub.java", SUB_BAD))},
        )
        assert response.status_code == 422
        data = response.json()
        assert data["error_type"] == "MissingSuperCallError"
        assert data["method"] == "start"
        assert data["class_name"] == "Sub"
        assert data["path"] == "Sub.java"
        assert data["line"] == 2

    def test_custom_required_tag(self, api_client):
        response = api_client.post(
            "/api/check",
            json={
                "files": files(("Base.java", BASE), ("Sub.java", SUB_BAD)),
                "required_tag": "@MustCallSuper",
            },
        )
        assert response.status_code == 200

    def test_blank_required_tag(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("Base.java", BASE)), "required_tag": " @ "},
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "ConfigError"

    def test_cyclic_inheritance(self, api_client):
        response = api_client.post(
            "/api/check",
            json={
                "files": files(
                    ("A.java", "class A extends B {}"),
                    ("B.java", "class B extends A {}"),
                )
            },
        )
        assert response.status_code == 422
        assert response.json()["error_type"] == "CyclicAncestorError"

    def test_unresolved_ancestor(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("Sub.java", SUB_OK))},
        )
        assert response.status_code == 409
        data = response.json()
        assert data["error_type"] == "InconsistentRenewStateError"
        assert data["pending"] == {"Sub.java:Sub": "ancestor Base is not registered"}

    def test_duplicate_class(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("Base.java", BASE), ("./Base.java", BASE))},
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "DuplicateClassError"

    def test_unsupported_language(self, api_client):
        response = api_client.post(
            "/api/check",
            json={"files": files(("widget.kt", "class Widget"))},
        )
        assert response.status_code == 400
        assert response.json()["error_type"] == "UnsupportedLanguageError"

    def test_invalid_body(self, api_client):
        response = api_client.post("/api/check", json={"files": [{"path": ""}]})
        assert response.status_code == 422
