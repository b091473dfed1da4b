"""Tests for the HTTP API."""

import json

import pytest
from fastapi.testclient import TestClient

from route_resolver import __version__
from route_resolver.api.app import create_app

from tests.conftest import offset_of

ROUTES = """\
import router from '@adonisjs/core/services/router'
const UserController = () => import('#controllers/user_controller')

router.get('/users', [UserController, 'index'])
"""


@pytest.fixture
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def project(make_project):
    return make_project(
        files={
            "app/controllers/user_controller.ts": "export default class UserController { index() {} }\n",
        },
        imports={"#controllers/*": "./app/controllers/*.js"},
    )


def _body(project, needle: str, delta: int = 1) -> dict:
    return {
        "file_path": str(project / "start" / "routes.ts"),
        "text": ROUTES,
        "offset": offset_of(ROUTES, needle, delta=delta),
    }


class TestDefinitionEndpoint:
    """Tests for POST /api/v1/definition."""

    def test_method_string(self, client, project):
        response = client.post("/api/v1/definition", json=_body(project, "'index'", delta=2))

        assert response.status_code == 200
        data = response.json()
        assert data["found"] is True
        assert data["result"]["target_path"] == str(project / "app/controllers/user_controller.ts")
        col = len("export default class UserController { ")
        assert data["result"]["range"] == {
            "start": {"line": 0, "col": col},
            "end": {"line": 0, "col": col + len("index")},
        }
        assert data["result"]["origin_range"]["start"]["line"] == 3

    def test_controller_identifier(self, client, project):
        response = client.post("/api/v1/definition", json=_body(project, "UserController, 'index'"))

        data = response.json()
        assert data["found"] is True
        assert data["result"]["target_path"] == str(project / "app/controllers/user_controller.ts")

    def test_not_found(self, client, project):
        response = client.post("/api/v1/definition", json=_body(project, "'/users'", delta=2))

        assert response.status_code == 200
        assert response.json() == {"found": False, "result": None}

    def test_open_documents(self, client, project):
        controller = project / "app/controllers/user_controller.ts"
        body = _body(project, "'index'", delta=2)
        body["open_documents"] = {str(controller): "\nexport default class UserController {\n  index() {}\n}\n"}

        data = client.post("/api/v1/definition", json=body).json()
        assert data["result"]["range"]["start"] == {"line": 2, "col": 2}

    def test_negative_offset_rejected(self, client, project):
        body = _body(project, "'index'")
        body["offset"] = -1

        assert client.post("/api/v1/definition", json=body).status_code == 422


class TestContextEndpoint:
    """Tests for POST /api/v1/context."""

    def test_method_string(self, client, project):
        data = client.post("/api/v1/context", json=_body(project, "'index'", delta=2)).json()

        assert data["context"]["type"] == "method_string"
        assert data["context"]["controller_name"] == "UserController"
        assert data["context"]["method_name"] == "index"

    def test_import_path(self, client, project):
        data = client.post("/api/v1/context", json=_body(project, "#controllers")).json()

        assert data["context"] == {
            "type": "controller_import_path",
            "variable_name": None,
            "controller_name": None,
            "method_name": None,
            "import_path": "#controllers/user_controller",
            "module_name": None,
        }

    def test_no_context(self, client, project):
        data = client.post("/api/v1/context", json=_body(project, "router.get", delta=8)).json()
        assert data == {"context": None}

    def test_unencodable_text_returns_no_context(self, client, project):
        body = {**_body(project, "router.get"), "text": "\ud800 router.get()", "offset": 1}
        # Escaped JSON keeps the lone surrogate intact on the wire
        response = client.post(
            "/api/v1/context",
            content=json.dumps(body),
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {"context": None}


class TestHealth:
    """Tests for health endpoints."""

    def test_health(self, client):
        data = client.get("/health").json()

        assert data["status"] == "healthy"
        assert data["version"] == __version__
        assert "typescript" in data["languages"]

    def test_live(self, client):
        assert client.get("/live").json() == {"alive": True}
