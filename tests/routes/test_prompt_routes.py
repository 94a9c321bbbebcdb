"""
Tests for the /prompts and health endpoints.
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

from prompt_writer.auth.dependencies import AuthenticatedUser, get_authenticated_user
from prompt_writer.main import app

client = TestClient(app)


async def mock_get_authenticated_user_dependency():
    return AuthenticatedUser(user_id="test-user-id", access_token="test-access-token")


@pytest.fixture
def mock_auth():
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_clients():
    with patch("prompt_writer.routes.prompts.get_public_client") as public, \
            patch("prompt_writer.routes.prompts.get_supabase_client") as authed:
        public.return_value = MagicMock()
        authed.return_value = MagicMock()
        yield


@pytest.fixture
def mock_prompt():
    return {
        "id": 1,
        "title": "코딩 도우미",
        "description": "프로그래밍 문제를 해결해주는 AI",
        "prompt": "당신은 숙련된 프로그래머입니다.",
        "role": "system",
        "tags": ["코딩"],
        "created_at": "2024-01-15T00:00:00",
    }


class TestPrompts:

    @patch("prompt_writer.routes.prompts.list_prompts")
    def test_list(self, mock_list, mock_prompt):
        mock_list.return_value = [mock_prompt]

        response = client.get("/prompts")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    @patch("prompt_writer.routes.prompts.get_prompt_by_id")
    def test_get_not_found(self, mock_get):
        mock_get.return_value = None

        response = client.get("/prompts/9")

        assert response.status_code == 404

    def test_create_requires_auth(self):
        response = client.post("/prompts", json={"title": "t", "prompt": "p"})

        assert response.status_code == 401

    @patch("prompt_writer.routes.prompts.create_prompt")
    def test_create(self, mock_create, mock_auth, mock_prompt):
        mock_create.return_value = mock_prompt

        response = client.post(
            "/prompts",
            json={"title": "코딩 도우미", "prompt": "당신은 숙련된 프로그래머입니다.", "role": "system", "tags": ["코딩"]}
        )

        assert response.status_code == 201
        assert response.json()["prompt"]["role"] == "system"
        assert mock_create.call_args.kwargs["user_id"] == "test-user-id"

    def test_create_missing_prompt(self, mock_auth):
        response = client.post("/prompts", json={"title": "t"})

        assert response.status_code == 422


class TestHealth:

    def test_health(self):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @patch("prompt_writer.routes.health.get_public_client")
    def test_ping(self, mock_client):
        mock_client.return_value = MagicMock()

        response = client.get("/ping")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    @patch("prompt_writer.routes.health.get_public_client")
    def test_ping_database_down(self, mock_client):
        mock_client.return_value.table.side_effect = Exception("connection refused")

        response = client.get("/ping")

        assert response.status_code == 503
        assert response.json()["detail"]["error"] == "database_unavailable"
