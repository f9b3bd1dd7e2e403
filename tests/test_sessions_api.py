"""Tests for the /api/sessions proxy routes."""

import json

import httpx
import pytest
from httpx import AsyncClient

from tests.conftest import TEST_TOKEN, FakeUpstream
from tests.factories import SessionFactory


class TestDeleteSession:
    @pytest.mark.asyncio
    async def test_requires_credential(
        self, unauthenticated_client: AsyncClient, control_plane: FakeUpstream
    ):
        """No credential: 401 and the control plane is never called."""
        response = await unauthenticated_client.delete("/api/sessions/sess_1")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert control_plane.requests == []

    @pytest.mark.asyncio
    async def test_relays_upstream_status_and_body(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("DELETE", "/sessions/sess_1", 404, text="not found")

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 404
        assert response.json() == {"error": "not found"}

    @pytest.mark.asyncio
    async def test_empty_upstream_body_uses_generic_message(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("DELETE", "/sessions/sess_1", 503, text="")

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 503
        assert response.json() == {"error": "Failed to delete session"}

    @pytest.mark.asyncio
    async def test_success_relays_json_verbatim(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("DELETE", "/sessions/sess_1", json={"ok": True, "id": "sess_1"})

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "id": "sess_1"}

        forwarded = control_plane.requests[0]
        assert forwarded.method == "DELETE"
        assert forwarded.headers["authorization"] == f"Bearer {TEST_TOKEN}"

    @pytest.mark.asyncio
    async def test_transport_failure_returns_generic_500(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.fail("DELETE", "/sessions/sess_1")

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete session"}
        assert "unreachable" not in response.text

    @pytest.mark.asyncio
    async def test_timeout_is_a_transport_failure(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.fail("DELETE", "/sessions/sess_1", httpx.ReadTimeout)

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete session"}

    @pytest.mark.asyncio
    async def test_invalid_json_from_upstream_is_a_transport_failure(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("DELETE", "/sessions/sess_1", 200, text="<html>")

        response = await client.delete("/api/sessions/sess_1")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to delete session"}


class TestListSessions:
    @pytest.mark.asyncio
    async def test_relays_session_list(self, client: AsyncClient, control_plane: FakeUpstream):
        payload = {"sessions": [SessionFactory.payload(id="sess_9", title="Fix it")]}
        control_plane.respond("GET", "/sessions", json=payload)

        response = await client.get("/api/sessions")

        assert response.status_code == 200
        assert response.json() == payload
        assert control_plane.requests[0].headers["authorization"] == f"Bearer {TEST_TOKEN}"

    @pytest.mark.asyncio
    async def test_requires_credential(
        self, unauthenticated_client: AsyncClient, control_plane: FakeUpstream
    ):
        response = await unauthenticated_client.get("/api/sessions")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        assert control_plane.requests == []

    @pytest.mark.asyncio
    async def test_upstream_error_relayed(self, client: AsyncClient, control_plane: FakeUpstream):
        control_plane.respond("GET", "/sessions", 401, text="token expired")

        response = await client.get("/api/sessions")

        assert response.status_code == 401
        assert response.json() == {"error": "token expired"}


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_forwards_body_and_relays_session_id(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond(
            "POST", "/sessions", json={"sessionId": "sess_new", "status": "created"}
        )

        response = await client.post(
            "/api/sessions",
            json={"repoOwner": "octo", "repoName": "widgets", "model": "claude-sonnet-4-5"},
        )

        assert response.status_code == 200
        assert response.json() == {"sessionId": "sess_new", "status": "created"}

        sent = json.loads(control_plane.requests[0].content)
        assert sent == {"repoOwner": "octo", "repoName": "widgets", "model": "claude-sonnet-4-5"}

    @pytest.mark.asyncio
    async def test_model_defaults_and_title_forwarded(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("POST", "/sessions", json={"sessionId": "sess_new"})

        await client.post(
            "/api/sessions",
            json={"repoOwner": "octo", "repoName": "widgets", "title": "Add auth"},
        )

        sent = json.loads(control_plane.requests[0].content)
        assert sent["model"] == "claude-haiku-4-5"
        assert sent["title"] == "Add auth"

    @pytest.mark.asyncio
    async def test_missing_repo_rejected_without_upstream_call(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        response = await client.post("/api/sessions", json={"repoOwner": "octo"})

        assert response.status_code == 422
        assert "repoName" in response.json()["error"]
        assert control_plane.requests == []

    @pytest.mark.asyncio
    async def test_upstream_failure_relayed(self, client: AsyncClient, control_plane: FakeUpstream):
        control_plane.respond("POST", "/sessions", 400, text="Repository not installed")

        response = await client.post(
            "/api/sessions", json={"repoOwner": "octo", "repoName": "widgets"}
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Repository not installed"}


class TestGetSession:
    @pytest.mark.asyncio
    async def test_relays_detail(self, client: AsyncClient, control_plane: FakeUpstream):
        payload = SessionFactory.payload(id="sess_3")
        control_plane.respond("GET", "/sessions/sess_3", json=payload)

        response = await client.get("/api/sessions/sess_3")

        assert response.status_code == 200
        assert response.json() == payload

    @pytest.mark.asyncio
    async def test_transport_failure(self, client: AsyncClient, control_plane: FakeUpstream):
        control_plane.fail("GET", "/sessions/sess_3")

        response = await client.get("/api/sessions/sess_3")

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch session"}
