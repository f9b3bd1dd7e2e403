"""Tests for the home page, sidebar partial and session detail view."""

import json
import re

import pytest
from httpx import AsyncClient

from inspectweb.api.utils import Sidebar, templates
from inspectweb.core.credential import Credential
from inspectweb.core.session_list import INACTIVE_THRESHOLD_MS
from inspectweb.utils.datetime import now_ms
from tests.conftest import FakeUpstream
from tests.factories import SessionFactory


def _session_list(control_plane: FakeUpstream, *sessions: dict) -> None:
    control_plane.respond("GET", "/sessions", json={"sessions": list(sessions)})


class TestHome:
    @pytest.mark.asyncio
    async def test_signed_out_shows_signin(
        self, unauthenticated_client: AsyncClient, control_plane: FakeUpstream
    ):
        response = await unauthenticated_client.get("/")

        assert response.status_code == 200
        assert "Sign in" in response.text
        assert control_plane.requests == []

    @pytest.mark.asyncio
    async def test_sidebar_lists_active_then_inactive(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        now = now_ms()
        _session_list(
            control_plane,
            SessionFactory.payload(title="Old work", updated_at=now - 2 * INACTIVE_THRESHOLD_MS),
            SessionFactory.payload(title=None, repo_owner="a", repo_name="b", updated_at=now),
        )

        response = await client.get("/")

        assert response.status_code == 200
        html = response.text
        assert "a/b" in html
        assert "Inactive" in html
        assert html.index("a/b") < html.index("Inactive") < html.index("Old work")

    @pytest.mark.asyncio
    async def test_empty_list(self, client: AsyncClient, control_plane: FakeUpstream):
        _session_list(control_plane)

        response = await client.get("/")

        assert "No sessions yet" in response.text

    @pytest.mark.asyncio
    async def test_list_failure_renders_empty(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.fail("GET", "/sessions")

        response = await client.get("/")

        assert response.status_code == 200
        assert "No sessions yet" in response.text


class TestSidebarPartial:
    @pytest.mark.asyncio
    async def test_search_filters_list(self, client: AsyncClient, control_plane: FakeUpstream):
        _session_list(
            control_plane,
            SessionFactory.payload(title="Add login page"),
            SessionFactory.payload(title="Fix flaky test"),
        )

        response = await client.get("/sidebar", params={"q": "LOGIN"})

        assert response.status_code == 200
        assert "Add login page" in response.text
        assert "Fix flaky test" not in response.text
        assert 'id="session-list"' in response.text

    @pytest.mark.asyncio
    async def test_current_session_highlighted(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        _session_list(control_plane, SessionFactory.payload(id="sess_cur", title="Current"))

        response = await client.get("/sidebar", params={"current": "sess_cur"})

        assert "session-item current" in response.text


class TestSessionDetail:
    @pytest.mark.asyncio
    async def test_renders_session(self, client: AsyncClient, control_plane: FakeUpstream):
        payload = SessionFactory.payload(id="sess_5", title=None, repo_owner="x", repo_name="y")
        control_plane.respond("GET", "/sessions/sess_5", json=payload)
        _session_list(control_plane, payload)

        response = await client.get("/session/sess_5")

        assert response.status_code == 200
        assert "<h1>x/y</h1>" in response.text
        assert "session-item current" in response.text

    @pytest.mark.asyncio
    async def test_upstream_error_shown(self, client: AsyncClient, control_plane: FakeUpstream):
        control_plane.respond("GET", "/sessions/missing", 404, text="Session not found")

        response = await client.get("/session/missing")

        assert response.status_code == 404
        assert "Session not found" in response.text

    @pytest.mark.asyncio
    async def test_delete_redirects_home(self, client: AsyncClient, control_plane: FakeUpstream):
        control_plane.respond("DELETE", "/sessions/sess_5", json={"deleted": True})

        response = await client.post("/session/sess_5/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/"

    @pytest.mark.asyncio
    async def test_failed_delete_returns_to_session(
        self, client: AsyncClient, control_plane: FakeUpstream
    ):
        control_plane.respond("DELETE", "/sessions/sess_5", 409, text="busy")

        response = await client.post("/session/sess_5/delete", follow_redirects=False)

        assert response.status_code == 303
        assert response.headers["location"] == "/session/sess_5?deleted=0"


class TestSidebarTemplate:
    def _render(self, current_session_id: str) -> str:
        template = templates.get_template("partials/sidebar.html")
        return template.render(
            credential=Credential("t", login="octocat"),
            sidebar=Sidebar(current_session_id=current_session_id),
        )

    def test_current_id_sent_with_searches(self):
        html = self._render("sess_cur")

        hx_vals = re.search(r"hx-vals='([^']*)'", html).group(1)
        assert json.loads(hx_vals) == {"current": "sess_cur"}

    @pytest.mark.parametrize("session_id", ['a"b', "a'b", "a<b>&c", "a\\b"])
    def test_current_id_with_quotes_stays_valid_json(self, session_id: str):
        html = self._render(session_id)

        hx_vals = re.search(r"hx-vals='([^']*)'", html).group(1)
        assert "&#34;" not in hx_vals
        assert json.loads(hx_vals) == {"current": session_id}

    def test_no_vals_without_current_session(self):
        html = templates.get_template("partials/sidebar.html").render(
            credential=Credential("t"), sidebar=Sidebar()
        )

        assert "hx-vals" not in html
