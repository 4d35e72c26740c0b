"""
Tests for the HTTP API.

Tests cover:
- Health and readiness endpoints
- History listing, recording, renaming and removal
- Starred toggling and listing
- App catalog and visibility settings
- History command endpoint
- Domain error mapping
"""

from unittest.mock import AsyncMock, patch

from profile_history.domain.exceptions import StorageException


def _record(client, profile, app, app_name=None):
    payload = {"profile": profile, "app": app}
    if app_name:
        payload["app_name"] = app_name
    response = client.post("/api/v1/history", json=payload)
    assert response.status_code == 201
    return response.json()


class TestHealth:
    def test_health(self, client):
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_ready(self, client):
        response = client.get("/api/v1/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["ready"] is True
        assert data["checks"]["store"]["backend"] == "memory"

    def test_not_ready(self, client, store):
        store.ping = AsyncMock(return_value=False)

        response = client.get("/api/v1/ready")
        assert response.status_code == 503
        assert response.json()["ready"] is False

    def test_request_id_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_metrics(self, client):
        client.get("/api/v1/health")

        response = client.get("/metrics")
        assert response.status_code == 200
        assert "profile_history_http_requests_total" in response.text


class TestHistoryEndpoints:
    """Test history endpoints."""

    def test_empty(self, client):
        response = client.get("/api/v1/history")

        assert response.status_code == 200
        assert response.json() == {"success": True, "count": 0, "items": []}

    def test_record_and_list(self, client):
        created = _record(client, "alice", "github")
        assert created["app_name"] == "GitHub"

        _record(client, "bob", "x")

        data = client.get("/api/v1/history").json()
        assert data["count"] == 2
        assert [i["profile"] for i in data["items"]] == ["bob", "alice"]

    def test_filter_and_limit(self, client):
        _record(client, "alice", "github")
        _record(client, "bob", "x")
        _record(client, "carol", "github")

        data = client.get("/api/v1/history", params={"app": "github", "limit": 1}).json()
        assert [i["profile"] for i in data["items"]] == ["carol"]

    def test_negative_limit_rejected(self, client):
        assert client.get("/api/v1/history", params={"limit": -1}).status_code == 422

    def test_record_unknown_app_uses_value_as_name(self, client):
        created = _record(client, "a", "intranet")
        assert created["app_name"] == "intranet"

    def test_record_blank_profile(self, client):
        response = client.post("/api/v1/history", json={"profile": "   ", "app": "github"})
        assert response.status_code == 422

    def test_rename(self, client):
        _record(client, "alice", "github")

        response = client.patch(
            "/api/v1/history",
            json={"old_profile": "alice", "app": "github", "new_profile": "alicia"},
        )

        assert response.json()["success"] is True
        assert client.get("/api/v1/history").json()["items"][0]["profile"] == "alicia"

    def test_delete(self, client):
        _record(client, "alice", "github")

        response = client.delete("/api/v1/history", params={"profile": "alice", "app": "github"})

        assert response.json()["success"] is True
        assert client.get("/api/v1/history").json()["count"] == 0

    def test_delete_missing(self, client):
        response = client.delete("/api/v1/history", params={"profile": "x", "app": "github"})
        assert response.json()["success"] is False

    def test_clear(self, client):
        _record(client, "alice", "github")

        assert client.delete("/api/v1/history/all").status_code == 200
        assert client.get("/api/v1/history").json()["count"] == 0

    def test_storage_failure_maps_to_503(self, client, history_service):
        history_service.history_repo.get_usage_history = AsyncMock(
            side_effect=StorageException("read", "connection refused")
        )

        response = client.get("/api/v1/history")

        assert response.status_code == 503
        assert response.json()["error"] == "storage_unavailable"

    def test_corrupted_data_maps_to_503(self, client, store):
        store.data["usageHistory"] = "{broken"

        assert client.get("/api/v1/history").status_code == 503


class TestStarredEndpoints:
    """Test starred endpoints."""

    def test_toggle(self, client):
        response = client.post("/api/v1/starred/toggle", json={"profile": "alice", "app": "github"})
        assert response.json()["starred"] is True

        response = client.post("/api/v1/starred/toggle", json={"profile": "alice", "app": "github"})
        assert response.json()["starred"] is False

    def test_list_starred(self, client):
        _record(client, "alice", "github")
        _record(client, "bob", "x")
        client.post("/api/v1/starred/toggle", json={"profile": "@Alice", "app": "GitHub"})

        data = client.get("/api/v1/starred").json()
        assert [i["profile"] for i in data["items"]] == ["alice"]

    def test_clear_starred(self, client):
        _record(client, "alice", "github")
        client.post("/api/v1/starred/toggle", json={"profile": "alice", "app": "github"})

        client.delete("/api/v1/starred")
        assert client.get("/api/v1/starred").json()["count"] == 0


class TestAppEndpoints:
    """Test app catalog endpoints."""

    def test_list_apps(self, client):
        data = client.get("/api/v1/apps").json()
        assert "github" in [a["value"] for a in data["apps"]]

    def test_add_custom_app(self, client):
        payload = {
            "value": "codeberg",
            "name": "Codeberg",
            "url_template": "https://codeberg.org/{profile}",
        }

        assert client.post("/api/v1/apps", json=payload).status_code == 201
        values = [a["value"] for a in client.get("/api/v1/apps").json()["apps"]]
        assert "codeberg" in values

    def test_add_duplicate_app(self, client):
        payload = {"value": "github", "name": "GH", "url_template": "https://gh.io/{profile}"}

        response = client.post("/api/v1/apps", json=payload)
        assert response.status_code == 409

    def test_add_app_without_placeholder(self, client):
        payload = {"value": "site", "name": "Site", "url_template": "https://example.com/"}
        assert client.post("/api/v1/apps", json=payload).status_code == 422

    def test_remove_custom_app(self, client):
        payload = {"value": "codeberg", "name": "Codeberg", "url_template": "https://c.org/{profile}"}
        client.post("/api/v1/apps", json=payload)

        assert client.delete("/api/v1/apps/codeberg").status_code == 200
        assert client.delete("/api/v1/apps/codeberg").status_code == 404

    def test_visibility(self, client):
        response = client.patch("/api/v1/apps/settings/github", params={"visible": False})
        assert response.status_code == 200

        visible = [a["value"] for a in client.get("/api/v1/apps").json()["apps"]]
        assert "github" not in visible

        everything = client.get("/api/v1/apps", params={"include_hidden": True}).json()
        assert "github" in [a["value"] for a in everything["apps"]]

    def test_list_apps_goes_through_service(self, client, history_service):
        with patch.object(history_service, "list_apps", AsyncMock(return_value=[])) as list_apps:
            response = client.get("/api/v1/apps", params={"include_hidden": True})

        assert response.json()["count"] == 0
        list_apps.assert_awaited_once_with(include_hidden=True)

    def test_visibility_unknown_app(self, client):
        response = client.patch("/api/v1/apps/settings/myspace", params={"visible": False})
        assert response.status_code == 404

    def test_replace_settings(self, client):
        payload = {"settings": [{"value": "x", "visible": False}]}

        assert client.put("/api/v1/apps/settings", json=payload).status_code == 200
        assert client.get("/api/v1/apps/settings").json() == payload

    def test_replace_settings_duplicates_rejected(self, client):
        payload = {"settings": [{"value": "x"}, {"value": "x", "visible": False}]}
        assert client.put("/api/v1/apps/settings", json=payload).status_code == 422


class TestHistoryToolEndpoint:
    """Test history command endpoint."""

    def test_default_list(self, client):
        response = client.post("/api/v1/tool/history", json={})

        assert response.status_code == 200
        assert response.json()["message"] == "No profile history found."

    def test_star_then_list_starred(self, client):
        _record(client, "alice", "github")

        star = client.post(
            "/api/v1/tool/history",
            json={"action": "star", "profile": "@alice", "app": "GitHub"},
        ).json()
        assert star["message"] == "Starred @alice on GitHub."

        listed = client.post("/api/v1/tool/history", json={"action": "list_starred"}).json()
        assert listed["message"] == "Starred profiles:"
        assert [i["profile"] for i in listed["items"]] == ["alice"]

    def test_invalid_action(self, client):
        response = client.post("/api/v1/tool/history", json={"action": "nuke"})
        assert response.status_code == 422
