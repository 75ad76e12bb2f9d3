"""Tests for share text endpoints."""

from urllib.parse import parse_qs, urlparse

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

URL = "https://example.com/calendar"
NOW = "2024-01-15T10:00:00+09:00"


def _event(id: str, title: str, start: str, status: str = "approved") -> dict:
    return {
        "id": id,
        "title": title,
        "start_date": start,
        "end_date": start,
        "status": status,
    }


class TestHealthCheck:
    """Tests for GET /health."""

    async def test_health_check(self, client: AsyncClient):
        """Should return healthy status."""
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestGenerateShareText:
    """Tests for POST /api/share-text."""

    async def test_generates_text(self, client: AsyncClient):
        """Should return share text, metadata and intent URL."""
        response = await client.post(
            "/api/share-text",
            json={
                "events": [
                    _event("2", "Python入門", "2024-01-25T19:00:00+09:00"),
                    _event("1", "React勉強会", "2024-01-20T19:00:00+09:00"),
                ],
                "now": NOW,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert "01/20 React勉強会\n01/25 Python入門" in data["share_text"]
        assert URL in data["share_text"]
        assert data["included_event_count"] == 2
        assert data["was_truncated"] is False
        assert data["length"] == len(data["share_text"])
        assert data["is_fallback"] is False

        intent = urlparse(data["intent_url"])
        assert parse_qs(intent.query)["text"] == [data["share_text"]]

    async def test_accepts_admin_api_records(self, client: AsyncClient):
        """Should convert raw admin API records."""
        response = await client.post(
            "/api/share-text",
            json={
                "events": [
                    {
                        "id": "evt-1",
                        "title": "React勉強会",
                        "url": "https://connpass.com/event/1/",
                        "datetime": "2024-01-20T19:00:00+09:00",
                        "status": "approved",
                        "createdAt": "2024-01-01T00:00:00Z",
                        "updatedAt": "2024-01-01T00:00:00Z",
                    }
                ],
                "now": NOW,
            },
        )

        assert response.status_code == 200
        assert "01/20 React勉強会" in response.json()["share_text"]

    async def test_no_events(self, client: AsyncClient):
        """Should return the no-events text for an empty list."""
        response = await client.post("/api/share-text", json={"events": [], "now": NOW})

        assert response.status_code == 200
        data = response.json()
        assert "今月は予定されているイベントがありません" in data["share_text"]
        assert data["included_event_count"] == 0

    async def test_incomparable_times_fall_back(self, client: AsyncClient):
        """Mixing naive and aware start times should give the short fallback text."""
        response = await client.post(
            "/api/share-text",
            json={
                "events": [
                    _event("1", "React勉強会", "2024-01-20T19:00:00"),
                    _event("2", "Python入門", "2024-01-25T19:00:00+09:00"),
                ],
                "now": NOW,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["share_text"] == f"広島IT勉強会カレンダー\n{URL}"
        assert data["is_fallback"] is True
        assert data["included_event_count"] == 0
        assert parse_qs(urlparse(data["intent_url"]).query)["text"] == [data["share_text"]]

    async def test_invalid_status_rejected(self, client: AsyncClient):
        """Should reject events with an unknown status."""
        response = await client.post(
            "/api/share-text",
            json={"events": [_event("1", "A", "2024-01-20T19:00:00+09:00", "draft")]},
        )

        assert response.status_code == 422


class TestShareConfigEndpoints:
    """Tests for GET/PUT /api/share-text/config."""

    async def test_get_config(self, client: AsyncClient):
        response = await client.get("/api/share-text/config")

        assert response.status_code == 200
        assert response.json()["destination_url"] == URL

    async def test_update_config_applies_to_next_generation(self, client: AsyncClient):
        """Should serve text built with the new hashtags after an update."""
        body = {"events": [_event("1", "React勉強会", "2024-01-20T19:00:00+09:00")], "now": NOW}
        await client.post("/api/share-text", json=body)

        response = await client.put("/api/share-text/config", json={"hashtags": ["#新タグ"]})
        assert response.status_code == 200
        assert response.json()["hashtags"] == ["#新タグ"]
        assert response.json()["destination_url"] == URL

        data = (await client.post("/api/share-text", json=body)).json()
        assert "#新タグ" in data["share_text"]
        assert "#広島IT" not in data["share_text"]

    async def test_update_config_rejects_empty_url(self, client: AsyncClient):
        response = await client.put("/api/share-text/config", json={"destination_url": ""})

        assert response.status_code == 422
