"""
End-to-end tests for the MyndSelf API endpoints.

These tests verify the complete HTTP API functionality including signups,
mood entries, the emotion profile, error envelopes and CORS.
"""

import asyncio

from fastapi.testclient import TestClient

from myndself_api.config import Settings
from myndself_api.server import create_app
from myndself_api.store import RecordStore

# MARK: - Sync


class TestAPISync:
    """Integration tests covering the complete application flow using HTTP
    synchronous request/response flow."""

    def setup_method(self):
        """Set up a fresh app with a new record store for each test."""
        self.store = RecordStore()
        self.app = create_app(self.store, Settings())

    def _signups(self):
        return asyncio.run(self.store.list_signups())

    def test_healthz(self):
        """Test that the liveness check always answers ok."""
        with TestClient(self.app) as client:
            response = client.get("/healthz")
            assert response.status_code == 200
            assert response.json() == {"ok": True}

            client.post("/api/mood", json={"mood": "happy"})
            assert client.get("/healthz").json() == {"ok": True}

    def test_subscribe_valid_email(self):
        """Test that a valid email is stored."""
        with TestClient(self.app) as client:
            response = client.post("/api/subscribe", json={"email": "a@b.com"})
            assert response.status_code == 200
            assert response.json() == {"ok": True}

        signups = self._signups()
        assert len(signups) == 1
        assert signups[0].email == "a@b.com"

    def test_subscribe_rejections_leave_store_empty(self):
        """Test that missing or malformed emails give invalid_email."""
        with TestClient(self.app) as client:
            for body in ({}, {"email": "nope"}, {"email": 12}, {"email": None}):
                response = client.post("/api/subscribe", json=body)
                assert response.status_code == 400
                assert response.json() == {"ok": False, "error": "invalid_email"}

            # No body at all is treated as an empty object
            response = client.post("/api/subscribe")
            assert response.status_code == 400
            assert response.json() == {"ok": False, "error": "invalid_email"}

        assert self._signups() == ()

    def test_subscribe_allows_duplicates(self):
        """Test that subscribing twice stores two records."""
        with TestClient(self.app) as client:
            for _ in range(2):
                response = client.post("/api/subscribe", json={"email": "a@b.com"})
                assert response.status_code == 200

        assert [s.email for s in self._signups()] == ["a@b.com", "a@b.com"]

    def test_malformed_body_gives_invalid_request(self):
        """Test that a non-object body is answered with a 400 envelope."""
        with TestClient(self.app) as client:
            response = client.post("/api/subscribe", json=["a@b.com"])
            assert response.status_code == 400
            assert response.json() == {"ok": False, "error": "invalid_request"}

            response = client.post(
                "/api/mood",
                content=b"{not json",
                headers={"Content-Type": "application/json"},
            )
            assert response.status_code == 400
            assert response.json() == {"ok": False, "error": "invalid_request"}

        assert self._signups() == ()

    def test_complete_mood_workflow(self):
        """Test the complete workflow: list -> create -> defaults -> list."""
        with TestClient(self.app) as client:
            # 1. Fresh store holds only the seed entry
            initial = client.get("/api/mood")
            assert initial.status_code == 200
            body = initial.json()
            assert body["ok"] is True
            assert len(body["items"]) == 1
            seed = body["items"][0]
            assert {k: seed[k] for k in ("id", "mood", "note")} == {
                "id": 1,
                "mood": "calm",
                "note": "demo",
            }

            # 2. Create an entry with both fields
            created = client.post(
                "/api/mood", json={"mood": "grateful", "note": "coffee with Sam"}
            )
            assert created.status_code == 200
            item = created.json()["item"]
            assert item["id"] == 2
            assert item["mood"] == "grateful"
            assert item["note"] == "coffee with Sam"
            assert item["at"]

            # 3. Omitted fields are defaulted
            defaulted = client.post("/api/mood", json={})
            assert defaulted.json()["item"]["mood"] == "neutral"
            assert defaulted.json()["item"]["note"] == ""

            empty_body = client.post("/api/mood")
            assert empty_body.status_code == 200
            assert empty_body.json()["item"]["id"] == 4

            # 4. Listing returns everything oldest first
            items = client.get("/api/mood").json()["items"]
            assert [i["id"] for i in items] == [1, 2, 3, 4]
            assert items[1] == item

    def test_mood_ids_are_sequential(self):
        """Test that N posts return ids 2..N+1."""
        with TestClient(self.app) as client:
            ids = [
                client.post("/api/mood", json={"mood": f"m{n}"}).json()["item"]["id"]
                for n in range(5)
            ]
        assert ids == [2, 3, 4, 5, 6]

    def test_mood_profile(self):
        """Test that the profile reflects the newest entries."""
        with TestClient(self.app) as client:
            client.post("/api/mood", json={"mood": "stressed", "note": "deadline"})
            client.post("/api/mood", json={"mood": "low", "note": "stress and fear"})

            response = client.get("/api/mood/profile")
            assert response.status_code == 200
            profile = response.json()["profile"]
            assert profile["dominant_tags"] == ["stress", "fear", "calm"]
            assert profile["last_mood"] == "low"
            assert profile["sample_size"] == 3

    def test_analytics(self):
        """Test tag counts over all entries and entries per day."""
        with TestClient(self.app) as client:
            client.post("/api/mood", json={"mood": "calm", "note": "slow morning"})
            client.post("/api/mood", json={"mood": "tense", "note": "stress"})

            tags = client.get("/api/analytics/tags")
            assert tags.status_code == 200
            assert tags.json() == {
                "ok": True,
                "items": [
                    {"tag": "calm", "count": 2},
                    {"tag": "stress", "count": 1},
                ],
            }

            daily = client.get("/api/analytics/daily")
            assert daily.status_code == 200
            items = daily.json()["items"]
            assert sum(i["count"] for i in items) == 3
            assert all(len(i["day"]) == 10 for i in items)
            assert [i["day"] for i in items] == sorted(i["day"] for i in items)


# MARK: - Failures


class BrokenStore(RecordStore):
    """A store whose writes always fail."""

    async def append_mood(self, mood: str, note: str):
        raise RuntimeError("journal backend exploded at /var/secret")


class TestInternalErrors:
    """Tests for the catch-all error envelope."""

    def test_unexpected_exception_gives_internal_error(self):
        app = create_app(BrokenStore(), Settings())
        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post("/api/mood", json={"mood": "calm"})
            assert response.status_code == 500
            assert response.json() == {"ok": False, "error": "internal_error"}
            assert "exploded" not in response.text
            assert "/var/secret" not in response.text

            # Reads keep working
            assert client.get("/api/mood").status_code == 200

# MARK: - CORS


class TestCORS:
    """Tests for the cross-origin policy."""

    def test_all_origins_allowed_by_default(self):
        app = create_app(RecordStore(), Settings(cors_origin="*"))
        with TestClient(app) as client:
            response = client.get("/healthz", headers={"Origin": "https://x.example"})
            assert response.headers["access-control-allow-origin"] == "*"

            preflight = client.options(
                "/api/subscribe",
                headers={
                    "Origin": "https://x.example",
                    "Access-Control-Request-Method": "POST",
                },
            )
            assert preflight.status_code == 200

    def test_configured_allow_list(self):
        settings = Settings(cors_origin="https://myndself.ai, https://beta.myndself.ai")
        assert settings.allowed_origins() == [
            "https://myndself.ai",
            "https://beta.myndself.ai",
        ]

        app = create_app(RecordStore(), settings)
        with TestClient(app) as client:
            allowed = client.get("/healthz", headers={"Origin": "https://myndself.ai"})
            assert allowed.headers["access-control-allow-origin"] == (
                "https://myndself.ai"
            )

            denied = client.get("/healthz", headers={"Origin": "https://evil.example"})
            assert denied.status_code == 200
            assert "access-control-allow-origin" not in denied.headers
