"""
HTTP tests for the note, AI and profile routes.

The app is built with a fake gateway and the request session is swapped for
the in-memory test session; callers authenticate with real signed tokens.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from noteai.api.deps import get_db
from noteai.common.common_message import CommonMessage
from noteai.main import create_app


def _auth_header(user):
    token = jwt.encode(
        {
            "sub": user.id,
            "email": user.email,
            "aud": "authenticated",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        "test-secret",
        algorithm="HS256",
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def app(db, fake_gateway):
    app = create_app(gateway=fake_gateway)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def headers(alice):
    return _auth_header(alice)


def _create(client, headers, title="Groceries", content="Milk, eggs"):
    response = client.post("/notes", json={"title": title, "content": content}, headers=headers)
    assert response.status_code == 201
    return response.json()["data"]["note_id"]


@pytest.mark.unit
class TestNoteEndpoints:

    def test_health(self, client):
        assert client.get("/healthz").json() == {"status": "healthy"}

    def test_login_required(self, client):
        response = client.post("/notes", json={"title": "Title", "content": "Content"})

        assert response.status_code == 401
        assert response.json() == {
            "code": 401,
            "success": False,
            "message": CommonMessage.LOGIN_REQUIRED,
            "data": None,
        }

    def test_invalid_token_is_anonymous(self, client):
        response = client.get("/notes", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401

    def test_create_and_read(self, client, headers):
        note_id = _create(client, headers)

        body = client.get(f"/notes/{note_id}", headers=headers).json()

        assert body["success"] is True
        assert body["data"]["title"] == "Groceries"
        assert body["data"]["tags"] == []
        assert body["data"]["summary"] is None

    def test_validation_error(self, client, headers):
        response = client.post("/notes", json={"title": "", "content": "Content"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == CommonMessage.TITLE_REQUIRED

    def test_list_with_page_and_sort(self, client, headers):
        _create(client, headers, title="Beta")
        _create(client, headers, title="Alpha")

        body = client.get("/notes", params={"page": 0, "sort": "title-asc"}, headers=headers).json()

        assert body["data"]["current_page"] == 1
        assert body["data"]["total_count"] == 2
        assert [note["title"] for note in body["data"]["notes"]] == ["Alpha", "Beta"]

    def test_update_and_patch(self, client, headers):
        note_id = _create(client, headers)

        too_long = client.put(f"/notes/{note_id}", json={"title": "a" * 101, "content": "x"}, headers=headers)
        assert too_long.status_code == 400

        updated = client.put(f"/notes/{note_id}", json={"title": "Renamed", "content": "x"}, headers=headers)
        assert updated.json()["data"]["title"] == "Renamed"

        patched = client.patch(f"/notes/{note_id}/content", json={"content": "Autosaved"}, headers=headers)
        assert patched.json()["data"]["content"] == "Autosaved"

    def test_other_user_cannot_see_note(self, client, headers, bob):
        note_id = _create(client, headers)

        response = client.get(f"/notes/{note_id}", headers=_auth_header(bob))

        assert response.status_code == 404
        assert response.json()["message"] == CommonMessage.NOTE_NOT_FOUND

    def test_delete(self, client, headers):
        note_id = _create(client, headers)

        assert client.delete(f"/notes/{note_id}", headers=headers).status_code == 200
        assert client.get(f"/notes/{note_id}", headers=headers).status_code == 404

    def test_summary_and_tags(self, client, headers):
        note_id = _create(client, headers)

        summary = client.post(f"/notes/{note_id}/summary", headers=headers)
        tags = client.post(f"/notes/{note_id}/tags", headers=headers)

        assert summary.status_code == 200
        assert tags.json()["data"]["tags"] == ["python", "testing", "notes"]
        detail = client.get(f"/notes/{note_id}", headers=headers).json()["data"]
        assert detail["summary"]["content"].startswith("First point")
        assert detail["tags"] == ["notes", "python", "testing"]

    def test_regenerate(self, client, headers):
        note_id = _create(client, headers)

        body = client.post(f"/notes/{note_id}/ai/regenerate", headers=headers).json()

        assert body["data"]["model"] == "gemini-test"
        assert body["data"]["tags"] == ["python", "testing", "notes"]

    def test_ai_failure_is_bad_gateway(self, client, headers, fake_gateway):
        note_id = _create(client, headers)
        fake_gateway.summary_error = "quota exceeded"

        response = client.post(f"/notes/{note_id}/summary", headers=headers)

        assert response.status_code == 502
        assert response.json()["message"] == "Summary generation failed: quota exceeded"


@pytest.mark.unit
class TestAIEndpoints:

    def test_requires_login(self, client):
        response = client.post("/ai/generate", json={"action": "summarize", "content": "text"})
        assert response.status_code == 401

    @pytest.mark.parametrize(
        "action, keys",
        [("summarize", {"summary"}), ("tags", {"tags"}), ("both", {"summary", "tags"})],
    )
    def test_generate(self, client, headers, action, keys):
        response = client.post("/ai/generate", json={"action": action, "content": "Some text"}, headers=headers)

        assert response.status_code == 200
        assert set(response.json()["data"]) == keys

    def test_unsupported_action(self, client, headers):
        response = client.post("/ai/generate", json={"action": "translate", "content": "text"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == CommonMessage.AI_UNSUPPORTED_ACTION

    def test_content_required(self, client, headers):
        response = client.post("/ai/generate", json={"action": "summarize", "content": "  "}, headers=headers)

        assert response.status_code == 400
        assert response.json()["message"] == CommonMessage.AI_CONTENT_REQUIRED

    def test_generate_failure(self, client, headers, fake_gateway):
        fake_gateway.tag_error = "timeout"

        response = client.post("/ai/generate", json={"action": "both", "content": "text"}, headers=headers)

        assert response.status_code == 502
        assert response.json()["message"] == "Tag generation failed: timeout"

    def test_logs_stats_and_cleanup(self, client, headers):
        client.post("/ai/generate", json={"action": "both", "content": "Some text"}, headers=headers)

        logs = client.get("/ai/logs", headers=headers).json()["data"]
        assert len(logs) == 2

        stats = client.get("/ai/stats", headers=headers).json()["data"]
        assert stats["total_calls"] == 2
        assert stats["success_rate"] == 100

        usage = client.get("/ai/usage/today", headers=headers).json()["data"]
        assert usage["api_calls"] == 2

        cleaned = client.delete("/ai/logs", params={"days_to_keep": 0}, headers=headers).json()
        assert cleaned["data"] == {"kept": 0}
        assert client.get("/ai/logs", headers=headers).json()["data"] == []


@pytest.mark.unit
class TestProfileEndpoints:

    def test_requires_login(self, client):
        assert client.post("/profile/onboarding/complete").status_code == 401
        assert client.post("/profile/onboarding/skip").status_code == 401

        response = client.get("/profile/onboarding")
        assert response.status_code == 401
        assert response.json()["data"] == {"completed": False}

    def test_complete_then_status(self, client, headers):
        assert client.get("/profile/onboarding", headers=headers).json()["data"] == {"completed": False}

        response = client.post("/profile/onboarding/complete", headers=headers)
        assert response.status_code == 200
        assert response.json()["message"] == CommonMessage.ONBOARDING_COMPLETED_SUCCESS

        assert client.get("/profile/onboarding", headers=headers).json()["data"] == {"completed": True}

    def test_skip(self, client, headers, bob):
        response = client.post("/profile/onboarding/skip", headers=headers)

        assert response.json()["data"] == {"completed": True}
        other = client.get("/profile/onboarding", headers=_auth_header(bob)).json()
        assert other["data"] == {"completed": False}
