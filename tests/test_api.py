import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from api.main import app
from council_portal.db.repositories import SessionTokenRepository
from council_portal.db.session import get_db
from tests.factories import create_member, create_question, create_user


@pytest.fixture
def client(database):
    async def override_get_db():
        async with database.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _auth_headers(database, email: str, role: str = None) -> dict:
    async def sign_in():
        async with database.session() as session:
            user_id = await create_user(session, email, role=role)
            raw_token, _ = await SessionTokenRepository(session).create_token(user_id)
            return raw_token

    return {"Authorization": f"Bearer {asyncio.run(sign_in())}"}


def test_health(client) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_export_status_codes_follow_caller_role(client, database) -> None:
    citizen = _auth_headers(database, "citizen@example.jp")
    editor = _auth_headers(database, "editor@example.jp", role="admin")

    anonymous = client.get("/api/v1/migration/export")
    denied = client.get("/api/v1/migration/export", headers=citizen)
    allowed = client.get("/api/v1/migration/export", headers=editor)

    assert anonymous.status_code == 401
    assert anonymous.json() == {"detail": "認証が必要です"}
    assert denied.status_code == 403
    assert allowed.status_code == 200
    assert set(allowed.json()) == {"exportedAt", "data"}
    assert allowed.json()["data"]["councilMembers"] == []


def test_import_endpoint_reports_table_stats(client, database) -> None:
    editor = _auth_headers(database, "editor@example.jp", role="admin")
    snapshot = {
        "exportedAt": 0,
        "data": {
            "councilMembers": [{"_id": "m1", "name": "田中"}],
            "questions": [
                {
                    "_id": "q1",
                    "title": "Q1",
                    "content": "本文",
                    "category": "教育",
                    "councilMemberId": "m1",
                    "councilMemberName": "田中",
                    "sessionDate": 1709251200000,
                }
            ],
        },
    }

    response = client.post(
        "/api/v1/migration/import",
        json={"jsonData": json.dumps(snapshot), "options": {"skipDuplicates": False}},
        headers=editor,
    )
    listed = client.get("/api/v1/questions")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["stats"]["councilMembers"] == {"imported": 1, "skipped": 0}
    assert body["stats"]["questions"] == {"imported": 1, "skipped": 0}
    assert [question["memberName"] for question in listed.json()] == ["田中"]


def test_import_endpoint_rejects_malformed_snapshot_in_body(client, database) -> None:
    editor = _auth_headers(database, "editor@example.jp", role="admin")

    response = client.post(
        "/api/v1/migration/import", json={"jsonData": "[]"}, headers=editor
    )

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["stats"] is None


def test_clear_requires_super_admin(client, database) -> None:
    editor = _auth_headers(database, "editor@example.jp", role="admin")
    operator = _auth_headers(database, "operator@example.jp", role="superAdmin")

    denied = client.post("/api/v1/migration/clear", headers=editor)
    cleared = client.post("/api/v1/migration/clear", headers=operator)

    assert denied.status_code == 403
    assert denied.json() == {"detail": "運営者権限が必要です"}
    assert cleared.status_code == 200
    assert cleared.json()["success"] is True
    assert cleared.json()["failed"] == []


def test_missing_question_is_404(client) -> None:
    response = client.get("/api/v1/questions/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {"detail": "質問が見つかりません"}


def test_register_then_me(client) -> None:
    short = client.post(
        "/api/v1/auth/register", json={"email": "new@example.jp", "password": "short"}
    )
    registered = client.post(
        "/api/v1/auth/register",
        json={"email": "New@Example.jp", "password": "long-enough-password", "name": "市民"},
    )
    token = registered.json()["token"]
    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"})
    anonymous = client.get("/api/v1/auth/me")

    assert short.status_code == 400
    assert registered.status_code == 201
    assert me.json()["email"] == "new@example.jp"
    assert me.json()["name"] == "市民"
    assert "_id" in me.json()
    assert anonymous.json() is None


def test_self_demotion_is_forbidden(client, database) -> None:
    operator = _auth_headers(database, "operator@example.jp", role="superAdmin")
    role = client.get("/api/v1/admin/role", headers=operator).json()
    users = client.get("/api/v1/admin/users", headers=operator).json()

    response = client.put(
        f"/api/v1/admin/users/{users[0]['_id']}/role", json={"role": "user"}, headers=operator
    )

    assert role == {"role": "superAdmin", "isAdmin": True, "isSuperAdmin": True}
    assert response.status_code == 403


def test_like_state_endpoint_tracks_caller(client, database) -> None:
    citizen = _auth_headers(database, "citizen@example.jp")

    async def seed():
        async with database.session() as session:
            return await create_question(session, "Q1", await create_member(session, "田中"))

    question_id = asyncio.run(seed())
    url = f"/api/v1/likes/{question_id}/mine"

    before = client.get(url, headers=citizen)
    client.post(f"/api/v1/likes/{question_id}/toggle", headers=citizen)
    after = client.get(url, headers=citizen)
    anonymous = client.get(url)

    assert before.json() == {"questionId": question_id, "liked": False}
    assert after.json() == {"questionId": question_id, "liked": True}
    assert anonymous.json()["liked"] is False
