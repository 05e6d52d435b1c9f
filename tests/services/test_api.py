"""End-to-end tests for the public matching API."""

import uuid

import pytest
from fastapi.testclient import TestClient

from mentormatch.services.api import build_app
from people import profile_payload


@pytest.fixture
def client(tmp_path, monkeypatch):
    """API client backed by a throwaway SQLite file, schema created on startup."""

    monkeypatch.setenv("DATABASE_DSN", f"sqlite+aiosqlite:///{tmp_path / 'api.db'}")
    app = build_app()
    with TestClient(app) as client:
        yield client


@pytest.fixture
def create(client):
    def _create(name: str, **overrides) -> dict:
        response = client.post("/profiles", json=profile_payload(name, **overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _create


def test_create_profile(client):
    payload = profile_payload("alice", skills=["litigation"])
    payload["role"] = "MENTOR"

    response = client.post("/profiles", json=payload)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == "user-alice"
    assert body["role"] == "Mentor"
    assert body["location"] == {
        "city": "New York",
        "country": "US",
        "latitude": 40.7128,
        "longitude": -74.006,
    }
    assert body["preferences"] == {"minAge": 25, "maxAge": 35, "maxDistance": 50}
    assert body["skills"] == ["litigation"]


def test_duplicate_profile_conflicts(client, create):
    create("alice")

    response = client.post("/profiles", json=profile_payload("alice"))

    assert response.status_code == 409
    assert response.json() == {"error": "Profile already exists for this user"}


@pytest.mark.parametrize(
    "overrides",
    [
        {"minAge": 40, "maxAge": 30},
        {"age": 17},
        {"role": "sponsor"},
        {"country": "USA"},
        {"maxDistance": 501},
    ],
)
def test_invalid_profile_is_rejected(client, overrides):
    payload = profile_payload("alice")
    payload.update(overrides)

    response = client.post("/profiles", json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_swipe_flow_creates_match(client, create):
    create("alice")
    create("bob")

    feed = client.get("/users/user-alice/discovery").json()
    assert [p["id"] for p in feed["profiles"]] == ["user-bob"]

    first = client.post("/users/user-alice/swipes", json={"profileId": "user-bob", "action": "like"})
    assert first.status_code == 200
    assert first.json()["match"] is None
    assert first.json()["message"] == "Swipe recorded"
    assert first.json()["swipe"]["actor"] == "user-alice"

    incoming = client.get("/users/user-bob/likes/incoming").json()
    assert incoming["count"] == 1
    assert incoming["likes"][0]["id"] == "user-alice"
    assert "likedAt" in incoming["likes"][0]

    second = client.post("/users/user-bob/swipes", json={"profileId": "user-alice", "action": "like"})
    body = second.json()
    assert body["message"] == "It's a match!"
    assert body["match"]["userLow"] == "user-alice"
    assert body["match"]["userHigh"] == "user-bob"
    assert body["match"]["conversationStarted"] is False
    assert body["match"]["profile"]["id"] == "user-alice"

    matches = client.get("/users/user-alice/matches").json()
    assert matches["count"] == 1
    assert matches["matches"][0]["matchId"] == body["match"]["id"]
    assert matches["matches"][0]["profile"]["id"] == "user-bob"

    assert client.get("/users/user-alice/discovery").json()["total"] == 0
    assert client.get("/users/user-bob/likes/incoming").json() == {"likes": [], "count": 0}


def test_duplicate_swipe_conflicts(client, create):
    create("alice")
    create("bob")
    client.post("/users/user-alice/swipes", json={"profileId": "user-bob", "action": "like"})

    response = client.post("/users/user-alice/swipes", json={"profileId": "user-bob", "action": "pass"})

    assert response.status_code == 409
    assert response.json() == {"error": "Already swiped this profile"}


@pytest.mark.parametrize(
    "body",
    [
        {"action": "like"},
        {"profileId": "user-bob", "action": "superlike"},
        {"profileId": "", "action": "like"},
    ],
)
def test_invalid_swipe_body(client, create, body):
    create("alice")
    create("bob")

    response = client.post("/users/user-alice/swipes", json=body)

    assert response.status_code == 400


def test_swipe_unknown_profile(client, create):
    create("alice")

    response = client.post("/users/user-alice/swipes", json={"profileId": "ghost", "action": "like"})

    assert response.status_code == 404
    assert "ghost" in response.json()["error"]


def test_swipe_unknown_user(client, create):
    create("bob")

    response = client.post("/users/ghost/swipes", json={"profileId": "user-bob", "action": "like"})

    assert response.status_code == 404
    assert response.json() == {"error": 'User with id "ghost" not found'}


def test_discovery_pagination(client, create):
    create("alice")
    for name in ("bob", "carol", "iris"):
        create(name)

    page = client.get("/users/user-alice/discovery", params={"limit": 2, "offset": 0}).json()
    assert len(page["profiles"]) == 2
    assert page["hasMore"] is True
    assert page["nextOffset"] == 2
    assert page["total"] == 3

    tail = client.get("/users/user-alice/discovery", params={"limit": 2, "offset": 2}).json()
    assert len(tail["profiles"]) == 1
    assert tail["hasMore"] is False
    assert tail["nextOffset"] == 2


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": -1}, {"offset": -1}, {"limit": "many"}])
def test_discovery_rejects_bad_paging(client, create, params):
    create("alice")

    response = client.get("/users/user-alice/discovery", params=params)

    assert response.status_code == 400


def test_discovery_unknown_user(client):
    response = client.get("/users/ghost/discovery")

    assert response.status_code == 404


def test_matches_unknown_user(client):
    assert client.get("/users/ghost/matches").status_code == 404
    assert client.get("/users/ghost/likes/incoming").status_code == 404


def test_legacy_match_endpoint(client, create):
    alice_id = str(uuid.uuid4())
    create("alice", user_id=alice_id)
    create("bob", user_id=str(uuid.uuid4()))
    create("eve", user_id=str(uuid.uuid4()))

    first = client.get(f"/match/{alice_id}").json()
    second = client.get(f"/match/{alice_id}").json()

    assert [u["name"] for u in first["matches"]] == ["Bob"]
    assert first["message"] == "Found 1 connection"
    assert second["message"] == "Found 1 connection"


def test_legacy_match_without_candidates(client, create):
    alice_id = str(uuid.uuid4())
    create("alice", user_id=alice_id)

    body = client.get(f"/match/{alice_id}").json()

    assert body["matches"] == []
    assert body["message"].startswith("Could not find any connections")


def test_legacy_match_requires_uuid(client):
    response = client.get("/match/not-a-uuid")

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid user ID format. Must be a valid UUID."}


def test_legacy_match_unknown_uuid(client):
    assert client.get(f"/match/{uuid.uuid4()}").status_code == 404
