"""Unit tests for the HTTP surface.

Every request opens its own DI scope, so each call starts with empty
in-memory repositories; cross-request flows are covered at the use case
level.
"""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from agora.interface.api.errors import register_error_handlers
from agora.interface.api.routes import comments, feeds, friends, health, posts, votes
from agora.util.di.container import setup_di
from tests.di import build_test_container


@pytest.fixture
def client():
    app = FastAPI()
    setup_di(app, build_test_container())
    register_error_handlers(app)
    for module in (health, posts, comments, votes, feeds, friends):
        app.include_router(module.router)

    with TestClient(app) as test_client:
        yield test_client


def _user():
    return {"X-User-Id": str(uuid4())}


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestVotes:
    def test_vote_requires_user(self, client):
        response = client.post("/votes", json={"value": 1, "post_id": str(uuid4())})

        assert response.status_code == 401

    def test_vote_on_missing_post(self, client):
        response = client.post(
            "/votes", json={"value": 1, "post_id": str(uuid4())}, headers=_user()
        )

        assert response.status_code == 404
        assert "Post not found" in response.json()["detail"]

    def test_vote_with_two_targets(self, client):
        response = client.post(
            "/votes",
            json={"value": 1, "post_id": str(uuid4()), "comment_id": str(uuid4())},
            headers=_user(),
        )

        assert response.status_code == 400

    def test_bad_vote_value(self, client):
        response = client.post(
            "/votes", json={"value": 2, "post_id": str(uuid4())}, headers=_user()
        )

        assert response.status_code == 400

    def test_score_of_unvoted_target(self, client):
        post_id = str(uuid4())

        response = client.get("/votes/score", params={"post_id": post_id})

        assert response.status_code == 200
        assert response.json() == {
            "votable_type": "post",
            "votable_id": post_id,
            "score": 0,
        }

    def test_status_requires_user(self, client):
        response = client.get("/votes/status", params={"post_id": str(uuid4())})

        assert response.status_code == 401


class TestPostsAndComments:
    def test_create_post(self, client):
        headers = _user()

        response = client.post("/posts", json={"title": "Hello"}, headers=headers)

        assert response.status_code == 201
        assert response.json()["author_id"] == headers["X-User-Id"]

    def test_comments_of_missing_post(self, client):
        response = client.get(f"/posts/{uuid4()}/comments")

        assert response.status_code == 404

    def test_comment_on_missing_post(self, client):
        response = client.post(
            f"/posts/{uuid4()}/comments", json={"content": "Hi"}, headers=_user()
        )

        assert response.status_code == 404

    def test_malformed_post_id(self, client):
        response = client.get("/posts/not-a-uuid/comments")

        assert response.status_code == 400


class TestFeeds:
    def test_empty_recent_feed(self, client):
        response = client.get("/feeds/recent", headers={"X-Feed-Session": "tab-1"})

        assert response.status_code == 200
        body = response.json()
        assert body["feed"] == "recent"
        assert body["posts"] == []
        assert body["has_more"] is False

    def test_friends_feed_needs_user(self, client):
        response = client.get("/feeds/friends")

        assert response.status_code == 400

    def test_unknown_feed_kind(self, client):
        response = client.get("/feeds/trending")

        assert response.status_code == 422

    def test_reset_without_cursor(self, client):
        response = client.delete(
            "/feeds/popular",
            params={"period": "day"},
            headers={"X-Feed-Session": "tab-1"},
        )

        assert response.status_code == 200
        assert response.json() == {"feed": "popular:day", "reset": False}

    def test_reset_requires_session(self, client):
        response = client.delete("/feeds/recent")

        assert response.status_code == 400

    def test_client_session_is_echoed(self, client):
        response = client.get("/feeds/recent", headers={"X-Feed-Session": "tab-1"})

        assert response.headers["X-Feed-Session"] == "tab-1"
        assert response.json()["session_id"] == "tab-1"

    def test_clients_without_session_get_distinct_sessions(self, client):
        first = client.get("/feeds/recent")
        second = client.get("/feeds/recent")

        assert first.status_code == 200
        assert second.status_code == 200
        first_session = first.headers["X-Feed-Session"]
        second_session = second.headers["X-Feed-Session"]
        assert first_session
        assert first_session != second_session
        assert first.json()["session_id"] == first_session

    def test_search_feed_needs_query(self, client):
        response = client.get("/feeds/search")

        assert response.status_code == 400

    def test_empty_search_feed(self, client):
        response = client.get("/feeds/search", params={"q": "graphene"})

        assert response.status_code == 200
        assert response.json()["feed"] == "search:graphene"
        assert response.json()["posts"] == []


class TestFriends:
    def test_friend_requires_user(self, client):
        response = client.post(f"/users/{uuid4()}/friend", json={"action": "add"})

        assert response.status_code == 401

    def test_add_friend(self, client):
        headers = _user()
        friend_id = str(uuid4())

        response = client.post(
            f"/users/{friend_id}/friend", json={"action": "add"}, headers=headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "user_id": headers["X-User-Id"],
            "friend_id": friend_id,
            "friends": True,
        }

    def test_remove_stranger(self, client):
        response = client.post(
            f"/users/{uuid4()}/friend", json={"action": "remove"}, headers=_user()
        )

        assert response.status_code == 404

    def test_befriend_self(self, client):
        headers = _user()

        response = client.post(
            f"/users/{headers['X-User-Id']}/friend",
            json={"action": "add"},
            headers=headers,
        )

        assert response.status_code == 400

    def test_unknown_action(self, client):
        response = client.post(
            f"/users/{uuid4()}/friend", json={"action": "poke"}, headers=_user()
        )

        assert response.status_code == 422
