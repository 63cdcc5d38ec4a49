"""End-to-end tests for the live comment WebSocket."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

from tests.conftest import make_token
from tests.harness import create_test_app


@pytest.fixture
def client():
    """Test client on an app wired to a fresh test container.

    Used as a context manager so HTTP calls and WebSocket sessions share one
    event loop, the way they do under uvicorn.
    """
    with TestClient(create_test_app()) as client:
        yield client


def login(client: TestClient, name: str = "reader") -> str:
    user_id = str(uuid4())
    client.cookies.set("auth_token", make_token(user_id, name))
    return user_id


@pytest.fixture
def post_id(client) -> str:
    login(client, "author")
    response = client.post("/posts", json={"title": "Live", "content": "Body"})
    return response.json()["post_id"]


def live_url(post_id: str) -> str:
    return f"/posts/{post_id}/comments/live"


class TestLiveComments:
    """Live thread over WebSocket."""

    def test_unknown_post_is_closed(self, client):
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(live_url(str(uuid4()))) as ws:
                ws.receive_json()

        assert exc_info.value.code == 1008

    def test_initial_thread(self, client, post_id):
        client.post(f"/posts/{post_id}/comments", json={"content": "Existing"})

        with client.websocket_connect(live_url(post_id)) as ws:
            message = ws.receive_json()

        assert message["type"] == "thread"
        assert message["post_id"] == post_id
        assert message["total"] == 1
        assert message["pending"] is False
        assert message["draft"] == ""

    def test_submit_pushes_rebuilt_thread(self, client, post_id):
        """The change feed rebuild and the settled state arrive before the ack."""
        login(client, "alice")

        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()

            ws.send_json({"type": "submit", "content": "Hello live"})
            rebuilt = ws.receive_json()
            settled = ws.receive_json()
            submitted = ws.receive_json()

        assert rebuilt["type"] == "thread"
        assert rebuilt["total"] == 1
        assert rebuilt["pending"] is True
        assert rebuilt["draft"] == "Hello live"
        node = rebuilt["comments"][0]
        assert node["comment"]["content"] == "Hello live"
        assert node["comment"]["author_name"] == "alice"
        assert settled["type"] == "thread"
        assert settled["total"] == 1
        assert settled["pending"] is False
        assert settled["draft"] == ""
        assert submitted == {
            "type": "submitted",
            "comment_id": node["comment"]["comment_id"],
        }

    def test_first_live_comment_creates_profile(self, client, post_id):
        """A reader whose first comment is live gets a public profile."""
        # Arrange
        user_id = login(client, "Newcomer")
        assert client.get(f"/users/{user_id}").status_code == 404

        # Act
        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()
            ws.send_json({"type": "submit", "content": "First time here"})
            ws.receive_json()
            ws.receive_json()
            submitted = ws.receive_json()
        profile = client.get(f"/users/{user_id}")

        # Assert
        assert submitted["type"] == "submitted"
        assert profile.status_code == 200
        assert profile.json()["display_name"] == "Newcomer"

    def test_comment_from_other_viewer_is_pushed(self, client, post_id):
        """A comment posted over HTTP reaches an open viewer."""
        with client.websocket_connect(live_url(post_id)) as ws:
            assert ws.receive_json()["total"] == 0

            login(client, "bob")
            client.post(f"/posts/{post_id}/comments", json={"content": "From HTTP"})
            message = ws.receive_json()

        assert message["type"] == "thread"
        assert message["total"] == 1
        assert message["comments"][0]["comment"]["content"] == "From HTTP"

    def test_anonymous_viewer_cannot_submit(self, client, post_id):
        client.cookies.clear()

        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()
            ws.send_json({"type": "submit", "content": "Hi"})
            message = ws.receive_json()

        assert message == {
            "type": "error",
            "message": "Authentication required to submit",
        }

    def test_blank_submit_reports_error(self, client, post_id):
        login(client)

        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()
            ws.send_json({"type": "submit", "content": "   "})
            message = ws.receive_json()

        assert message == {"type": "error", "message": "Comment cannot be empty"}

    def test_invalid_message(self, client, post_id):
        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()
            ws.send_text("{not json")
            message = ws.receive_json()

        assert message == {"type": "error", "message": "invalid message"}

    def test_author_deletes_over_socket(self, client, post_id):
        # Arrange
        login(client, "alice")
        created = client.post(
            f"/posts/{post_id}/comments", json={"content": "Regret"}
        ).json()

        with client.websocket_connect(live_url(post_id)) as ws:
            assert ws.receive_json()["total"] == 1

            # Act
            ws.send_json({"type": "delete", "comment_id": created["comment_id"]})
            message = ws.receive_json()
            settled = ws.receive_json()

        # Assert
        assert message["type"] == "thread"
        assert message["total"] == 0
        assert message["pending"] is True
        assert settled["total"] == 0
        assert settled["pending"] is False

    def test_non_author_delete_rejected(self, client, post_id):
        login(client, "alice")
        created = client.post(
            f"/posts/{post_id}/comments", json={"content": "Mine"}
        ).json()
        login(client, "bob")

        with client.websocket_connect(live_url(post_id)) as ws:
            ws.receive_json()
            ws.send_json({"type": "delete", "comment_id": created["comment_id"]})
            message = ws.receive_json()

        assert message["type"] == "error"
        assert "not authorized" in message["message"]

    def test_toggle_collapse(self, client, post_id):
        # Arrange
        login(client)
        root = client.post(
            f"/posts/{post_id}/comments", json={"content": "Root"}
        ).json()
        for i in range(4):
            client.post(
                f"/posts/{post_id}/comments",
                json={"content": f"Reply {i}", "parent_id": root["comment_id"]},
            )

        with client.websocket_connect(live_url(post_id)) as ws:
            initial = ws.receive_json()

            # Act
            ws.send_json({"type": "toggle", "comment_id": root["comment_id"]})
            toggled = ws.receive_json()

        # Assert
        assert initial["comments"][0]["collapsed"] is True
        assert initial["visible_ids"] == [root["comment_id"]]
        assert toggled["comments"][0]["collapsed"] is False
        assert len(toggled["visible_ids"]) == 5
