import json

import httpx
import pytest

from freet_social.client.api_client import ApiError, FreetApiClient
from freet_social.client.state import AppState


def make_client(handler, state=None):
    state = state or AppState()
    transport = httpx.MockTransport(handler)
    http_client = httpx.AsyncClient(transport=transport, base_url="http://freet.test")
    return FreetApiClient(state, client=http_client)


@pytest.mark.asyncio
async def test_refresh_freets_uses_filter():
    seen = []

    def handler(request):
        seen.append(request.url.path)
        return httpx.Response(200, json=[{"content": "hello"}])

    state = AppState(filter="alice")
    async with make_client(handler, state) as api:
        await api.refresh_freets()

    assert seen == ["/api/users/alice/freets"]
    assert state.freets == [{"content": "hello"}]


@pytest.mark.asyncio
async def test_load_followers_updates_state():
    def handler(request):
        assert request.url.params["username"] == "alice"
        assert request.url.params["followers"] == "true"
        return httpx.Response(200, json={"followers": ["bob"]})

    state = AppState()
    async with make_client(handler, state) as api:
        followers = await api.load_followers("alice")

    assert followers == ["bob"]
    assert state.followers == ["bob"]


@pytest.mark.asyncio
async def test_follow_sends_add_flag_and_tracks_own_following():
    def handler(request):
        body = json.loads(request.content)
        assert request.method == "PUT"
        assert body == {"usernameOfFollowed": "alice", "usernameOfFollower": "bob", "add": "true"}
        return httpx.Response(
            200,
            json={
                "message": "ok",
                "usernameOfFollowed": {"username": "alice", "followers": ["bob"], "following": []},
                "usernameOfFollower": {"username": "bob", "followers": [], "following": ["alice"]},
            },
        )

    state = AppState(username="bob")
    async with make_client(handler, state) as api:
        await api.follow("alice", "bob")

    assert state.following == ["alice"]


@pytest.mark.asyncio
async def test_update_group_uses_action_target_field():
    def handler(request):
        body = json.loads(request.content)
        assert body == {"groupUsername": "mitcs", "action": "removeAdmin", "removedAdminUsername": "bob"}
        return httpx.Response(200, json={"message": "ok", "group": {}})

    async with make_client(handler) as api:
        await api.update_group("mitcs", "removeAdmin", "bob")


@pytest.mark.asyncio
async def test_error_reply_raises_api_error():
    def handler(request):
        return httpx.Response(404, json={"error": {"groupUsername": "A Group with this username does not exists."}})

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_group("nope")

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "A Group with this username does not exists."


@pytest.mark.asyncio
async def test_submit_with_alert_records_outcome():
    def handler(request):
        if request.method == "POST":
            return httpx.Response(201, json={"message": "created", "followers": {}})
        return httpx.Response(403, json={"error": {"auth": "You must be logged in to complete this action."}})

    state = AppState()
    async with make_client(handler, state) as api:
        created = await api.submit_with_alert(api.create_follower_view("alice"), "Follower view created.")
        failed = await api.submit_with_alert(api.follow("alice", "bob"), "Followed alice.")

    assert created["message"] == "created"
    assert failed is None
    assert state.visible_alerts() == {
        "Follower view created.": "success",
        "You must be logged in to complete this action.": "error",
    }
