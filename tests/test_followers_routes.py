def _create_views(client, *usernames):
    for username in usernames:
        assert client.post("/api/followers", json={"username": username}).status_code == 201


def test_create_follower_view(client):
    response = client.post("/api/followers", json={"username": "alice"})

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Your follower view was created successfully."
    assert body["followers"]["username"] == "alice"
    assert body["followers"]["followers"] == []
    assert isinstance(body["followers"]["_id"], str)


def test_create_requires_login(anonymous_client):
    response = anonymous_client.post("/api/followers", json={"username": "alice"})

    assert response.status_code == 403
    assert response.json() == {"error": {"auth": "You must be logged in to complete this action."}}


def test_create_requires_username(client):
    response = client.post("/api/followers", json={})

    assert response.status_code == 400
    assert response.json() == {"error": {"username": "Username must be given."}}


def test_create_twice_conflicts_ignoring_case(client):
    _create_views(client, "alice")

    response = client.post("/api/followers", json={"username": "ALICE"})

    assert response.status_code == 409
    assert response.json() == {"error": {"username": "Follower view for this username already exists."}}


def test_follow_then_list(client):
    _create_views(client, "alice", "bob")

    response = client.put(
        "/api/followers", json={"usernameOfFollowed": "alice", "usernameOfFollower": "bob", "add": "true"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Your follower view was updated successfully (added follower)."
    assert body["usernameOfFollowed"]["followers"] == ["bob"]
    assert body["usernameOfFollower"]["following"] == ["alice"]

    followers = client.get("/api/followers", params={"username": "alice", "followers": "true"})
    following = client.get("/api/followers", params={"username": "bob", "followers": "false"})
    assert followers.json() == {"followers": ["bob"]}
    assert following.json() == {"following": ["alice"]}


def test_unfollow_with_boolean_flag(client):
    _create_views(client, "alice", "bob")
    client.put("/api/followers", json={"usernameOfFollowed": "alice", "usernameOfFollower": "bob", "add": True})

    response = client.put(
        "/api/followers", json={"usernameOfFollowed": "alice", "usernameOfFollower": "bob", "add": False}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Your follower view was updated successfully. (removed follower)"
    assert response.json()["usernameOfFollowed"]["followers"] == []


def test_follow_missing_view_is_not_found(client):
    _create_views(client, "alice")

    response = client.put(
        "/api/followers", json={"usernameOfFollowed": "alice", "usernameOfFollower": "ghost", "add": "true"}
    )

    assert response.status_code == 404
    assert response.json() == {"error": {"userFollowerViewNotFound": "User does not have created follower view."}}


def test_follow_requires_both_usernames(client):
    response = client.put("/api/followers", json={"usernameOfFollowed": "alice", "add": "true"})

    assert response.status_code == 400
    assert response.json() == {"error": {"username": "Both usernames must be given."}}


def test_follow_rejects_unknown_add_flag(client):
    _create_views(client, "alice", "bob")

    response = client.put(
        "/api/followers", json={"usernameOfFollowed": "alice", "usernameOfFollower": "bob", "add": "maybe"}
    )

    assert response.status_code == 400
    assert "add" in response.json()["error"]


def test_list_requires_username(client):
    response = client.get("/api/followers")

    assert response.status_code == 400
    assert response.json() == {"error": "Provided author username must be nonempty."}


def test_list_unknown_user(client):
    response = client.get("/api/followers", params={"username": "ghost", "followers": "true"})

    assert response.status_code == 404
    assert response.json() == {"error": "Follower View for a user with username ghost does not exist."}


def test_follow_rejects_non_ascii_usernames(client):
    _create_views(client, "José", "bob")

    response = client.put(
        "/api/followers", json={"usernameOfFollowed": "José", "usernameOfFollower": "bob", "add": "true"}
    )

    assert response.status_code == 400
    assert response.json() == {"error": {"usernames": "Both usernames must be nonempty alphanumeric strings."}}


def test_malformed_json_is_a_400(client):
    response = client.post(
        "/api/followers", content=b"{not json", headers={"Content-Type": "application/json"}
    )

    assert response.status_code == 400
    assert "body" in response.json()["error"]


def test_non_object_body_is_a_400(client):
    response = client.post("/api/followers", json=["alice"])

    assert response.status_code == 400
    assert set(response.json()) == {"error"}
    assert "body" in response.json()["error"]
