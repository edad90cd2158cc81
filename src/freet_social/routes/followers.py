"""
# Followers Routes

REST endpoints for **follower views**: the per-user record of who follows a
user and whom that user follows.

## Domain Overview

- **Follower view**: one document per user holding `followers` and `following`
  username lists. A view must be created explicitly before the user can follow
  or be followed.
- **Follow / unfollow**: a single request edits *both* views, keeping
  `B in A.followers <=> A in B.following`. Repeating a request is harmless.

## API Endpoints

- `POST /api/followers` - Create the follower view for `username`
- `PUT /api/followers` - Follow (`add="true"`) or unfollow (`add="false"`)
- `GET /api/followers?username=...&followers=true|false` - List followers or following

## Usage Examples

```python
await client.post("/api/followers", json={"username": "alice"})
await client.put("/api/followers", json={
    "usernameOfFollowed": "alice",
    "usernameOfFollower": "bob",
    "add": "true",
})
response = await client.get("/api/followers", params={"username": "alice", "followers": "true"})
# {"followers": ["bob"]}
```

Attributes:
    router (APIRouter): FastAPI router with `/api/followers` prefix
"""

import re
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from freet_social.managers.logging_manager import get_logger
from freet_social.models.followers_models import CreateFollowerViewRequest, UpdateFollowersRequest
from freet_social.routes.auth.dependencies import get_session_username
from freet_social.services.followers_service import followers_service
from freet_social.utils.response_projection import construct_followers_response
from freet_social.validation import (
    FieldsGiven,
    MatchesPattern,
    OneOf,
    RecordAbsent,
    RecordExists,
    RequestContext,
    UserLoggedIn,
    ValidationPipeline,
    parse_payload,
)

logger = get_logger(prefix="[Followers Routes]")

router = APIRouter(prefix="/api/followers", tags=["Followers"])

VIEW_NOT_FOUND = {"userFollowerViewNotFound": "User does not have created follower view."}

create_pipeline = ValidationPipeline(
    "followers.create",
    [
        UserLoggedIn(),
        FieldsGiven(["username"], {"username": "Username must be given."}),
        RecordAbsent(
            followers_service.find_one_by_username,
            "username",
            {"username": "Follower view for this username already exists."},
        ),
    ],
)

update_pipeline = ValidationPipeline(
    "followers.update",
    [
        UserLoggedIn(),
        FieldsGiven(["usernameOfFollowed", "usernameOfFollower"], {"username": "Both usernames must be given."}),
        RecordExists(followers_service.find_one_by_username, ["usernameOfFollowed", "usernameOfFollower"], VIEW_NOT_FOUND),
        MatchesPattern(
            ["usernameOfFollowed", "usernameOfFollower"],
            r"\w+",
            {"usernames": "Both usernames must be nonempty alphanumeric strings."},
            flags=re.ASCII,
        ),
        OneOf("add", ["true", "false", True, False], {"add": "add must be either true or false."}),
    ],
)

read_pipeline = ValidationPipeline(
    "followers.read",
    [
        FieldsGiven(["username"], "Provided author username must be nonempty.", source="query"),
        RecordExists(
            followers_service.find_one_by_username,
            ["username"],
            lambda context: f"Follower View for a user with username {context.query.get('username')} does not exist.",
            source="query",
        ),
    ],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_follower_view(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    """Create an empty follower view."""
    body = payload or {}
    await create_pipeline.run(RequestContext(body=body, session_username=session_username))
    request = parse_payload(CreateFollowerViewRequest, body)

    view = await followers_service.create_follower_view(request.username)
    logger.info("Follower view created for %s by %s", view.username, session_username)
    return {
        "message": "Your follower view was created successfully.",
        "followers": construct_followers_response(view),
    }


@router.put("")
async def update_followers(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    """
    Follow or unfollow.

    Responds with both updated views, under `usernameOfFollowed` and
    `usernameOfFollower`.
    """
    body = payload or {}
    await update_pipeline.run(RequestContext(body=body, session_username=session_username))
    request = parse_payload(UpdateFollowersRequest, body)

    if request.is_add:
        followed = await followers_service.add_follower(request.username_of_followed, request.username_of_follower)
        message = "Your follower view was updated successfully (added follower)."
    else:
        followed = await followers_service.remove_follower(request.username_of_followed, request.username_of_follower)
        message = "Your follower view was updated successfully. (removed follower)"

    follower = await followers_service.find_one_by_username(request.username_of_follower)
    return {
        "message": message,
        "usernameOfFollowed": construct_followers_response(followed),
        "usernameOfFollower": construct_followers_response(follower),
    }


@router.get("")
async def get_follower_lists(request: Request):
    """`{"followers": [...]}` when `followers=true`, otherwise `{"following": [...]}`."""
    query = dict(request.query_params)
    await read_pipeline.run(RequestContext(query=query))

    view = await followers_service.find_one_by_username(query["username"])
    if query.get("followers") == "true":
        return {"followers": view.followers}
    return {"following": view.following}
