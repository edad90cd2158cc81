"""
# Group Tagging Routes

REST endpoints for **groups**: named sets of members and admins that freets can
be tagged with.

## Domain Overview

- **Group**: identified by `groupUsername`; tracks `groupMembers`,
  `groupAdmin` and `groupTags` (ids of tagged freets).
- **Creator**: becomes the first member and the first admin.
- **Actions**: a single `PUT` endpoint dispatches on `action`, each action
  reading its own target field:

| Action | Target field | Target must exist in |
|---|---|---|
| `addMember` | `addedGroupMemberUsername` | users |
| `removeMember` | `removedGroupMemberUsername` | users |
| `addAdmin` | `addedAdminUsername` | users |
| `removeAdmin` | `removedAdminUsername` | users |
| `addTag` | `taggedFreetId` | freets |

## API Endpoints

- `POST /api/groupTagging` - Create a group
- `PUT /api/groupTagging` - Apply a membership, admin or tag action
- `GET /api/groupTagging?groupUsername=...` - Read a group

## Usage Examples

```python
await client.post("/api/groupTagging", json={"groupUsername": "mitcs", "groupCreatorUsername": "alice"})
await client.put("/api/groupTagging", json={
    "groupUsername": "mitcs",
    "action": "addAdmin",
    "addedAdminUsername": "bob",
})
```

Attributes:
    router (APIRouter): FastAPI router with `/api/groupTagging` prefix
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from freet_social.managers.logging_manager import get_logger
from freet_social.models.group_tagging_models import CreateGroupRequest, GroupAction, UpdateGroupRequest
from freet_social.routes.auth.dependencies import get_session_username
from freet_social.services.directory_service import directory_service
from freet_social.services.group_tagging_service import group_tagging_service
from freet_social.utils.response_projection import construct_group_response
from freet_social.validation import (
    ActionTargetExists,
    FieldsGiven,
    OneOf,
    RecordAbsent,
    RecordExists,
    RequestContext,
    UserLoggedIn,
    ValidationPipeline,
    parse_payload,
)

logger = get_logger(prefix="[Group Tagging Routes]")

router = APIRouter(prefix="/api/groupTagging", tags=["Group Tagging"])

GROUP_NOT_FOUND = {"groupUsername": "A Group with this username does not exists."}

ACTION_MESSAGES = {
    GroupAction.ADD_MEMBER: "Your group membership was updated successfully (added member).",
    GroupAction.REMOVE_MEMBER: "Your group membership was updated successfully. (removed member)",
    GroupAction.ADD_ADMIN: "Your group admin was updated successfully (added admin).",
    GroupAction.REMOVE_ADMIN: "Your group admin was updated successfully. (removed admin)",
    GroupAction.ADD_TAG: "Your group tags was updated successfully.",
}

create_pipeline = ValidationPipeline(
    "groupTagging.create",
    [
        UserLoggedIn(),
        FieldsGiven(
            ["groupUsername", "groupCreatorUsername"],
            {"groupUsername": "Group username and group creator username must be given."},
        ),
        RecordAbsent(
            group_tagging_service.find_one_by_group_username,
            "groupUsername",
            {"groupUsername": "A Group with this username already exists."},
        ),
        RecordExists(
            directory_service.find_user_by_username,
            ["groupCreatorUsername"],
            {"user": "A user with this username does not exists."},
        ),
    ],
)

update_pipeline = ValidationPipeline(
    "groupTagging.update",
    [
        UserLoggedIn(),
        FieldsGiven(["groupUsername"], {"groupUsername": "Group username must be given."}),
        RecordExists(group_tagging_service.find_one_by_group_username, ["groupUsername"], GROUP_NOT_FOUND),
        OneOf(
            "action",
            [action.value for action in GroupAction],
            {"action": "Action must be one of addMember, removeMember, addAdmin, removeAdmin or addTag."},
        ),
        ActionTargetExists(directory_service.find_user_by_username, directory_service.find_freet_by_id),
    ],
)

read_pipeline = ValidationPipeline(
    "groupTagging.read",
    [
        FieldsGiven(["groupUsername"], {"groupUsername": "Group username must be given."}, source="query"),
        RecordExists(
            group_tagging_service.find_one_by_group_username, ["groupUsername"], GROUP_NOT_FOUND, source="query"
        ),
    ],
)


async def _stored_username(username: str) -> str:
    """The username as stored on the user account; group lists hold that spelling."""
    user = await directory_service.find_user_by_username(username)
    return user["username"] if user else username


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_group(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    """Create a group with its creator as the only member and admin."""
    body = payload or {}
    await create_pipeline.run(RequestContext(body=body, session_username=session_username))
    request = parse_payload(CreateGroupRequest, body)

    creator = await _stored_username(request.group_creator_username)
    group = await group_tagging_service.create_group(request.group_username, creator)
    return {"message": "Your group was created successfully.", "group": construct_group_response(group)}


@router.put("")
async def update_group(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    """Apply one group action to its target."""
    body = payload or {}
    await update_pipeline.run(RequestContext(body=body, session_username=session_username))
    request = parse_payload(UpdateGroupRequest, body)

    target = request.target
    if request.action != GroupAction.ADD_TAG:
        target = await _stored_username(target)
    group = await group_tagging_service.apply_action(request.group_username, request.action, target)
    logger.info("%s applied %s to group %s", session_username, request.action.value, group.group_username)
    return {"message": ACTION_MESSAGES[request.action], "group": construct_group_response(group)}


@router.get("")
async def get_group(request: Request):
    query = dict(request.query_params)
    await read_pipeline.run(RequestContext(query=query))

    group = await group_tagging_service.find_one_by_group_username(query["groupUsername"])
    return {"message": "Your group information was found successfully.", "group": construct_group_response(group)}
