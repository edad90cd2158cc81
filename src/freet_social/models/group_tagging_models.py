"""
# Group Tagging Models

A group is identified by its `groupUsername` and tracks its members, its admins
and the ids of freets that carry the group's tag.

**Membership rules:**
*   The creator starts as the only member and the only admin.
*   Adding an admin also adds them as a member.
*   Removing a member does not revoke their admin status.
*   Tags are unique freet ids, in no particular order.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field

from freet_social.models.base import CamelModel, RelationshipDocument


class GroupAction(str, Enum):
    """Edits accepted by `PUT /api/groupTagging`."""

    ADD_MEMBER = "addMember"
    REMOVE_MEMBER = "removeMember"
    ADD_ADMIN = "addAdmin"
    REMOVE_ADMIN = "removeAdmin"
    ADD_TAG = "addTag"


# Request field naming the target of each action.
ACTION_TARGET_FIELDS: Dict[GroupAction, str] = {
    GroupAction.ADD_MEMBER: "addedGroupMemberUsername",
    GroupAction.REMOVE_MEMBER: "removedGroupMemberUsername",
    GroupAction.ADD_ADMIN: "addedAdminUsername",
    GroupAction.REMOVE_ADMIN: "removedAdminUsername",
    GroupAction.ADD_TAG: "taggedFreetId",
}


class Group(RelationshipDocument):
    """MongoDB document model for a tagging group."""

    group_username: str = Field(..., description="Unique group name")
    group_members: List[str] = Field(default_factory=list, description="Usernames of members")
    group_tags: List[str] = Field(default_factory=list, description="Ids of freets tagged with this group")
    group_admin: List[str] = Field(default_factory=list, description="Usernames of admins")


class CreateGroupRequest(CamelModel):
    group_username: str
    group_creator_username: str


class UpdateGroupRequest(CamelModel):
    group_username: str
    action: GroupAction
    added_group_member_username: Optional[str] = None
    removed_group_member_username: Optional[str] = None
    added_admin_username: Optional[str] = None
    removed_admin_username: Optional[str] = None
    tagged_freet_id: Optional[str] = None

    @property
    def target(self) -> Optional[str]:
        """Value of the field the current action operates on."""
        return self.model_dump(by_alias=True).get(ACTION_TARGET_FIELDS[self.action])


class GroupResponse(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    group_username: str
    group_members: List[str]
    group_tags: List[str]
    group_admin: List[str]
