"""
# Group Tagging Service

Membership, admin and tag edits for groups. Each edit loads the group, applies
an idempotent set-membership change and saves the group once; an edit that
changes nothing is not written.

Adding an admin also makes them a member. Removing a member leaves their admin
entry in place.
"""

from typing import List, Optional

from freet_social.config import settings
from freet_social.database.relationship_store import RelationshipStore
from freet_social.errors import NotFoundError
from freet_social.managers.logging_manager import get_logger
from freet_social.models.group_tagging_models import Group, GroupAction

logger = get_logger(prefix="[GroupTaggingService]")


def _add(values: List[str], value: str) -> bool:
    if value in values:
        return False
    values.append(value)
    return True


def _remove(values: List[str], value: str) -> bool:
    if value not in values:
        return False
    values.remove(value)
    return True


class GroupTaggingService:
    def __init__(self, store: Optional[RelationshipStore[Group]] = None):
        self.store = store or RelationshipStore(settings.GROUP_TAGGING_COLLECTION, "groupUsername", Group)

    async def create_group(self, group_username: str, group_creator_username: str) -> Group:
        """Create a group whose only member and admin is its creator."""
        group = Group(
            group_username=group_username,
            group_members=[group_creator_username],
            group_tags=[],
            group_admin=[group_creator_username],
        )
        group = await self.store.create(group)
        logger.info("Group %s created by %s", group_username, group_creator_username)
        return group

    async def find_one_by_group_username(self, group_username: Optional[str]) -> Optional[Group]:
        return await self.store.find_by_key(group_username)

    async def _load(self, group_username: str) -> Group:
        group = await self.store.find_by_key(group_username)
        if group is None:
            raise NotFoundError({"groupUsername": "A Group with this username does not exists."})
        return group

    async def _commit(self, group: Group, changed: bool, action: str, value: str) -> Group:
        if changed:
            await self.store.save(group)
            logger.info("%s %s on group %s", action, value, group.group_username)
        else:
            logger.debug("%s %s on group %s was a no-op", action, value, group.group_username)
        return group

    async def add_group_member(self, group_username: str, added_group_member_username: str) -> Group:
        group = await self._load(group_username)
        changed = _add(group.group_members, added_group_member_username)
        return await self._commit(group, changed, "addMember", added_group_member_username)

    async def remove_group_member(self, group_username: str, removed_group_member_username: str) -> Group:
        group = await self._load(group_username)
        changed = _remove(group.group_members, removed_group_member_username)
        return await self._commit(group, changed, "removeMember", removed_group_member_username)

    async def add_admin(self, group_username: str, added_admin_username: str) -> Group:
        """Make a user an admin, adding them as a member if they are not one already."""
        group = await self._load(group_username)
        admin_added = _add(group.group_admin, added_admin_username)
        member_added = _add(group.group_members, added_admin_username)
        return await self._commit(group, admin_added or member_added, "addAdmin", added_admin_username)

    async def remove_admin(self, group_username: str, removed_admin_username: str) -> Group:
        group = await self._load(group_username)
        changed = _remove(group.group_admin, removed_admin_username)
        return await self._commit(group, changed, "removeAdmin", removed_admin_username)

    async def tag_group(self, group_username: str, tagged_freet_id: str) -> Group:
        group = await self._load(group_username)
        changed = _add(group.group_tags, tagged_freet_id)
        return await self._commit(group, changed, "addTag", tagged_freet_id)

    async def apply_action(self, group_username: str, action: GroupAction, target: str) -> Group:
        """Dispatch a `PUT /api/groupTagging` action to the matching edit."""
        handlers = {
            GroupAction.ADD_MEMBER: self.add_group_member,
            GroupAction.REMOVE_MEMBER: self.remove_group_member,
            GroupAction.ADD_ADMIN: self.add_admin,
            GroupAction.REMOVE_ADMIN: self.remove_admin,
            GroupAction.ADD_TAG: self.tag_group,
        }
        return await handlers[action](group_username, target)


group_tagging_service = GroupTaggingService()
