"""
# Followers Service

Follow and unfollow operations over follower views.

Every user has at most one follower view, created explicitly through
`create_follower_view`. Following is recorded twice: the followed user's view
gains the follower in `followers`, and the follower's view gains the followed
user in `following`. Entries use each view's stored username, so

    B.username in A.followers  <=>  A.username in B.following

The two writes are independent saves. A failure between them leaves the pair
asymmetric until the same request is retried; every edit is idempotent, so a
retry is always safe.
"""

from typing import Optional

from freet_social.config import settings
from freet_social.database.relationship_store import RelationshipStore
from freet_social.errors import NotFoundError
from freet_social.managers.logging_manager import get_logger
from freet_social.models.followers_models import FollowerView

logger = get_logger(prefix="[FollowersService]")


class FollowersService:
    def __init__(self, store: Optional[RelationshipStore[FollowerView]] = None):
        self.store = store or RelationshipStore(settings.FOLLOWERS_COLLECTION, "username", FollowerView)

    async def create_follower_view(self, username: str) -> FollowerView:
        """Create an empty follower view for `username`."""
        return await self.store.create(FollowerView(username=username))

    async def find_one_by_username(self, username: Optional[str]) -> Optional[FollowerView]:
        return await self.store.find_by_key(username)

    async def _load(self, username: str) -> FollowerView:
        view = await self.store.find_by_key(username)
        if view is None:
            raise NotFoundError({"userFollowerViewNotFound": "User does not have created follower view."})
        return view

    async def add_follower(self, username_of_followed: str, username_of_follower: str) -> FollowerView:
        """
        Record that `username_of_follower` follows `username_of_followed`.

        Returns:
            FollowerView: The followed user's updated view.

        Raises:
            NotFoundError: If either follower view does not exist.
        """
        followed = await self._load(username_of_followed)
        follower = await self._load(username_of_follower)

        if follower.username not in followed.followers:
            followed.followers.append(follower.username)
            await self.store.save(followed)

        # Reload so a self-follow sees the write above.
        follower = await self._load(username_of_follower)
        if followed.username not in follower.following:
            follower.following.append(followed.username)
            await self.store.save(follower)

        logger.info("%s now follows %s", follower.username, followed.username)
        if follower.id == followed.id:
            return follower
        return followed

    async def remove_follower(self, username_of_followed: str, username_of_follower: str) -> FollowerView:
        """
        Remove `username_of_follower` from the followers of `username_of_followed`.

        Returns:
            FollowerView: The followed user's updated view.

        Raises:
            NotFoundError: If either follower view does not exist.
        """
        followed = await self._load(username_of_followed)
        follower = await self._load(username_of_follower)

        if follower.username in followed.followers:
            followed.followers.remove(follower.username)
            await self.store.save(followed)

        follower = await self._load(username_of_follower)
        if followed.username in follower.following:
            follower.following.remove(followed.username)
            await self.store.save(follower)

        logger.info("%s no longer follows %s", follower.username, followed.username)
        if follower.id == followed.id:
            return follower
        return followed


followers_service = FollowersService()
