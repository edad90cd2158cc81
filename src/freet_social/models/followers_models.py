"""
# Follower View Models

A follower view records, for one user, who follows them and whom they follow.
Both lists hold usernames; the pair of views for two users is kept symmetric by
`FollowersService`:

    B.username in A.followers  <=>  A.username in B.following
"""

from typing import List, Optional, Union

from pydantic import Field

from freet_social.models.base import CamelModel, RelationshipDocument


class FollowerView(RelationshipDocument):
    """MongoDB document model for a user's follower view."""

    username: str = Field(..., description="Owner of this follower view")
    followers: List[str] = Field(default_factory=list, description="Usernames following this user")
    following: List[str] = Field(default_factory=list, description="Usernames this user follows")


class CreateFollowerViewRequest(CamelModel):
    username: str


class UpdateFollowersRequest(CamelModel):
    """Follow (`add="true"`) or unfollow (`add="false"`) request."""

    username_of_followed: str
    username_of_follower: str
    add: Union[bool, str] = "true"

    @property
    def is_add(self) -> bool:
        if isinstance(self.add, bool):
            return self.add
        return self.add == "true"


class FollowerViewResponse(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    username: str
    followers: List[str]
    following: List[str]
