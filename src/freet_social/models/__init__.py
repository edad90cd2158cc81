"""Document, request and response models for the Freet Social relationship collections."""

from freet_social.models.base import CamelModel, RelationshipDocument
from freet_social.models.contact_information_models import (
    ContactInformationDisplay,
    ContactInformationPatch,
    ContactInformationResponse,
    CreateContactInformationRequest,
    FieldUpdate,
    UpdateKind,
)
from freet_social.models.followers_models import (
    CreateFollowerViewRequest,
    FollowerView,
    FollowerViewResponse,
    UpdateFollowersRequest,
)
from freet_social.models.group_tagging_models import (
    ACTION_TARGET_FIELDS,
    CreateGroupRequest,
    Group,
    GroupAction,
    GroupResponse,
    UpdateGroupRequest,
)

__all__ = [
    "ACTION_TARGET_FIELDS",
    "CamelModel",
    "ContactInformationDisplay",
    "ContactInformationPatch",
    "ContactInformationResponse",
    "CreateContactInformationRequest",
    "CreateFollowerViewRequest",
    "CreateGroupRequest",
    "FieldUpdate",
    "FollowerView",
    "FollowerViewResponse",
    "Group",
    "GroupAction",
    "GroupResponse",
    "RelationshipDocument",
    "UpdateFollowersRequest",
    "UpdateGroupRequest",
    "UpdateKind",
]
