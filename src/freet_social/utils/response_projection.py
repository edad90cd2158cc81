"""
Project stored relationship records into the JSON shapes returned by the API.

Only allow-listed fields are emitted and `_id` is rendered as a string, so
storage bookkeeping never leaks into responses.
"""

from typing import Any, Dict

from freet_social.models.base import RelationshipDocument
from freet_social.models.contact_information_models import ContactInformationDisplay, ContactInformationResponse
from freet_social.models.followers_models import FollowerView, FollowerViewResponse
from freet_social.models.group_tagging_models import Group, GroupResponse


def _project(record: RelationshipDocument, response_model) -> Dict[str, Any]:
    values = record.model_dump(exclude={"id"})
    values["id"] = str(record.id) if record.id is not None else None
    return response_model(**values).model_dump(by_alias=True)


def construct_followers_response(view: FollowerView) -> Dict[str, Any]:
    return _project(view, FollowerViewResponse)


def construct_group_response(group: Group) -> Dict[str, Any]:
    return _project(group, GroupResponse)


def construct_contact_response(contact: ContactInformationDisplay) -> Dict[str, Any]:
    return _project(contact, ContactInformationResponse)
