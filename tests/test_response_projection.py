from bson import ObjectId

from freet_social.models.contact_information_models import ContactInformationDisplay
from freet_social.models.followers_models import FollowerView
from freet_social.models.group_tagging_models import Group
from freet_social.utils.response_projection import (
    construct_contact_response,
    construct_followers_response,
    construct_group_response,
)

OBJECT_ID = ObjectId("507f1f77bcf86cd799439011")


def test_followers_response_stringifies_id():
    view = FollowerView.from_document(
        {"_id": OBJECT_ID, "username": "alice", "followers": ["bob"], "following": [], "__v": 3}
    )

    assert construct_followers_response(view) == {
        "_id": "507f1f77bcf86cd799439011",
        "username": "alice",
        "followers": ["bob"],
        "following": [],
    }


def test_group_response_uses_camel_case_fields():
    group = Group(id=OBJECT_ID, group_username="mitcs", group_members=["alice"], group_admin=["alice"])

    assert construct_group_response(group) == {
        "_id": "507f1f77bcf86cd799439011",
        "groupUsername": "mitcs",
        "groupMembers": ["alice"],
        "groupTags": [],
        "groupAdmin": ["alice"],
    }


def test_contact_response_is_allow_listed():
    contact = ContactInformationDisplay.from_document(
        {
            "_id": OBJECT_ID,
            "contactInformationDisplayed": True,
            "username": "alice",
            "contactNumber": "6175550100",
            "contactEmail": None,
            "internalNote": "never returned",
        }
    )

    response = construct_contact_response(contact)

    assert set(response) == {
        "_id",
        "contactInformationDisplayed",
        "username",
        "contactNumber",
        "contactEmail",
        "contactWebsite",
        "contactAddress",
    }
    assert response["_id"] == "507f1f77bcf86cd799439011"
    assert response["contactEmail"] == ""
