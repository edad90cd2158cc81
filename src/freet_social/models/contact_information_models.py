"""
# Contact Information Display Models

Each user may publish a phone number, email, website and address on their
profile, plus a flag saying whether the block is shown at all.

## Update semantics

Updates are partial. `ContactInformationPatch` carries one `FieldUpdate` per
field, each of which is one of:

*   **ABSENT**: leave the stored value untouched (key missing, `null` or `""`).
*   **CLEAR**: store `""` (the request value was the literal `"delete"`).
*   **SET**: store the given value.

The display flag accepts `true`/`false` as well as the tokens `"yes"`/`"no"`;
an explicit `false` is a SET, not an ABSENT.
"""

from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, field_validator

from freet_social.models.base import CamelModel, RelationshipDocument

DELETE_SENTINEL = "delete"

DISPLAY_TRUE_VALUES = ("yes", "true")
DISPLAY_FALSE_VALUES = ("no", "false")

# Request/document key for each string contact field.
CONTACT_FIELDS: Dict[str, str] = {
    "contact_number": "contactNumber",
    "contact_email": "contactEmail",
    "contact_website": "contactWebsite",
    "contact_address": "contactAddress",
}


def parse_display_flag(value: Any) -> bool:
    """
    Normalize a display flag given as a boolean or a yes/no/true/false token.

    Raises:
        ValueError: If the value is none of the accepted forms.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in DISPLAY_TRUE_VALUES:
            return True
        if value in DISPLAY_FALSE_VALUES:
            return False
    raise ValueError("value must be either yes or no (case sensitive)")


def is_display_flag(value: Any) -> bool:
    try:
        parse_display_flag(value)
    except ValueError:
        return False
    return True


class ContactInformationDisplay(RelationshipDocument):
    """MongoDB document model for a user's contact information display."""

    contact_information_displayed: bool = Field(..., description="Whether the block is shown on the profile")
    username: str = Field(..., description="Owner of this contact information")
    contact_number: str = Field(default="", description="Ten digit phone number, blank if unset")
    contact_email: str = Field(default="", description="Email address, blank if unset")
    contact_website: str = Field(default="", description="Website, blank if unset")
    contact_address: str = Field(default="", description="Postal address, blank if unset")

    @field_validator("contact_number", "contact_email", "contact_website", "contact_address", mode="before")
    @classmethod
    def blank_when_missing(cls, v: Any) -> Any:
        return "" if v is None else v


class CreateContactInformationRequest(CamelModel):
    contact_information_displayed: bool
    username: str
    contact_number: str = ""
    contact_email: str = ""
    contact_website: str = ""
    contact_address: str = ""

    @field_validator("contact_information_displayed", mode="before")
    @classmethod
    def normalize_display_flag(cls, v: Any) -> bool:
        return parse_display_flag(v)

    @field_validator("contact_number", "contact_email", "contact_website", "contact_address", mode="before")
    @classmethod
    def blank_when_missing(cls, v: Any) -> Any:
        return "" if v is None else v


class UpdateKind(str, Enum):
    ABSENT = "absent"
    SET = "set"
    CLEAR = "clear"


class FieldUpdate(BaseModel):
    kind: UpdateKind = UpdateKind.ABSENT
    value: Any = None

    @classmethod
    def absent(cls) -> "FieldUpdate":
        return cls(kind=UpdateKind.ABSENT)

    @classmethod
    def set(cls, value: Any) -> "FieldUpdate":
        return cls(kind=UpdateKind.SET, value=value)

    @classmethod
    def clear(cls) -> "FieldUpdate":
        return cls(kind=UpdateKind.CLEAR)


class ContactInformationPatch(BaseModel):
    """Explicit partial update of a contact information display."""

    contact_information_displayed: FieldUpdate = Field(default_factory=FieldUpdate.absent)
    contact_number: FieldUpdate = Field(default_factory=FieldUpdate.absent)
    contact_email: FieldUpdate = Field(default_factory=FieldUpdate.absent)
    contact_website: FieldUpdate = Field(default_factory=FieldUpdate.absent)
    contact_address: FieldUpdate = Field(default_factory=FieldUpdate.absent)

    @classmethod
    def from_request(cls, body: Mapping[str, Any]) -> "ContactInformationPatch":
        """Build a patch from a camelCase request body."""
        updates: Dict[str, FieldUpdate] = {}

        display = body.get("contactInformationDisplayed")
        if display is not None and display != "":
            updates["contact_information_displayed"] = FieldUpdate.set(parse_display_flag(display))

        for attribute, key in CONTACT_FIELDS.items():
            value = body.get(key)
            if value is None or value == "":
                continue
            if value == DELETE_SENTINEL:
                updates[attribute] = FieldUpdate.clear()
            else:
                updates[attribute] = FieldUpdate.set(value)

        return cls(**updates)

    def string_updates(self) -> Dict[str, FieldUpdate]:
        return {attribute: getattr(self, attribute) for attribute in CONTACT_FIELDS}


class ContactInformationResponse(CamelModel):
    id: Optional[str] = Field(default=None, alias="_id")
    contact_information_displayed: bool
    username: str
    contact_number: str
    contact_email: str
    contact_website: str
    contact_address: str
