"""
# Contact Information Display Routes

REST endpoints for the contact block shown on a user's profile.

## Update Semantics

`PUT` is a partial update. For each of `contactNumber`, `contactEmail`,
`contactWebsite` and `contactAddress`:

- missing, `null` or `""`: left unchanged
- `"delete"`: cleared
- any other string: replaces the stored value (non-strings are a 400)

`contactInformationDisplayed` accepts `true`/`false` or `"yes"`/`"no"`, and may
be omitted on `PUT`. A contact number must be exactly ten digits.

## API Endpoints

- `POST /api/contactInformationDisplay` - Create a user's contact information
- `PUT /api/contactInformationDisplay` - Partially update it
- `GET /api/contactInformationDisplay?username=...` - Read it

Attributes:
    router (APIRouter): FastAPI router with `/api/contactInformationDisplay` prefix
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from freet_social.managers.logging_manager import get_logger
from freet_social.models.contact_information_models import (
    DELETE_SENTINEL,
    DISPLAY_FALSE_VALUES,
    DISPLAY_TRUE_VALUES,
    ContactInformationPatch,
    CreateContactInformationRequest,
)
from freet_social.routes.auth.dependencies import get_session_username
from freet_social.services.contact_information_service import contact_information_service
from freet_social.utils.response_projection import construct_contact_response
from freet_social.validation import (
    FieldsGiven,
    IsString,
    MatchesPattern,
    OneOf,
    RecordAbsent,
    RecordExists,
    RequestContext,
    UserLoggedIn,
    ValidationPipeline,
    parse_payload,
)

logger = get_logger(prefix="[Contact Information Routes]")

router = APIRouter(prefix="/api/contactInformationDisplay", tags=["Contact Information Display"])

CONTACT_NUMBER_PATTERN = r"[0-9]{10}"

USERNAME_REQUIRED = {"username": "Username must be given."}
INVALID_NUMBER = {"Number": "Number must be a 10 digit long string of numeric characters."}
INVALID_DISPLAY = {"contactInformationDisplayed": "value must be either yes or no (case sensitive)"}
INVALID_TEXT = {"contactInformation": "Contact email, website and address must be strings."}
TEXT_FIELDS = ["contactEmail", "contactWebsite", "contactAddress"]
DISPLAY_VALUES = DISPLAY_TRUE_VALUES + DISPLAY_FALSE_VALUES + (True, False)

create_pipeline = ValidationPipeline(
    "contactInformationDisplay.create",
    [
        UserLoggedIn(),
        FieldsGiven(
            ["contactInformationDisplayed"],
            {"contactInformationDisplayed": "Must determine if information will be displayed."},
        ),
        FieldsGiven(["username"], USERNAME_REQUIRED),
        RecordAbsent(
            contact_information_service.find_one_by_username,
            "username",
            {"username": "Contact Information for this username already exists."},
        ),
        OneOf("contactInformationDisplayed", DISPLAY_VALUES, INVALID_DISPLAY),
        MatchesPattern(["contactNumber"], CONTACT_NUMBER_PATTERN, INVALID_NUMBER, passthrough=[""], optional=True),
        IsString(TEXT_FIELDS, INVALID_TEXT),
    ],
)

update_pipeline = ValidationPipeline(
    "contactInformationDisplay.update",
    [
        UserLoggedIn(),
        FieldsGiven(["username"], USERNAME_REQUIRED),
        RecordExists(
            contact_information_service.find_one_by_username,
            ["username"],
            {"userContactInformationNotFound": "User does not have created contact information."},
        ),
        OneOf("contactInformationDisplayed", DISPLAY_VALUES, INVALID_DISPLAY, optional=True),
        MatchesPattern(
            ["contactNumber"],
            CONTACT_NUMBER_PATTERN,
            INVALID_NUMBER,
            passthrough=["", DELETE_SENTINEL],
            optional=True,
        ),
        IsString(TEXT_FIELDS, INVALID_TEXT),
    ],
)

read_pipeline = ValidationPipeline(
    "contactInformationDisplay.read",
    [
        FieldsGiven(["username"], "Provided author username must be nonempty.", source="query"),
        RecordExists(
            contact_information_service.find_one_by_username,
            ["username"],
            lambda context: (
                f"Contact Information for a user with username {context.query.get('username')} does not exist."
            ),
            source="query",
        ),
    ],
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_contact_information(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    body = payload or {}
    await create_pipeline.run(RequestContext(body=body, session_username=session_username))
    request = parse_payload(CreateContactInformationRequest, body)

    contact = await contact_information_service.add_one(request)
    return {
        "message": "Your contact information display was created successfully.",
        "contactInformationDisplay": construct_contact_response(contact),
    }


@router.put("")
async def update_contact_information(
    payload: Optional[Dict[str, Any]] = Body(None),
    session_username: Optional[str] = Depends(get_session_username),
):
    """Partially update a user's contact information; `"delete"` clears a field."""
    body = payload or {}
    await update_pipeline.run(RequestContext(body=body, session_username=session_username))

    patch = ContactInformationPatch.from_request(body)
    contact = await contact_information_service.update_one(body["username"], patch)
    logger.info("Contact information for %s updated by %s", contact.username, session_username)
    return {
        "message": "Your contact information was updated successfully.",
        "contactInformationDisplay": construct_contact_response(contact),
    }


@router.get("")
async def get_contact_information(request: Request):
    """The projected contact information of `username`."""
    query = dict(request.query_params)
    await read_pipeline.run(RequestContext(query=query))

    contact = await contact_information_service.find_one_by_username(query["username"])
    return construct_contact_response(contact)
