"""
# Contact Information Service

Create, partially update and read contact information displays.

Updates are driven by a `ContactInformationPatch`: ABSENT fields are left as
stored, CLEAR fields become `""`, SET fields take the new value.
"""

from typing import Optional

from freet_social.config import settings
from freet_social.database.relationship_store import RelationshipStore
from freet_social.errors import NotFoundError
from freet_social.managers.logging_manager import get_logger
from freet_social.models.contact_information_models import (
    ContactInformationDisplay,
    ContactInformationPatch,
    CreateContactInformationRequest,
    UpdateKind,
)

logger = get_logger(prefix="[ContactInformationService]")


class ContactInformationService:
    def __init__(self, store: Optional[RelationshipStore[ContactInformationDisplay]] = None):
        self.store = store or RelationshipStore(
            settings.CONTACT_INFORMATION_COLLECTION, "username", ContactInformationDisplay
        )

    async def add_one(self, request: CreateContactInformationRequest) -> ContactInformationDisplay:
        """Create the contact information display described by `request`."""
        contact = ContactInformationDisplay(**request.model_dump())
        contact = await self.store.create(contact)
        logger.info("Contact information created for %s", contact.username)
        return contact

    async def update_one(self, username: str, patch: ContactInformationPatch) -> ContactInformationDisplay:
        """
        Apply `patch` to the display owned by `username`.

        Raises:
            NotFoundError: If the user has no contact information display.
        """
        contact = await self.store.find_by_key(username)
        if contact is None:
            raise NotFoundError({"userContactInformationNotFound": "User does not have created contact information."})

        display = patch.contact_information_displayed
        if display.kind == UpdateKind.SET:
            contact.contact_information_displayed = display.value

        for attribute, update in patch.string_updates().items():
            if update.kind == UpdateKind.CLEAR:
                setattr(contact, attribute, "")
            elif update.kind == UpdateKind.SET:
                setattr(contact, attribute, update.value)

        await self.store.save(contact)
        logger.info("Contact information updated for %s", contact.username)
        return contact

    async def find_one_by_username(self, username: Optional[str]) -> Optional[ContactInformationDisplay]:
        return await self.store.find_by_key(username)


contact_information_service = ContactInformationService()
