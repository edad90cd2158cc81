"""
Read-only lookups into collections owned by other parts of Freet.

Group validation needs to know whether a user account or a freet exists; the
accounts live in `users` and the posts in `freets`. Neither collection is ever
written from this service.
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId

from freet_social.config import settings
from freet_social.database import db_manager
from freet_social.database.relationship_store import key_filter
from freet_social.managers.logging_manager import get_logger

logger = get_logger(prefix="[DirectoryService]")


class DirectoryService:
    def __init__(self):
        self.users_collection = settings.USERS_COLLECTION
        self.freets_collection = settings.FREETS_COLLECTION

    async def find_user_by_username(self, username: Optional[str]) -> Optional[Dict[str, Any]]:
        """User account whose username matches ignoring case, if any."""
        if not isinstance(username, str) or not username.strip():
            return None
        collection = db_manager.get_collection(self.users_collection)
        return await collection.find_one(key_filter("username", username))

    async def find_freet_by_id(self, freet_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Freet with the given id; malformed ids are treated as absent."""
        if not isinstance(freet_id, str):
            return None
        try:
            object_id = ObjectId(freet_id)
        except (InvalidId, TypeError):
            logger.debug("Rejected malformed freet id %r", freet_id)
            return None
        collection = db_manager.get_collection(self.freets_collection)
        return await collection.find_one({"_id": object_id})


directory_service = DirectoryService()
