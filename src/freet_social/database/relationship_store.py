"""
# Relationship Store

Generic persistence for keyed relationship records (follower views, groups,
contact information displays). Every kind is the same shape: one document per
key, looked up case-insensitively on the whole key, mutated in memory and
written back as a whole.

## Contract

*   `create(record)`: insert; the store does not re-check key uniqueness.
*   `find_by_key(key)`: anchored, case-insensitive exact match, or `None`.
*   `save(record)`: replace the stored document by `_id`. There is no version
    check, so concurrent writers to one record race and the last write wins.

```python
store = RelationshipStore("followers", "username", FollowerView)
view = await store.find_by_key("Alice")
view.followers.append("bob")
await store.save(view)
```
"""

import re
from typing import Any, Callable, Dict, Generic, Optional, Type, TypeVar

from pymongo.errors import DuplicateKeyError

from freet_social.database.manager import db_manager
from freet_social.errors import DuplicateKey
from freet_social.managers.logging_manager import get_logger
from freet_social.models.base import RelationshipDocument

logger = get_logger(prefix="[RelationshipStore]")

RecordT = TypeVar("RecordT", bound=RelationshipDocument)


def key_filter(key_field: str, key: str) -> Dict[str, Any]:
    """Filter matching `key` exactly, ignoring case and surrounding whitespace."""
    return {key_field: {"$regex": f"^{re.escape(key.strip())}$", "$options": "i"}}


class RelationshipStore(Generic[RecordT]):
    """
    Keyed store for one relationship kind.

    Args:
        collection_name: MongoDB collection holding the records.
        key_field: Stored (camelCase) name of the unique key field.
        model: Document model the records are loaded into.
        get_collection: Collection provider; defaults to `db_manager.get_collection`.
    """

    def __init__(
        self,
        collection_name: str,
        key_field: str,
        model: Type[RecordT],
        get_collection: Optional[Callable[[str], Any]] = None,
    ):
        self.collection_name = collection_name
        self.key_field = key_field
        self.model = model
        self._get_collection = get_collection

    @property
    def collection(self):
        provider = self._get_collection or db_manager.get_collection
        return provider(self.collection_name)

    async def create(self, record: RecordT) -> RecordT:
        """
        Insert a new record and return it with its generated `_id`.

        Raises:
            DuplicateKey: If the document store rejects the insert on a unique constraint.
        """
        document = record.to_document()
        start_time = db_manager.log_query_start(self.collection_name, "insert_one", document)
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError as e:
            db_manager.log_query_error(self.collection_name, "insert_one", start_time, e, document)
            raise DuplicateKey({self.key_field: f"A record with this {self.key_field} already exists."}) from e

        record.id = result.inserted_id
        db_manager.log_query_success(self.collection_name, "insert_one", start_time, f"_id={record.id}")
        logger.info("Created %s record for %s", self.collection_name, getattr(record, self._attribute_name()))
        return record

    async def find_by_key(self, key: Optional[str]) -> Optional[RecordT]:
        """Return the record whose key equals `key` ignoring case, or `None`."""
        if not isinstance(key, str) or not key.strip():
            return None

        query = key_filter(self.key_field, key)
        start_time = db_manager.log_query_start(self.collection_name, "find_one", query)
        document = await self.collection.find_one(query)
        db_manager.log_query_success(
            self.collection_name, "find_one", start_time, "found" if document else "not found"
        )
        if document is None:
            return None
        return self.model.from_document(document)

    async def save(self, record: RecordT) -> RecordT:
        """
        Persist every field of `record` over the stored document.

        Raises:
            ValueError: If the record was never created.
        """
        if record.id is None:
            raise ValueError(f"Cannot save a {self.model.__name__} that has not been created")

        query = {"_id": record.id}
        start_time = db_manager.log_query_start(self.collection_name, "replace_one", query)
        await self.collection.replace_one(query, record.to_document())
        db_manager.log_query_success(self.collection_name, "replace_one", start_time)
        return record

    def _attribute_name(self) -> str:
        for name, field in self.model.model_fields.items():
            if field.alias == self.key_field or name == self.key_field:
                return name
        return "id"
