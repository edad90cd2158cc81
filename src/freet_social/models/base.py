"""
Shared base for documents stored in the relationship collections.

Documents are persisted with camelCase field names and a BSON `ObjectId` under
`_id`. Unknown fields found in stored documents (such as a legacy `__v` version
counter) are ignored when loading.
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model whose JSON/BSON field names are the camelCase form of its attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )


class RelationshipDocument(CamelModel):
    """A keyed relationship record as stored in MongoDB."""

    id: Optional[ObjectId] = Field(default=None, alias="_id", description="MongoDB document id")

    def to_document(self) -> Dict[str, Any]:
        """Field mapping to write to MongoDB, without `_id`."""
        return self.model_dump(by_alias=True, exclude={"id"})

    @classmethod
    def from_document(cls, document: Dict[str, Any]):
        return cls.model_validate(document)
