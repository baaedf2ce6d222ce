"""
User Records Service — Stored User Document
============================================

What:  Model of a document in the `users` collection.
How:   A pydantic model whose `id` maps to the document's `_id` field.
       Unset attributes are left out of the stored document rather than
       written as null.
Who:   Built by UserService from request payloads and from documents
       returned by the driver.

Document shape:
    {"_id": ObjectId, "name"?: str, "email"?: str}
"""

from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    A persisted user record.

    Lifecycle:
        1. Created with a server-generated ObjectId (client ids are ignored)
        2. Mutated only through merge(); the id never changes
        3. Removed by delete; no soft-delete or versioning
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    id: ObjectId = Field(alias="_id")
    name: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "User":
        """Decode a raw driver document. Raises pydantic.ValidationError on bad shape."""
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Encode for insert_one, omitting unset attributes."""
        return self.model_dump(by_alias=True, exclude_none=True)

    def field_values(self) -> Dict[str, Any]:
        """The mutable attributes that are set, as used in a `$set` update."""
        return self.model_dump(exclude={"id"}, exclude_none=True)

    def merge(self, name: Optional[str] = None, email: Optional[str] = None) -> "User":
        """
        Field-level merge: each supplied value replaces the stored one, each
        omitted value keeps it. Returns a new record with the same id.
        """
        return User(
            id=self.id,
            name=name if name is not None else self.name,
            email=email if email is not None else self.email,
        )
