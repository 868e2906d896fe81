"""Post shapes: the in-memory/wire model and the update payload.

Stored documents use `_id` (ObjectId) and `user_id` for the owner, which is
the layout existing collections already have. The wire shape uses `id`
(hex string) and `owner_id`.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping

from bson import ObjectId
from pydantic import BaseModel, StrictStr


class Post(BaseModel):
    id: str
    owner_id: StrictStr = ""
    title: StrictStr = ""
    body: StrictStr = ""

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "Post":
        """Decode a stored document.

        Absent text fields decode to "". A missing/non-ObjectId `_id` or a
        non-string text field raises ValueError (pydantic's ValidationError
        is a ValueError).
        """
        oid = doc.get("_id")
        if not isinstance(oid, ObjectId):
            raise ValueError(f"document _id is not an ObjectId: {oid!r}")
        return cls.model_validate({
            "id": str(oid),
            "owner_id": doc.get("user_id", ""),
            "title": doc.get("title", ""),
            "body": doc.get("body", ""),
        })

    def to_document(self) -> Dict[str, Any]:
        return {
            "_id": ObjectId(self.id),
            "user_id": self.owner_id,
            "title": self.title,
            "body": self.body,
        }


class PostUpdate(BaseModel):
    owner_id: str
    title: str
    body: str


class DeletedPost(BaseModel):
    post_id: str
