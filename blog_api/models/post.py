"""
Blog API — BlogPost Stored Document Model
===========================================

What:  The shape of a blog post as it lives in the `blogposts` collection.
Why:   Gives the store adapter a typed object instead of raw dicts, and keeps
       the stored shape separate from the wire shape in schemas/post.py.
How:   Pydantic models with explicit conversion to and from MongoDB documents.

Stored document:
    {
        "_id":     ObjectId("..."),          store-assigned, immutable
        "title":   "...",
        "content": "...",
        "author":  {"firstName": "...", "lastName": "..."},
        "created": ISODate("...")             set on insert, never updated
    }
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, ConfigDict, Field


class Author(BaseModel):
    """Embedded author value; has no identity outside its post."""

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class BlogPost(BaseModel):
    """A stored blog post with its string-encoded ObjectId."""

    id: str
    title: Optional[str] = None
    content: Optional[str] = None
    author: Author = Field(default_factory=Author)
    created: Optional[datetime] = None

    @property
    def author_name(self) -> str:
        """Author flattened to "first last"."""
        return self.author.full_name

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "BlogPost":
        """Build from a raw MongoDB document (as returned by find/find_one)."""
        return cls(
            id=str(doc["_id"]),
            title=doc.get("title"),
            content=doc.get("content"),
            author=Author.model_validate(doc.get("author") or {}),
            created=doc.get("created"),
        )


def new_document(
    title: Optional[str],
    content: Optional[str],
    author: Optional[Author],
    created: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the document inserted for a new post.

    Fields the caller did not supply are left out rather than stored as null.
    """
    doc: Dict[str, Any] = {}
    if title is not None:
        doc["title"] = title
    if content is not None:
        doc["content"] = content
    if author is not None:
        doc["author"] = author.model_dump(by_alias=True, exclude_none=True)
    doc["created"] = created or datetime.now(timezone.utc)
    return doc


def parse_object_id(value: str) -> Optional[ObjectId]:
    """ObjectId for a path id, or None when the string is not a valid ObjectId."""
    if not ObjectId.is_valid(value):
        return None
    return ObjectId(value)
