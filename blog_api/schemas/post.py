"""
Blog API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the JSON contract of the /posts endpoints.
Why:   Request parsing, response serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies and serialize responses.

Wire vs stored shape:
    Requests carry `author` as {"firstName", "lastName"}; responses carry it as
    the single string "first last". The conversion lives in `serialize_post()`
    and `PostUpdate.to_update_fields()`, not in the stored model.

Validation policy:
    Only type coercion. Fields are optional on create and update; numbers sent
    for text fields are coerced to strings. Unknown fields are ignored.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from blog_api.models.post import Author, BlogPost


_BODY_CONFIG = ConfigDict(coerce_numbers_to_str=True, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class AuthorIn(BaseModel):
    """Author as sent by clients."""

    model_config = _BODY_CONFIG

    firstName: Optional[str] = Field(default=None, description="Author first name")
    lastName: Optional[str] = Field(default=None, description="Author last name")

    def to_author(self) -> Author:
        return Author(first_name=self.firstName, last_name=self.lastName)


class PostCreate(BaseModel):
    """
    Body of POST /posts.

    Example:
        {
            "title": "Space",
            "content": "Space is so spacious",
            "author": {"firstName": "Ada", "lastName": "Lovelace"}
        }
    """

    model_config = _BODY_CONFIG

    title: Optional[str] = Field(default=None, description="Post title")
    content: Optional[str] = Field(default=None, description="Post body text")
    author: Optional[AuthorIn] = Field(default=None, description="Post author")


class PostUpdate(BaseModel):
    """
    Body of PUT /posts/{id}: any subset of the updatable fields.

    `id` is optional; when present it must equal the path id.
    """

    model_config = _BODY_CONFIG

    id: Optional[str] = Field(default=None, description="Must match the path id if sent")
    title: Optional[str] = Field(default=None)
    content: Optional[str] = Field(default=None)
    author: Optional[AuthorIn] = Field(default=None)

    def to_update_fields(self) -> Dict[str, Any]:
        """
        MongoDB `$set` payload for the supplied fields only.

        Author parts are addressed with dotted paths so that sending only
        `firstName` keeps the stored `lastName`.
        """
        fields: Dict[str, Any] = {}
        if self.title is not None:
            fields["title"] = self.title
        if self.content is not None:
            fields["content"] = self.content
        if self.author is not None:
            if self.author.firstName is not None:
                fields["author.firstName"] = self.author.firstName
            if self.author.lastName is not None:
                fields["author.lastName"] = self.author.lastName
        return fields


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class PostResponse(BaseModel):
    """Serialized blog post. Always exactly these four keys."""

    id: str = Field(description="Post identifier (ObjectId hex string)")
    title: Optional[str] = Field(default=None, description="Post title")
    content: Optional[str] = Field(default=None, description="Post body text")
    author: str = Field(description='Author flattened to "firstName lastName"')


def serialize_post(post: BlogPost) -> PostResponse:
    """Stored post → wire representation, flattening the author."""
    return PostResponse(
        id=post.id,
        title=post.title,
        content=post.content,
        author=post.author_name,
    )


def serialize_posts(posts: List[BlogPost]) -> List[PostResponse]:
    return [serialize_post(post) for post in posts]


# ══════════════════════════════════════════════════════════════════════════
# Error & Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "bad_request",
            "message": "Request path id (abc) and request body id (def) must match",
            "request_id": "1f2e3d4c"
        }
    """

    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
    details: Optional[List[Dict[str, Any]]] = Field(
        default=None, description="Field-level errors (validation_error only)"
    )


class HealthResponse(BaseModel):
    """Health check body for GET /health."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
