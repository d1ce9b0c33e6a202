"""
Blog API — Posts Route Handlers
=================================

What:  The five /posts endpoints: list, create, read, update, delete.
How:   Each handler makes exactly one PostService call and serializes the
       result with serialize_post(). The database handle is injected with
       Depends(get_database).

Route Inventory:
    GET    /posts        → 200 [PostResponse]
    POST   /posts        → 201 PostResponse
    GET    /posts/{id}   → 200 PostResponse | 404
    PUT    /posts/{id}   → 204 | 400 on path/body id mismatch
    DELETE /posts/{id}   → 204 (also when the post does not exist)
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status
from pymongo.asynchronous.database import AsyncDatabase

from blog_api.database import get_database
from blog_api.exceptions import BadRequestError, NotFoundError
from blog_api.schemas.post import (
    ErrorResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    serialize_post,
    serialize_posts,
)
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/posts", tags=["Posts"])

_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[PostResponse],
    responses=_SERVER_ERROR,
    summary="List all blog posts",
)
async def list_posts(db: AsyncDatabase = Depends(get_database)) -> List[PostResponse]:
    posts = await post_service.list_posts(db)
    return serialize_posts(posts)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    responses=_SERVER_ERROR,
    summary="Create a blog post",
)
async def create_post(
    data: PostCreate,
    db: AsyncDatabase = Depends(get_database),
) -> PostResponse:
    """
    Create a post from `{title, content, author: {firstName, lastName}}`.

    Fields are stored as sent; missing fields are not rejected.
    """
    post = await post_service.create_post(
        db,
        title=data.title,
        content=data.content,
        author=data.author.to_author() if data.author else None,
    )
    return serialize_post(post)


@router.get(
    "/{post_id}",
    response_model=PostResponse,
    responses={
        404: {"description": "Post not found", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Get a single blog post by ID",
)
async def get_post(
    post_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> PostResponse:
    post = await post_service.get_post(db, post_id)
    if post is None:
        raise NotFoundError(resource="post", resource_id=post_id)
    return serialize_post(post)


@router.put(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Path id and body id differ", "model": ErrorResponse},
        **_SERVER_ERROR,
    },
    summary="Update some fields of a blog post",
)
async def update_post(
    post_id: str,
    data: PostUpdate,
    db: AsyncDatabase = Depends(get_database),
) -> Response:
    """
    Partial update: only `title`, `content` and `author` parts that are
    present in the body change. Updating a post that does not exist is
    not an error.
    """
    if data.id is not None and data.id != post_id:
        raise BadRequestError(
            message=(
                f"Request path id ({post_id}) and request body id ({data.id}) must match"
            ),
            field="id",
        )

    await post_service.update_post(db, post_id, data.to_update_fields())
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_SERVER_ERROR,
    summary="Delete a blog post",
)
async def delete_post(
    post_id: str,
    db: AsyncDatabase = Depends(get_database),
) -> Response:
    await post_service.delete_post(db, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
