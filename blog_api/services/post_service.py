"""
Blog API — Post Service (Document Store Adapter)
==================================================

What:  Create/read/update/delete of BlogPost documents in MongoDB.
Why:   Keeps every MongoDB call in one place, independent of HTTP concerns.
How:   Each method performs exactly one collection operation against the
       database handle it is given, and converts raw documents to BlogPost.
Who:   Called by the /posts route handlers and by the integration tests.

Absence semantics:
    get_post()    → None when nothing matches (the route turns that into 404)
    update_post() → no signal when nothing matches
    delete_post() → no signal when nothing matches
    Ids that are not valid ObjectIds are treated as matching nothing.

Design Decision:
    PostService is stateless; it receives the database handle on every call.
    There is no shared connection inside the service, so tests can pass a
    mocked handle directly.
"""

import logging
from typing import Any, Dict, List, Optional

from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from blog_api.database import POSTS_COLLECTION
from blog_api.exceptions import StoreError
from blog_api.models.post import Author, BlogPost, new_document, parse_object_id

logger = logging.getLogger(__name__)


class PostService:
    """
    Store adapter for blog posts.

    Error Handling Strategy:
        Driver failures (PyMongoError) are wrapped in StoreError with the
        driver's error type in the context. Nothing is retried.
    """

    def _collection(self, db: AsyncDatabase) -> AsyncCollection:
        return db[POSTS_COLLECTION]

    async def create_post(
        self,
        db: AsyncDatabase,
        title: Optional[str],
        content: Optional[str],
        author: Optional[Author],
    ) -> BlogPost:
        """
        Insert a new post; the store assigns `_id`, we set `created`.

        Fields are stored as given. Nothing here checks for missing values.
        """
        doc = new_document(title=title, content=content, author=author)
        try:
            result = await self._collection(db).insert_one(doc)
        except PyMongoError as e:
            logger.error("Database error creating post: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not create the post. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        stored = {**doc, "_id": result.inserted_id}
        logger.info("Post created: %s", result.inserted_id)
        return BlogPost.from_document(stored)

    async def list_posts(self, db: AsyncDatabase) -> List[BlogPost]:
        """All posts in natural order (insertion order in practice)."""
        try:
            docs = await self._collection(db).find({}).to_list(None)
        except PyMongoError as e:
            logger.error("Database error listing posts: %s", str(e), exc_info=True)
            raise StoreError(
                message="Could not retrieve posts. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e

        return [BlogPost.from_document(doc) for doc in docs]

    async def get_post(self, db: AsyncDatabase, post_id: str) -> Optional[BlogPost]:
        """The post with this id, or None."""
        oid = parse_object_id(post_id)
        if oid is None:
            logger.debug("Lookup with malformed post id %r", post_id)
            return None

        try:
            doc = await self._collection(db).find_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error fetching post %s: %s", post_id, str(e))
            raise StoreError(
                message="Could not retrieve the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e

        if doc is None:
            return None
        return BlogPost.from_document(doc)

    async def update_post(
        self, db: AsyncDatabase, post_id: str, fields: Dict[str, Any]
    ) -> None:
        """
        `$set` only the supplied fields on the post with this id.

        `fields` uses MongoDB paths (e.g. "author.firstName"). An empty dict
        or an unmatched id leaves the collection untouched.
        """
        oid = parse_object_id(post_id)
        if oid is None or not fields:
            return

        try:
            result = await self._collection(db).update_one({"_id": oid}, {"$set": fields})
        except PyMongoError as e:
            logger.error("Database error updating post %s: %s", post_id, str(e))
            raise StoreError(
                message="Could not update the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e

        logger.info(
            "Post %s updated: fields=%s matched=%d",
            post_id,
            sorted(fields),
            result.matched_count,
        )

    async def delete_post(self, db: AsyncDatabase, post_id: str) -> None:
        """Remove the post with this id if it exists."""
        oid = parse_object_id(post_id)
        if oid is None:
            return

        try:
            result = await self._collection(db).delete_one({"_id": oid})
        except PyMongoError as e:
            logger.error("Database error deleting post %s: %s", post_id, str(e))
            raise StoreError(
                message="Could not delete the post. Please try again.",
                context={"post_id": post_id, "error_type": type(e).__name__},
            ) from e

        logger.info("Post %s deleted: removed=%d", post_id, result.deleted_count)

    async def count_posts(self, db: AsyncDatabase) -> int:
        try:
            return await self._collection(db).count_documents({})
        except PyMongoError as e:
            logger.error("Database error counting posts: %s", str(e))
            raise StoreError(
                message="Could not count posts. Please try again.",
                context={"error_type": type(e).__name__},
            ) from e


post_service = PostService()
