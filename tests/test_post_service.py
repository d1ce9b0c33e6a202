"""
Blog API — Post Service Unit Tests
=====================================

What:  Tests for PostService, the document store adapter.
How:   Uses a mocked collection (no real MongoDB).

What we test:
    ✅ Create inserts the stored shape and returns the new id
    ✅ Get returns None for unknown and malformed ids
    ✅ Update sends only supplied fields; skips the store when nothing changes
    ✅ Delete of a missing or malformed id is silent
    ✅ Driver errors surface as StoreError
"""

from datetime import datetime

import pytest
from bson import ObjectId
from pymongo.errors import AutoReconnect, ServerSelectionTimeoutError

from blog_api.exceptions import StoreError
from blog_api.models.post import Author
from blog_api.services.post_service import PostService


class TestPostServiceCreate:
    """Tests for create_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_create_post_stores_composite_author(self, mock_db, mock_collection):
        new_id = ObjectId()
        mock_collection.insert_one.return_value.inserted_id = new_id

        post = await self.service.create_post(
            mock_db,
            title="Hello",
            content="World",
            author=Author(first_name="Ada", last_name="Lovelace"),
        )

        inserted = mock_collection.insert_one.call_args.args[0]
        assert inserted["title"] == "Hello"
        assert inserted["content"] == "World"
        assert inserted["author"] == {"firstName": "Ada", "lastName": "Lovelace"}
        assert isinstance(inserted["created"], datetime)

        assert post.id == str(new_id)
        assert post.author_name == "Ada Lovelace"
        assert post.created == inserted["created"]

    @pytest.mark.asyncio
    async def test_create_post_omits_missing_fields(self, mock_db, mock_collection):
        new_id = ObjectId()
        mock_collection.insert_one.return_value.inserted_id = new_id

        post = await self.service.create_post(
            mock_db, title="Only a title", content=None, author=None
        )

        # The driver itself may add _id to the inserted dict
        inserted = mock_collection.insert_one.call_args.args[0]
        assert set(inserted) - {"_id"} == {"title", "created"}
        assert post.id == str(new_id)
        assert post.content is None

    @pytest.mark.asyncio
    async def test_create_post_store_failure(self, mock_db, mock_collection):
        mock_collection.insert_one.side_effect = ServerSelectionTimeoutError("no servers")

        with pytest.raises(StoreError) as exc_info:
            await self.service.create_post(mock_db, title="t", content="c", author=None)

        assert exc_info.value.context["error_type"] == "ServerSelectionTimeoutError"


class TestPostServiceRead:
    """Tests for list_posts, get_post and count_posts."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_list_posts_empty(self, mock_db):
        assert await self.service.list_posts(mock_db) == []

    @pytest.mark.asyncio
    async def test_list_posts_converts_documents(
        self, mock_db, mock_collection, sample_post_document
    ):
        second = dict(sample_post_document, _id=ObjectId(), title="Second")
        mock_collection.find.return_value.to_list.return_value = [sample_post_document, second]

        posts = await self.service.list_posts(mock_db)

        assert [p.title for p in posts] == ["Space", "Second"]
        assert posts[0].id == str(sample_post_document["_id"])
        mock_collection.find.assert_called_once_with({})

    @pytest.mark.asyncio
    async def test_list_posts_store_failure(self, mock_db, mock_collection):
        mock_collection.find.return_value.to_list.side_effect = AutoReconnect("lost")

        with pytest.raises(StoreError):
            await self.service.list_posts(mock_db)

    @pytest.mark.asyncio
    async def test_get_post_found(self, mock_db, mock_collection, sample_post_document):
        mock_collection.find_one.return_value = sample_post_document
        post_id = str(sample_post_document["_id"])

        post = await self.service.get_post(mock_db, post_id)

        assert post.id == post_id
        assert post.author.first_name == "Ada"
        assert post.author.last_name == "Lovelace"
        mock_collection.find_one.assert_awaited_once_with({"_id": sample_post_document["_id"]})

    @pytest.mark.asyncio
    async def test_get_post_not_found_returns_none(self, mock_db):
        assert await self.service.get_post(mock_db, str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_get_post_malformed_id_returns_none(self, mock_db, mock_collection):
        assert await self.service.get_post(mock_db, "not-an-object-id") is None
        mock_collection.find_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_count_posts(self, mock_db, mock_collection):
        mock_collection.count_documents.return_value = 10
        assert await self.service.count_posts(mock_db) == 10


class TestPostServiceWrite:
    """Tests for update_post and delete_post."""

    def setup_method(self):
        self.service = PostService()

    @pytest.mark.asyncio
    async def test_update_post_sets_only_supplied_fields(self, mock_db, mock_collection):
        post_id = ObjectId()

        await self.service.update_post(
            mock_db, str(post_id), {"title": "Space", "author.lastName": "Byron"}
        )

        mock_collection.update_one.assert_awaited_once_with(
            {"_id": post_id}, {"$set": {"title": "Space", "author.lastName": "Byron"}}
        )

    @pytest.mark.asyncio
    async def test_update_post_without_fields_skips_store(self, mock_db, mock_collection):
        await self.service.update_post(mock_db, str(ObjectId()), {})
        mock_collection.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_post_missing_id_is_silent(self, mock_db, mock_collection):
        mock_collection.update_one.return_value.matched_count = 0

        result = await self.service.update_post(mock_db, str(ObjectId()), {"title": "x"})

        assert result is None

    @pytest.mark.asyncio
    async def test_update_post_malformed_id_is_silent(self, mock_db, mock_collection):
        await self.service.update_post(mock_db, "42", {"title": "x"})
        mock_collection.update_one.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_post(self, mock_db, mock_collection):
        post_id = ObjectId()

        await self.service.delete_post(mock_db, str(post_id))

        mock_collection.delete_one.assert_awaited_once_with({"_id": post_id})

    @pytest.mark.asyncio
    async def test_delete_post_missing_id_is_silent(self, mock_db, mock_collection):
        mock_collection.delete_one.return_value.deleted_count = 0
        assert await self.service.delete_post(mock_db, str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_delete_post_store_failure(self, mock_db, mock_collection):
        mock_collection.delete_one.side_effect = AutoReconnect("lost")

        with pytest.raises(StoreError) as exc_info:
            await self.service.delete_post(mock_db, str(ObjectId()))

        assert "post_id" in exc_info.value.context
