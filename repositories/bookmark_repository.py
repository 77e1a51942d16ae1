from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from dataBase import BOOKMARKS
from errors import BookmarkNotFoundError
from models.social_models import BookmarkDocument
from repositories.base import BaseRepository


class BookmarkRepository(BaseRepository):
    """Wish-list markers: books a user wants to read."""

    collection_name = BOOKMARKS

    async def create(self, user_id: str, isbn: str) -> str:
        key = ObjectId()
        try:
            await self.write_new(key, {"userId": user_id, "isbn": isbn}, stamp=("createdAt",))
            return str(key)
        except Exception:
            raise self.persistence_error("Could not add the bookmark.") from None

    async def get_by_user_id(self, user_id: str) -> List[BookmarkDocument]:
        try:
            bookmarks = []
            cursor = self.collection.find({"userId": user_id}).sort("createdAt", DESCENDING)
            async for bookmark in cursor:
                bookmarks.append(BookmarkDocument(**self.with_id(bookmark)))
            return bookmarks
        except Exception:
            raise self.persistence_error("Could not load the bookmarks.") from None

    async def get_by_user_id_and_isbn(self, user_id: str, isbn: str) -> Optional[BookmarkDocument]:
        try:
            bookmark = await self.collection.find_one({"userId": user_id, "isbn": isbn})
        except Exception:
            raise self.persistence_error("Could not load the bookmark.") from None
        if not bookmark:
            return None
        return BookmarkDocument(**self.with_id(bookmark))

    async def delete(self, user_id: str, isbn: str) -> None:
        bookmark = await self.get_by_user_id_and_isbn(user_id, isbn)
        if bookmark is None:
            raise BookmarkNotFoundError()
        try:
            await self.collection.delete_one({"_id": self.to_object_id(bookmark.id)})
        except Exception:
            raise self.persistence_error("Could not remove the bookmark.") from None

    async def is_bookmarked(self, user_id: str, isbn: str) -> bool:
        try:
            return await self.collection.find_one({"userId": user_id, "isbn": isbn}) is not None
        except Exception:
            return self.check_failed("is_bookmarked")
