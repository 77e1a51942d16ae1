from typing import Any, Dict, List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from dataBase import USER_BOOKS
from errors import UserBookNotFoundError
from models.user_book_model import ReadingStatus, UserBookDocument
from repositories.base import BaseRepository

# likesCount is only ever moved by the like transaction
IMMUTABLE_FIELDS = ("_id", "id", "userId", "isbn", "createdAt", "updatedAt", "likesCount")


class UserBookRepository(BaseRepository):
    """Library entries: one document per book a user has registered."""

    collection_name = USER_BOOKS

    async def create(self, data: Dict[str, Any]) -> str:
        key = ObjectId()
        try:
            await self.write_new(key, {**data, "likesCount": 0})
            return str(key)
        except Exception:
            raise self.persistence_error("Could not register the book.") from None

    async def get_by_user_id(self, user_id: str, include_private: bool = False) -> List[UserBookDocument]:
        query: Dict[str, Any] = {"userId": user_id}
        # Callers that are not the owner only ever see public entries
        if not include_private:
            query["isPublic"] = True
        return await self._list(query, "Could not load the book list.")

    async def get_by_status(
        self, user_id: str, status: ReadingStatus, include_private: bool = False
    ) -> List[UserBookDocument]:
        query: Dict[str, Any] = {"userId": user_id, "status": ReadingStatus(status).value}
        if not include_private:
            query["isPublic"] = True
        return await self._list(query, "Could not load the book list.")

    async def get_by_user_id_and_isbn(self, user_id: str, isbn: str) -> Optional[UserBookDocument]:
        try:
            user_book = await self.collection.find_one({"userId": user_id, "isbn": isbn})
        except Exception:
            raise self.persistence_error("Could not load the book entry.") from None
        if not user_book:
            return None
        return UserBookDocument(**self.with_id(user_book))

    async def get_by_id(self, user_book_id: str) -> Optional[UserBookDocument]:
        key = self.to_object_id(user_book_id)
        if key is None:
            return None
        try:
            user_book = await self.collection.find_one({"_id": key})
        except Exception:
            raise self.persistence_error("Could not load the book entry.") from None
        if not user_book:
            return None
        return UserBookDocument(**self.with_id(user_book))

    async def update(self, user_book_id: str, updates: Dict[str, Any]) -> None:
        key = self.to_object_id(user_book_id)
        if key is None:
            raise UserBookNotFoundError()
        fields = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
        try:
            result = await self.collection.update_one({"_id": key}, self.update_document(fields))
        except Exception:
            raise self.persistence_error("Could not update the book entry.") from None
        if result.matched_count == 0:
            raise UserBookNotFoundError()

    async def delete(self, user_book_id: str) -> None:
        key = self.to_object_id(user_book_id)
        if key is None:
            return
        try:
            await self.collection.delete_one({"_id": key})
        except Exception:
            raise self.persistence_error("Could not delete the book entry.") from None

    async def check_duplicate(self, user_id: str, isbn: str) -> bool:
        try:
            return await self.collection.find_one({"userId": user_id, "isbn": isbn}) is not None
        except Exception:
            return self.check_failed("check_duplicate")

    async def get_public_by_isbn(self, isbn: str) -> List[UserBookDocument]:
        return await self._list({"isbn": isbn, "isPublic": True}, "Could not load the book entries.")

    async def _list(self, query: Dict[str, Any], message: str) -> List[UserBookDocument]:
        try:
            user_books = []
            cursor = self.collection.find(query).sort("createdAt", DESCENDING)
            async for user_book in cursor:
                user_books.append(UserBookDocument(**self.with_id(user_book)))
            return user_books
        except Exception:
            raise self.persistence_error(message) from None
