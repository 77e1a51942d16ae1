from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from dataBase import BOOKS
from models.book_model import BookDocument
from repositories.base import BaseRepository


class BookRepository(BaseRepository):
    """Canonical catalog entries keyed by ISBN, mirrored from the search API."""

    collection_name = BOOKS

    async def create(self, book_data: Dict[str, Any]) -> str:
        isbn = book_data["isbn"]
        try:
            await self.write_new(isbn, book_data)
            return isbn
        except Exception:
            raise self.persistence_error("Could not save the book.") from None

    async def get_by_isbn(self, isbn: str) -> Optional[BookDocument]:
        try:
            book = await self.collection.find_one({"_id": isbn})
        except Exception:
            raise self.persistence_error("Could not load the book.") from None
        if not book:
            return None
        return BookDocument(**self.without_id(book))

    async def get_recent(self, limit: int = 20) -> List[BookDocument]:
        try:
            books = []
            cursor = self.collection.find({}).sort("createdAt", DESCENDING).limit(limit)
            async for book in cursor:
                books.append(BookDocument(**self.without_id(book)))
            return books
        except Exception:
            raise self.persistence_error("Could not load the book list.") from None

    async def delete(self, isbn: str) -> None:
        try:
            await self.collection.delete_one({"_id": isbn})
        except Exception:
            raise self.persistence_error("Could not delete the book.") from None

    async def exists(self, isbn: str) -> bool:
        try:
            return await self.collection.find_one({"_id": isbn}) is not None
        except Exception:
            return self.check_failed("exists")
