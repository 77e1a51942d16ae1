from typing import List, Optional

from pymongo import DESCENDING

from dataBase import BOOK_STATS
from models.book_stats_models import BookStatsDocument
from repositories.base import BaseRepository


class BookStatsRepository(BaseRepository):
    """Read-only access to the per-ISBN aggregates built by the stats job."""

    collection_name = BOOK_STATS

    async def get_by_isbn(self, isbn: str) -> Optional[BookStatsDocument]:
        try:
            stats = await self.collection.find_one({"_id": isbn})
        except Exception:
            raise self.persistence_error("Could not load the book statistics.") from None
        if not stats:
            return None
        return BookStatsDocument(**self.without_id(stats))

    async def get_popular(self, limit: int = 20) -> List[BookStatsDocument]:
        return await self._top("totalReaders", limit, "Could not load the popular books.")

    async def get_top_rated(self, limit: int = 20) -> List[BookStatsDocument]:
        return await self._top("averageRating", limit, "Could not load the top rated books.")

    async def _top(self, field: str, limit: int, message: str) -> List[BookStatsDocument]:
        try:
            ranked = []
            cursor = self.collection.find({}).sort(field, DESCENDING).limit(limit)
            async for stats in cursor:
                ranked.append(BookStatsDocument(**self.without_id(stats)))
            return ranked
        except Exception:
            raise self.persistence_error(message) from None
