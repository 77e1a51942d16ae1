import pytest

from dataBase import BOOK_STATS, BOOKS
from errors import PersistenceError


class TestBookRepository:
    @pytest.mark.asyncio
    async def test_create_keys_by_isbn(self, repos, db, sample_book):
        key = await repos.books.create(sample_book.model_dump())

        assert key == sample_book.isbn
        assert sample_book.isbn in db[BOOKS].documents
        book = await repos.books.get_by_isbn(sample_book.isbn)
        assert book.title == "The Quiet Library"
        assert book.createdAt is not None

    @pytest.mark.asyncio
    async def test_check_then_create_is_idempotent(self, repos, db, sample_book):
        for _ in range(2):
            if not await repos.books.exists(sample_book.isbn):
                await repos.books.create(sample_book.model_dump())

        assert len(db[BOOKS].documents) == 1

    @pytest.mark.asyncio
    async def test_missing_book(self, repos):
        assert await repos.books.get_by_isbn("0000000000000") is None
        assert await repos.books.exists("0000000000000") is False

    @pytest.mark.asyncio
    async def test_get_recent_orders_newest_first(self, repos, sample_book):
        for index in range(3):
            data = sample_book.model_dump()
            data["isbn"] = f"978000000000{index}"
            data["title"] = f"Book {index}"
            await repos.books.create(data)

        recent = await repos.books.get_recent(limit=2)

        assert [book.title for book in recent] == ["Book 2", "Book 1"]

    @pytest.mark.asyncio
    async def test_delete(self, repos, sample_book):
        await repos.books.create(sample_book.model_dump())

        await repos.books.delete(sample_book.isbn)

        assert await repos.books.exists(sample_book.isbn) is False

    @pytest.mark.asyncio
    async def test_exists_swallows_errors(self, repos, db, sample_book):
        await repos.books.create(sample_book.model_dump())
        db[BOOKS].fail_on.add("find_one")

        assert await repos.books.exists(sample_book.isbn) is False

    @pytest.mark.asyncio
    async def test_list_failure(self, repos, db):
        db[BOOKS].fail_on.add("find")

        with pytest.raises(PersistenceError, match="Could not load the book list."):
            await repos.books.get_recent()


class TestBookStatsRepository:
    @pytest.fixture
    def seed_stats(self, db):
        stats = db[BOOK_STATS]
        stats.documents = {
            "111": {"_id": "111", "isbn": "111", "totalReaders": 5, "totalLikes": 2, "averageRating": 4.5,
                    "ratingDistribution": {"0": 0, "4": 1, "5": 4}},
            "222": {"_id": "222", "isbn": "222", "totalReaders": 12, "totalLikes": 9, "averageRating": 3.1,
                    "ratingDistribution": {"3": 12}, "genderStats": {"male": 3, "female": 8, "other": 1}},
            "333": {"_id": "333", "isbn": "333", "totalReaders": 1, "totalLikes": 0, "averageRating": 10.0,
                    "ageStats": {"20s": 1}},
        }

    @pytest.mark.asyncio
    async def test_get_by_isbn(self, repos, seed_stats):
        stats = await repos.book_stats.get_by_isbn("222")

        assert stats.totalReaders == 12
        assert stats.genderStats.female == 8
        assert await repos.book_stats.get_by_isbn("999") is None

    @pytest.mark.asyncio
    async def test_rankings(self, repos, seed_stats):
        popular = await repos.book_stats.get_popular(limit=2)
        top_rated = await repos.book_stats.get_top_rated()

        assert [s.isbn for s in popular] == ["222", "111"]
        assert [s.isbn for s in top_rated] == ["333", "111", "222"]
