from repositories.book_repository import BookRepository
from repositories.book_stats_repository import BookStatsRepository
from repositories.bookmark_repository import BookmarkRepository
from repositories.follower_repository import FollowerRepository
from repositories.user_book_like_repository import UserBookLikeRepository
from repositories.user_book_repository import UserBookRepository
from repositories.user_repository import UserRepository


class Repositories:
    """All entity repositories bound to one database handle."""

    def __init__(self, db):
        self.db = db
        self.users = UserRepository(db)
        self.books = BookRepository(db)
        self.user_books = UserBookRepository(db)
        self.bookmarks = BookmarkRepository(db)
        self.likes = UserBookLikeRepository(db)
        self.followers = FollowerRepository(db)
        self.book_stats = BookStatsRepository(db)


__all__ = [
    'Repositories',
    'UserRepository',
    'BookRepository',
    'UserBookRepository',
    'BookmarkRepository',
    'UserBookLikeRepository',
    'FollowerRepository',
    'BookStatsRepository',
]
