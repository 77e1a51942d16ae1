from .users_routes import router as users_routes
from .books_routes import router as books_routes
from .user_books_routes import router as user_books_routes
from .files_routes import router as files_routes

__all__ = [
    'users_routes',
    'books_routes',
    'user_books_routes',
    'files_routes'
]
