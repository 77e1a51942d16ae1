from typing import Optional


class PersistenceError(Exception):
    """The document store failed (transport, permission or unknown error)."""


class DomainError(Exception):
    """A business rule rejected the request."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConflictError(DomainError):
    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


class DuplicateRegistrationError(ConflictError):
    def __init__(self, message: str = "This book is already in your library."):
        super().__init__(message, code="ALREADY_REGISTERED")


class AlreadyLikedError(ConflictError):
    def __init__(self, message: str = "You already liked this book."):
        super().__init__(message, code="ALREADY_LIKED")


class NotFoundError(DomainError):
    pass


class UserNotFoundError(NotFoundError):
    def __init__(self, message: str = "User not found."):
        super().__init__(message)


class UserBookNotFoundError(NotFoundError):
    def __init__(self, message: str = "Library entry not found."):
        super().__init__(message)


class LikeNotFoundError(NotFoundError):
    def __init__(self, message: str = "Like not found."):
        super().__init__(message)


class FollowNotFoundError(NotFoundError):
    def __init__(self, message: str = "Follow relationship not found."):
        super().__init__(message)


class BookmarkNotFoundError(NotFoundError):
    def __init__(self, message: str = "Bookmark not found."):
        super().__init__(message)


class ForbiddenError(DomainError):
    pass
