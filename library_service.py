import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from errors import DuplicateRegistrationError, ForbiddenError, UserBookNotFoundError, UserNotFoundError
from models.book_model import BookMetadata
from models.book_register_model import BookRegisterForm, UserBookUpdateForm
from models.user_book_model import ReadingStatus, UserBookDocument, UserBookWithBook
from models.user_model import LibraryVisibility, UserDocument
from repositories import Repositories

logger = logging.getLogger(__name__)


def _to_datetime(value: Optional[date]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def _entry_fields(values: Dict[str, Any]) -> Dict[str, Any]:
    fields = dict(values)
    for key in ("startDate", "endDate"):
        if key in fields:
            fields[key] = _to_datetime(fields[key])
    if "status" in fields and fields["status"] is not None:
        fields["status"] = ReadingStatus(fields["status"]).value
    return fields


async def register_book(
    repos: Repositories,
    user_id: str,
    book: BookMetadata,
    form: BookRegisterForm,
) -> UserBookDocument:
    """Add a catalog book to a user's library.

    The catalog entry is created on first registration of its ISBN. A second
    registration of the same ISBN by the same user is rejected; the check is
    not isolated from concurrent registrations.
    """
    if not await repos.books.exists(book.isbn):
        await repos.books.create(book.model_dump())
        logger.info("Mirrored catalog book %s", book.isbn)

    if await repos.user_books.check_duplicate(user_id, book.isbn):
        raise DuplicateRegistrationError()

    entry = _entry_fields(form.model_dump())
    entry["tags"] = entry.get("tags") or []
    entry["userId"] = user_id
    entry["isbn"] = book.isbn

    user_book_id = await repos.user_books.create(entry)
    created = await repos.user_books.get_by_id(user_book_id)
    if created is None:
        raise UserBookNotFoundError()
    return created


async def can_view_library(repos: Repositories, owner: UserDocument, viewer: Optional[UserDocument]) -> bool:
    if viewer is not None and viewer.userId == owner.userId:
        return True
    if owner.libraryVisibility == LibraryVisibility.PUBLIC:
        return True
    if owner.libraryVisibility == LibraryVisibility.FOLLOWERS and viewer is not None:
        return await repos.followers.is_following(viewer.userId, owner.userId)
    return False


def _hide_private_fields(entry: UserBookDocument) -> UserBookDocument:
    # memos are notes to self
    return entry.model_copy(update={"memo": None})


async def get_library(
    repos: Repositories,
    owner_user_id: str,
    viewer: Optional[UserDocument],
    status: Optional[ReadingStatus] = None,
) -> List[UserBookDocument]:
    owner = await repos.users.get_by_id(owner_user_id)
    if owner is None:
        raise UserNotFoundError()
    if not await can_view_library(repos, owner, viewer):
        raise ForbiddenError("This library is not shared with you.")

    is_owner = viewer is not None and viewer.userId == owner.userId
    if status is None:
        entries = await repos.user_books.get_by_user_id(owner.userId, include_private=is_owner)
    else:
        entries = await repos.user_books.get_by_status(owner.userId, status, include_private=is_owner)

    if is_owner:
        return entries
    return [_hide_private_fields(entry) for entry in entries]


async def get_library_with_books(
    repos: Repositories,
    owner_user_id: str,
    viewer: Optional[UserDocument],
    status: Optional[ReadingStatus] = None,
) -> List[UserBookWithBook]:
    entries = await get_library(repos, owner_user_id, viewer, status)
    joined = []
    for entry in entries:
        book = await repos.books.get_by_isbn(entry.isbn)
        joined.append(UserBookWithBook(**entry.model_dump(), book=book))
    return joined


async def get_user_book(
    repos: Repositories,
    user_book_id: str,
    viewer: Optional[UserDocument],
) -> UserBookDocument:
    entry = await repos.user_books.get_by_id(user_book_id)
    if entry is None:
        raise UserBookNotFoundError()
    if viewer is not None and viewer.userId == entry.userId:
        return entry
    # private entries do not exist for anybody but the owner
    if not entry.isPublic:
        raise UserBookNotFoundError()

    owner = await repos.users.get_by_id(entry.userId)
    if owner is None or not await can_view_library(repos, owner, viewer):
        raise ForbiddenError("This library is not shared with you.")
    return _hide_private_fields(entry)


async def _owned_entry(repos: Repositories, user_book_id: str, owner: UserDocument) -> UserBookDocument:
    entry = await repos.user_books.get_by_id(user_book_id)
    if entry is None:
        raise UserBookNotFoundError()
    if entry.userId != owner.userId:
        raise ForbiddenError("Only the owner can change this entry.")
    return entry


async def update_user_book(
    repos: Repositories,
    user_book_id: str,
    owner: UserDocument,
    form: UserBookUpdateForm,
) -> UserBookDocument:
    await _owned_entry(repos, user_book_id, owner)
    updates = form.model_dump(exclude_unset=True)
    for required in ("status", "rating", "isPublic"):
        if updates.get(required, "") is None:
            del updates[required]
    if "tags" in updates and updates["tags"] is None:
        updates["tags"] = []
    await repos.user_books.update(user_book_id, _entry_fields(updates))
    updated = await repos.user_books.get_by_id(user_book_id)
    if updated is None:
        raise UserBookNotFoundError()
    return updated


async def delete_user_book(repos: Repositories, user_book_id: str, owner: UserDocument) -> None:
    await _owned_entry(repos, user_book_id, owner)
    await repos.user_books.delete(user_book_id)


async def like_user_book(repos: Repositories, user_book_id: str, user: UserDocument) -> str:
    # liking requires being able to see the entry
    await get_user_book(repos, user_book_id, user)
    return await repos.likes.create(user_book_id, user.userId)


async def unlike_user_book(repos: Repositories, user_book_id: str, user: UserDocument) -> None:
    await repos.likes.delete(user_book_id, user.userId)


async def get_public_readers(repos: Repositories, isbn: str) -> List[UserBookDocument]:
    """Public entries for an ISBN whose owners keep a public library."""
    entries = await repos.user_books.get_public_by_isbn(isbn)
    visible = []
    owners = {}
    for entry in entries:
        if entry.userId not in owners:
            owners[entry.userId] = await repos.users.get_by_id(entry.userId)
        owner = owners[entry.userId]
        if owner is not None and owner.libraryVisibility == LibraryVisibility.PUBLIC:
            visible.append(_hide_private_fields(entry))
    return visible
