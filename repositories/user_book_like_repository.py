from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from dataBase import USER_BOOK_LIKES, USER_BOOKS
from errors import AlreadyLikedError, DomainError, LikeNotFoundError, UserBookNotFoundError
from models.social_models import UserBookLikeDocument
from repositories.base import BaseRepository


class UserBookLikeRepository(BaseRepository):
    """Likes on other users' library entries.

    Each like is paired with the target entry's denormalized ``likesCount``.
    Both writes go through one transaction so the like document and the
    counter never change independently.
    """

    collection_name = USER_BOOK_LIKES

    @property
    def user_books(self):
        return self.db[USER_BOOKS]

    def _counter_update(self, delta: int):
        return {"$inc": {"likesCount": delta}, "$currentDate": {"updatedAt": True}}

    async def create(self, user_book_id: str, user_id: str) -> str:
        user_book_key = self.to_object_id(user_book_id)
        if user_book_key is None:
            raise UserBookNotFoundError()
        pair = {"userBookId": user_book_id, "userId": user_id}
        key = ObjectId()
        try:
            async with await self.db.client.start_session() as session:
                async with session.start_transaction():
                    # Checked inside the transaction: a concurrent duplicate
                    # also writes the same counter and is aborted by the store.
                    if await self.collection.find_one(pair, session=session):
                        raise AlreadyLikedError()
                    await self.write_new(key, pair, stamp=("createdAt",), session=session)
                    counter = await self.user_books.update_one(
                        {"_id": user_book_key}, self._counter_update(1), session=session
                    )
                    if counter.matched_count == 0:
                        raise UserBookNotFoundError()
            return str(key)
        except DomainError:
            raise
        except Exception:
            raise self.persistence_error("Could not add the like.") from None

    async def delete(self, user_book_id: str, user_id: str) -> None:
        user_book_key = self.to_object_id(user_book_id)
        if user_book_key is None:
            raise LikeNotFoundError()
        pair = {"userBookId": user_book_id, "userId": user_id}
        try:
            async with await self.db.client.start_session() as session:
                async with session.start_transaction():
                    like = await self.collection.find_one(pair, session=session)
                    if not like:
                        raise LikeNotFoundError()
                    await self.collection.delete_one({"_id": like["_id"]}, session=session)
                    counter = await self.user_books.update_one(
                        {"_id": user_book_key}, self._counter_update(-1), session=session
                    )
                    if counter.matched_count == 0:
                        raise UserBookNotFoundError()
        except DomainError:
            raise
        except Exception:
            raise self.persistence_error("Could not remove the like.") from None

    async def get_by_user_book_id_and_user_id(self, user_book_id: str, user_id: str) -> Optional[UserBookLikeDocument]:
        try:
            like = await self.collection.find_one({"userBookId": user_book_id, "userId": user_id})
        except Exception:
            raise self.persistence_error("Could not load the like.") from None
        if not like:
            return None
        return UserBookLikeDocument(**self.with_id(like))

    async def get_by_user_id(self, user_id: str) -> List[UserBookLikeDocument]:
        try:
            likes = []
            cursor = self.collection.find({"userId": user_id}).sort("createdAt", DESCENDING)
            async for like in cursor:
                likes.append(UserBookLikeDocument(**self.with_id(like)))
            return likes
        except Exception:
            raise self.persistence_error("Could not load the liked books.") from None

    async def is_liked(self, user_book_id: str, user_id: str) -> bool:
        try:
            return await self.collection.find_one({"userBookId": user_book_id, "userId": user_id}) is not None
        except Exception:
            return self.check_failed("is_liked")
