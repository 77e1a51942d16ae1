from typing import Any, Dict, Optional

from dataBase import USERS
from errors import UserNotFoundError
from models.user_model import LibraryVisibility, UserDocument
from repositories.base import BaseRepository

IMMUTABLE_FIELDS = ("_id", "userId", "createdAt", "updatedAt")


class UserRepository(BaseRepository):
    collection_name = USERS

    async def create(self, user_id: str, user_data: Dict[str, Any]) -> str:
        """Write the user document keyed by ``user_id``.

        This is a plain overwrite: uniqueness of ``userId`` and ``nickname``
        is checked by the caller beforehand, so two racing signups with the
        same id end with the later write.
        """
        try:
            user_doc = {
                "userId": user_id,
                "uid": user_data.get("uid") or "",
                "nickname": user_data.get("nickname") or "User",
                "email": user_data.get("email") or "",
                "photoURL": user_data.get("photoURL"),
                "bio": user_data.get("bio"),
                "birth": user_data.get("birth"),
                "gender": user_data.get("gender"),
                "libraryVisibility": user_data.get("libraryVisibility") or LibraryVisibility.PUBLIC.value,
            }
            await self.write_new(user_id, user_doc)
            return user_id
        except Exception:
            raise self.persistence_error("Could not create the user.") from None

    async def get_by_uid(self, uid: str) -> Optional[UserDocument]:
        try:
            user = await self.collection.find_one({"uid": uid})
        except Exception:
            raise self.persistence_error("Could not load the user.") from None
        if not user:
            return None
        return UserDocument(**self.without_id(user))

    async def get_by_id(self, user_id: str) -> Optional[UserDocument]:
        try:
            user = await self.collection.find_one({"_id": user_id})
        except Exception:
            raise self.persistence_error("Could not load the user.") from None
        if not user:
            return None
        return UserDocument(**self.without_id(user))

    async def update(self, user_id: str, updates: Dict[str, Any]) -> None:
        fields = {k: v for k, v in updates.items() if k not in IMMUTABLE_FIELDS}
        try:
            result = await self.collection.update_one({"_id": user_id}, self.update_document(fields))
        except Exception:
            raise self.persistence_error("Could not update the user.") from None
        if result.matched_count == 0:
            raise UserNotFoundError()

    async def delete(self, user_id: str) -> None:
        try:
            await self.collection.delete_one({"_id": user_id})
        except Exception:
            raise self.persistence_error("Could not delete the user.") from None

    async def check_user_id_exists(self, user_id: str) -> bool:
        try:
            return await self.collection.find_one({"_id": user_id}) is not None
        except Exception:
            return self.check_failed("check_user_id_exists")

    async def check_nickname_exists(self, nickname: str) -> bool:
        try:
            return await self.collection.find_one({"nickname": nickname}) is not None
        except Exception:
            return self.check_failed("check_nickname_exists")
