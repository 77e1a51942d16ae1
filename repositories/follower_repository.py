from typing import List, Optional

from bson import ObjectId
from pymongo import DESCENDING

from dataBase import FOLLOWERS
from errors import FollowNotFoundError
from models.social_models import FollowerDocument
from repositories.base import BaseRepository


class FollowerRepository(BaseRepository):
    """Directed follow edges: ``followerId`` follows ``followingId``."""

    collection_name = FOLLOWERS

    async def create(self, follower_id: str, following_id: str) -> str:
        key = ObjectId()
        try:
            await self.write_new(
                key, {"followerId": follower_id, "followingId": following_id}, stamp=("createdAt",)
            )
            return str(key)
        except Exception:
            raise self.persistence_error("Could not follow the user.") from None

    async def delete(self, follower_id: str, following_id: str) -> None:
        follow = await self.get_by_follower_id_and_following_id(follower_id, following_id)
        if follow is None:
            raise FollowNotFoundError()
        try:
            await self.collection.delete_one({"_id": self.to_object_id(follow.id)})
        except Exception:
            raise self.persistence_error("Could not unfollow the user.") from None

    async def get_by_follower_id_and_following_id(
        self, follower_id: str, following_id: str
    ) -> Optional[FollowerDocument]:
        try:
            follow = await self.collection.find_one({"followerId": follower_id, "followingId": following_id})
        except Exception:
            raise self.persistence_error("Could not load the follow relationship.") from None
        if not follow:
            return None
        return FollowerDocument(**self.with_id(follow))

    async def get_followings(self, user_id: str) -> List[FollowerDocument]:
        """Edges for the users ``user_id`` follows."""
        return await self._list({"followerId": user_id}, "Could not load the following list.")

    async def get_followers(self, user_id: str) -> List[FollowerDocument]:
        """Edges for the users following ``user_id``."""
        return await self._list({"followingId": user_id}, "Could not load the follower list.")

    async def is_following(self, follower_id: str, following_id: str) -> bool:
        try:
            return await self.collection.find_one({"followerId": follower_id, "followingId": following_id}) is not None
        except Exception:
            return self.check_failed("is_following")

    async def _list(self, query, message: str) -> List[FollowerDocument]:
        try:
            follows = []
            cursor = self.collection.find(query).sort("createdAt", DESCENDING)
            async for follow in cursor:
                follows.append(FollowerDocument(**self.with_id(follow)))
            return follows
        except Exception:
            raise self.persistence_error(message) from None
