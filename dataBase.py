import logging

import motor.motor_asyncio
from fastapi import Request
from pymongo import ASCENDING, DESCENDING

from config import Settings

logger = logging.getLogger(__name__)

USERS = "users"
BOOKS = "books"
USER_BOOKS = "userBooks"
BOOKMARKS = "bookmarks"
USER_BOOK_LIKES = "userBookLikes"
FOLLOWERS = "followers"
BOOK_STATS = "bookStats"


def create_client(settings: Settings) -> motor.motor_asyncio.AsyncIOMotorClient:
    return motor.motor_asyncio.AsyncIOMotorClient(settings.mongo_url, tz_aware=True)


def get_database(client: motor.motor_asyncio.AsyncIOMotorClient, settings: Settings):
    return client[settings.mongo_db_name]


async def ensure_indexes(db) -> None:
    """Create the indexes the repository queries rely on."""
    await db[USERS].create_index("uid")
    await db[USERS].create_index("nickname")
    await db[USER_BOOKS].create_index([("userId", ASCENDING), ("createdAt", DESCENDING)])
    await db[USER_BOOKS].create_index([("userId", ASCENDING), ("isbn", ASCENDING)])
    await db[USER_BOOKS].create_index([("isbn", ASCENDING), ("isPublic", ASCENDING)])
    await db[BOOKMARKS].create_index([("userId", ASCENDING), ("isbn", ASCENDING)])
    await db[FOLLOWERS].create_index("followerId")
    await db[FOLLOWERS].create_index("followingId")
    await db[USER_BOOK_LIKES].create_index(
        [("userBookId", ASCENDING), ("userId", ASCENDING)], unique=True
    )
    logger.info("Indexes ensured on %s", db.name)


def get_db(request: Request):
    """FastAPI dependency returning the database handle owned by the app."""
    return request.app.state.db
