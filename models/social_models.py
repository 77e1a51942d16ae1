from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class BookmarkDocument(BaseModel):
    id: Optional[str] = None
    userId: str
    isbn: str
    createdAt: Optional[datetime] = None


class UserBookLikeDocument(BaseModel):
    id: Optional[str] = None
    userBookId: str
    userId: str
    createdAt: Optional[datetime] = None


class FollowerDocument(BaseModel):
    id: Optional[str] = None
    followerId: str
    followingId: str
    createdAt: Optional[datetime] = None
