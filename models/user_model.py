from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class LibraryVisibility(str, Enum):
    PUBLIC = "public"
    FOLLOWERS = "followers"
    PRIVATE = "private"


class UserDocument(BaseModel):
    userId: str  # also the document key
    uid: str
    nickname: str
    email: str = ""
    photoURL: Optional[str] = None
    bio: Optional[str] = None
    birth: Optional[str] = None  # YYMMDD
    gender: Optional[Gender] = None
    libraryVisibility: LibraryVisibility = LibraryVisibility.PUBLIC
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class PublicUserProfile(BaseModel):
    userId: str
    nickname: str
    photoURL: Optional[str] = None
    bio: Optional[str] = None
    libraryVisibility: LibraryVisibility = LibraryVisibility.PUBLIC
    createdAt: Optional[datetime] = None
