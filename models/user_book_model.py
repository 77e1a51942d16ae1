from pydantic import BaseModel
from typing import List, Literal, Optional
from datetime import datetime
from enum import Enum

from models.book_model import BookDocument

# 0: not rated, 1-5: regular rating, 10: book of a lifetime
BookRating = Literal[0, 1, 2, 3, 4, 5, 10]


class ReadingStatus(str, Enum):
    READING = "reading"
    COMPLETED = "completed"


class UserBookDocument(BaseModel):
    id: Optional[str] = None
    userId: str
    isbn: str
    status: ReadingStatus
    isPublic: bool = True
    rating: BookRating = 0
    review: Optional[str] = None
    memo: Optional[str] = None
    tags: List[str] = []
    startDate: Optional[datetime] = None
    endDate: Optional[datetime] = None
    likesCount: int = 0
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class UserBookWithBook(UserBookDocument):
    book: Optional[BookDocument] = None
