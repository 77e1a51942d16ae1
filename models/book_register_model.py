from datetime import date
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from models.book_model import BookMetadata
from models.user_book_model import BookRating, ReadingStatus

MAX_REVIEW_LENGTH = 100
MAX_TAGS = 10


def split_tags(value):
    """Tags arrive either as a list or as one comma separated string."""
    if value is None:
        return None
    if isinstance(value, str):
        return [tag.strip() for tag in value.split(",") if tag.strip()]
    return value


class BookRegisterForm(BaseModel):
    status: ReadingStatus = ReadingStatus.READING
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    rating: BookRating = 0
    review: Optional[str] = Field(default=None, max_length=MAX_REVIEW_LENGTH)
    memo: Optional[str] = None
    tags: Optional[List[str]] = Field(default=None, max_length=MAX_TAGS)
    isPublic: bool = True

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return split_tags(value)


class BookRegisterRequest(BaseModel):
    book: BookMetadata
    form: BookRegisterForm = BookRegisterForm()


class UserBookUpdateForm(BaseModel):
    status: Optional[ReadingStatus] = None
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    rating: Optional[BookRating] = None
    review: Optional[str] = Field(default=None, max_length=MAX_REVIEW_LENGTH)
    memo: Optional[str] = None
    tags: Optional[List[str]] = Field(default=None, max_length=MAX_TAGS)
    isPublic: Optional[bool] = None

    @field_validator("tags", mode="before")
    @classmethod
    def parse_tags(cls, value):
        return split_tags(value)
