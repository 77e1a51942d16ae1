from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class BookMetadata(BaseModel):
    isbn: str  # also the document key
    isbn13: Optional[str] = None
    title: str
    author: str
    publisher: str = ""
    pubDate: str = ""  # YYYY-MM-DD
    description: Optional[str] = None
    cover: str = ""
    categoryName: Optional[str] = None
    priceStandard: Optional[int] = None


class BookDocument(BookMetadata):
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
