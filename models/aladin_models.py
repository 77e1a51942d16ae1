from pydantic import BaseModel, ConfigDict
from typing import List, Optional
from enum import Enum


class QueryType(str, Enum):
    TITLE = "Title"
    AUTHOR = "Author"
    PUBLISHER = "Publisher"
    KEYWORD = "Keyword"


class SearchTarget(str, Enum):
    BOOK = "Book"
    FOREIGN = "Foreign"
    MUSIC = "Music"
    DVD = "DVD"
    USED = "Used"
    EBOOK = "eBook"
    ALL = "All"


class AladinSubInfo(BaseModel):
    itemPage: Optional[int] = None
    subTitle: Optional[str] = None
    originalTitle: Optional[str] = None


class AladinBook(BaseModel):
    model_config = ConfigDict(extra="allow")

    title: str
    link: Optional[str] = None
    author: str = ""
    pubDate: str = ""
    description: str = ""
    isbn: str = ""
    isbn13: str = ""
    itemId: Optional[int] = None
    priceSales: Optional[int] = None
    priceStandard: Optional[int] = None
    cover: str = ""
    categoryId: Optional[int] = None
    categoryName: Optional[str] = None
    publisher: str = ""
    customerReviewRank: Optional[int] = None
    subInfo: Optional[AladinSubInfo] = None


class AladinSearchResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    totalResults: int = 0
    startIndex: int = 1
    itemsPerPage: int = 0
    query: str = ""
    item: List[AladinBook] = []
