import logging
from typing import List, Optional

import httpx

from config import Settings
from models.aladin_models import AladinBook, AladinSearchResponse, QueryType, SearchTarget
from models.book_model import BookMetadata

logger = logging.getLogger(__name__)

API_VERSION = "20131101"
MAX_RESULTS_LIMIT = 100


class AladinApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AladinClient:
    """Catalog search against the Aladin ItemSearch API.

    The API key stays on the server; callers only pass search parameters.
    """

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.api_key = settings.aladin_api_key
        self.base_url = settings.aladin_api_base_url
        self._client = http_client or httpx.AsyncClient(timeout=settings.aladin_timeout)

    async def search_books(
        self,
        query: str,
        query_type: QueryType = QueryType.KEYWORD,
        max_results: int = 10,
        start: int = 1,
        search_target: SearchTarget = SearchTarget.BOOK,
    ) -> List[AladinBook]:
        if not query or not query.strip():
            raise AladinApiError("Please enter a search term.", 400)
        if not self.api_key:
            logger.error("Aladin API key is not configured")
            raise AladinApiError("The catalog API key is not configured.", 500)

        params = {
            "ttbkey": self.api_key,
            "Query": query,
            "QueryType": QueryType(query_type).value,
            "MaxResults": str(min(max(max_results, 1), MAX_RESULTS_LIMIT)),
            "start": str(max(start, 1)),
            "SearchTarget": SearchTarget(search_target).value,
            "output": "js",
            "Version": API_VERSION,
        }
        logger.info("Aladin search: query=%r type=%s", query, params["QueryType"])

        try:
            response = await self._client.get(self.base_url, params=params)
        except httpx.HTTPError as exc:
            logger.error("Aladin request failed: %s", exc)
            raise AladinApiError(f"Book search failed. ({exc})", 500) from exc

        if response.is_error:
            logger.error("Aladin API returned %s %s", response.status_code, response.reason_phrase)
            raise AladinApiError(f"Catalog request failed: {response.reason_phrase}", response.status_code)

        try:
            payload = response.json()
        except ValueError as exc:
            raise AladinApiError("The catalog returned an unreadable response.", 502) from exc

        # Aladin reports bad keys and quota errors in a 200 body
        if isinstance(payload, dict) and "errorCode" in payload:
            logger.error("Aladin API error %s: %s", payload.get("errorCode"), payload.get("errorMessage"))
            raise AladinApiError(payload.get("errorMessage") or "Catalog request failed.", 502)

        try:
            data = AladinSearchResponse.model_validate(payload)
        except ValueError as exc:
            raise AladinApiError("The catalog returned an unreadable response.", 502) from exc

        logger.info("Aladin search returned %d items", len(data.item))
        return data.item

    async def get_book_by_isbn(self, isbn: str) -> Optional[AladinBook]:
        books = await self.search_books(isbn, query_type=QueryType.KEYWORD, max_results=1)
        return books[0] if books else None

    async def close(self):
        await self._client.aclose()


def to_book_metadata(book: AladinBook) -> BookMetadata:
    """Map a search hit onto the catalog document, keyed by ISBN-13 when present."""
    isbn = book.isbn13 or book.isbn
    return BookMetadata(
        isbn=isbn,
        isbn13=book.isbn13 or None,
        title=book.title,
        author=book.author,
        publisher=book.publisher,
        pubDate=book.pubDate,
        description=book.description or None,
        cover=book.cover,
        categoryName=book.categoryName,
        priceStandard=book.priceStandard,
    )
