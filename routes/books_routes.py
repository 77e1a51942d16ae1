from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List

import library_service
from aladin_service import AladinClient
from dependencies import get_aladin_client, get_current_user, get_repositories
from models.aladin_models import AladinBook, QueryType, SearchTarget
from models.book_model import BookDocument
from models.book_stats_models import BookStatsDocument
from models.user_book_model import UserBookDocument
from models.user_model import UserDocument
from repositories import Repositories

router = APIRouter(prefix="/books", tags=["books"])


@router.get("/search", response_model=List[AladinBook])
async def search_books(
    query: str = Query("", description="Search term or ISBN"),
    queryType: QueryType = QueryType.KEYWORD,
    maxResults: int = Query(10, ge=1, le=100),
    start: int = Query(1, ge=1),
    searchTarget: SearchTarget = SearchTarget.BOOK,
    aladin: AladinClient = Depends(get_aladin_client),
):
    return await aladin.search_books(
        query,
        query_type=queryType,
        max_results=maxResults,
        start=start,
        search_target=searchTarget,
    )


@router.get("/recent", response_model=List[BookDocument])
async def get_recent_books(
    limit: int = Query(20, ge=1, le=100),
    repos: Repositories = Depends(get_repositories),
):
    return await repos.books.get_recent(limit)


@router.get("/popular", response_model=List[BookStatsDocument])
async def get_popular_books(
    limit: int = Query(20, ge=1, le=100),
    repos: Repositories = Depends(get_repositories),
):
    return await repos.book_stats.get_popular(limit)


@router.get("/top-rated", response_model=List[BookStatsDocument])
async def get_top_rated_books(
    limit: int = Query(20, ge=1, le=100),
    repos: Repositories = Depends(get_repositories),
):
    return await repos.book_stats.get_top_rated(limit)


@router.get("/{isbn}", response_model=BookDocument)
async def get_book(isbn: str, repos: Repositories = Depends(get_repositories)):
    book = await repos.books.get_by_isbn(isbn)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.get("/{isbn}/stats", response_model=BookStatsDocument)
async def get_book_stats(isbn: str, repos: Repositories = Depends(get_repositories)):
    stats = await repos.book_stats.get_by_isbn(isbn)
    if stats is None:
        raise HTTPException(status_code=404, detail="No statistics for this book yet")
    return stats


@router.get("/{isbn}/readers", response_model=List[UserBookDocument])
async def get_book_readers(isbn: str, repos: Repositories = Depends(get_repositories)):
    return await library_service.get_public_readers(repos, isbn)


@router.get("/{isbn}/bookmark-status")
async def get_bookmark_status(
    isbn: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return {"bookmarked": await repos.bookmarks.is_bookmarked(user.userId, isbn)}


@router.post("/{isbn}/bookmark", status_code=201)
async def add_bookmark(
    isbn: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    if await repos.bookmarks.is_bookmarked(user.userId, isbn):
        raise HTTPException(status_code=409, detail="This book is already bookmarked")
    bookmark_id = await repos.bookmarks.create(user.userId, isbn)
    return {"message": "Bookmark added", "id": bookmark_id}


@router.delete("/{isbn}/bookmark")
async def remove_bookmark(
    isbn: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    await repos.bookmarks.delete(user.userId, isbn)
    return {"message": "Bookmark removed"}
