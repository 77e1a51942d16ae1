from fastapi import APIRouter, Depends
from typing import Optional

import library_service
from dependencies import get_current_user, get_optional_user, get_repositories
from models.book_register_model import BookRegisterRequest, UserBookUpdateForm
from models.user_book_model import UserBookDocument
from models.user_model import UserDocument
from repositories import Repositories

router = APIRouter(prefix="/user-books", tags=["library"])


@router.post("", response_model=UserBookDocument, status_code=201)
async def register_book(
    request: BookRegisterRequest,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return await library_service.register_book(repos, user.userId, request.book, request.form)


@router.get("/{user_book_id}", response_model=UserBookDocument)
async def get_user_book(
    user_book_id: str,
    viewer: Optional[UserDocument] = Depends(get_optional_user),
    repos: Repositories = Depends(get_repositories),
):
    return await library_service.get_user_book(repos, user_book_id, viewer)


@router.put("/{user_book_id}", response_model=UserBookDocument)
async def update_user_book(
    user_book_id: str,
    form: UserBookUpdateForm,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return await library_service.update_user_book(repos, user_book_id, user, form)


@router.delete("/{user_book_id}")
async def delete_user_book(
    user_book_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    await library_service.delete_user_book(repos, user_book_id, user)
    return {"message": "Book removed from your library"}


@router.get("/{user_book_id}/like-status")
async def get_like_status(
    user_book_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return {"liked": await repos.likes.is_liked(user_book_id, user.userId)}


@router.post("/{user_book_id}/like", status_code=201)
async def like_user_book(
    user_book_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    like_id = await library_service.like_user_book(repos, user_book_id, user)
    return {"message": "Liked", "id": like_id}


@router.delete("/{user_book_id}/like")
async def unlike_user_book(
    user_book_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    await library_service.unlike_user_book(repos, user_book_id, user)
    return {"message": "Like removed"}
