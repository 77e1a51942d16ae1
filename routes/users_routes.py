from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from typing import List, Optional

import library_service
import user_service
from dependencies import (get_current_principal, get_current_user, get_optional_user,
                          get_profile_storage, get_repositories)
from errors import UserNotFoundError
from models.join_form_model import JoinForm
from models.profile_edit_model import ProfileEditForm
from models.social_models import BookmarkDocument, FollowerDocument, UserBookLikeDocument
from models.user_book_model import ReadingStatus, UserBookWithBook
from models.user_model import PublicUserProfile, UserDocument
from repositories import Repositories
from storage_service import ProfileImageStorage, validate_image
from utils import Principal, default_user_id

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/check-id/{user_id}")
async def check_user_id(user_id: str, repos: Repositories = Depends(get_repositories)):
    return {"userId": user_id, "available": await user_service.check_user_id_available(repos, user_id)}


@router.get("/check-nickname/{nickname}")
async def check_nickname(nickname: str, repos: Repositories = Depends(get_repositories)):
    return {"nickname": nickname, "available": await user_service.check_nickname_available(repos, nickname)}


@router.get("/suggest-id")
async def suggest_user_id(principal: Principal = Depends(get_current_principal)):
    return {"userId": default_user_id(principal.email or "")}


@router.post("", response_model=UserDocument, status_code=201)
async def sign_up(
    form: JoinForm,
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
):
    if await repos.users.get_by_uid(principal.uid) is not None:
        raise HTTPException(status_code=409, detail="This account is already registered")
    return await user_service.create_user(repos, principal.uid, form, photo_url=principal.photoURL)


@router.get("/me", response_model=UserDocument)
async def get_me(user: UserDocument = Depends(get_current_user)):
    return user


@router.get("/me/bookmarks", response_model=List[BookmarkDocument])
async def get_my_bookmarks(
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return await repos.bookmarks.get_by_user_id(user.userId)


@router.get("/me/likes", response_model=List[UserBookLikeDocument])
async def get_my_likes(
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return await repos.likes.get_by_user_id(user.userId)


@router.get("/{user_id}", response_model=PublicUserProfile)
async def get_user_profile(user_id: str, repos: Repositories = Depends(get_repositories)):
    user = await repos.users.get_by_id(user_id)
    if user is None:
        raise UserNotFoundError()
    return PublicUserProfile(**user.model_dump())


@router.put("/{user_id}", response_model=UserDocument)
async def update_user_profile(
    user_id: str,
    form: ProfileEditForm,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    if user.userId != user_id:
        raise HTTPException(status_code=403, detail="You can only edit your own profile")
    return await user_service.update_profile(repos, user, form)


@router.post("/{user_id}/photo", response_model=UserDocument)
async def upload_profile_photo(
    user_id: str,
    file: UploadFile = File(...),
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
    storage: ProfileImageStorage = Depends(get_profile_storage),
):
    if user.userId != user_id:
        raise HTTPException(status_code=403, detail="You can only edit your own profile")
    if file.size is not None:
        validate_image(file.content_type, file.size, storage.max_size)
    # never buffer more than one byte past the limit
    data = await file.read(storage.max_size + 1)
    photo_url = await storage.upload_profile_image(
        user.userId, file.filename or "", file.content_type or "", data
    )
    return await user_service.update_photo(repos, user, photo_url)


@router.get("/{user_id}/books", response_model=List[UserBookWithBook])
async def get_user_library(
    user_id: str,
    status: Optional[ReadingStatus] = Query(None),
    viewer: Optional[UserDocument] = Depends(get_optional_user),
    repos: Repositories = Depends(get_repositories),
):
    return await library_service.get_library_with_books(repos, user_id, viewer, status)


@router.get("/{user_id}/followers", response_model=List[FollowerDocument])
async def get_followers(user_id: str, repos: Repositories = Depends(get_repositories)):
    return await repos.followers.get_followers(user_id)


@router.get("/{user_id}/followings", response_model=List[FollowerDocument])
async def get_followings(user_id: str, repos: Repositories = Depends(get_repositories)):
    return await repos.followers.get_followings(user_id)


@router.get("/{user_id}/follow-status")
async def get_follow_status(
    user_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    return {"following": await repos.followers.is_following(user.userId, user_id)}


@router.post("/{user_id}/follow", status_code=201)
async def follow_user(
    user_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    if user_id == user.userId:
        raise HTTPException(status_code=400, detail="You cannot follow yourself")
    if await repos.users.get_by_id(user_id) is None:
        raise UserNotFoundError()
    if await repos.followers.is_following(user.userId, user_id):
        raise HTTPException(status_code=409, detail="You already follow this user")
    follow_id = await repos.followers.create(user.userId, user_id)
    return {"message": "Followed successfully", "id": follow_id}


@router.delete("/{user_id}/follow")
async def unfollow_user(
    user_id: str,
    user: UserDocument = Depends(get_current_user),
    repos: Repositories = Depends(get_repositories),
):
    await repos.followers.delete(user.userId, user_id)
    return {"message": "Unfollowed successfully"}
