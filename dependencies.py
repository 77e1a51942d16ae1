from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from aladin_service import AladinClient
from dataBase import get_db
from models.user_model import UserDocument
from repositories import Repositories
from storage_service import ProfileImageStorage
from utils import Principal, principal_from_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_repositories(db=Depends(get_db)) -> Repositories:
    return Repositories(db)


def get_aladin_client(request: Request) -> AladinClient:
    return request.app.state.aladin


def get_profile_storage(request: Request) -> ProfileImageStorage:
    return request.app.state.storage


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    if credentials is None:
        return None
    principal = principal_from_token(credentials.credentials)
    if principal is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    return principal


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    if principal is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return principal


async def get_optional_user(
    principal: Optional[Principal] = Depends(get_optional_principal),
    repos: Repositories = Depends(get_repositories),
) -> Optional[UserDocument]:
    if principal is None:
        return None
    return await repos.users.get_by_uid(principal.uid)


async def get_current_user(
    principal: Principal = Depends(get_current_principal),
    repos: Repositories = Depends(get_repositories),
) -> UserDocument:
    user = await repos.users.get_by_uid(principal.uid)
    if user is None:
        raise HTTPException(status_code=403, detail="Please finish signing up first")
    return user
