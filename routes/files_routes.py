from fastapi import APIRouter, Depends
from fastapi.responses import Response

from dependencies import get_profile_storage
from storage_service import ProfileImageStorage

router = APIRouter(prefix="/files", tags=["files"])


@router.get("/{name:path}")
async def get_file(name: str, storage: ProfileImageStorage = Depends(get_profile_storage)):
    data, content_type = await storage.read(name)
    return Response(content=data, media_type=content_type)
