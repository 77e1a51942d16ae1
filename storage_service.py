import logging
import time
from typing import Callable, Optional, Tuple

from gridfs.errors import NoFile
from motor.motor_asyncio import AsyncIOMotorGridFSBucket

from config import Settings
from errors import DomainError, NotFoundError, PersistenceError

logger = logging.getLogger(__name__)

PROFILE_PREFIX = "profiles/"


class ImageValidationError(DomainError):
    pass


def validate_image(content_type: Optional[str], size: int, max_size: int) -> None:
    if size > max_size:
        raise ImageValidationError(f"File size must be {max_size // (1024 * 1024)}MB or less.")
    if not content_type or not content_type.startswith("image/"):
        raise ImageValidationError("Only image files can be uploaded.")


def profile_image_name(user_id: str, filename: str, content_type: str, timestamp_ms: int) -> str:
    if "." in filename:
        extension = filename.rsplit(".", 1)[-1]
    else:
        extension = content_type.split("/", 1)[-1]
    return f"{PROFILE_PREFIX}{user_id}_{timestamp_ms}.{extension}"


class ProfileImageStorage:
    """Profile pictures kept in GridFS and served back through ``/files``."""

    def __init__(
        self,
        bucket,
        public_base_url: str,
        max_size: int,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.max_size = max_size
        self.clock = clock or time.time

    @classmethod
    def from_database(cls, db, settings: Settings) -> "ProfileImageStorage":
        return cls(
            AsyncIOMotorGridFSBucket(db),
            public_base_url=settings.public_base_url,
            max_size=settings.max_profile_image_size,
        )

    def url_for(self, name: str) -> str:
        return f"{self.public_base_url}/files/{name}"

    async def upload_profile_image(self, user_id: str, filename: str, content_type: str, data: bytes) -> str:
        validate_image(content_type, len(data), self.max_size)
        name = profile_image_name(user_id, filename or "", content_type, int(self.clock() * 1000))
        try:
            await self.bucket.upload_from_stream(
                name, data, metadata={"contentType": content_type, "userId": user_id}
            )
        except Exception:
            logger.exception("Profile image upload failed for %s", user_id)
            raise PersistenceError("Could not upload the image.") from None
        logger.info("Stored profile image %s (%d bytes)", name, len(data))
        return self.url_for(name)

    async def read(self, name: str) -> Tuple[bytes, str]:
        try:
            stream = await self.bucket.open_download_stream_by_name(name)
            data = await stream.read()
        except NoFile:
            raise NotFoundError("File not found.") from None
        except Exception:
            logger.exception("Could not read stored file %s", name)
            raise PersistenceError("Could not load the file.") from None
        metadata = stream.metadata or {}
        return data, metadata.get("contentType", "application/octet-stream")
