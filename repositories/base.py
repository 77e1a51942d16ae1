import logging
from typing import Any, Dict, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId

from errors import PersistenceError

logger = logging.getLogger(__name__)

STAMPED_ON_CREATE = ("createdAt", "updatedAt")


class BaseRepository:
    """Shared plumbing for the collection-backed repositories.

    Subclasses set ``collection_name``. Auto-keyed collections expose the
    Mongo ``_id`` as a string ``id``; natural-keyed ones (users, books,
    bookStats) drop ``_id`` because the key is already a document field.
    Every timestamp is assigned by the server through ``$currentDate``.
    """

    collection_name: str = ""

    def __init__(self, db):
        self.db = db

    @property
    def collection(self):
        return self.db[self.collection_name]

    @staticmethod
    def to_object_id(key: str) -> Optional[ObjectId]:
        try:
            return ObjectId(key)
        except (InvalidId, TypeError):
            return None

    @staticmethod
    def with_id(document: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(document)
        document["id"] = str(document.pop("_id"))
        return document

    @staticmethod
    def without_id(document: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(document)
        document.pop("_id", None)
        return document

    @staticmethod
    def update_document(fields: Dict[str, Any]) -> Dict[str, Any]:
        """Merge ``fields`` and let the store stamp ``updatedAt``."""
        update: Dict[str, Any] = {"$currentDate": {"updatedAt": True}}
        if fields:
            update["$set"] = fields
        return update

    async def write_new(
        self,
        key: Any,
        fields: Dict[str, Any],
        stamp: Sequence[str] = STAMPED_ON_CREATE,
        session=None,
    ) -> None:
        """Upsert ``fields`` under ``key`` with server-side creation timestamps.

        An existing document with the same key has the given fields
        overwritten and its timestamps reset.
        """
        fields = {k: v for k, v in fields.items() if k not in ("_id", "id") and k not in stamp}
        await self.collection.update_one(
            {"_id": key},
            {"$set": fields, "$currentDate": {name: True for name in stamp}},
            upsert=True,
            session=session,
        )

    def persistence_error(self, message: str) -> PersistenceError:
        # Called from an except block: the cause is logged here and then
        # suppressed for callers.
        logger.exception("%s (collection=%s)", message, self.collection_name)
        return PersistenceError(message)

    def check_failed(self, check: str) -> bool:
        logger.warning("%s failed on %s, reporting False", check, self.collection_name, exc_info=True)
        return False
