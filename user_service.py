import logging
from typing import Optional

from errors import ConflictError, PersistenceError
from models.join_form_model import JoinForm
from models.profile_edit_model import ProfileEditForm
from models.user_model import UserDocument
from repositories import Repositories

logger = logging.getLogger(__name__)

USER_ID_TAKEN = "USER_ID_TAKEN"
NICKNAME_TAKEN = "NICKNAME_TAKEN"


async def check_user_id_available(repos: Repositories, user_id: str) -> bool:
    return not await repos.users.check_user_id_exists(user_id)


async def check_nickname_available(repos: Repositories, nickname: str) -> bool:
    return not await repos.users.check_nickname_exists(nickname)


async def create_user(
    repos: Repositories,
    uid: str,
    form: JoinForm,
    photo_url: Optional[str] = None,
) -> UserDocument:
    """Sign a user up under the handle they picked.

    The id and nickname checks run before the write without isolation, so
    two simultaneous signups for the same id can both pass and the second
    write replaces the first.
    """
    if not await check_user_id_available(repos, form.userId):
        raise ConflictError("This ID is already in use.", code=USER_ID_TAKEN)

    if not await check_nickname_available(repos, form.nickname):
        raise ConflictError("This nickname is already in use.", code=NICKNAME_TAKEN)

    user_data = form.model_dump(mode="json")
    user_data["uid"] = uid
    user_data["photoURL"] = photo_url
    await repos.users.create(form.userId, user_data)
    logger.info("Created user %s", form.userId)

    created = await repos.users.get_by_id(form.userId)
    if created is None:
        raise PersistenceError("Could not create the user.")
    return created


async def update_profile(
    repos: Repositories,
    user: UserDocument,
    form: ProfileEditForm,
) -> UserDocument:
    if form.nickname != user.nickname and not await check_nickname_available(repos, form.nickname):
        raise ConflictError("This nickname is already in use.", code=NICKNAME_TAKEN)

    updates = form.model_dump(mode="json", exclude_unset=True)
    # An unset visibility keeps whatever the user chose before
    if updates.get("libraryVisibility") is None:
        updates.pop("libraryVisibility", None)
    await repos.users.update(user.userId, updates)

    updated = await repos.users.get_by_id(user.userId)
    if updated is None:
        raise PersistenceError("Could not load the user.")
    return updated


async def update_photo(repos: Repositories, user: UserDocument, photo_url: str) -> UserDocument:
    await repos.users.update(user.userId, {"photoURL": photo_url})
    updated = await repos.users.get_by_id(user.userId)
    if updated is None:
        raise PersistenceError("Could not load the user.")
    return updated
