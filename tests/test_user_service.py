"""
Tests for signup and profile editing.
"""
import pytest

import user_service
from errors import ConflictError, UserNotFoundError
from models.join_form_model import JoinForm
from models.profile_edit_model import ProfileEditForm
from utils import default_user_id


def join_form(**overrides):
    data = {
        "userId": "alice01",
        "nickname": "Alice",
        "email": "alice@example.com",
        "gender": "female",
        "birth": "920315",
        "bio": "Reads on trains",
    }
    data.update(overrides)
    return JoinForm(**data)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_user(self, repos):
        user = await user_service.create_user(repos, "uid-alice", join_form(), photo_url="http://img/a.png")

        assert user.userId == "alice01"
        assert user.uid == "uid-alice"
        assert user.photoURL == "http://img/a.png"
        assert user.libraryVisibility == "public"
        assert user.gender == "female"

    @pytest.mark.asyncio
    async def test_user_id_taken(self, repos):
        await user_service.create_user(repos, "uid-alice", join_form())

        with pytest.raises(ConflictError) as excinfo:
            await user_service.create_user(repos, "uid-other", join_form(nickname="Other"))

        assert excinfo.value.code == "USER_ID_TAKEN"
        assert (await repos.users.get_by_id("alice01")).uid == "uid-alice"

    @pytest.mark.asyncio
    async def test_nickname_taken(self, repos):
        await user_service.create_user(repos, "uid-alice", join_form())

        with pytest.raises(ConflictError) as excinfo:
            await user_service.create_user(repos, "uid-bob", join_form(userId="bob_reads"))

        assert excinfo.value.code == "NICKNAME_TAKEN"
        assert await repos.users.get_by_id("bob_reads") is None

    @pytest.mark.asyncio
    async def test_availability_checks(self, repos):
        await user_service.create_user(repos, "uid-alice", join_form())

        assert await user_service.check_user_id_available(repos, "alice01") is False
        assert await user_service.check_user_id_available(repos, "bob") is True
        assert await user_service.check_nickname_available(repos, "Alice") is False
        assert await user_service.check_nickname_available(repos, "Bob") is True


class TestUpdateProfile:
    @pytest.mark.asyncio
    async def test_update_profile(self, repos):
        user = await user_service.create_user(repos, "uid-alice", join_form())

        updated = await user_service.update_profile(
            repos, user, ProfileEditForm(nickname="Alice", bio="New bio", libraryVisibility="followers")
        )

        assert updated.bio == "New bio"
        assert updated.libraryVisibility == "followers"
        assert updated.updatedAt > user.updatedAt

    @pytest.mark.asyncio
    async def test_unset_visibility_is_kept(self, repos):
        user = await user_service.create_user(repos, "uid-alice", join_form())
        await repos.users.update("alice01", {"libraryVisibility": "private"})
        user = await repos.users.get_by_id("alice01")

        updated = await user_service.update_profile(repos, user, ProfileEditForm(nickname="Ally"))

        assert updated.nickname == "Ally"
        assert updated.libraryVisibility == "private"

    @pytest.mark.asyncio
    async def test_nickname_change_conflict(self, repos):
        await user_service.create_user(repos, "uid-bob", join_form(userId="bob", nickname="Bobby"))
        user = await user_service.create_user(repos, "uid-alice", join_form())

        with pytest.raises(ConflictError) as excinfo:
            await user_service.update_profile(repos, user, ProfileEditForm(nickname="Bobby"))

        assert excinfo.value.code == "NICKNAME_TAKEN"

    @pytest.mark.asyncio
    async def test_update_photo(self, repos):
        user = await user_service.create_user(repos, "uid-alice", join_form())

        updated = await user_service.update_photo(repos, user, "http://testserver/files/profiles/x.png")

        assert updated.photoURL == "http://testserver/files/profiles/x.png"

    @pytest.mark.asyncio
    async def test_update_deleted_user(self, repos):
        user = await user_service.create_user(repos, "uid-alice", join_form())
        await repos.users.delete("alice01")

        with pytest.raises(UserNotFoundError):
            await user_service.update_photo(repos, user, "http://img/a.png")


def test_default_user_id():
    assert default_user_id("alice.reads+tag@example.com") == "alicereadstag"
    assert default_user_id("bob_01@example.com") == "bob_01"
