import logging

import pytest

from dataBase import BOOKMARKS, FOLLOWERS
from errors import BookmarkNotFoundError, FollowNotFoundError, PersistenceError


class TestBookmarkRepository:
    @pytest.mark.asyncio
    async def test_bookmark_lifecycle(self, repos):
        bookmark_id = await repos.bookmarks.create("alice01", "9780000000001")

        bookmark = await repos.bookmarks.get_by_user_id_and_isbn("alice01", "9780000000001")
        assert bookmark.id == bookmark_id
        assert await repos.bookmarks.is_bookmarked("alice01", "9780000000001") is True

        await repos.bookmarks.delete("alice01", "9780000000001")

        assert await repos.bookmarks.is_bookmarked("alice01", "9780000000001") is False

    @pytest.mark.asyncio
    async def test_delete_missing_bookmark(self, repos):
        with pytest.raises(BookmarkNotFoundError):
            await repos.bookmarks.delete("alice01", "9780000000001")

    @pytest.mark.asyncio
    async def test_list_is_per_user_and_newest_first(self, repos):
        await repos.bookmarks.create("alice01", "111")
        await repos.bookmarks.create("bob", "222")
        await repos.bookmarks.create("alice01", "333")

        bookmarks = await repos.bookmarks.get_by_user_id("alice01")

        assert [b.isbn for b in bookmarks] == ["333", "111"]

    @pytest.mark.asyncio
    async def test_create_failure(self, repos, db):
        db[BOOKMARKS].fail_on.add("update_one")

        with pytest.raises(PersistenceError, match="Could not add the bookmark."):
            await repos.bookmarks.create("alice01", "111")


class TestFollowerRepository:
    @pytest.mark.asyncio
    async def test_follow_is_directed(self, repos):
        await repos.followers.create("bob", "alice01")

        assert await repos.followers.is_following("bob", "alice01") is True
        assert await repos.followers.is_following("alice01", "bob") is False

    @pytest.mark.asyncio
    async def test_followers_and_followings(self, repos):
        await repos.followers.create("bob", "alice01")
        await repos.followers.create("carol", "alice01")
        await repos.followers.create("alice01", "carol")

        followers = await repos.followers.get_followers("alice01")
        followings = await repos.followers.get_followings("alice01")

        assert [f.followerId for f in followers] == ["carol", "bob"]
        assert [f.followingId for f in followings] == ["carol"]

    @pytest.mark.asyncio
    async def test_unfollow(self, repos):
        await repos.followers.create("bob", "alice01")

        await repos.followers.delete("bob", "alice01")

        assert await repos.followers.get_by_follower_id_and_following_id("bob", "alice01") is None

    @pytest.mark.asyncio
    async def test_unfollow_missing_edge(self, repos):
        with pytest.raises(FollowNotFoundError):
            await repos.followers.delete("bob", "alice01")

    @pytest.mark.asyncio
    async def test_is_following_swallows_errors(self, repos, db, caplog):
        await repos.followers.create("bob", "alice01")
        await repos.bookmarks.create("bob", "111")
        db[FOLLOWERS].fail_on.add("find_one")
        db[BOOKMARKS].fail_on.add("find_one")

        caplog.clear()
        with caplog.at_level(logging.WARNING):
            assert await repos.followers.is_following("bob", "alice01") is False
            assert await repos.bookmarks.is_bookmarked("bob", "111") is False

        assert [record.levelno for record in caplog.records] == [logging.WARNING, logging.WARNING]

    @pytest.mark.asyncio
    async def test_created_at_comes_from_the_store_clock(self, repos, clock):
        await repos.followers.create("bob", "alice01")

        follow = await repos.followers.get_by_follower_id_and_following_id("bob", "alice01")
        assert follow.createdAt == clock.current
