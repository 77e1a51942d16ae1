import pytest
from fastapi.testclient import TestClient

from dataBase import USER_BOOK_LIKES
from fake_mongo import FakeDatabase, FakeGridFSBucket, TickingClock
from models.book_model import BookMetadata
from repositories import Repositories
from storage_service import ProfileImageStorage
from utils import create_access_token


@pytest.fixture
def clock():
    # the database server clock behind $currentDate
    return TickingClock()


@pytest.fixture
def db(clock):
    database = FakeDatabase(clock)
    # mirrors the unique index created at startup
    database[USER_BOOK_LIKES].unique_indexes.append(["userBookId", "userId"])
    return database


@pytest.fixture
def repos(db):
    return Repositories(db)


@pytest.fixture
def sample_book():
    return BookMetadata(
        isbn="9780000000001",
        isbn13="9780000000001",
        title="The Quiet Library",
        author="Jane Doe",
        publisher="Paper House",
        pubDate="2021-05-01",
        description="A novel about shelves.",
        cover="https://image.example.com/cover.jpg",
        categoryName="Fiction",
        priceStandard=15000,
    )


@pytest.fixture
def storage():
    return ProfileImageStorage(
        FakeGridFSBucket(),
        public_base_url="http://testserver",
        max_size=5 * 1024 * 1024,
        clock=lambda: 1700000000.5,
    )


def auth_header(uid, email=None):
    token = create_access_token({"uid": uid, "email": email or f"{uid}@example.com"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(db, repos, storage):
    from dataBase import get_db
    from dependencies import get_profile_storage, get_repositories
    from main import app

    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_repositories] = lambda: repos
    app.dependency_overrides[get_profile_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth():
    return auth_header
