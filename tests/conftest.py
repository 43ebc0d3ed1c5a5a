"""Shared fixtures: in-memory database, on-disk media store, HTTP client."""
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app import models  # noqa: F401
from app.core.exceptions import MediaStorageError
from app.database import Base, get_db
from app.main import app as fastapi_app
from app.services.media_uploader import LocalMediaUploader, get_media_uploader

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


class FlakyUploader(LocalMediaUploader):
    """Local uploader whose host can be switched off per operation."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fail_uploads = False
        self.fail_deletes = False
        self.uploaded: list[str] = []
        self.deleted: list[str] = []

    async def upload(self, data: bytes, filename: str) -> str:
        if self.fail_uploads:
            raise MediaStorageError("media host unavailable")
        url = await super().upload(data, filename)
        self.uploaded.append(url)
        return url

    async def delete(self, url: str) -> None:
        if self.fail_deletes:
            raise MediaStorageError("media host unavailable")
        await super().delete(url)
        self.deleted.append(url)


@pytest.fixture
async def session_factory():
    """Create an isolated in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def uploader(tmp_path):
    return FlakyUploader(tmp_path / "media", url_prefix="/static/uploads/notes")


@pytest.fixture
async def client(session_factory, uploader):
    """Create test client."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    fastapi_app.dependency_overrides[get_media_uploader] = lambda: uploader

    async with AsyncClient(
        transport=ASGITransport(app=fastapi_app),
        base_url="http://test"
    ) as ac:
        yield ac

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def make_user(client):
    """Register and log in a user, returning bearer headers."""

    async def _make(username: str = "alice", email: str | None = None, password: str = "pw1") -> dict:
        email = email or f"{username}@x.com"
        response = await client.post(
            "/api/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text

        response = await client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _make


@pytest.fixture
def create_note(client):
    """Create a note through the API and return its JSON."""

    async def _create(headers: dict, title: str = "Groceries", content: str = "milk,eggs", images=None) -> dict:
        files = [("images", (name, data, "image/png")) for name, data in (images or [])]
        response = await client.post(
            "/api/notes",
            data={"title": title, "content": content},
            files=files or None,
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create
