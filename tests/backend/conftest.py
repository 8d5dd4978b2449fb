import os

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from tortoise import Tortoise

from app.config import settings
from app.core import db as db_module
from app.main import app
from app.models.user import User


TEST_DB_URL = "sqlite://:memory:?cache=shared"
os.environ["DATABASE_URL"] = TEST_DB_URL
db_module.DB_URL = TEST_DB_URL
db_module.TORTOISE_ORM["connections"]["default"] = TEST_DB_URL


async def _init_test_db() -> None:
    """
    Initialize a clean in-memory SQLite database for every test.
    Ensures tables are recreated from scratch.
    """
    if Tortoise._inited:
        await Tortoise.close_connections()
    await Tortoise.init(config=db_module.TORTOISE_ORM)
    await Tortoise.generate_schemas()


@pytest.fixture(autouse=True)
def uploads_tmpdir(tmp_path, monkeypatch):
    """
    Keep uploaded/downloaded images out of the working tree.
    """
    target = tmp_path / "uploads"
    monkeypatch.setattr(settings, "uploads_dir", str(target))
    return target


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    """
    The /ai/generate limiter is process-wide; start every test with empty windows.
    """
    from app.api.v1.routers import ai

    ai.generate_limiter.reset()
    yield
    ai.generate_limiter.reset()


@pytest_asyncio.fixture
async def db():
    """
    Fresh database without an HTTP client (for service/unit tests).
    """
    await _init_test_db()
    yield
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def client():
    """
    Provide an HTTPX AsyncClient bound to the FastAPI app with a fresh DB.
    """
    await _init_test_db()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        yield async_client
    await Tortoise.close_connections()


@pytest_asyncio.fixture
async def create_user():
    """
    Factory fixture to create accounts directly via ORM (admins can't self-register).
    """

    async def _create_user(
        user_id: str,
        role: str = "student",
        name: str | None = None,
        password: str = "pw123456",
    ) -> User:
        return await User.create(
            id=user_id,
            name=name or f"{role}-{user_id}",
            password=password,
            role=role,
        )

    return _create_user


@pytest_asyncio.fixture
async def upload_artwork(client):
    """
    Helper fixture to upload an artwork through the public endpoint; returns the artwork dict.
    """

    async def _upload(user_id: str, title: str = "Untitled", **form) -> dict:
        resp = await client.post(
            "/api/gallery/upload",
            data={"user": user_id, "title": title, **form},
            files={"image": ("sketch.png", b"\x89PNG fake image bytes", "image/png")},
        )
        assert resp.status_code == 200, resp.text
        return resp.json()["data"]

    return _upload
