"""Integration-test fixtures.

All integration tests share a single event-loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the entire test session.

Pre-condition: a migrated database at DATABASE_URL (alembic upgrade head).
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from src.main import app
from src.sg_common.database import engine


@pytest_asyncio.fixture(loop_scope="session", scope="session", autouse=True)
async def database_available() -> None:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1 FROM transactions LIMIT 1"))
    except (OSError, SQLAlchemyError) as exc:
        pytest.skip(f"database not available: {exc}")


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client — keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
