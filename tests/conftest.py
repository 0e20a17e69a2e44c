import os
from typing import AsyncGenerator, Callable, Dict, Optional

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlalchemy.pool import StaticPool

from quickcreate.auth.security import create_access_token
from quickcreate.core.models import Account, Exercise
from quickcreate.db.session import build_engine, build_sessionmaker, create_all, get_db
from quickcreate.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture()
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory SQLite database per test; StaticPool keeps a single shared connection."""
    engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for a test and override FastAPI dependency."""
    async with build_sessionmaker(engine)() as session:

        async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
            yield session

        app.dependency_overrides[get_db] = override_get_db
        yield session

    app.dependency_overrides.clear()


@pytest.fixture()
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


def make_headers(role: str = "ACCOUNTANT", permissions: Optional[Dict[str, Dict[str, bool]]] = None) -> Dict[str, str]:
    token = create_access_token(
        subject={"sub": "user-1", "role": role, "permissions": permissions or {}}
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers() -> Callable[..., Dict[str, str]]:
    """Factory for Authorization headers with a given role and permission map."""
    return make_headers


@pytest.fixture()
def accountant_headers() -> Dict[str, str]:
    return make_headers(permissions={"accounts": {"read": True, "create": True}})


@pytest.fixture()
async def exercise(db_session: AsyncSession) -> Exercise:
    ex = Exercise(code="2025", name="Ejercicio 2025", subaccount_code_length=10, status="OPEN")
    db_session.add(ex)
    await db_session.commit()
    await db_session.refresh(ex)
    return ex


@pytest.fixture()
async def accounts(db_session: AsyncSession, exercise: Exercise) -> Dict[str, Account]:
    """A few chart-of-accounts nodes in the test exercise, keyed by code."""
    rows = {
        "43": "Clientes",
        "430": "Clientes",
        "570": "Caja, euros",
        "629": "Otros servicios",
    }
    created = {}
    for code, description in rows.items():
        account = Account(code=code, description=description, exercise_id=exercise.id)
        db_session.add(account)
        created[code] = account
    await db_session.commit()
    for account in created.values():
        await db_session.refresh(account)
    return created
