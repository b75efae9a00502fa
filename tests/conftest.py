"""
Shared fixtures.

Environment defaults are set before the application is imported so the
settings singleton picks them up.
"""

import os

os.environ.setdefault("PYTHON_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool  # noqa: E402

from teacher_panel.core.auth import AdminGuard, CallerContext  # noqa: E402
from teacher_panel.core.database import Base, get_db  # noqa: E402
from teacher_panel.core.rate_limit import reset_memory_store  # noqa: E402
from teacher_panel.core.security import create_access_token  # noqa: E402
from teacher_panel.main import app  # noqa: E402
from teacher_panel.modules.documents import models as _documents  # noqa: E402, F401
from teacher_panel.modules.documents.ports import DocumentWrite  # noqa: E402
from teacher_panel.modules.documents.repository import SqlDocumentStore  # noqa: E402
from teacher_panel.modules.identity import models as _identity  # noqa: E402, F401
from teacher_panel.modules.identity.repository import SqlIdentityProvider  # noqa: E402

ADMIN_EMAIL = "admin@example.com"
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    reset_memory_store()
    yield
    reset_memory_store()


@pytest.fixture
def admin_caller() -> CallerContext:
    return CallerContext(uid="admin-uid", email=ADMIN_EMAIL, name="Admin")


@pytest.fixture
def guard() -> AdminGuard:
    return AdminGuard([ADMIN_EMAIL])


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """A session on a fresh in-memory SQLite database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def document_store(db_session: AsyncSession) -> SqlDocumentStore:
    return SqlDocumentStore(db_session)


@pytest.fixture
def seed_document(document_store: SqlDocumentStore):
    """Write one record directly, the way the intake process would."""

    async def _seed(
        collection: str, doc_id: str, data: dict[str, Any], merge: bool = True
    ) -> None:
        await document_store.transactional_write([DocumentWrite(collection, doc_id, data, merge)])

    return _seed


@pytest.fixture
def identity_provider(db_session: AsyncSession) -> SqlIdentityProvider:
    return SqlIdentityProvider(db_session)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app and the test session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def bearer():
    """Build an Authorization header for a caller with the given claims."""

    def _bearer(uid: str, email: str | None) -> dict[str, str]:
        claims = {"email": email} if email is not None else {}
        token = create_access_token(subject=uid, additional_claims=claims)
        return {"Authorization": f"Bearer {token}"}

    return _bearer


@pytest.fixture
def admin_headers(bearer) -> dict[str, str]:
    return bearer("admin-uid", ADMIN_EMAIL)
