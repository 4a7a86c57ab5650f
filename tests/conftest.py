"""Test configuration and fixtures."""
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.core.database import Base, get_db
from app.core.security import get_password_hash, create_access_token
from app.core.enums import UserRole
from app.models.user import User
import uuid


# Test database URL (use SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
)

TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests."""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


async def make_user(
    db_session: AsyncSession,
    mobile: str,
    role: UserRole = UserRole.PICKER,
    name: str = "Test Picker",
    password: str = "testpassword",
    is_active: bool = True,
) -> User:
    user = User(
        id=str(uuid.uuid4()),
        mobile=mobile,
        name=name,
        role=role,
        hashed_password=get_password_hash(password),
        is_active=is_active,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


def bearer(user: User) -> dict:
    token = create_access_token(user_id=user.id, role=user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create test picker."""
    return await make_user(db_session, mobile="9876543210")


@pytest_asyncio.fixture
async def supervisor(db_session: AsyncSession) -> User:
    return await make_user(
        db_session, mobile="9123456780", role=UserRole.SUPERVISOR, name="Test Supervisor"
    )


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict:
    """Create authorization headers with valid token."""
    return bearer(test_user)


@pytest_asyncio.fixture
async def supervisor_headers(supervisor: User) -> dict:
    return bearer(supervisor)
