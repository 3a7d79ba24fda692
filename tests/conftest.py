from pathlib import Path

from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / ".env.test"
load_dotenv(env_file)

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.security import create_access_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402
from tests.utils.factories import create_instructor_factory, create_user_factory  # noqa: E402


@pytest.fixture
def test_engine():
    """In-memory SQLite shared by every connection of one test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)

    yield engine

    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def test_session_local(test_engine):
    return sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(test_session_local):
    session = test_session_local()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
async def test_app(db_session):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
async def test_client(test_app):
    async with AsyncClient(transport=ASGITransport(app=test_app), base_url="http://test") as client:
        yield client


@pytest.fixture
def test_user(db_session):
    return create_user_factory(db_session, email="student@example.com")


@pytest.fixture
def test_instructor(db_session):
    return create_instructor_factory(db_session, email="instructor@example.com")


@pytest.fixture
def test_admin(db_session):
    return create_user_factory(db_session, email="admin@example.com", role="admin")


@pytest.fixture
def test_user_token(test_user):
    return create_access_token(
        {"sub": str(test_user.id), "email": test_user.email, "role": test_user.role}
    )


@pytest.fixture
def test_admin_token(test_admin):
    return create_access_token(
        {"sub": str(test_admin.id), "email": test_admin.email, "role": test_admin.role}
    )
