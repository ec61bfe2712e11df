import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["TIMEZONE"] = "UTC"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from ticketstream.application.services.auth_service import create_access_token, register_user
from ticketstream.domain.enums import UserRole
from ticketstream.domain.models.user import User
from ticketstream.domain.schemas.auth import UserCreate
from ticketstream.infrastructure.database import Base, get_db
from ticketstream.infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from ticketstream.main import app

PASSWORD = "s3cret-pass"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_session):
    def _make_user(name: str, email: str, role: UserRole = UserRole.REGULAR) -> User:
        repo = SQLAlchemyUserRepository(db_session, User)
        return register_user(repo, UserCreate(name=name, email=email, password=PASSWORD, role=role))

    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("Alice", "alice@example.com")


@pytest.fixture
def bob(make_user):
    return make_user("Bob", "bob@example.com")


@pytest.fixture
def agent(make_user):
    return make_user("Agent Smith", "smith@example.com", UserRole.AGENT)


@pytest.fixture
def other_agent(make_user):
    return make_user("Agent Jones", "jones@example.com", UserRole.AGENT)


@pytest.fixture
def auth_headers():
    def _auth_headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _auth_headers


@pytest.fixture
def password():
    return PASSWORD
