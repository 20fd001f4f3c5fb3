"""
Test configuration and fixtures.

Provides:
- Isolated in-memory database per test (tables created and dropped)
- Accounts, users and contacts on both sides of the tenant boundary
- JWT token minting for authenticated tests
- HTTPX AsyncClient with proper headers
"""
import os
from dataclasses import dataclass
from typing import AsyncGenerator, Generator

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ["TESTING"] = "1"

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from personal_crm.main import app
from personal_crm.core.deps import get_db
from personal_crm.core.security import create_session_token
from personal_crm.db.base import Base
from personal_crm.db.models import Account, Contact, User


# One shared connection so every thread sees the same in-memory database
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema for every test."""
    Base.metadata.create_all(bind=test_engine)
    session = TestingSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def test_account(db: Session) -> Account:
    account = Account(name="Test Account")
    db.add(account)
    db.commit()
    return account


@pytest.fixture(scope="function")
def test_user(db: Session, test_account: Account) -> User:
    user = User(
        account_id=test_account.id,
        email="test@example.com",
        first_name="Test",
        last_name="User",
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture(scope="function")
def test_contact(db: Session, test_account: Account) -> Contact:
    contact = Contact(
        account_id=test_account.id,
        first_name="Ada",
        last_name="Lovelace",
        gender="female",
        is_partial=False,
    )
    db.add(contact)
    db.commit()
    return contact


@pytest.fixture(scope="function")
def second_contact(db: Session, test_account: Account) -> Contact:
    contact = Contact(account_id=test_account.id, first_name="Charles", last_name="Babbage")
    db.add(contact)
    db.commit()
    return contact


@pytest.fixture(scope="function")
def other_account(db: Session) -> Account:
    account = Account(name="Other Account")
    db.add(account)
    db.commit()
    return account


@pytest.fixture(scope="function")
def other_contact(db: Session, other_account: Account) -> Contact:
    contact = Contact(account_id=other_account.id, first_name="Grace", last_name="Hopper")
    db.add(contact)
    db.commit()
    return contact


# =============================================================================
# Auth Fixtures
# =============================================================================

@dataclass
class TestAuth:
    """Test authentication context."""
    user: User
    account: Account
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture(scope="function")
def test_auth(test_user: User, test_account: Account) -> TestAuth:
    """Create JWT token for test user."""
    token = create_session_token(
        user_id=test_user.id,
        account_id=test_account.id,
        token_version=test_user.token_version,
    )
    return TestAuth(user=test_user, account=test_account, token=token)


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def authed_client(
    db: Session,
    test_auth: TestAuth
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create authenticated AsyncClient with a bearer token.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=test_auth.headers,
    ) as c:
        yield c

    app.dependency_overrides.clear()
