# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ADMIN_EMAILS", "admin@example.com, Ops@Example.com")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from porchlight.core.security import create_access_token
from porchlight.db.session import Base
from porchlight.db.session import get_db as app_get_session
from porchlight.db.time import utcnow
from porchlight.main import app as fastapi_app
from porchlight.models import Address, Answer, Question, Review, User

TEST_DB_URL = "sqlite://"

RESIDENT = {"sub": "user_resident", "email": "resident@example.com", "given_name": "Rita", "family_name": "Resident"}
NEIGHBOR = {"sub": "user_neighbor", "email": "neighbor@example.com", "given_name": "Ned"}
ADMIN = {"sub": "user_admin", "email": "admin@example.com", "given_name": "Ada", "family_name": "Admin"}


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

        # Endpoints commit, so wipe every table to keep tests independent.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _bearer(claims: dict[str, Any]) -> dict[str, str]:
    extra = {key: value for key, value in claims.items() if key != "sub"}
    token = create_access_token(claims["sub"], extra)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth_headers() -> dict[str, str]:
    """Authorization headers for a regular signed-in resident."""
    return _bearer(RESIDENT)


@pytest.fixture()
def other_auth_headers() -> dict[str, str]:
    """Authorization headers for a second regular user."""
    return _bearer(NEIGHBOR)


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    """Authorization headers for a user on the admin allow-list."""
    return _bearer(ADMIN)


@pytest.fixture()
def make_headers() -> Callable[..., dict[str, str]]:
    """Return a factory producing headers for arbitrary claims."""

    def _make(sub: str, **claims: Any) -> dict[str, str]:
        return _bearer({"sub": sub, **claims})

    return _make


@pytest.fixture()
def questions(db_session: Session) -> list[Question]:
    """Create a small active catalog."""
    catalog = [
        Question(text="How safe is it at night?", category="Safety"),
        Question(text="How quiet is it?", category="Noise"),
        Question(text="How friendly are neighbors?", category="Community"),
        Question(text="How close are shops?", category="Amenities"),
        Question(text="How easy is transit?", category="Transport"),
    ]
    db_session.add_all(catalog)
    db_session.flush()
    return catalog


@pytest.fixture()
def address(db_session: Session) -> Address:
    """Create an address on Maple Street."""
    address = Address(
        street_address="12 Maple Street",
        city="Springfield",
        state="IL",
        zip_code="62701",
        formatted_address="12 maple street, springfield, il 62701",
    )
    db_session.add(address)
    db_session.flush()
    return address


@pytest.fixture()
def other_address(db_session: Session) -> Address:
    """Create a second address in another city."""
    address = Address(
        street_address="400 Oak Avenue",
        city="Shelbyville",
        state="IL",
        zip_code="62565",
        formatted_address="400 oak avenue, shelbyville, il 62565",
    )
    db_session.add(address)
    db_session.flush()
    return address


@pytest.fixture()
def make_review(db_session: Session, questions: list[Question]) -> Callable[..., Review]:
    """Return a factory that persists a review with one answer per score."""

    def _make(
        address: Address,
        scores: list[int],
        *,
        user_id: str | None = None,
        user_email: str | None = None,
        is_anonymous: bool = False,
        created_at: datetime | None = None,
    ) -> Review:
        created = created_at or utcnow()
        review = Review(
            address_id=address.id,
            user_id=user_id,
            user_email=user_email,
            is_anonymous=is_anonymous,
            created_at=created,
        )
        review.answers = [
            Answer(
                question_id=questions[index % len(questions)].id,
                score=score,
                created_at=created,
            )
            for index, score in enumerate(scores)
        ]
        db_session.add(review)
        db_session.flush()
        return review

    return _make


@pytest.fixture()
def local_user(db_session: Session) -> User:
    """Persist a local record for the resident identity."""
    user = User(user_id=RESIDENT["sub"], email=RESIDENT["email"], name="Rita Resident")
    db_session.add(user)
    db_session.flush()
    return user
