"""Pytest fixtures — file-backed SQLite database, fresh schema per test."""
import time
import jwt
import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from chapterhub.config import settings
from chapterhub.database import Base, get_db
from chapterhub.main import app

# Import all models so they register with Base.metadata
from chapterhub.models.user import User, UserType              # noqa: F401
from chapterhub.models.event import Event                      # noqa: F401
from chapterhub.models.registration import EventRegistration   # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: tokens as the hosted auth service would issue them
# ---------------------------------------------------------------------------
def make_token(user_id: str, email: str = None, expires_in: int = 3600, audience: str = None) -> str:
    now = int(time.time())
    claims = {
        "sub": user_id,
        "aud": audience or settings.AUTH_JWT_AUDIENCE,
        "iat": now,
        "exp": now + expires_in,
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, settings.AUTH_JWT_SECRET, algorithm=settings.AUTH_JWT_ALGORITHM)


def auth_headers(user_id: str, **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


def profile_form(**overrides) -> dict:
    form = {
        "studentEmail": "student@example.com",
        "studentFirstName": "Sam",
        "studentLastName": "Student",
        "studentGrade": 10,
        "studentPhone": "121655501234",
        "parentFirstName": "Pat",
        "parentLastName": "Parent",
        "parentEmail": "parent@example.com",
        "memberType": UserType.student.value,
        "photoMediaRelease": True,
        "studentSignature": "Sam Student",
        "studentDate": "2025-01-10",
        "parentSignature": "Pat Parent",
        "parentDate": "2025-01-10",
    }
    form.update(overrides)
    return form


def waiver_form(**overrides) -> dict:
    form = {
        "studentSignature": "Sam Student",
        "studentDate": "2025-02-01",
        "parentSignature": "Pat Parent",
        "parentDate": "2025-02-01",
        "registerParent": False,
    }
    form.update(overrides)
    return form


def create_test_profile(client: TestClient, user_id: str, **overrides) -> dict:
    """Helper — POST /api/signup for ``user_id`` and return the profile JSON."""
    resp = client.post("/api/signup", json=profile_form(**overrides), headers=auth_headers(user_id))
    assert resp.status_code == 201, resp.text
    return resp.json()["user"]


def create_test_admin(client: TestClient, db, user_id: str = "admin-1") -> dict:
    """Helper — create a profile and promote it to admin directly in the datastore."""
    create_test_profile(client, user_id, studentEmail=f"{user_id}@example.com")
    db.query(User).filter(User.id == user_id).update({User.user_type: UserType.admin.value})
    db.commit()
    return auth_headers(user_id)


def create_test_event(client: TestClient, admin_headers: dict, **overrides) -> dict:
    """Helper — POST /api/admin/events and return the event JSON."""
    payload = {
        "eventName": "Bridge Building Workshop",
        "eventTime": "2030-04-12T17:30:00",
        "eventLocation": "Engineers Hall",
        "eventDescription": "Build and load-test balsa bridges.",
        "maxUsers": 10,
        "maxParents": 2,
        "eventWaiverInfo": "Participants use hand tools under supervision.",
    }
    payload.update(overrides)
    resp = client.post("/api/admin/events", json=payload, headers=admin_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()["event"]
