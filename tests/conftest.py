# tests/conftest.py

import os
from datetime import datetime

# Must be set before taskflow.database builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskflow.database import Base, get_db
from taskflow.models import Role, Task, User, ADMINISTRATOR, REGULAR_USER
from taskflow.utils.access import Identity
from taskflow.utils.security import create_access_token, hash_password

PASSWORD = "password123"


@pytest.fixture()
def engine():
    """
    One in-memory SQLite database per test.

    StaticPool keeps a single connection alive so every session, including
    the ones the API opens per request, sees the same database.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def roles(db):
    admin = Role(name=ADMINISTRATOR, description="Full access to all features and data")
    regular = Role(name=REGULAR_USER, description="Standard user with limited access")
    db.add_all([admin, regular])
    db.commit()
    return {ADMINISTRATOR: admin, REGULAR_USER: regular}


@pytest.fixture()
def client(session_factory, roles):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db, roles):
    counter = {"n": 0}

    def _make_user(name=None, email=None, role_names=(REGULAR_USER,)):
        counter["n"] += 1
        user = User(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@taskflow.io",
            hashed_password=hash_password(PASSWORD),
        )
        user.roles = [roles[role_name] for role_name in role_names]
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_task(db):
    """Create a task; assignee defaults to the creator unless given (None means unassigned)"""
    missing = object()

    def _make_task(creator, assignee=missing, **fields):
        fields.setdefault("title", "Task")
        if assignee is missing:
            assignee = creator
        task = Task(
            created_by=creator.id,
            assigned_to=assignee.id if assignee is not None else None,
            **fields,
        )
        if "created_at" in fields and "updated_at" not in fields:
            task.updated_at = fields["created_at"]
        db.add(task)
        db.commit()
        db.refresh(task)
        return task

    return _make_task


@pytest.fixture()
def identity_of(db):
    def _identity_of(user):
        db.refresh(user)
        return Identity.from_user(user)

    return _identity_of


@pytest.fixture()
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(data={"sub": user.email})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest.fixture()
def alice(make_user):
    return make_user(name="Alice", email="alice@taskflow.io")


@pytest.fixture()
def bob(make_user):
    return make_user(name="Bob", email="bob@taskflow.io")


@pytest.fixture()
def admin(make_user):
    return make_user(name="Admin", email="admin@taskflow.io", role_names=(ADMINISTRATOR,))


@pytest.fixture()
def now():
    return datetime(2025, 3, 15, 12, 0, 0)
