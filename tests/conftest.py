import itertools
import os

os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("REDIS_URL", None)
os.environ.pop("SNS_TOPIC_EVENTS_ARN", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from flashfit.database import get_db, init_database, make_engine
from flashfit.main import app
from flashfit.models import Exercise


@pytest.fixture
def engine(tmp_path):
    """A fresh, seeded SQLite file per test."""
    engine = make_engine(f"sqlite:///{tmp_path / 'flashfit_test.db'}")
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


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
def register(client):
    """Register a user and return (auth headers, public user dict)."""
    counter = itertools.count(1)

    def _register(name=None, email=None, password="secret123", phone=None):
        n = next(counter)
        body = {"name": name or f"User {n}", "email": email or f"user{n}@example.com", "password": password}
        if phone is not None:
            body["phone"] = phone
        r = client.post("/api/auth/register", json=body)
        assert r.status_code == 201, r.text
        data = r.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]

    return _register


@pytest.fixture
def auth_headers(register):
    headers, _ = register()
    return headers


@pytest.fixture
def exercise_id(db_session):
    def _lookup(name):
        return db_session.query(Exercise.id).filter(Exercise.name == name).scalar()
    return _lookup
