from sqlalchemy.orm import sessionmaker

from flashfit.database import get_db, init_database, make_engine
from flashfit.main import app
from flashfit.models import Exercise, StoreProgram, WorkoutProgram


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["success"] is True
    assert r.json()["message"] == "FlashFit API is running"


def test_root_lists_endpoints(client):
    body = client.get("/").json()
    assert body["success"] is True
    assert body["endpoints"]["auth"]["login"] == "POST /api/auth/login"


def test_unknown_route(client):
    r = client.get("/api/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"success": False, "message": "Route not found"}


def test_seeding_is_idempotent(engine, db_session):
    counts = (
        db_session.query(Exercise).count(),
        db_session.query(WorkoutProgram).count(),
        db_session.query(StoreProgram).count(),
    )
    init_database(engine)
    assert (
        db_session.query(Exercise).count(),
        db_session.query(WorkoutProgram).count(),
        db_session.query(StoreProgram).count(),
    ) == counts


def test_store_failure_is_reported(client, tmp_path):
    broken = make_engine(f"sqlite:///{tmp_path / 'missing' / 'nowhere.db'}")
    factory = sessionmaker(bind=broken)

    def broken_db():
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = broken_db
    r = client.get("/api/exercises")
    assert r.status_code == 500
    assert r.json()["success"] is False
    assert r.json()["message"] == "Database error"
    assert r.json()["error"]
