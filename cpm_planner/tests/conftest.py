"""
Test configuration and fixtures for the cpm_planner test suite.
"""
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker

from cpm_planner.main import app
from cpm_planner.app.db.database import get_db, init_schema
from cpm_planner.app.db.models import TaskModel


ANCHOR = datetime(2025, 1, 6, 9, 0, 0)


@pytest.fixture
def anchor():
    return ANCHOR


@pytest.fixture
def make_task():
    """Factory: make_task("A", 2, deps=["B"], offset_hours=24)."""
    def _make(task_id, duration, deps=None, offset_hours=0.0, name=""):
        return TaskModel(
            id=task_id,
            name=name or task_id,
            duration=duration,
            earliest_start=ANCHOR + timedelta(hours=offset_hours),
            dependencies=list(deps or []),
        )
    return _make


@pytest.fixture
def test_engine(tmp_path):
    """SQLite engine on a temp file with the CPM schema created."""
    db_path = tmp_path / "test.db"
    engine = create_engine(f"sqlite:///{db_path}", echo=False, connect_args={"check_same_thread": False})
    init_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def test_db(test_engine):
    """Override get_db with a session bound to the temp database.

    Yields the session factory so tests can open their own sessions.
    """
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestingSessionLocal
    app.dependency_overrides.clear()


def _insert_project(engine, project_id, name, tasks, deps):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO projects (id, name) VALUES (:id, :name)"), {"id": project_id, "name": name})
        for tid, duration, offset in tasks:
            conn.execute(
                text("""INSERT INTO tasks (id, project_id, name, duration_hours, earliest_start)
                        VALUES (:id, :pid, :name, :dur, :start)"""),
                {
                    "id": tid,
                    "pid": project_id,
                    "name": f"Task {tid}",
                    "dur": duration,
                    "start": (ANCHOR + timedelta(hours=offset)).isoformat(),
                },
            )
        for task_id, depends_on in deps:
            conn.execute(
                text("INSERT INTO dependencies (task_id, depends_on) VALUES (:t, :d)"),
                {"t": task_id, "d": depends_on},
            )


@pytest.fixture
def seeded_db(test_engine, test_db):
    """Project 1: linear chain X(2h) -> Y(3h) -> Z(1h).
    Project 2: cycle C1 <-> C2 plus an independent task FREE(4h), and a dangling dependency on FREE.
    """
    _insert_project(
        test_engine, 1, "Chain",
        tasks=[("X", 2.0, 0), ("Y", 3.0, 0), ("Z", 1.0, 0)],
        deps=[("Y", "X"), ("Z", "Y")],
    )
    _insert_project(
        test_engine, 2, "Cyclic",
        tasks=[("C1", 1.0, 0), ("C2", 1.0, 0), ("FREE", 4.0, 0)],
        deps=[("C1", "C2"), ("C2", "C1"), ("FREE", "GONE")],
    )
    return test_db


@pytest.fixture
def client():
    """Create a test client."""
    return TestClient(app)


@pytest.fixture
def db_client(seeded_db):
    """Test client whose get_db points at the seeded temp database."""
    return TestClient(app)
