"""
Tests for loading projects from the database and the DB-backed CPA helpers.
"""
import pytest
from datetime import datetime

from cpm_planner.app.db.db_loader import load_project_from_db, find_task_project_id, ProjectNotFoundError
from cpm_planner.tools.cpa.engine import (
    run_cpa, get_critical_path, get_task_slack, get_project_duration, summarize_project_cpa,
)


@pytest.fixture
def db(seeded_db):
    session = seeded_db()
    yield session
    session.close()


class TestLoadProjectFromDb:
    """Test row -> model mapping."""

    def test_loads_tasks_and_dependencies(self, db):
        project = load_project_from_db(db, 1)
        assert project.name == "Chain"
        assert [t.id for t in project.tasks] == ["X", "Y", "Z"]
        by_id = {t.id: t for t in project.tasks}
        assert by_id["Y"].dependencies == ["X"]
        assert by_id["X"].dependencies == []
        assert by_id["Y"].duration == 3.0
        assert by_id["X"].earliest_start == datetime(2025, 1, 6, 9, 0, 0)

    def test_keeps_dangling_dependencies(self, db):
        project = load_project_from_db(db, 2)
        free = next(t for t in project.tasks if t.id == "FREE")
        assert free.dependencies == ["GONE"]

    def test_unknown_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            load_project_from_db(db, 42)

    def test_find_task_project_id(self, db):
        assert find_task_project_id(db, "C2") == 2
        assert find_task_project_id(db, "missing") is None


class TestCpaHelpers:
    """Test run_cpa and friends against the seeded database."""

    def test_run_cpa(self, db):
        res = run_cpa(db, 1)
        assert res["project_id"] == 1
        assert res["project_name"] == "Chain"
        assert res["project_duration"] == 6.0
        assert set(res["task_data"]) == {"X", "Y", "Z"}

    def test_get_critical_path(self, db):
        assert get_critical_path(db, 1)["critical_path"] == ["X", "Y", "Z"]

    def test_get_project_duration(self, db):
        assert get_project_duration(db, 2) == {"project_id": 2, "duration": 4.0, "total_work": 6.0}

    def test_get_task_slack(self, db):
        assert get_task_slack(db, "X") == {"task_id": "X", "project_id": 1, "slack": 0.0, "is_critical": True}
        assert get_task_slack(db, "C2")["error"] == "task not schedulable"
        assert get_task_slack(db, "missing")["error"] == "task not found"

    def test_summarize_project_cpa(self, db):
        summary = summarize_project_cpa(db, 1)
        assert summary["tasks_count"] == 3
        assert summary["critical_count"] == 3
        assert summary["excluded_count"] == 0
        assert len(summary["sample"]) == 3

    def test_run_cpa_unknown_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            run_cpa(db, 7)
