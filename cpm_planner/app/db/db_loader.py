from .models import TaskModel, ProjectModel
from sqlalchemy import text


class ProjectNotFoundError(LookupError):
    pass


def load_project_from_db(session, project_id: int) -> ProjectModel:
    project_row = session.execute(text("""
        SELECT id, name FROM projects WHERE id = :pid
    """), {"pid": project_id}).fetchone()

    task_rows = session.execute(text("""
        SELECT id, name, duration_hours, earliest_start
        FROM tasks WHERE project_id = :pid
        ORDER BY earliest_start, id
    """), {"pid": project_id}).fetchall()

    if project_row is None and not task_rows:
        raise ProjectNotFoundError(f"Project {project_id} not found")

    # Dangling depends_on ids are kept; the CPM engine ignores them
    dep_rows = session.execute(text("""
        SELECT d.task_id, d.depends_on
        FROM dependencies d
        JOIN tasks t ON t.id = d.task_id
        WHERE t.project_id = :pid
    """), {"pid": project_id}).fetchall()

    dep_map = {}
    for dep in dep_rows:
        dep_map.setdefault(dep.task_id, []).append(dep.depends_on)

    tasks = []
    for row in task_rows:
        tasks.append(TaskModel(
            id=row.id,
            name=row.name or "",
            duration=row.duration_hours,
            earliest_start=row.earliest_start,
            dependencies=dep_map.get(row.id, [])
        ))

    name = project_row.name if project_row is not None else f"Project {project_id}"
    return ProjectModel(id=project_id, name=name, tasks=tasks)


def find_task_project_id(session, task_id: str):
    """Return the project id owning task_id, or None."""
    row = session.execute(text("""
        SELECT project_id FROM tasks WHERE id = :id
    """), {"id": task_id}).fetchone()
    return int(row.project_id) if row else None
