from typing import List
import logging

from cpm_planner.app.db.models import TaskModel
from cpm_planner.app.db.db_loader import load_project_from_db, find_task_project_id

from .critical_path import reconstruct_critical_path
from .graph import build_dependency_graph, find_excluded, topological_order
from .models import CPMResult, Diagnostic, TimingResult, CYCLE_DETECTED, NON_POSITIVE_DURATION
from .serial import schedule_serial
from .timing import compute_project_anchor, logical_timing, start_offsets

logger = logging.getLogger(__name__)

# |slack| below this (hours) marks a task critical; also the scheduler's late-start tie band
CRITICAL_EPSILON = 1e-3

# ------------------------------
# CPM computation
# ------------------------------

def compute_critical_path(tasks: List[TaskModel], epsilon: float = CRITICAL_EPSILON) -> CPMResult:
    """Run the full CPM pipeline over one task snapshot.

    Logical ES/EF/LS/LF and slack come from an unlimited-resource pass; scheduled
    start/finish come from a single-worker serial schedule prioritised by logical
    late start. Cycles and dangling dependencies never raise: cycle members (and
    everything behind them) are dropped and reported in ``diagnostics``.
    """
    if not tasks:
        return CPMResult()

    graph = build_dependency_graph(tasks)
    # anchor over kept tasks only; dropped duplicates must not shift offsets
    anchor = compute_project_anchor(graph.tasks)
    order = topological_order(graph)

    diagnostics: List[Diagnostic] = []
    excluded = find_excluded(graph, order)
    if excluded:
        logger.warning("Dependency cycle detected, %d task(s) excluded from CPM calculation: %s",
                       len(excluded), ", ".join(excluded))
        diagnostics.append(Diagnostic(
            kind=CYCLE_DETECTED,
            task_ids=excluded,
            message="Dependency cycle detected; tasks on or behind the cycle were excluded",
        ))

    degenerate = [t.id for t in graph.tasks if t.duration <= 0]
    if degenerate:
        logger.info("Tasks with non-positive duration: %s", ", ".join(degenerate))
        diagnostics.append(Diagnostic(
            kind=NON_POSITIVE_DURATION,
            task_ids=degenerate,
            message="Duration must be positive; these tasks produce zero-width or inverted intervals",
        ))

    offsets = start_offsets(graph, anchor)
    early, late, _ = logical_timing(graph, order, offsets)
    serial = schedule_serial(graph, late, offsets, priority_epsilon=epsilon)

    task_data = {}
    for u in order:
        if u not in serial.times:
            continue
        es, ef = early[u]
        ls, lf = late[u]
        start, finish = serial.times[u]
        slack = ls - es
        task_data[graph.ids[u]] = TimingResult(
            task_id=graph.ids[u],
            duration=graph.tasks[u].duration,
            early_start=es,
            early_finish=ef,
            late_start=ls,
            late_finish=lf,
            slack=slack,
            is_critical=abs(slack) < epsilon,
            scheduled_start=start,
            scheduled_finish=finish,
        )

    return CPMResult(
        task_data=task_data,
        critical_path=reconstruct_critical_path(graph, task_data),
        project_anchor=anchor,
        project_duration=serial.finish,
        total_work=sum(t.duration for t in graph.tasks),
        diagnostics=diagnostics,
        excluded_task_ids=excluded,
    )


# ------------------------------
# DB-backed helpers
# ------------------------------

def run_cpa(session, project_id: int, epsilon: float = CRITICAL_EPSILON) -> dict:
    """Load a project from the DB and run CPM on it.

    Raises ProjectNotFoundError for unknown projects.
    """
    project = load_project_from_db(session, project_id)
    result = compute_critical_path(project.tasks, epsilon=epsilon)
    return {
        "project_id": project_id,
        "project_name": project.name,
        **result.model_dump(mode="json"),
    }


def get_critical_path(session, project_id: int) -> dict:
    """Return ordered list of tasks on the critical path."""
    result = run_cpa(session, project_id)
    return {
        "project_id": project_id,
        "critical_path": result.get("critical_path", []),
    }


def get_task_slack(session, task_id: str) -> dict:
    """Return slack for a specific task. Determines project via task lookup."""
    project_id = find_task_project_id(session, task_id)
    if project_id is None:
        return {"task_id": task_id, "error": "task not found"}
    result = run_cpa(session, project_id)
    t = result.get("task_data", {}).get(task_id)
    if not t:
        # present in the DB but dropped by cycle exclusion
        return {"task_id": task_id, "project_id": project_id, "error": "task not schedulable"}
    return {
        "task_id": task_id,
        "project_id": project_id,
        "slack": t.get("slack", 0.0),
        "is_critical": t.get("is_critical", False),
    }


def get_project_duration(session, project_id: int) -> dict:
    result = run_cpa(session, project_id)
    return {
        "project_id": project_id,
        "duration": result.get("project_duration", 0.0),
        "total_work": result.get("total_work", 0.0),
    }


def summarize_project_cpa(session, project_id: int) -> dict:
    """Concise summary of a project's CPM run."""
    res = run_cpa(session, project_id)
    task_data = res.get("task_data", {})
    crit_count = sum(1 for t in task_data.values() if t.get("is_critical"))
    return {
        "project_id": project_id,
        "project_name": res.get("project_name"),
        "tasks_count": len(task_data),
        "critical_count": crit_count,
        "excluded_count": len(res.get("excluded_task_ids", [])),
        "project_duration": res.get("project_duration", 0.0),
        "total_work": res.get("total_work", 0.0),
        "critical_path": res.get("critical_path", []),
        "diagnostics": res.get("diagnostics", []),
        "sample": list(task_data.values())[:5],
    }
