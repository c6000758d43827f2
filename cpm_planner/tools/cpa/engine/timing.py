from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from cpm_planner.app.db.models import TaskModel
from .graph import DependencyGraph


def _as_utc(moment: datetime) -> datetime:
    # Naive datetimes are taken as UTC so naive and aware inputs compare cleanly
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def hours_between(start: datetime, end: datetime) -> float:
    return (_as_utc(end) - _as_utc(start)).total_seconds() / 3600.0


def compute_project_anchor(tasks: List[TaskModel]) -> Optional[datetime]:
    """Earliest earliest_start across all tasks: the t=0 of every offset."""
    if not tasks:
        return None
    return min(tasks, key=lambda t: _as_utc(t.earliest_start)).earliest_start


def start_offsets(graph: DependencyGraph, anchor: datetime) -> List[float]:
    """Hours from the anchor to each task's own earliest-start constraint."""
    return [hours_between(anchor, t.earliest_start) for t in graph.tasks]


def forward_pass(graph: DependencyGraph, order: List[int], offsets: List[float]) -> Dict[int, Tuple[float, float]]:
    """ES = max(EF of predecessors, own start constraint); EF = ES + duration."""
    early: Dict[int, Tuple[float, float]] = {}
    for u in order:
        es = max((early[p][1] for p in graph.predecessors[u] if p in early), default=0.0)
        if offsets[u] > es:
            es = offsets[u]
        early[u] = (es, es + graph.tasks[u].duration)
    return early


def backward_pass(graph: DependencyGraph, order: List[int], project_finish: float) -> Dict[int, Tuple[float, float]]:
    """LF = min(LS of successors), or the logical project finish for terminal tasks; LS = LF - duration."""
    late: Dict[int, Tuple[float, float]] = {}
    for u in reversed(order):
        succs = [s for s in graph.successors[u] if s in late]
        if succs:
            lf = min(late[s][0] for s in succs)
        else:
            lf = project_finish
        late[u] = (lf - graph.tasks[u].duration, lf)
    return late


def logical_timing(
    graph: DependencyGraph, order: List[int], offsets: List[float]
) -> Tuple[Dict[int, Tuple[float, float]], Dict[int, Tuple[float, float]], float]:
    """Run both passes under unlimited resources.

    Returns (early, late, logical_duration) where early maps index -> (ES, EF)
    and late maps index -> (LS, LF).
    """
    early = forward_pass(graph, order, offsets)
    logical_duration = max((ef for _, ef in early.values()), default=0.0)
    late = backward_pass(graph, order, logical_duration)
    return early, late, logical_duration
