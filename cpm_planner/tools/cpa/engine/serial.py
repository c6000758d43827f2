from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Dict, List, Tuple

from .graph import DependencyGraph

# Default tie band (hours); compute_critical_path passes its own epsilon
PRIORITY_EPSILON = 1e-3


@dataclass
class SerialSchedule:
    times: Dict[int, Tuple[float, float]] = field(default_factory=dict)  # index -> (start, finish)
    sequence: List[int] = field(default_factory=list)  # execution order
    finish: float = 0.0


def schedule_serial(
    graph: DependencyGraph,
    late: Dict[int, Tuple[float, float]],
    offsets: List[float],
    priority_epsilon: float = PRIORITY_EPSILON,
) -> SerialSchedule:
    """Schedule tasks for a single worker who executes one task at a time.

    Among tasks whose predecessors are all done, the one with the smallest
    logical late start goes next (minimum slack first); late starts within
    ``priority_epsilon`` hours count as equal and the longer task wins. The
    task starts once the worker is free and its own start constraint has
    passed. Tasks that never become ready (cycle members and anything behind
    them) get no entry.
    """
    # The tie band makes this comparator non-transitive (0 ~ 0.0008 ~ 0.0016
    # but 0 < 0.0016). The sort is stable over the ready list, so the order
    # that comes out is still the same on every run.
    def _priority(a: int, b: int) -> int:
        ls_a = late[a][0] if a in late else 0.0
        ls_b = late[b][0] if b in late else 0.0
        if abs(ls_a - ls_b) > priority_epsilon:
            return -1 if ls_a < ls_b else 1
        dur_a = graph.tasks[a].duration
        dur_b = graph.tasks[b].duration
        if dur_a != dur_b:
            return -1 if dur_a > dur_b else 1
        return 0

    remaining = [len(preds) for preds in graph.predecessors]
    ready: List[int] = [i for i, d in enumerate(remaining) if d == 0]
    schedule = SerialSchedule()
    current_time = 0.0

    while ready:
        ready.sort(key=cmp_to_key(_priority))
        u = ready.pop(0)
        start = max(current_time, offsets[u])
        finish = start + graph.tasks[u].duration
        schedule.times[u] = (start, finish)
        schedule.sequence.append(u)
        current_time = finish

        for v in graph.successors[u]:
            remaining[v] -= 1
            if remaining[v] == 0:
                ready.append(v)

    schedule.finish = current_time
    return schedule
