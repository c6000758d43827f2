from typing import Dict, List, Set

from .graph import DependencyGraph
from .models import TimingResult


def reconstruct_critical_path(graph: DependencyGraph, task_data: Dict[str, TimingResult]) -> List[str]:
    """Linearize the zero-float subgraph by depth-first search.

    Roots are critical tasks without a critical predecessor, visited in order of
    logical early start; from each root only critical successors are followed,
    again by early start. A task reachable from several roots is listed once,
    at its first visit, so disjoint chains come out concatenated.
    """
    def _critical(i: int) -> bool:
        data = task_data.get(graph.ids[i])
        return data is not None and data.is_critical

    def _early_start(i: int) -> float:
        return task_data[graph.ids[i]].early_start

    critical = [i for i in range(len(graph)) if _critical(i)]
    if not critical:
        return []

    roots = [i for i in critical if not any(_critical(p) for p in graph.predecessors[i])]
    roots.sort(key=_early_start)

    path: List[str] = []
    visited: Set[int] = set()
    for root in roots:
        stack = [root]
        while stack:
            u = stack.pop()
            if u in visited:
                continue
            visited.add(u)
            path.append(graph.ids[u])
            nxt = sorted((s for s in graph.successors[u] if _critical(s)), key=_early_start)
            # reversed so the earliest successor is explored first
            stack.extend(reversed(nxt))
    return path
