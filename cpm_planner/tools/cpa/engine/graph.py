from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Set
import logging

from cpm_planner.app.db.models import TaskModel

logger = logging.getLogger(__name__)


@dataclass
class DependencyGraph:
    """Arena-style dependency graph: tasks live in a flat list, edges are index lists.

    predecessors[i] holds the indices task i waits on; successors[i] the indices waiting on i.
    Dependency ids that name no task in the set are dropped while building.
    """
    tasks: List[TaskModel] = field(default_factory=list)
    ids: List[str] = field(default_factory=list)
    index: Dict[str, int] = field(default_factory=dict)
    predecessors: List[List[int]] = field(default_factory=list)
    successors: List[List[int]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ids)

    def predecessor_map(self) -> Dict[str, Set[str]]:
        return {self.ids[i]: {self.ids[p] for p in preds} for i, preds in enumerate(self.predecessors)}

    def successor_map(self) -> Dict[str, Set[str]]:
        return {self.ids[i]: {self.ids[s] for s in succs} for i, succs in enumerate(self.successors)}


def build_dependency_graph(tasks: List[TaskModel]) -> DependencyGraph:
    graph = DependencyGraph()
    for t in tasks:
        if t.id in graph.index:
            logger.debug("Duplicate task id %s ignored", t.id)
            continue
        graph.index[t.id] = len(graph.ids)
        graph.ids.append(t.id)
        graph.tasks.append(t)
        graph.predecessors.append([])
        graph.successors.append([])

    for i, t in enumerate(graph.tasks):
        seen: Set[int] = set()
        for dep in t.dependencies:
            p = graph.index.get(dep)
            if p is None:
                logger.debug("Task %s depends on unknown task %s; ignoring", t.id, dep)
                continue
            if p in seen:
                continue
            seen.add(p)
            graph.predecessors[i].append(p)
            graph.successors[p].append(i)
    return graph


def topological_order(graph: DependencyGraph) -> List[int]:
    """Kahn's algorithm. Tasks on (or downstream of) a cycle never reach in-degree zero
    and are left out, so the order may be shorter than the graph."""
    indeg = [len(preds) for preds in graph.predecessors]
    q = deque(i for i, d in enumerate(indeg) if d == 0)
    order: List[int] = []
    while q:
        u = q.popleft()
        order.append(u)
        for v in graph.successors[u]:
            indeg[v] -= 1
            if indeg[v] == 0:
                q.append(v)
    return order


def find_excluded(graph: DependencyGraph, order: List[int]) -> List[str]:
    """Ids missing from a topological order, in input order."""
    ordered = set(order)
    return [tid for i, tid in enumerate(graph.ids) if i not in ordered]
