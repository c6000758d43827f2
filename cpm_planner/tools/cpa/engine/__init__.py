from .cpa import (
    CRITICAL_EPSILON,
    compute_critical_path,
    run_cpa,
    get_critical_path,
    get_task_slack,
    get_project_duration,
    summarize_project_cpa,
)
from .critical_path import reconstruct_critical_path
from .graph import DependencyGraph, build_dependency_graph, topological_order, find_excluded
from .models import CPMResult, TimingResult, Diagnostic, CYCLE_DETECTED, NON_POSITIVE_DURATION
from .serial import SerialSchedule, schedule_serial
from .timing import hours_between, compute_project_anchor, forward_pass, backward_pass, logical_timing

__all__ = [
    "CRITICAL_EPSILON",
    "compute_critical_path",
    "run_cpa",
    "get_critical_path",
    "get_task_slack",
    "get_project_duration",
    "summarize_project_cpa",
    "reconstruct_critical_path",
    "DependencyGraph",
    "build_dependency_graph",
    "topological_order",
    "find_excluded",
    "CPMResult",
    "TimingResult",
    "Diagnostic",
    "CYCLE_DETECTED",
    "NON_POSITIVE_DURATION",
    "SerialSchedule",
    "schedule_serial",
    "hours_between",
    "compute_project_anchor",
    "forward_pass",
    "backward_pass",
    "logical_timing",
]
