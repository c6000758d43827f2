"""
Formatting tools for turning CPM results into display-ready output.
Offsets stay in hours inside the engine; everything here is presentation only.
"""

from typing import Any, Dict, List

from cpm_planner.tools.cpa.engine.models import CPMResult


def format_hours_for_display(hours: float, working_hours_per_day: int = 8) -> str:
    """
    Render an hour count as hours, working days or 5-day weeks.

    Args:
        hours: Duration or offset in hours
        working_hours_per_day: Hours in one working day

    Returns:
        A short label such as "6.0h", "2.5d" or "1.2w"
    """
    if hours < working_hours_per_day:
        return f"{hours:.1f}h"
    days = hours / working_hours_per_day
    if days < 5:
        return f"{days:.1f}d"
    weeks = days / 5
    return f"{weeks:.1f}w"


def float_severity(slack: float, is_critical: bool) -> str:
    """
    Bucket a task's slack for styling.

    Args:
        slack: Logical slack in hours
        is_critical: Whether the task is on the critical path

    Returns:
        One of "critical", "tight" (a day or less), "moderate" (a week or less), "relaxed"
    """
    if is_critical:
        return "critical"
    if slack <= 8:
        return "tight"
    if slack <= 40:
        return "moderate"
    return "relaxed"


def format_cpm_result(result: CPMResult, project_name: str = "", working_hours_per_day: int = 8) -> Dict[str, Any]:
    """
    Format a CPM result for UI consumption.

    Args:
        result: Output of compute_critical_path
        project_name: Optional project name for context
        working_hours_per_day: Hours in one working day, for the display labels

    Returns:
        Structured JSON for the critical path view, tasks ordered by scheduled start
    """
    tasks: List[Dict[str, Any]] = []
    for t in sorted(result.task_data.values(), key=lambda d: (d.scheduled_start, d.task_id)):
        start_at = result.at(t.scheduled_start)
        finish_at = result.at(t.scheduled_finish)
        tasks.append({
            "id": t.task_id,
            "duration": t.duration,
            "duration_label": format_hours_for_display(t.duration, working_hours_per_day),
            "scheduled_start": t.scheduled_start,
            "scheduled_finish": t.scheduled_finish,
            "start_at": start_at.isoformat() if start_at else "",
            "finish_at": finish_at.isoformat() if finish_at else "",
            "slack": t.slack,
            "slack_label": format_hours_for_display(t.slack, working_hours_per_day),
            "is_critical": t.is_critical,
            "severity": float_severity(t.slack, t.is_critical),
        })

    return {
        "ui": "cpm_result",
        "data": {
            "project_name": project_name,
            "project_start": result.project_anchor.isoformat() if result.project_anchor else "",
            "project_duration": result.project_duration,
            "project_duration_label": format_hours_for_display(result.project_duration, working_hours_per_day),
            "total_work": result.total_work,
            "critical_path": list(result.critical_path),
            "tasks": tasks,
            "warnings": [d.message for d in result.diagnostics],
        }
    }


def format_cpm_report(result: CPMResult, title: str = "Critical Path Report", working_hours_per_day: int = 8) -> str:
    """Return a human-readable report for a CPM result."""
    lines: List[str] = []
    lines.append(title)
    lines.append("")
    if result.project_anchor is not None:
        lines.append(f"Project start: {result.project_anchor.isoformat()}")
    lines.append(f"Project duration (1 worker): {format_hours_for_display(result.project_duration, working_hours_per_day)}"
                 f" ({result.project_duration:.2f}h)")
    lines.append(f"Total work: {result.total_work:.2f}h")
    lines.append("")
    lines.append("Schedule (start -> finish, slack):")
    if result.task_data:
        for t in sorted(result.task_data.values(), key=lambda d: (d.scheduled_start, d.task_id)):
            marker = "*" if t.is_critical else " "
            lines.append(f" {marker} {t.task_id}: {t.scheduled_start:.2f}h -> {t.scheduled_finish:.2f}h, "
                         f"slack {t.slack:.2f}h")
    else:
        lines.append(" - (no schedulable tasks)")
    lines.append("")
    if result.critical_path:
        lines.append("Critical path: " + " -> ".join(result.critical_path))
    else:
        lines.append("Critical path: (none)")
    for d in result.diagnostics:
        lines.append(f"Warning [{d.kind}]: {d.message}: {', '.join(d.task_ids)}")
    return "\n".join(lines)
