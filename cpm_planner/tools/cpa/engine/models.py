from datetime import datetime, timedelta
from typing import Dict, List, Optional

from pydantic import BaseModel


CYCLE_DETECTED = "cycle_detected"
NON_POSITIVE_DURATION = "non_positive_duration"


class TimingResult(BaseModel):
    """Per-task output of one CPM computation. All times are hours from the project anchor."""
    task_id: str
    duration: float
    # logical pass (dependencies only, unlimited workers)
    early_start: float
    early_finish: float
    late_start: float
    late_finish: float
    slack: float
    is_critical: bool
    # single-worker serial schedule
    scheduled_start: float
    scheduled_finish: float


class Diagnostic(BaseModel):
    kind: str
    task_ids: List[str] = []
    message: str = ""


class CPMResult(BaseModel):
    task_data: Dict[str, TimingResult] = {}
    critical_path: List[str] = []
    project_anchor: Optional[datetime] = None
    project_duration: float = 0.0
    total_work: float = 0.0
    diagnostics: List[Diagnostic] = []
    excluded_task_ids: List[str] = []

    @property
    def has_cycle(self) -> bool:
        return any(d.kind == CYCLE_DETECTED for d in self.diagnostics)

    def at(self, offset_hours: float) -> Optional[datetime]:
        """Convert an hour offset back to a calendar instant (None for an empty project)."""
        if self.project_anchor is None:
            return None
        return self.project_anchor + timedelta(hours=offset_hours)
