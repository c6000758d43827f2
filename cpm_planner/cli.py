import argparse
import json
import logging
import sys
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from cpm_planner import config
from cpm_planner.app.db.models import TaskModel
from cpm_planner.tools.cpa.engine import compute_critical_path
from cpm_planner.tools.formatting_tools import format_cpm_report

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(List[TaskModel])


def load_tasks(path: str) -> List[TaskModel]:
    """Read tasks from a JSON file holding either a list or {"tasks": [...]}."""
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    if isinstance(raw, dict):
        raw = raw.get("tasks", [])
    return _TASK_LIST.validate_python(raw)


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="cpm-planner", description="Critical path and single-worker schedule for a task set")
    ap.add_argument("tasks", help="JSON file with the task list")
    ap.add_argument("--format", choices=["json", "text"], default="text")
    ap.add_argument("--epsilon", type=float, default=config.CPM_FLOAT_EPSILON,
                    help="slack (hours) below which a task counts as critical")
    args = ap.parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL)

    try:
        tasks = load_tasks(args.tasks)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Cannot read tasks from %s: %s", args.tasks, e)
        return 2

    result = compute_critical_path(tasks, epsilon=args.epsilon)
    if args.format == "json":
        print(result.model_dump_json(indent=2))
    else:
        print(format_cpm_report(result, working_hours_per_day=config.WORKING_HOURS_PER_DAY))
    return 0


if __name__ == "__main__":
    sys.exit(main())
