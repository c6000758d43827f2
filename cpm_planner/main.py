from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from sqlalchemy.orm import Session
from typing import List
import logging

from cpm_planner import config
from cpm_planner.app.db.database import get_db
from cpm_planner.app.db.db_loader import ProjectNotFoundError
from cpm_planner.app.db.models import TaskModel
from cpm_planner.tools.cpa.engine import (
    CPMResult,
    compute_critical_path,
    run_cpa,
    get_critical_path,
    get_task_slack,
    get_project_duration,
    summarize_project_cpa,
)
from cpm_planner.tools.formatting_tools import format_cpm_report, format_cpm_result

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger("api")

app = FastAPI(title="CPM Planner")


class TaskSetRequest(BaseModel):
    tasks: List[TaskModel] = []


# Enable CORS for local frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _not_found(project_id: int, e: ProjectNotFoundError) -> HTTPException:
    logger.info("project %s not found: %s", project_id, e)
    return HTTPException(status_code=404, detail=f"Project {project_id} not found")


@app.get("/")
async def root():
    return {"message": "Hello from cpm-planner!"}

@app.get("/debug/ping")
async def debug_ping():
    return {"pong": True}

@app.post("/cpm", response_model=CPMResult)
async def cpm(request: TaskSetRequest):
    """
    Run the critical path computation over the posted task set.
    Cycles never fail the request; they show up in `diagnostics` and `excluded_task_ids`.
    """
    try:
        result = compute_critical_path(request.tasks, epsilon=config.CPM_FLOAT_EPSILON)
        if result.has_cycle:
            logger.warning("/cpm excluded tasks due to a dependency cycle: %s", result.excluded_task_ids)
        return result
    except Exception as e:
        logging.exception("/cpm failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/cpm/report")
async def cpm_report(request: TaskSetRequest):
    """Plain-text report of the schedule and critical path for the posted task set."""
    try:
        result = compute_critical_path(request.tasks, epsilon=config.CPM_FLOAT_EPSILON)
        return {"report": format_cpm_report(result, working_hours_per_day=config.WORKING_HOURS_PER_DAY)}
    except Exception as e:
        logging.exception("/cpm/report failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/cpm/view")
async def cpm_view(request: TaskSetRequest):
    """UI-ready view of the schedule (labels, severity buckets, calendar instants)."""
    try:
        result = compute_critical_path(request.tasks, epsilon=config.CPM_FLOAT_EPSILON)
        return format_cpm_result(result, working_hours_per_day=config.WORKING_HOURS_PER_DAY)
    except Exception as e:
        logging.exception("/cpm/view failed: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/projects/{project_id}/cpm")
async def project_cpm(project_id: int, db: Session = Depends(get_db)):
    try:
        return run_cpa(db, project_id, epsilon=config.CPM_FLOAT_EPSILON)
    except ProjectNotFoundError as e:
        raise _not_found(project_id, e)
    except Exception as e:
        logging.exception("/projects/%s/cpm failed: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/projects/{project_id}/critical-path")
async def project_critical_path(project_id: int, db: Session = Depends(get_db)):
    try:
        return get_critical_path(db, project_id)
    except ProjectNotFoundError as e:
        raise _not_found(project_id, e)
    except Exception as e:
        logging.exception("/projects/%s/critical-path failed: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/projects/{project_id}/duration")
async def project_duration(project_id: int, db: Session = Depends(get_db)):
    try:
        return get_project_duration(db, project_id)
    except ProjectNotFoundError as e:
        raise _not_found(project_id, e)
    except Exception as e:
        logging.exception("/projects/%s/duration failed: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/projects/{project_id}/summary")
async def project_summary(project_id: int, db: Session = Depends(get_db)):
    try:
        return summarize_project_cpa(db, project_id)
    except ProjectNotFoundError as e:
        raise _not_found(project_id, e)
    except Exception as e:
        logging.exception("/projects/%s/summary failed: %s", project_id, e)
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/tasks/{task_id}/slack")
async def task_slack(task_id: str, db: Session = Depends(get_db)):
    """
    Return the logical slack of a task, looked up through its project.
    404 when the task is unknown or was excluded by a dependency cycle.
    """
    try:
        res = get_task_slack(db, task_id)
        if res.get("error"):
            raise HTTPException(status_code=404, detail=f"{task_id}: {res['error']}")
        return res
    except HTTPException:
        raise
    except Exception as e:
        logging.exception("/tasks/%s/slack failed: %s", task_id, e)
        raise HTTPException(status_code=500, detail=str(e))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.UVICORN_HOST, port=config.UVICORN_PORT)
