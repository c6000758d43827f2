from typing import List
from pydantic import BaseModel
from datetime import datetime


class TaskModel(BaseModel):
    id: str
    name: str = ""
    duration: float  # hours
    earliest_start: datetime
    dependencies: List[str] = []


class ProjectModel(BaseModel):
    id: int
    name: str
    tasks: List[TaskModel] = []
