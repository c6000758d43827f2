from .models import TaskModel, ProjectModel

__all__ = ["TaskModel", "ProjectModel"]
