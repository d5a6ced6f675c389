"""ORM models exposed by the dashboard application."""
from .task import Task
from .task_dependency import TaskDependency

__all__ = ["Task", "TaskDependency"]
