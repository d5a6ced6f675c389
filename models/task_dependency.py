"""SQLModel table linking a task to the tasks it depends on."""

from __future__ import annotations

from datetime import datetime

from sqlmodel import Field, SQLModel

from datetime_utils import utc_now


class TaskDependency(SQLModel, table=True):
    __tablename__ = "task_dependency"

    task_id: str = Field(primary_key=True, foreign_key="task.id")
    dependency_id: str = Field(primary_key=True, foreign_key="task.id")
    created_at: datetime = Field(default_factory=utc_now)


__all__ = ["TaskDependency"]
