# dashboard/models/task.py
from typing import Optional
from datetime import date, datetime
from uuid import uuid4

from datetime_utils import utc_now
from sqlmodel import SQLModel, Field


def _new_id() -> str:
    return uuid4().hex


class Task(SQLModel, table=True):
    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    description: Optional[str] = None
    project_id: int = Field(index=True)
    assignee_id: Optional[str] = None
    assignee_name: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str = "Not Started"   # Completed / In Progress / Review / At Risk / Not Started
    priority: str = "Medium"      # Low / Medium / High / Urgent
    progress: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
