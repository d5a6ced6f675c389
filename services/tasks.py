# dashboard/services/tasks.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional

from sqlmodel import Session, select
from sqlalchemy import or_

from core.log import get_logger
from core.statuses import normalize_status
from datetime_utils import DateLike, parse_iso_date, to_iso_date, utc_now
from helpers.gantt import GanttTask
from models.task import Task
from models.task_dependency import TaskDependency
from storage.db import get_session


logger = get_logger("tasks")

PRIORITIES = ("Low", "Medium", "High", "Urgent")
DEFAULT_PRIORITY = "Medium"

_CAMEL_TO_COLUMN = {
    "startDate": "start_date",
    "endDate": "end_date",
    "assigneeId": "assignee_id",
    "assigneeName": "assignee_name",
    "projectId": "project_id",
}


def normalize_priority(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_PRIORITY
    for priority in PRIORITIES:
        if priority.lower() == value.strip().lower():
            return priority
    return DEFAULT_PRIORITY


def _clamp_progress(value: Any) -> int:
    try:
        ivalue = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, ivalue))


def _check_range(start: Optional[date], end: Optional[date]) -> None:
    if start is not None and end is not None and end < start:
        raise ValueError(f"End date {end.isoformat()} is before start date {start.isoformat()}")


def format_date_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Translate a view-model payload into column names with ISO date strings.

    ``startDate``/``endDate`` (and the other camelCase keys) become their column
    names; ``date``/``datetime`` values become ``YYYY-MM-DD`` strings.
    """

    formatted: Dict[str, Any] = {}
    for key, value in payload.items():
        column = _CAMEL_TO_COLUMN.get(key, key)
        if column in ("start_date", "end_date") and isinstance(value, (date, datetime)):
            value = to_iso_date(value)
        formatted[column] = value
    return formatted


def to_gantt_task(task: Task) -> GanttTask:
    """Row -> chart view model."""
    return GanttTask(
        id=task.id,
        name=task.name,
        start_date=to_iso_date(task.start_date) or "",
        end_date=to_iso_date(task.end_date) or "",
        status=normalize_status(task.status),
        assignee=task.assignee_name or None,
    )


class TaskService:
    _listeners = {
        "after_create": set(),
        "after_update": set(),
        "after_delete": set(),
    }

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    @classmethod
    def subscribe(cls, event: str, callback):
        if event not in cls._listeners:
            raise ValueError(f"Unsupported event: {event}")
        cls._listeners[event].add(callback)

    @classmethod
    def unsubscribe(cls, event: str, callback):
        if event not in cls._listeners:
            return
        cls._listeners[event].discard(callback)

    @classmethod
    def _emit(cls, event: str, task_id: str):
        listeners = list(cls._listeners.get(event, []))
        for listener in listeners:
            try:
                listener(task_id)
            except Exception:
                logger.exception("Listener for %s failed on task %s", event, task_id)

    def list_for_project(self, project_id: int) -> List[Task]:
        with self._session_factory() as s:
            stmt = (
                select(Task)
                .where(Task.project_id == project_id)
                .order_by(Task.start_date.asc(), Task.created_at.asc())
            )
            return list(s.exec(stmt))

    def gantt_tasks(self, project_id: int) -> List[GanttTask]:
        """Tasks of ``project_id`` that have both dates, as chart rows."""
        return [
            to_gantt_task(t)
            for t in self.list_for_project(project_id)
            if t.start_date is not None and t.end_date is not None
        ]

    def get(self, task_id: str) -> Optional[Task]:
        with self._session_factory() as s:
            return s.get(Task, task_id)

    def add(
        self,
        name: str,
        project_id: int,
        *,
        description: Optional[str] = None,
        start_date: Optional[DateLike] = None,
        end_date: Optional[DateLike] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        assignee_id: Optional[str] = None,
        assignee_name: Optional[str] = None,
        progress: int = 0,
        emit: bool = True,
    ) -> Task:
        title = (name or "").strip()
        if not title:
            raise ValueError("Task name must not be empty")
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        _check_range(start, end)

        with self._session_factory() as s:
            t = Task(
                name=title,
                project_id=project_id,
                description=description or None,
                start_date=start,
                end_date=end,
                status=normalize_status(status),
                priority=normalize_priority(priority),
                assignee_id=assignee_id or None,
                assignee_name=assignee_name or None,
                progress=_clamp_progress(progress),
            )
            s.add(t)
            s.commit()
            s.refresh(t)
        logger.info("Task created: %s (project %s)", t.id, project_id)
        if emit:
            self._emit("after_create", t.id)
        return t

    def update(self, task_id: str, *, emit: bool = True, **fields) -> Optional[Task]:
        """Apply ``fields`` (column or camelCase names) to a task."""
        values = format_date_fields(fields)
        with self._session_factory() as s:
            t = s.get(Task, task_id)
            if not t:
                logger.warning("Cannot update task %s: not found", task_id)
                return None
            for key, value in values.items():
                if key in ("id", "created_at", "updated_at") or not hasattr(t, key):
                    continue
                if key in ("start_date", "end_date"):
                    parsed = parse_iso_date(value)
                    # only an explicit None / empty value clears a date
                    if parsed is None and value not in (None, ""):
                        raise ValueError(f"Invalid {key} for task {task_id}: {value!r}")
                    value = parsed
                elif key == "status":
                    value = normalize_status(value)
                elif key == "priority":
                    value = normalize_priority(value)
                elif key == "progress":
                    value = _clamp_progress(value)
                elif key == "name":
                    value = (value or "").strip() or t.name
                setattr(t, key, value)
            _check_range(t.start_date, t.end_date)
            t.updated_at = utc_now()
            s.add(t)
            s.commit()
            s.refresh(t)
        logger.info("Task updated: %s", task_id)
        if emit:
            self._emit("after_update", t.id)
        return t

    def update_dates(
        self,
        task_id: str,
        start_date: DateLike,
        end_date: DateLike,
        *,
        emit: bool = True,
    ) -> Optional[Task]:
        """Persist a schedule change made on the chart."""
        start = parse_iso_date(start_date)
        end = parse_iso_date(end_date)
        if start is None or end is None:
            raise ValueError(f"Both dates are required: {start_date!r} .. {end_date!r}")
        _check_range(start, end)
        return self.update(task_id, start_date=start, end_date=end, emit=emit)

    def set_status(self, task_id: str, status: str) -> Optional[Task]:
        return self.update(task_id, status=status)

    def delete(self, task_id: str, *, emit: bool = True) -> bool:
        with self._session_factory() as s:
            t = s.get(Task, task_id)
            if not t:
                return False
            if emit:
                self._emit("after_delete", task_id)
            links = s.exec(
                select(TaskDependency).where(
                    or_(TaskDependency.task_id == task_id, TaskDependency.dependency_id == task_id)
                )
            )
            for link in links:
                s.delete(link)
            s.delete(t)
            s.commit()
        logger.info("Task deleted: %s", task_id)
        return True


__all__ = [
    "PRIORITIES",
    "TaskService",
    "format_date_fields",
    "normalize_priority",
    "to_gantt_task",
]
