from __future__ import annotations

from typing import Callable, List

from sqlmodel import Session, select

from core.log import get_logger
from models.task import Task
from models.task_dependency import TaskDependency
from storage.db import get_session


logger = get_logger("tasks")


class TaskDependencyService:
    """Links of the form "task depends on dependency"."""

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session_factory = session_factory

    def get_task_dependencies(self, task_id: str) -> List[str]:
        with self._session_factory() as session:
            stmt = (
                select(TaskDependency.dependency_id)
                .where(TaskDependency.task_id == task_id)
                .order_by(TaskDependency.created_at.asc())
            )
            return list(session.exec(stmt))

    def add_task_dependency(self, task_id: str, dependency_id: str) -> bool:
        if task_id == dependency_id:
            logger.warning("Task %s cannot depend on itself", task_id)
            return False
        with self._session_factory() as session:
            if session.get(Task, task_id) is None or session.get(Task, dependency_id) is None:
                logger.error(
                    "Error adding dependency between tasks %s and %s: task not found",
                    task_id,
                    dependency_id,
                )
                return False
            if session.get(TaskDependency, (task_id, dependency_id)) is not None:
                return True
            session.add(TaskDependency(task_id=task_id, dependency_id=dependency_id))
            session.commit()
        logger.info("Task %s now depends on %s", task_id, dependency_id)
        return True

    def remove_task_dependency(self, task_id: str, dependency_id: str) -> bool:
        with self._session_factory() as session:
            link = session.get(TaskDependency, (task_id, dependency_id))
            if link is None:
                return False
            session.delete(link)
            session.commit()
        logger.info("Removed dependency %s -> %s", task_id, dependency_id)
        return True


__all__ = ["TaskDependencyService"]
