"""In-memory state of one Gantt chart: tasks, visible window and selection."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from core.log import get_logger
from core.settings import UI
from datetime_utils import DateLike, parse_iso_date
from helpers import gantt
from helpers.gantt import GanttPosition, GanttTask, GanttWindow


GANTT_UI = UI.gantt


class GanttStateError(RuntimeError):
    """Raised for a selection transition that has no task to act on."""


class SelectionMode(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    EDITING = "editing"


@dataclass(frozen=True)
class GanttSelection:
    mode: SelectionMode = SelectionMode.IDLE
    task_id: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.mode is SelectionMode.EDITING


IDLE = GanttSelection()


class GanttChart:
    """Owns the task collection shown by the chart and everything derived from it.

    Derived values (window, day list) are recomputed whenever tasks or window
    bounds are written, never lazily on read.
    """

    def __init__(
        self,
        tasks: Iterable[GanttTask] = (),
        *,
        cell_width: int = GANTT_UI.cell_width,
        page_days: int = GANTT_UI.page_days,
        today: Optional[date] = None,
    ) -> None:
        self.cell_width = cell_width
        self.page_days = page_days
        self.logger = get_logger("gantt")
        self._tasks: List[GanttTask] = []
        self._window = gantt.default_window(today=today, length_days=GANTT_UI.default_window_days)
        self._days: List[date] = []
        self._selection = IDLE
        self.set_tasks(tasks)

    # ------------------------------------------------------------------
    # Tasks and window
    @property
    def tasks(self) -> List[GanttTask]:
        return list(self._tasks)

    @property
    def window(self) -> GanttWindow:
        return self._window

    @property
    def visible_days(self) -> List[date]:
        return list(self._days)

    @property
    def grid_width(self) -> int:
        return len(self._days) * self.cell_width

    def set_tasks(self, tasks: Iterable[GanttTask]) -> None:
        self._tasks = list(tasks)
        bounds = gantt.derive_date_range(self._tasks)
        if bounds is not None:
            self._window = GanttWindow(*bounds)
        self._recompute_days()
        self._drop_stale_selection()

    def set_window(self, start: date, end: date) -> None:
        self._window = GanttWindow(start, end)
        self._recompute_days()

    def shift_window(self, days: int) -> None:
        self._window = self._window.shifted(days)
        self._recompute_days()

    def previous_period(self) -> None:
        self.shift_window(-self.page_days)

    def next_period(self) -> None:
        self.shift_window(self.page_days)

    def go_today(self, *, today: Optional[date] = None) -> None:
        """Move the window so it starts today, keeping its length."""
        base = today or date.today()
        length = max(len(self._window), 1)
        self.set_window(base, base + timedelta(days=length - 1))

    def _recompute_days(self) -> None:
        self._days = gantt.visible_days(self._window.start, self._window.end)

    # ------------------------------------------------------------------
    # Derived per-task / per-day values
    def position_of(self, task: GanttTask) -> GanttPosition:
        return gantt.calculate_task_position(task, self._window.start, cell_width=self.cell_width)

    def positions(self) -> List[GanttPosition]:
        return [self.position_of(task) for task in self._tasks]

    def is_weekend(self, day: date) -> bool:
        return gantt.is_weekend(day)

    def is_today(self, day: date, *, now: Optional[datetime] = None) -> bool:
        return gantt.is_today(day, now=now)

    def today_scroll_offset(self, *, now: Optional[datetime] = None) -> Optional[int]:
        return gantt.today_scroll_offset(
            self._days,
            cell_width=self.cell_width,
            lead_cells=GANTT_UI.today_lead_cells,
            now=now,
        )

    def find_task(self, task_id: Optional[str]) -> Optional[GanttTask]:
        if task_id is None:
            return None
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    # ------------------------------------------------------------------
    # Selection
    @property
    def selection(self) -> GanttSelection:
        return self._selection

    @property
    def selected_task(self) -> Optional[GanttTask]:
        return self.find_task(self._selection.task_id)

    def select_task(self, task_id: str) -> None:
        if self.find_task(task_id) is None:
            raise GanttStateError(f"Unknown task: {task_id}")
        self._selection = GanttSelection(SelectionMode.SELECTED, task_id)

    def open_editor(self, task_id: Optional[str] = None) -> GanttTask:
        target = task_id or self._selection.task_id
        task = self.find_task(target)
        if task is None:
            raise GanttStateError("No task selected for editing")
        self._selection = GanttSelection(SelectionMode.EDITING, task.id)
        return task

    def close_editor(self) -> None:
        self._selection = IDLE

    def _drop_stale_selection(self) -> None:
        if self._selection.task_id is not None and self.find_task(self._selection.task_id) is None:
            self._selection = IDLE

    # ------------------------------------------------------------------
    # Mutation
    def _fits_window(self, task: GanttTask) -> bool:
        start = parse_iso_date(task.start_date)
        end = parse_iso_date(task.end_date)
        if start is None or end is None:
            return False
        return self._window.start <= start and end <= self._window.end

    def _store_edit(self, tasks: List[GanttTask], task_id: str) -> Optional[GanttTask]:
        self._tasks = tasks
        updated = self.find_task(task_id)
        # keep a paged window as long as the edited task still fits in it
        if updated is not None and not self._fits_window(updated):
            self.set_tasks(tasks)
        return updated

    def apply_date_change(
        self,
        task_id: str,
        new_start: DateLike,
        new_end: DateLike,
    ) -> Optional[GanttTask]:
        """Update one task's dates in memory; persistence is up to the caller."""

        updated = self._store_edit(
            gantt.set_task_dates(self._tasks, task_id, new_start, new_end), task_id
        )
        if updated is None:
            self.logger.debug("Date change for unknown task %s ignored", task_id)
        else:
            self.logger.info(
                "Task %s rescheduled to %s .. %s", task_id, updated.start_date, updated.end_date
            )
        return updated

    def replace_task(self, task: GanttTask) -> Optional[GanttTask]:
        """Swap in a fresh copy of one task (e.g. the stored row after a save)."""

        tasks = [task if current.id == task.id else current for current in self._tasks]
        return self._store_edit(tasks, task.id)


__all__ = [
    "GanttChart",
    "GanttSelection",
    "GanttStateError",
    "SelectionMode",
]
