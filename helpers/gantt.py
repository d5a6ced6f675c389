"""Date and position arithmetic behind the Gantt timeline."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from core.log import get_logger
from datetime_utils import DateLike, parse_iso_date, to_iso_date


logger = get_logger("gantt")

# date.weekday(): Friday == 4, Saturday == 5
WEEKEND_DAYS = frozenset({4, 5})


@dataclass(frozen=True)
class GanttTask:
    """Schedulable unit shown as one row of the chart."""

    id: str
    name: str
    start_date: str
    end_date: str
    status: str
    assignee: Optional[str] = None


@dataclass(frozen=True)
class GanttPosition:
    left: int
    width: int


ZERO_POSITION = GanttPosition(left=0, width=0)


@dataclass(frozen=True)
class GanttWindow:
    """Contiguous date range currently rendered in the timeline."""

    start: date
    end: date

    @property
    def days(self) -> List[date]:
        return visible_days(self.start, self.end)

    def __len__(self) -> int:
        return max((self.end - self.start).days + 1, 0)

    def shifted(self, days: int) -> "GanttWindow":
        delta = timedelta(days=days)
        return GanttWindow(self.start + delta, self.end + delta)


def default_window(*, today: Optional[date] = None, length_days: int = 30) -> GanttWindow:
    base = today or date.today()
    return GanttWindow(base, base + timedelta(days=length_days))


def derive_date_range(tasks: Iterable[GanttTask]) -> Optional[Tuple[date, date]]:
    """Return ``(earliest start, latest end)`` over ``tasks`` or ``None`` when empty."""

    earliest: Optional[date] = None
    latest: Optional[date] = None
    for task in tasks:
        start = parse_iso_date(task.start_date)
        end = parse_iso_date(task.end_date)
        if start is None or end is None:
            logger.warning(
                "Skipping task %s with unparseable dates: %r .. %r",
                task.id,
                task.start_date,
                task.end_date,
            )
            continue
        if earliest is None or start < earliest:
            earliest = start
        if latest is None or end > latest:
            latest = end
    if earliest is None or latest is None:
        return None
    return earliest, latest


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from ``start`` to ``end`` inclusive."""

    current = start
    step = timedelta(days=1)
    while current <= end:
        yield current
        current += step


def visible_days(start: date, end: date) -> List[date]:
    return list(iter_days(start, end))


def calculate_task_position(
    task: GanttTask,
    reference_start: date,
    *,
    cell_width: int = 60,
) -> GanttPosition:
    """Map a task's dates onto a ``left``/``width`` pixel pair.

    ``left`` is negative for tasks starting before ``reference_start``; callers clip
    for display. Missing or malformed dates degrade to a zero-size rectangle.
    """

    start = parse_iso_date(task.start_date)
    end = parse_iso_date(task.end_date)
    if start is None or end is None:
        logger.warning(
            "Error calculating position for task %s: %r .. %r",
            task.id,
            task.start_date,
            task.end_date,
        )
        return ZERO_POSITION

    start_offset = (start - reference_start).days
    duration = (end - start).days + 1
    return GanttPosition(left=start_offset * cell_width, width=duration * cell_width)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def is_weekend(day: date) -> bool:
    return _as_date(day).weekday() in WEEKEND_DAYS


def is_today(day: date, *, now: Optional[datetime] = None) -> bool:
    """Compare against the local wall-clock date at call time."""

    current = (now or datetime.now()).date()
    value = _as_date(day)
    return (
        value.year == current.year
        and value.month == current.month
        and value.day == current.day
    )


def today_scroll_offset(
    days: Sequence[date],
    *,
    cell_width: int = 60,
    lead_cells: int = 2,
    now: Optional[datetime] = None,
) -> Optional[int]:
    """Horizontal scroll offset that puts today ``lead_cells`` from the left edge."""

    for index, day in enumerate(days):
        if is_today(day, now=now):
            return max(index - lead_cells, 0) * cell_width
    return None


def set_task_dates(
    tasks: Sequence[GanttTask],
    task_id: str,
    new_start: DateLike,
    new_end: DateLike,
) -> List[GanttTask]:
    """Return ``tasks`` with one task's dates replaced.

    Entries other than ``task_id`` are returned as the same objects. The range
    is not checked for ``new_start <= new_end``.
    """

    start_text = to_iso_date(new_start)
    end_text = to_iso_date(new_end)
    if start_text is None or end_text is None:
        raise ValueError(f"Invalid dates for task {task_id}: {new_start!r} .. {new_end!r}")

    result: List[GanttTask] = []
    for task in tasks:
        if task.id == task_id:
            result.append(replace(task, start_date=start_text, end_date=end_text))
        else:
            result.append(task)
    return result


__all__ = [
    "GanttPosition",
    "GanttTask",
    "GanttWindow",
    "WEEKEND_DAYS",
    "ZERO_POSITION",
    "calculate_task_position",
    "default_window",
    "derive_date_range",
    "is_today",
    "is_weekend",
    "iter_days",
    "set_task_dates",
    "today_scroll_offset",
    "visible_days",
]
