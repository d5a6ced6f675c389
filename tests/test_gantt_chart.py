from datetime import date, datetime, timedelta

import pytest

from helpers.gantt import GanttPosition, GanttTask, GanttWindow
from services.gantt_chart import GanttChart, GanttStateError, SelectionMode


def _tasks():
    return [
        GanttTask("t1", "Design", "2024-03-03", "2024-03-07", "Completed", "Sara"),
        GanttTask("t2", "Build", "2024-03-08", "2024-03-20", "In Progress", "Omar"),
        GanttTask("t3", "Review", "2024-03-18", "2024-03-22", "Review"),
    ]


def test_empty_chart_uses_default_window():
    today = date(2024, 6, 1)
    chart = GanttChart(today=today)
    assert chart.window == GanttWindow(today, today + timedelta(days=30))
    assert len(chart.visible_days) == 31
    assert chart.grid_width == 31 * 60


def test_set_tasks_derives_window():
    chart = GanttChart(_tasks())
    assert chart.window == GanttWindow(date(2024, 3, 3), date(2024, 3, 22))
    assert chart.visible_days[0] == date(2024, 3, 3)
    assert chart.visible_days[-1] == date(2024, 3, 22)


def test_empty_task_set_keeps_prior_window():
    chart = GanttChart(_tasks())
    chart.set_tasks([])
    assert chart.window == GanttWindow(date(2024, 3, 3), date(2024, 3, 22))
    assert chart.tasks == []


def test_positions_relative_to_window_start():
    chart = GanttChart(_tasks())
    assert chart.positions() == [
        GanttPosition(0, 300),
        GanttPosition(300, 780),
        GanttPosition(900, 300),
    ]


def test_paging_moves_window_and_days():
    chart = GanttChart(_tasks(), page_days=7)
    chart.next_period()
    assert chart.window == GanttWindow(date(2024, 3, 10), date(2024, 3, 29))
    assert chart.visible_days[0] == date(2024, 3, 10)
    assert chart.position_of(chart.tasks[0]) == GanttPosition(-420, 300)
    chart.previous_period()
    chart.previous_period()
    assert chart.window.start == date(2024, 2, 25)


def test_set_window_explicit_bounds():
    chart = GanttChart(_tasks())
    chart.set_window(date(2024, 3, 1), date(2024, 3, 5))
    assert len(chart.visible_days) == 5
    chart.set_window(date(2024, 3, 5), date(2024, 3, 1))
    assert chart.visible_days == []


def test_go_today_keeps_length():
    chart = GanttChart(_tasks())
    chart.go_today(today=date(2024, 7, 1))
    assert chart.window == GanttWindow(date(2024, 7, 1), date(2024, 7, 20))


def test_today_scroll_offset_inside_window():
    chart = GanttChart(_tasks())
    assert chart.today_scroll_offset(now=datetime(2024, 3, 10, 12, 0)) == 5 * 60
    assert chart.today_scroll_offset(now=datetime(2025, 1, 1)) is None


def test_selection_transitions():
    chart = GanttChart(_tasks())
    assert chart.selection.mode is SelectionMode.IDLE
    assert chart.selected_task is None

    chart.select_task("t2")
    assert chart.selection.mode is SelectionMode.SELECTED
    assert chart.selected_task.name == "Build"

    task = chart.open_editor()
    assert task.id == "t2"
    assert chart.selection.is_editing

    chart.close_editor()
    assert chart.selection.mode is SelectionMode.IDLE
    assert chart.selection.task_id is None


def test_open_editor_without_selection_fails():
    chart = GanttChart(_tasks())
    with pytest.raises(GanttStateError):
        chart.open_editor()
    with pytest.raises(GanttStateError):
        chart.select_task("nope")
    assert chart.open_editor("t3").id == "t3"


def test_selection_dropped_when_task_disappears():
    chart = GanttChart(_tasks())
    chart.select_task("t3")
    chart.set_tasks(_tasks()[:2])
    assert chart.selection.mode is SelectionMode.IDLE


def test_apply_date_change_updates_position():
    chart = GanttChart(_tasks())
    untouched = chart.tasks[0]
    updated = chart.apply_date_change("t2", date(2024, 3, 10), date(2024, 3, 12))
    assert updated.start_date == "2024-03-10"
    assert chart.tasks[0] is untouched
    assert chart.position_of(updated) == GanttPosition(7 * 60, 3 * 60)


def test_apply_date_change_rederives_window():
    chart = GanttChart(_tasks())
    chart.apply_date_change("t3", "2024-03-18", "2024-04-02")
    assert chart.window.end == date(2024, 4, 2)


def test_apply_date_change_unknown_task():
    chart = GanttChart(_tasks())
    before = chart.tasks
    assert chart.apply_date_change("zzz", "2024-01-01", "2024-01-02") is None
    assert chart.tasks == before


def test_apply_date_change_keeps_paged_window_when_task_fits():
    chart = GanttChart(_tasks(), page_days=7)
    chart.next_period()
    paged = chart.window
    chart.apply_date_change("t2", "2024-03-12", "2024-03-14")
    assert chart.window == paged
    assert chart.position_of(chart.find_task("t2")) == GanttPosition(2 * 60, 3 * 60)


def test_apply_date_change_outside_paged_window_rederives():
    chart = GanttChart(_tasks(), page_days=7)
    chart.next_period()
    chart.apply_date_change("t2", "2024-03-04", "2024-03-06")
    assert chart.window == GanttWindow(date(2024, 3, 3), date(2024, 3, 22))


def test_replace_task_swaps_one_entry():
    chart = GanttChart(_tasks())
    first = chart.tasks[0]
    renamed = GanttTask("t2", "Build v2", "2024-03-08", "2024-03-20", "At Risk", "Omar")
    assert chart.replace_task(renamed) is renamed
    assert chart.find_task("t2").name == "Build v2"
    assert chart.tasks[0] is first
    assert chart.window == GanttWindow(date(2024, 3, 3), date(2024, 3, 22))
