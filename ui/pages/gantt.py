# ui/pages/gantt.py
from __future__ import annotations

from datetime import date
from typing import List, Optional

import flet as ft

from core.log import get_logger
from core.settings import UI
from core.statuses import legend_entries, normalize_status, status_color
from helpers.gantt import GanttTask
from services.gantt_chart import GanttChart, GanttStateError
from services.tasks import TaskService, to_gantt_task
from ui.dialogs import close_alert_dialog, open_task_edit_dialog

# ===== settings =====
GANTT_UI = UI.gantt
THEME = UI.theme

CELL_W = GANTT_UI.cell_width
ROW_H = GANTT_UI.row_height
BAR_H = GANTT_UI.bar_height
BAR_TOP = GANTT_UI.bar_top_offset
TASK_COL_W = GANTT_UI.task_column_width
HEADER_H = GANTT_UI.header_height

# Arabic month abbreviations for the day header, January first.
MONTHS_AR = (
    "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
    "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
)


def _day_bg(chart: GanttChart, day: date) -> Optional[str]:
    if chart.is_weekend(day):
        return THEME.weekend_bg
    if chart.is_today(day):
        return THEME.today_bg
    return None


class GanttPage:
    """
    Project timeline: legend and paging on top, task list on the side,
    one bar per task over a day grid. Clicking a bar or row opens the task editor.
    """

    def __init__(self, page: ft.Page, project_id: int, *, svc: Optional[TaskService] = None):
        self.page = page
        self.project_id = project_id
        self.svc = svc or TaskService()
        self.chart = GanttChart()
        self.logger = get_logger("ui")
        self._dialog: Optional[ft.AlertDialog] = None

        self.title_text = ft.Text("", size=20, weight=ft.FontWeight.BOLD)
        self.prev_btn = ft.OutlinedButton("السابق", icon=ft.Icons.CHEVRON_LEFT, on_click=lambda e: self.shift_period(-1))
        self.next_btn = ft.OutlinedButton("التالي", icon=ft.Icons.CHEVRON_RIGHT, on_click=lambda e: self.shift_period(1))
        self.today_btn = ft.IconButton(icon=ft.Icons.TODAY, tooltip="اليوم", on_click=lambda e: self.go_today())

        header = ft.Row(
            controls=[
                self._build_legend(),
                self.title_text,
                ft.Row([self.prev_btn, self.today_btn, self.next_btn], spacing=6),
            ],
            alignment=ft.MainAxisAlignment.SPACE_BETWEEN,
        )

        self.timeline_row = ft.Row(scroll=ft.ScrollMode.AUTO, spacing=0, vertical_alignment=ft.CrossAxisAlignment.START)
        self.task_column = ft.Column(spacing=0, width=TASK_COL_W)
        self.grid = ft.Container(
            content=ft.Row([self.task_column, ft.VerticalDivider(width=1), ft.Container(self.timeline_row, expand=True)],
                           spacing=0, vertical_alignment=ft.CrossAxisAlignment.START),
            border=ft.border.all(1, THEME.outline),
            border_radius=6,
        )

        self.view = ft.Container(
            content=ft.Column([header, ft.Divider(height=1), self.grid], spacing=12, scroll=ft.ScrollMode.AUTO),
            expand=True,
            padding=16,
        )

    # ===== loading =====
    def load(self):
        try:
            tasks = self.svc.gantt_tasks(self.project_id)
        except Exception as exc:
            self.logger.error("Error fetching tasks for project %s: %s", self.project_id, exc)
            self._toast("تعذر تحميل المهام")
            tasks = []
        self.chart.set_tasks(tasks)
        self.render()
        offset = self.chart.today_scroll_offset()
        if offset is not None:
            self.timeline_row.scroll_to(offset=offset, duration=0)

    def render(self):
        window = self.chart.window
        self.title_text.value = f"{window.start.isoformat()} — {window.end.isoformat()}"
        self.task_column.controls = self._build_task_list()
        self.timeline_row.controls = [self._build_timeline()]
        self.page.update()

    # ===== navigation =====
    def shift_period(self, direction: int):
        if direction < 0:
            self.chart.previous_period()
        else:
            self.chart.next_period()
        self.render()

    def go_today(self):
        self.chart.go_today()
        self.render()

    # ===== building blocks =====
    def _build_legend(self) -> ft.Row:
        items = []
        for label, color in legend_entries():
            items.append(
                ft.Row(
                    [ft.Container(width=12, height=12, bgcolor=color, border_radius=6),
                     ft.Text(label, size=12, color=THEME.text_subtle)],
                    spacing=4,
                )
            )
        return ft.Row(items, spacing=10)

    def _build_task_list(self) -> List[ft.Control]:
        rows: List[ft.Control] = [
            ft.Container(ft.Text("المهمة", weight=ft.FontWeight.W_500), height=HEADER_H, padding=8,
                         border=ft.border.only(bottom=ft.BorderSide(1, THEME.outline)))
        ]
        for task in self.chart.tasks:
            rows.append(
                ft.Container(
                    height=ROW_H,
                    padding=ft.padding.symmetric(horizontal=8),
                    border=ft.border.only(bottom=ft.BorderSide(1, THEME.outline)),
                    on_click=lambda e, tid=task.id: self.on_task_click(tid),
                    content=ft.Row(
                        [
                            ft.Container(width=14, height=14, bgcolor=status_color(task.status),
                                         border_radius=7, tooltip=task.status),
                            ft.Column(
                                [ft.Text(task.name, size=13, weight=ft.FontWeight.W_500, no_wrap=True),
                                 ft.Text(task.assignee or "", size=11, color=THEME.text_subtle, no_wrap=True)],
                                spacing=0, expand=True,
                            ),
                        ],
                        spacing=8,
                    ),
                )
            )
        return rows

    def _build_timeline(self) -> ft.Control:
        days = self.chart.visible_days
        width = self.chart.grid_width
        height = max(len(self.chart.tasks), 1) * ROW_H

        header_cells = []
        for day in days:
            header_cells.append(
                ft.Container(
                    width=CELL_W,
                    height=HEADER_H,
                    bgcolor=_day_bg(self.chart, day),
                    border=ft.border.only(right=ft.BorderSide(1, THEME.outline)),
                    alignment=ft.alignment.center,
                    content=ft.Column(
                        [ft.Text(str(day.day), size=12, weight=ft.FontWeight.W_500),
                         ft.Text(MONTHS_AR[day.month - 1], size=10, color=THEME.text_subtle)],
                        spacing=0,
                        horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    ),
                )
            )

        layers: List[ft.Control] = []
        for index, day in enumerate(days):
            layers.append(
                ft.Container(
                    left=index * CELL_W,
                    top=0,
                    width=CELL_W,
                    height=height,
                    bgcolor=_day_bg(self.chart, day),
                    border=ft.border.only(right=ft.BorderSide(1, THEME.outline)),
                )
            )
        for index, task in enumerate(self.chart.tasks):
            bar = self._build_bar(task, index, width)
            if bar is not None:
                layers.append(bar)

        return ft.Column(
            [
                ft.Row(header_cells, spacing=0),
                ft.Stack(layers, width=width, height=height),
            ],
            spacing=0,
            width=width,
        )

    def _build_bar(self, task: GanttTask, index: int, grid_width: int) -> Optional[ft.Control]:
        position = self.chart.position_of(task)
        # clip to the grid; bars fully outside the window are not drawn
        left = max(position.left, 0)
        right = min(position.left + position.width, grid_width)
        if position.width <= 0 or right <= left:
            return None
        return ft.Container(
            left=left,
            top=index * ROW_H + BAR_TOP,
            width=right - left,
            height=BAR_H,
            bgcolor=status_color(task.status),
            border_radius=6,
            padding=ft.padding.symmetric(horizontal=8, vertical=4),
            tooltip=f"{task.name}\n{task.start_date} — {task.end_date}",
            on_click=lambda e, tid=task.id: self.on_task_click(tid),
            content=ft.Text(task.name, size=12, color=THEME.bar_text, no_wrap=True,
                            overflow=ft.TextOverflow.ELLIPSIS),
        )

    # ===== editing =====
    def on_task_click(self, task_id: str):
        try:
            self.chart.select_task(task_id)
            task = self.chart.open_editor()
        except GanttStateError as exc:
            self.logger.warning("Cannot open editor: %s", exc)
            return
        self._dialog = open_task_edit_dialog(
            self.page,
            task,
            on_save=lambda name, status, start, end, tid=task.id: self.save_task(
                tid, start, end, name=name, status=status
            ),
            on_cancel=self.close_editor,
        )

    def close_editor(self):
        self.chart.close_editor()
        close_alert_dialog(self.page, self._dialog)
        self._dialog = None

    def save_task(
        self,
        task_id: str,
        start: str,
        end: str,
        *,
        name: Optional[str] = None,
        status: Optional[str] = None,
    ):
        """Show the new dates right away, persist, then sync with the stored row."""
        self.chart.apply_date_change(task_id, start, end)
        try:
            stored = self.svc.update_dates(task_id, start, end)
            if stored is not None and name and name != stored.name:
                stored = self.svc.update(task_id, name=name)
            if stored is not None and status and normalize_status(status) != normalize_status(stored.status):
                stored = self.svc.set_status(task_id, status)
        except Exception as exc:
            self.logger.error("Error updating task %s: %s", task_id, exc)
            stored = None
            self._toast("تعذر حفظ التعديل")
        if stored is None:
            self._revert(task_id)
        else:
            self.chart.replace_task(to_gantt_task(stored))
        self.close_editor()
        self.render()

    def _revert(self, task_id: str):
        row = self.svc.get(task_id)
        if row is None or row.start_date is None or row.end_date is None:
            self.chart.set_tasks([t for t in self.chart.tasks if t.id != task_id])
            return
        self.chart.replace_task(to_gantt_task(row))

    def _toast(self, message: str):
        self.page.open(ft.SnackBar(ft.Text(message)))
