from __future__ import annotations

from typing import Callable, Optional

import flet as ft

from core.settings import UI
from core.statuses import normalize_status, status_options
from datetime_utils import parse_iso_date
from helpers.gantt import GanttTask


def open_alert_dialog(page: ft.Page, *, title: str, content: ft.Control, actions: list[ft.Control]):
    dlg = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=content,
        actions=actions,
        actions_alignment=ft.MainAxisAlignment.END,
    )
    page.overlay.append(dlg)
    dlg.open = True
    page.update()
    return dlg


def close_alert_dialog(page: ft.Page, dlg: Optional[ft.AlertDialog]):
    if dlg is None:
        return
    dlg.open = False
    try:
        page.overlay.remove(dlg)
    except ValueError:
        pass
    page.update()


def open_task_edit_dialog(
    page: ft.Page,
    task: GanttTask,
    *,
    on_save: Callable[[str, str, str, str], None],
    on_cancel: Callable[[], None],
) -> ft.AlertDialog:
    """Edit dialog for a task's name, status and start/end dates (``YYYY-MM-DD``).

    ``on_save`` receives ``(name, status, start, end)`` once the input is valid.
    """

    name_field = ft.TextField(label="اسم المهمة", value=task.name)
    status_field = ft.Dropdown(
        label="الحالة",
        value=normalize_status(task.status),
        options=[ft.dropdown.Option(key, label) for key, label in status_options().items()],
    )
    start_field = ft.TextField(label="تاريخ البدء", value=task.start_date, hint_text="YYYY-MM-DD")
    end_field = ft.TextField(label="تاريخ الانتهاء", value=task.end_date, hint_text="YYYY-MM-DD")
    error_text = ft.Text("", color=ft.Colors.RED_400, size=12)

    def _save(e):
        name = (name_field.value or "").strip()
        if not name:
            error_text.value = "اسم المهمة مطلوب"
            page.update()
            return
        start = parse_iso_date(start_field.value)
        end = parse_iso_date(end_field.value)
        if start is None or end is None:
            error_text.value = "صيغة التاريخ غير صحيحة"
            page.update()
            return
        if end < start:
            error_text.value = "تاريخ الانتهاء قبل تاريخ البدء"
            page.update()
            return
        on_save(name, normalize_status(status_field.value), start.isoformat(), end.isoformat())

    content = ft.Container(
        width=UI.gantt.dialog_width,
        content=ft.Column(
            [
                name_field,
                ft.Text(task.assignee or "", size=12, color=UI.theme.text_subtle),
                status_field,
                start_field,
                end_field,
                error_text,
            ],
            tight=True,
            spacing=10,
        ),
    )
    return open_alert_dialog(
        page,
        title="تعديل المهمة",
        content=content,
        actions=[
            ft.TextButton("إلغاء", on_click=lambda e: on_cancel()),
            ft.FilledButton("حفظ", on_click=_save),
        ],
    )
