# dashboard/main.py
import argparse
import os, sys
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))
import flet as ft

from core.settings import UI
from storage.db import init_db
from ui.pages.gantt import GanttPage


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Project timeline dashboard")
    parser.add_argument("--project", type=int, default=1, help="project id to show")
    return parser.parse_args(argv)


def build(project_id: int):
    def main(page: ft.Page):
        page.title = UI.app_title
        page.theme_mode = UI.theme_mode
        page.theme = ft.Theme(color_scheme_seed=UI.color_scheme_seed)
        page.rtl = UI.rtl
        page.appbar = ft.AppBar(title=ft.Text(UI.app_title), center_title=False)
        page.padding = 0
        page.window.min_width = UI.window_min_width
        page.window.min_height = UI.window_min_height

        init_db()
        gantt = GanttPage(page, project_id)
        page.add(gantt.view)
        gantt.load()

    return main


if __name__ == "__main__":
    args = parse_args()
    ft.app(target=build(args.project))
