"""Centralized application configuration."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os
import sys


def get_default_data_dir(
    app_name: str,
    *,
    platform: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    home: Optional[Path] = None,
) -> Path:
    """Return an OS-specific user data directory for ``app_name``."""

    platform_id = (platform or sys.platform).lower()
    environ = dict(env or os.environ)
    home_dir = Path(home or Path.home())
    sanitized = app_name.strip() or "app"
    sanitized = sanitized.replace("/", "-").replace("\\", "-")

    if platform_id.startswith("win"):
        base = Path(environ.get("APPDATA") or home_dir / "AppData" / "Roaming")
    elif platform_id == "darwin":
        base = home_dir / "Library" / "Application Support"
    else:
        base = Path(environ.get("XDG_DATA_HOME") or home_dir / ".local" / "share")

    return (base.expanduser() / sanitized)


APP_NAME = "BusinessDashboard"


DATA_DIR = get_default_data_dir(APP_NAME)
LOG_DIR = DATA_DIR / "logs"

for _dir in (DATA_DIR, LOG_DIR):
    _dir.mkdir(parents=True, exist_ok=True)


DB_PATH = DATA_DIR / "dashboard.db"


@dataclass(frozen=True)
class ThemeColors:
    outline: str = "#E5E7EB"
    text_subtle: str = "#6B7280"
    weekend_bg: str = "#F3F4F6"
    today_bg: str = "#EFF6FF"
    bar_text: str = "#FFFFFF"


@dataclass(frozen=True)
class GanttUISettings:
    cell_width: int = 60
    default_window_days: int = 30
    page_days: int = 7
    today_lead_cells: int = 2
    row_height: int = 41
    bar_height: int = 32
    bar_top_offset: int = 6
    task_column_width: int = 250
    header_height: int = 54
    dialog_width: int = 520


@dataclass(frozen=True)
class UISettings:
    app_title: str = "Business Dashboard"
    theme_mode: str = "system"
    color_scheme_seed: str = "#2563EB"
    window_min_width: int = 900
    window_min_height: int = 600
    rtl: bool = True
    theme: ThemeColors = ThemeColors()
    gantt: GanttUISettings = GanttUISettings()


UI = UISettings()


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    directory: Path = LOG_DIR
    filename: str = "dashboard.log"
    max_bytes: int = 1_000_000
    backup_count: int = 3


LOGGING = LoggingSettings()


__all__ = [
    "APP_NAME",
    "DATA_DIR",
    "LOG_DIR",
    "DB_PATH",
    "UI",
    "LOGGING",
    "get_default_data_dir",
]
