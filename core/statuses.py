"""Task status catalogue used for bar colours and the chart legend."""
from __future__ import annotations

from typing import Dict, List

COMPLETED = "Completed"
IN_PROGRESS = "In Progress"
REVIEW = "Review"
AT_RISK = "At Risk"
NOT_STARTED = "Not Started"

# Status only drives colour-coding; order matches the legend.
STATUS_META: Dict[str, Dict[str, str]] = {
    COMPLETED: {
        "label": "مكتملة",
        "color": "#22C55E",    # green-500
    },
    IN_PROGRESS: {
        "label": "قيد التنفيذ",
        "color": "#3B82F6",    # blue-500
    },
    REVIEW: {
        "label": "في المراجعة",
        "color": "#A855F7",    # purple-500
    },
    AT_RISK: {
        "label": "متأخرة",
        "color": "#EF4444",    # red-500
    },
    NOT_STARTED: {
        "label": "لم تبدأ",
        "color": "#9CA3AF",    # gray-400
    },
}

DEFAULT_STATUS = NOT_STARTED


def normalize_status(value: str | None) -> str:
    """Map external values onto the supported statuses."""
    if not value:
        return DEFAULT_STATUS
    text = value.strip()
    if text in STATUS_META:
        return text
    folded = text.lower().replace("_", " ").replace("-", " ")
    for status in STATUS_META:
        if status.lower() == folded:
            return status
    return DEFAULT_STATUS


def status_label(value: str) -> str:
    meta = STATUS_META.get(value, STATUS_META[DEFAULT_STATUS])
    return meta["label"]


def status_color(value: str) -> str:
    meta = STATUS_META.get(value, STATUS_META[DEFAULT_STATUS])
    return meta["color"]


def legend_entries() -> List[tuple[str, str]]:
    """Return ``(label, colour)`` pairs in legend order."""
    return [(meta["label"], meta["color"]) for meta in STATUS_META.values()]


def status_options() -> Dict[str, str]:
    """Return mapping of dropdown values -> labels."""
    return {status: meta["label"] for status, meta in STATUS_META.items()}
