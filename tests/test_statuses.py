from core.statuses import (
    AT_RISK,
    COMPLETED,
    DEFAULT_STATUS,
    STATUS_META,
    legend_entries,
    normalize_status,
    status_color,
    status_label,
    status_options,
)


def test_normalize_status_exact_and_loose():
    assert normalize_status("Completed") == COMPLETED
    assert normalize_status("at_risk") == AT_RISK
    assert normalize_status(" in-progress ") == "In Progress"
    assert normalize_status("On Hold") == DEFAULT_STATUS
    assert normalize_status(None) == DEFAULT_STATUS


def test_colors_and_labels_fall_back_to_default():
    assert status_color(COMPLETED) == "#22C55E"
    assert status_color("unknown") == STATUS_META[DEFAULT_STATUS]["color"]
    assert status_label("unknown") == STATUS_META[DEFAULT_STATUS]["label"]


def test_legend_order():
    entries = legend_entries()
    assert len(entries) == 5
    assert entries[0] == (STATUS_META[COMPLETED]["label"], "#22C55E")
    assert list(status_options()) == list(STATUS_META)
