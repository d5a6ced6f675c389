from datetime import date, datetime, timezone
from pathlib import Path
import sys

sys.path.append(str(Path(__file__).resolve().parents[1]))

from datetime_utils import parse_iso_date, to_iso_date, utc_now


def test_parse_iso_date_plain_and_timestamps():
    assert parse_iso_date("2023-12-01") == date(2023, 12, 1)
    assert parse_iso_date(" 2023-12-01 ") == date(2023, 12, 1)
    assert parse_iso_date("2023-12-01T22:15:00Z") == date(2023, 12, 1)
    assert parse_iso_date("2023-12-01T22:15:00.123+03:00") == date(2023, 12, 1)
    assert parse_iso_date("2023-12-01 08:00:00") == date(2023, 12, 1)


def test_parse_iso_date_objects_pass_through():
    assert parse_iso_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_iso_date(datetime(2024, 2, 29, 23, 59)) == date(2024, 2, 29)


def test_parse_iso_date_rejects_garbage():
    assert parse_iso_date(None) is None
    assert parse_iso_date("") is None
    assert parse_iso_date("01.12.2023") is None
    assert parse_iso_date("2023-02-30") is None
    assert parse_iso_date(20231201) is None


def test_to_iso_date_is_date_only():
    assert to_iso_date(datetime(2024, 3, 1, 17, 45)) == "2024-03-01"
    assert to_iso_date("2024-03-01T17:45:00Z") == "2024-03-01"
    assert to_iso_date("nope") is None


def test_utc_now_is_aware():
    assert utc_now().tzinfo is timezone.utc
