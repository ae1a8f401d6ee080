from datetime import date, datetime, timedelta, timezone

from medikey.utils.timezone import parse_date, to_utc_aware, to_utc_naive, utcnow


def test_utcnow_is_naive():
    assert utcnow().tzinfo is None


def test_to_utc_naive_converts_offsets():
    aware = datetime(2024, 5, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc_naive(aware) == datetime(2024, 5, 1, 8, 0)
    assert to_utc_naive(datetime(2024, 5, 1, 8, 0)) == datetime(2024, 5, 1, 8, 0)
    assert to_utc_naive(None) is None


def test_to_utc_aware():
    assert to_utc_aware(datetime(2024, 5, 1, 8, 0)).tzinfo == timezone.utc
    assert to_utc_aware(None) is None


def test_parse_date():
    assert parse_date("1990-06-15") == date(1990, 6, 15)
    assert parse_date("1990-06-15T12:30:00") == date(1990, 6, 15)
    assert parse_date("") is None
    assert parse_date("15/06/1990") is None
