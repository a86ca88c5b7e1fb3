from datetime import datetime, timedelta, timezone

from app.utils.time import coerce_datetime, days_ago, to_iso, utc_now


def test_coerce_datetime_parses_z_suffix():
    dt = coerce_datetime("2026-01-01T00:00:00Z")
    assert dt is not None
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.isoformat().endswith("+00:00")


def test_coerce_datetime_parses_offset():
    dt = coerce_datetime("2026-01-01T02:00:00+02:00")
    assert dt is not None
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)
    assert dt.hour == 0


def test_coerce_datetime_parses_naive_as_utc():
    dt = coerce_datetime("2026-01-01T00:00:00")
    assert dt is not None
    assert dt.tzinfo is not None
    assert dt.utcoffset() == timedelta(0)

    time_diff = utc_now() - dt
    assert isinstance(time_diff, timedelta)


def test_coerce_datetime_parses_plain_date():
    dt = coerce_datetime("2026-02-09")
    assert dt == datetime(2026, 2, 9, tzinfo=timezone.utc)


def test_coerce_datetime_rejects_garbage():
    assert coerce_datetime("") is None
    assert coerce_datetime("last tuesday") is None
    assert coerce_datetime(12345) is None


def test_to_iso_normalizes_to_utc():
    local = datetime(2026, 3, 1, 14, 0, tzinfo=timezone(timedelta(hours=2)))
    assert to_iso(local) == "2026-03-01T12:00:00+00:00"
    assert to_iso(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00+00:00"


def test_days_ago():
    reference = datetime(2026, 3, 1, tzinfo=timezone.utc)
    assert days_ago(30, now=reference) == datetime(2026, 1, 30, tzinfo=timezone.utc)
