"""Tests for import date parsing."""

from datetime import date, datetime, timezone

import pytest

from src.utils.datetime_utils import parse_import_date, utc_now


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None


@pytest.mark.parametrize("value", [None, "", "   "])
def test_blank_dates(value):
    assert parse_import_date(value) is None


def test_iso_date():
    assert parse_import_date("2024-03-01") == datetime(2024, 3, 1, tzinfo=timezone.utc)


def test_trailing_z():
    assert parse_import_date("2024-03-01T08:30:00Z") == datetime(2024, 3, 1, 8, 30, tzinfo=timezone.utc)


def test_date_object():
    assert parse_import_date(date(2024, 3, 1)) == datetime(2024, 3, 1, tzinfo=timezone.utc)


def test_invalid_date_raises():
    with pytest.raises(ValueError):
        parse_import_date("01/03/2024")
