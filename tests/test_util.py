from datetime import UTC, datetime, time, timedelta, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from pytollfee.exceptions import ConfigError, ValidationError
from pytollfee.util import (
    ensure_aware,
    load_timezone,
    mask_registration_number,
    normalize_registration_number,
    parse_amount,
    parse_time_of_day,
    parse_timestamp,
)


def test_normalize_registration_number() -> None:
    assert normalize_registration_number(" abc-123 ") == "ABC123"


def test_normalize_registration_number_invalid() -> None:
    with pytest.raises(ValidationError):
        normalize_registration_number("!!!")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("ABC123", "AB**23"),
        ("abc 12", "AB*12"),
        ("AB1", "A*1"),
        ("A1", "**"),
        ("", "***"),
        (None, "***"),
    ],
)
def test_mask_registration_number(value, expected: str) -> None:
    assert mask_registration_number(value) == expected


def test_parse_timestamp_keeps_offset() -> None:
    parsed = parse_timestamp("2019-03-13T06:00:00+01:00")
    assert parsed.utcoffset() == timedelta(hours=1)
    assert parsed == datetime(2019, 3, 13, 5, 0, tzinfo=UTC)


def test_parse_timestamp_zulu() -> None:
    assert parse_timestamp("2019-03-13T05:00:00Z") == datetime(2019, 3, 13, 5, 0, tzinfo=UTC)


def test_parse_timestamp_naive_uses_default_timezone() -> None:
    tz = ZoneInfo("Europe/Stockholm")
    parsed = parse_timestamp("2019-03-13T06:00:00", tz)
    assert parsed.tzinfo is tz


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2019-03-13T06:00:00"])
def test_parse_timestamp_invalid(value: str) -> None:
    with pytest.raises(ValidationError):
        parse_timestamp(value)


def test_ensure_aware() -> None:
    aware = datetime(2019, 3, 13, 6, 0, tzinfo=timezone(timedelta(hours=1)))
    assert ensure_aware(aware) is aware
    with pytest.raises(ValidationError):
        ensure_aware(datetime(2019, 3, 13, 6, 0))
    with pytest.raises(ValidationError):
        ensure_aware("2019-03-13T06:00:00Z")


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("06:30", timedelta(hours=6, minutes=30)),
        ("6:30:15", timedelta(hours=6, minutes=30, seconds=15)),
        (time(23, 59), timedelta(hours=23, minutes=59)),
        (timedelta(0), timedelta(0)),
    ],
)
def test_parse_time_of_day(value, expected: timedelta) -> None:
    assert parse_time_of_day(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [(8, Decimal(8)), ("13.50", Decimal("13.50")), (Decimal("0"), Decimal(0))],
)
def test_parse_amount(value, expected: Decimal) -> None:
    assert parse_amount(value) == expected


def test_load_timezone() -> None:
    assert load_timezone("Europe/Stockholm") == ZoneInfo("Europe/Stockholm")
    with pytest.raises(ConfigError):
        load_timezone("Mars/Olympus_Mons")
    with pytest.raises(ConfigError):
        load_timezone("")
