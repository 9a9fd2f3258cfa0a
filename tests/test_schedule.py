from datetime import time, timedelta
from decimal import Decimal

import pytest

from pytollfee.exceptions import ValidationError
from pytollfee.schedule import FeeSchedule


@pytest.fixture
def schedule() -> FeeSchedule:
    return FeeSchedule({"06:00": 8, "06:30": "13", time(7, 0): Decimal("18"), "18:30": 0})


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        (time(0, 0), 0),
        (time(5, 59, 59), 0),
        (time(6, 0), 8),
        (time(6, 29, 59, 999999), 8),
        (time(6, 30), 13),
        (timedelta(hours=12), 18),
        (time(18, 29), 18),
        (time(18, 30), 0),
        (time(23, 59), 0),
    ],
)
def test_fee_at_floor_lookup(schedule: FeeSchedule, query, expected: int) -> None:
    assert schedule.fee_at(query) == Decimal(expected)


def test_entries_are_sorted() -> None:
    schedule = FeeSchedule([("15:00", 13), ("06:00", 8)])
    assert schedule.entries == (
        (timedelta(hours=6), Decimal(8)),
        (timedelta(hours=15), Decimal(13)),
    )


def test_empty_schedule_is_free() -> None:
    schedule = FeeSchedule({})
    assert len(schedule) == 0
    assert schedule.fee_at(time(8, 0)) == Decimal(0)
    assert schedule.max_amount == Decimal(0)


def test_duplicate_threshold_rejected() -> None:
    with pytest.raises(ValidationError):
        FeeSchedule([("06:00", 8), (time(6, 0), 13)])


@pytest.mark.parametrize("key", ["24:00", "6", "06:60", "-01:00", timedelta(days=1), 600])
def test_invalid_threshold_rejected(key) -> None:
    with pytest.raises(ValidationError):
        FeeSchedule({key: 8})


@pytest.mark.parametrize("amount", [8.5, -1, "abc", "NaN", True, None])
def test_invalid_amount_rejected(amount) -> None:
    with pytest.raises(ValidationError):
        FeeSchedule({"06:00": amount})


def test_seconds_threshold() -> None:
    schedule = FeeSchedule({"06:00:30": 8})
    assert schedule.fee_at(time(6, 0, 29)) == Decimal(0)
    assert schedule.fee_at(time(6, 0, 30)) == Decimal(8)


def test_equality_and_repr() -> None:
    first = FeeSchedule({"06:00": 8, "18:30": 0})
    second = FeeSchedule([(time(18, 30), "0"), (timedelta(hours=6), Decimal("8"))])
    assert first == second
    assert hash(first) == hash(second)
    assert repr(first) == "FeeSchedule(06:00=8, 18:30=0)"


def test_max_amount(schedule: FeeSchedule) -> None:
    assert schedule.max_amount == Decimal(18)
