"""Time-of-day fee schedule."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable, Mapping
from datetime import time, timedelta
from decimal import Decimal

from .exceptions import ValidationError
from .util import parse_amount, parse_time_of_day

TimeKey = timedelta | time | str
AmountValue = Decimal | int | str


class FeeSchedule:
    """Step function from time of day to fee.

    The fee at a given time is the amount of the latest threshold at or
    before it. Times before the first threshold cost nothing.
    """

    __slots__ = ("_amounts", "_thresholds")

    def __init__(
        self,
        entries: Mapping[TimeKey, AmountValue] | Iterable[tuple[TimeKey, AmountValue]],
    ) -> None:
        items = entries.items() if isinstance(entries, Mapping) else entries
        parsed: dict[timedelta, Decimal] = {}
        for key, value in items:
            offset = parse_time_of_day(key)
            if offset in parsed:
                raise ValidationError(f"Duplicate schedule threshold: {offset}.")
            parsed[offset] = parse_amount(value)
        ordered = sorted(parsed.items())
        self._thresholds: tuple[timedelta, ...] = tuple(key for key, _ in ordered)
        self._amounts: tuple[Decimal, ...] = tuple(amount for _, amount in ordered)

    @property
    def entries(self) -> tuple[tuple[timedelta, Decimal], ...]:
        return tuple(zip(self._thresholds, self._amounts))

    @property
    def max_amount(self) -> Decimal:
        return max(self._amounts, default=Decimal(0))

    def fee_at(self, time_of_day: timedelta | time) -> Decimal:
        offset = parse_time_of_day(time_of_day)
        index = bisect_right(self._thresholds, offset)
        if index == 0:
            return Decimal(0)
        return self._amounts[index - 1]

    def __len__(self) -> int:
        return len(self._thresholds)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeeSchedule):
            return NotImplemented
        return self.entries == other.entries

    def __hash__(self) -> int:
        return hash(self.entries)

    def __repr__(self) -> str:
        steps = ", ".join(
            f"{_format_offset(key)}={amount}" for key, amount in self.entries
        )
        return f"FeeSchedule({steps})"


def _format_offset(offset: timedelta) -> str:
    total = int(offset.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    if seconds:
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    return f"{hours:02d}:{minutes:02d}"
