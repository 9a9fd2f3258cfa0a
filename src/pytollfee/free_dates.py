"""Toll-free date oracles.

A free-date oracle is any callable taking a calendar date and returning
``True`` when every pass on that date is free of charge.
"""

from __future__ import annotations

import calendar
import logging
from collections.abc import Callable, Iterable
from datetime import date

import holidays

from .exceptions import ConfigError

_LOGGER = logging.getLogger(__name__)

FreeDateOracle = Callable[[date], bool]


def is_weekend(day: date) -> bool:
    return day.weekday() >= calendar.SATURDAY


class HolidayCalendar:
    """Weekends plus the public holidays of one country."""

    def __init__(self, country: str, subdivision: str | None = None) -> None:
        if not isinstance(country, str) or not country.strip():
            raise ConfigError("Holiday country must be a non-empty ISO code.")
        self._country = country.strip().upper()
        self._subdivision = subdivision
        try:
            self._holidays = holidays.country_holidays(self._country, subdiv=subdivision)
        except NotImplementedError as exc:
            raise ConfigError(
                f"Holiday calendar for {self._country!r} is not supported."
            ) from exc
        _LOGGER.debug(
            "Holiday calendar loaded for %s (subdivision %s)",
            self._country,
            subdivision or "-",
        )

    @property
    def country(self) -> str:
        return self._country

    @property
    def subdivision(self) -> str | None:
        return self._subdivision

    def holiday_name(self, day: date) -> str | None:
        return self._holidays.get(day)

    def __call__(self, day: date) -> bool:
        return is_weekend(day) or day in self._holidays

    def __repr__(self) -> str:
        return f"HolidayCalendar(country={self._country!r}, subdivision={self._subdivision!r})"


class FixedDateCalendar:
    """Free dates from an explicit list, optionally including weekends."""

    def __init__(self, dates: Iterable[date] = (), *, include_weekends: bool = True) -> None:
        self._dates = frozenset(dates)
        self._include_weekends = include_weekends

    def __call__(self, day: date) -> bool:
        if self._include_weekends and is_weekend(day):
            return True
        return day in self._dates

    def __repr__(self) -> str:
        return (
            f"FixedDateCalendar(dates={len(self._dates)}, "
            f"include_weekends={self._include_weekends})"
        )
