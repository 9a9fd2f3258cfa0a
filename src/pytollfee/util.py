"""Shared utilities for validation and normalization."""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .exceptions import ConfigError, ValidationError

_REGISTRATION_RE = re.compile(r"[^A-Z0-9]")
_TIME_OF_DAY_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?$")
_ONE_DAY = timedelta(days=1)


def normalize_registration_number(value: str) -> str:
    if not isinstance(value, str):
        raise ValidationError("Registration number must be a string.")
    normalized = _REGISTRATION_RE.sub("", value.upper())
    if not normalized:
        raise ValidationError("Registration number is empty after normalization.")
    return normalized


def mask_registration_number(value: str | None) -> str:
    if not isinstance(value, str):
        return "***"
    normalized = _REGISTRATION_RE.sub("", value.upper())
    if not normalized:
        return "***"
    if len(normalized) <= 2:
        return "*" * len(normalized)
    if len(normalized) <= 4:
        return f"{normalized[:1]}{'*' * (len(normalized) - 2)}{normalized[-1:]}"
    masked = "*" * (len(normalized) - 4)
    return f"{normalized[:2]}{masked}{normalized[-2:]}"


def parse_timestamp(value: str, default_tz: ZoneInfo | None = None) -> datetime:
    """Parse an ISO 8601 timestamp, keeping its offset.

    Naive values are only accepted when ``default_tz`` is given.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Timestamp must be a non-empty string.")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = f"{raw[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError("Timestamp is not a valid ISO 8601 value.") from exc
    if parsed.tzinfo is None:
        if default_tz is None:
            raise ValidationError("Timestamp must include timezone information.")
        parsed = parsed.replace(tzinfo=default_tz, fold=0)
    return parsed


def ensure_aware(value: datetime) -> datetime:
    if not isinstance(value, datetime):
        raise ValidationError("Pass time must be a datetime.")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError("Pass time must include timezone information.")
    return value


def parse_time_of_day(value: timedelta | time | str) -> timedelta:
    """Return ``value`` as a duration since midnight."""
    if isinstance(value, timedelta):
        offset = value
    elif isinstance(value, time):
        offset = timedelta(
            hours=value.hour,
            minutes=value.minute,
            seconds=value.second,
            microseconds=value.microsecond,
        )
    elif isinstance(value, str):
        match = _TIME_OF_DAY_RE.match(value.strip())
        if match is None:
            raise ValidationError(f"Time of day must be HH:MM or HH:MM:SS; got {value!r}.")
        hours, minutes, seconds = (int(part or 0) for part in match.groups())
        if minutes >= 60 or seconds >= 60:
            raise ValidationError(f"Time of day is out of range; got {value!r}.")
        offset = timedelta(hours=hours, minutes=minutes, seconds=seconds)
    else:
        raise ValidationError("Time of day must be a timedelta, time or string.")
    if offset < timedelta(0) or offset >= _ONE_DAY:
        raise ValidationError(f"Time of day must be within one day; got {value!r}.")
    return offset


def parse_amount(value: Decimal | int | str) -> Decimal:
    if isinstance(value, bool) or isinstance(value, float):
        raise ValidationError("Amounts must be Decimal, int or numeric strings.")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Amount is not numeric: {value!r}.") from exc
    else:
        raise ValidationError("Amounts must be Decimal, int or numeric strings.")
    if not amount.is_finite():
        raise ValidationError(f"Amount must be finite; got {value!r}.")
    if amount < 0:
        raise ValidationError(f"Amount must be non-negative; got {value!r}.")
    return amount


def load_timezone(name: str) -> ZoneInfo:
    if not isinstance(name, str) or not name:
        raise ConfigError("Timezone name must be a non-empty string.")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"Timezone '{name}' is unavailable.") from exc
