"""Toll fee calculation for one vehicle's passes."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta, tzinfo
from decimal import Decimal

from .exceptions import ConfigError, ValidationError
from .exemption import VehicleExemptionPolicy
from .free_dates import FreeDateOracle
from .models import DailyCapReached, FeeEvent, TollFee, Vehicle
from .schedule import FeeSchedule
from .util import ensure_aware, mask_registration_number, parse_amount

_LOGGER = logging.getLogger(__name__)

WINDOW = timedelta(hours=1)
_ZERO = Decimal(0)


def _instant(value: datetime) -> datetime:
    # Window arithmetic on UTC; same-zone datetimes compare by wall clock.
    return value.astimezone(UTC)


@dataclass(slots=True)
class _DailyAccumulator:
    day: date
    total: Decimal = _ZERO


class TollFeeCalculator:
    """Compute per-pass toll fees under a schedule, a window and a daily cap.

    Configuration is read-only after construction, so one instance can be
    shared between callers.
    """

    def __init__(
        self,
        schedule: FeeSchedule,
        max_daily_fee: Decimal | int | str,
        *,
        free_date_oracle: FreeDateOracle,
        timezone: tzinfo,
        exemption_policy: VehicleExemptionPolicy | None = None,
        listener: Callable[[FeeEvent], None] | None = None,
    ) -> None:
        if not isinstance(schedule, FeeSchedule):
            raise ConfigError("schedule must be a FeeSchedule.")
        if not callable(free_date_oracle):
            raise ConfigError("free_date_oracle must be callable.")
        if timezone is None:
            raise ConfigError("timezone is required.")
        try:
            self._max_daily_fee = parse_amount(max_daily_fee)
        except ValidationError as exc:
            raise ConfigError(f"Invalid max_daily_fee: {exc}") from exc
        self._schedule = schedule
        self._is_free_date = free_date_oracle
        self._timezone = timezone
        self._policy = exemption_policy or VehicleExemptionPolicy()
        self._listener = listener

    @property
    def schedule(self) -> FeeSchedule:
        return self._schedule

    @property
    def max_daily_fee(self) -> Decimal:
        return self._max_daily_fee

    @property
    def timezone(self) -> tzinfo:
        return self._timezone

    @property
    def exemption_policy(self) -> VehicleExemptionPolicy:
        return self._policy

    def calculate_base_fee(self, pass_time: datetime) -> Decimal:
        """Return the schedule fee for one pass, ignoring window and cap."""
        local = ensure_aware(pass_time).astimezone(self._timezone)
        return self._base_fee(local)

    def compute_fee(self, vehicle: Vehicle, pass_time: datetime) -> TollFee:
        self._require_vehicle(vehicle)
        ensure_aware(pass_time)
        if self._policy.is_exempt(vehicle.vehicle_type, self._listener):
            return TollFee(_ZERO, pass_time)
        fee = min(self.calculate_base_fee(pass_time), self._max_daily_fee)
        return TollFee(fee, pass_time)

    def compute_fees(self, vehicle: Vehicle, passes: Iterable[datetime]) -> list[TollFee]:
        self._require_vehicle(vehicle)
        if passes is None:
            raise ValidationError("At least one pass is required.")
        ordered = sorted((ensure_aware(item) for item in passes), key=_instant)
        if not ordered:
            raise ValidationError("At least one pass is required.")

        plate = mask_registration_number(vehicle.registration_number)
        _LOGGER.debug("Computing fees for %s with %d passes", plate, len(ordered))
        if self._policy.is_exempt(vehicle.vehicle_type, self._listener):
            return [TollFee(_ZERO, item) for item in ordered]

        fees: list[TollFee] = []
        accumulator: _DailyAccumulator | None = None
        next_chargeable: datetime | None = None
        for pass_time in ordered:
            local = pass_time.astimezone(self._timezone)
            if accumulator is None or accumulator.day != local.date():
                accumulator = _DailyAccumulator(local.date())

            instant = _instant(pass_time)
            if next_chargeable is not None and instant < next_chargeable:
                fees.append(TollFee(_ZERO, pass_time))
                continue
            next_chargeable = instant + WINDOW

            charged = self._apply_cap(accumulator.total, self._base_fee(local))
            already_capped = accumulator.total >= self._max_daily_fee
            accumulator.total += charged
            if not already_capped and accumulator.total >= self._max_daily_fee:
                self._report_cap(plate, accumulator)
            fees.append(TollFee(charged, pass_time))

        _LOGGER.debug(
            "Computed fees for %s: total %s",
            plate,
            sum((fee.amount for fee in fees), _ZERO),
        )
        return fees

    def _base_fee(self, local: datetime) -> Decimal:
        if self._is_free_date(local.date()):
            return _ZERO
        return self._schedule.fee_at(local.time())

    def _apply_cap(self, total: Decimal, fee: Decimal) -> Decimal:
        if total >= self._max_daily_fee:
            return _ZERO
        if total + fee > self._max_daily_fee:
            return self._max_daily_fee - total
        return fee

    def _report_cap(self, plate: str, accumulator: _DailyAccumulator) -> None:
        _LOGGER.info("Vehicle %s hit toll fee limit on %s", plate, accumulator.day.isoformat())
        if self._listener is not None:
            self._listener(
                DailyCapReached(
                    registration_number=plate,
                    day=accumulator.day,
                    total=accumulator.total,
                )
            )

    @staticmethod
    def _require_vehicle(vehicle: Vehicle | None) -> None:
        if vehicle is None:
            raise ValidationError("Vehicle is required.")
        if not isinstance(vehicle, Vehicle):
            raise ValidationError("vehicle must be a Vehicle.")

    def __repr__(self) -> str:
        return (
            f"TollFeeCalculator(schedule={self._schedule!r}, "
            f"max_daily_fee={self._max_daily_fee}, "
            f"timezone={str(self._timezone)!r})"
        )
