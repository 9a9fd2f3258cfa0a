"""Public data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum

from .exceptions import ValidationError
from .util import normalize_registration_number


class VehicleType(StrEnum):
    CAR = "car"
    MOTORBIKE = "motorbike"
    TRACTOR = "tractor"
    EMERGENCY = "emergency"
    DIPLOMAT = "diplomat"
    FOREIGN = "foreign"
    MILITARY = "military"


@dataclass(frozen=True, slots=True)
class Vehicle:
    vehicle_type: VehicleType
    registration_number: str | None = None

    def __post_init__(self) -> None:
        if self.registration_number is not None:
            object.__setattr__(
                self, "registration_number", normalize_registration_number(self.registration_number)
            )
        if isinstance(self.vehicle_type, VehicleType):
            return
        try:
            coerced = VehicleType(str(self.vehicle_type).strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown vehicle type: {self.vehicle_type!r}.") from exc
        object.__setattr__(self, "vehicle_type", coerced)


@dataclass(frozen=True, slots=True)
class TollFee:
    amount: Decimal
    pass_time: datetime


@dataclass(frozen=True, slots=True)
class TariffInfo:
    id: str
    name: str
    currency: str


@dataclass(frozen=True, slots=True)
class DailyCapReached:
    registration_number: str
    day: date
    total: Decimal


@dataclass(frozen=True, slots=True)
class UnknownVehicleType:
    vehicle_type: str


FeeEvent = DailyCapReached | UnknownVehicleType
