"""pyTollFee package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .aggregator import TollFeeCalculator
from .client import Client
from .exceptions import ConfigError, NotFoundError, PyTollFeeError, TariffError, ValidationError
from .exemption import VehicleExemptionPolicy
from .free_dates import FixedDateCalendar, HolidayCalendar, is_weekend
from .models import DailyCapReached, TariffInfo, TollFee, UnknownVehicleType, Vehicle, VehicleType
from .schedule import FeeSchedule

try:
    __version__ = version("pytollfee")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "Client",
    "ConfigError",
    "DailyCapReached",
    "FeeSchedule",
    "FixedDateCalendar",
    "HolidayCalendar",
    "NotFoundError",
    "PyTollFeeError",
    "TariffError",
    "TariffInfo",
    "TollFee",
    "TollFeeCalculator",
    "UnknownVehicleType",
    "ValidationError",
    "Vehicle",
    "VehicleExemptionPolicy",
    "VehicleType",
    "__version__",
    "is_weekend",
]
