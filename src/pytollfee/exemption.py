"""Vehicle type exemption policy."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from .exceptions import ConfigError
from .models import FeeEvent, UnknownVehicleType, VehicleType

_LOGGER = logging.getLogger(__name__)

DEFAULT_CHARGEABLE = frozenset({VehicleType.CAR, VehicleType.MOTORBIKE, VehicleType.TRACTOR})
DEFAULT_EXEMPT = frozenset(
    {
        VehicleType.EMERGENCY,
        VehicleType.DIPLOMAT,
        VehicleType.FOREIGN,
        VehicleType.MILITARY,
    }
)


class VehicleExemptionPolicy:
    """Classify vehicle types as chargeable or toll exempt.

    Types listed in neither set fail open: they are treated as exempt and
    reported as an anomaly.
    """

    def __init__(
        self,
        chargeable: Iterable[VehicleType] = DEFAULT_CHARGEABLE,
        exempt: Iterable[VehicleType] = DEFAULT_EXEMPT,
    ) -> None:
        self._chargeable = frozenset(chargeable)
        self._exempt = frozenset(exempt)
        overlap = self._chargeable & self._exempt
        if overlap:
            names = ", ".join(sorted(str(item) for item in overlap))
            raise ConfigError(f"Vehicle types cannot be both chargeable and exempt: {names}.")

    @property
    def chargeable(self) -> frozenset[VehicleType]:
        return self._chargeable

    @property
    def exempt(self) -> frozenset[VehicleType]:
        return self._exempt

    def is_exempt(
        self,
        vehicle_type: VehicleType,
        listener: Callable[[FeeEvent], None] | None = None,
    ) -> bool:
        if vehicle_type in self._chargeable:
            return False
        if vehicle_type in self._exempt:
            return True
        _LOGGER.warning("Unhandled vehicle type %s treated as toll exempt", vehicle_type)
        if listener is not None:
            listener(UnknownVehicleType(vehicle_type=str(vehicle_type)))
        return True

    def __repr__(self) -> str:
        chargeable = sorted(str(item) for item in self._chargeable)
        exempt = sorted(str(item) for item in self._exempt)
        return f"VehicleExemptionPolicy(chargeable={chargeable}, exempt={exempt})"
