"""Client facade for tariff discovery and calculator construction."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .aggregator import TollFeeCalculator
from .exemption import VehicleExemptionPolicy
from .free_dates import FreeDateOracle, HolidayCalendar
from .models import FeeEvent, TariffInfo
from .tariff.loader import TariffManifest, get_manifest, list_tariffs
from .util import load_timezone

_LOGGER = logging.getLogger(__name__)


class Client:
    """Facade for tariff discovery and access."""

    def __init__(
        self,
        *,
        exemption_policy: VehicleExemptionPolicy | None = None,
        listener: Callable[[FeeEvent], None] | None = None,
    ) -> None:
        self._exemption_policy = exemption_policy
        self._listener = listener

    def list_tariffs(self) -> list[TariffInfo]:
        return list_tariffs()

    def get_tariff(self, tariff_id: str) -> TariffManifest:
        return get_manifest(tariff_id)

    def get_calculator(
        self,
        tariff_id: str,
        *,
        exemption_policy: VehicleExemptionPolicy | None = None,
        free_date_oracle: FreeDateOracle | None = None,
        listener: Callable[[FeeEvent], None] | None = None,
    ) -> TollFeeCalculator:
        manifest = get_manifest(tariff_id)
        if free_date_oracle is None:
            free_date_oracle = HolidayCalendar(manifest.country, manifest.subdivision)
        _LOGGER.debug("Building calculator for tariff %s", manifest.id)
        return TollFeeCalculator(
            manifest.schedule,
            manifest.max_daily_fee,
            free_date_oracle=free_date_oracle,
            timezone=load_timezone(manifest.timezone),
            exemption_policy=exemption_policy or self._exemption_policy,
            listener=listener if listener is not None else self._listener,
        )
