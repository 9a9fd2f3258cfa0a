"""Tariff discovery and manifest loading."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from importlib import resources
from importlib.metadata import PackageNotFoundError
from importlib.resources.abc import Traversable

from ..exceptions import ConfigError, NotFoundError, TariffError, ValidationError
from ..models import TariffInfo
from ..schedule import FeeSchedule
from ..util import load_timezone, parse_amount

MANIFEST_FILENAME = "manifest.json"
SCHEMA_FILENAME = "manifest.schema.json"
_REQUIRED_KEYS = ("id", "name", "country", "timezone", "currency", "max_daily_fee", "schedule")
_MANIFEST_CACHE: tuple[TariffManifest, ...] | None = None


@dataclass(frozen=True, slots=True)
class TariffManifest:
    id: str
    name: str
    country: str
    timezone: str
    currency: str
    max_daily_fee: Decimal
    schedule: FeeSchedule
    subdivision: str | None = None

    @property
    def info(self) -> TariffInfo:
        return TariffInfo(id=self.id, name=self.name, currency=self.currency)


def _tariff_root() -> Traversable:
    return resources.files("pytollfee.tariff")


def load_manifest_schema() -> dict:
    schema_path = _tariff_root() / SCHEMA_FILENAME
    return json.loads(schema_path.read_text(encoding="utf-8"))


def _require_string(data: dict, key: str) -> str:
    value = data[key]
    if not isinstance(value, str) or not value:
        raise TariffError(f"Tariff manifest {key} must be a non-empty string.")
    return value


def _build_schedule(raw: object) -> FeeSchedule:
    if not isinstance(raw, list) or not raw:
        raise TariffError("Tariff manifest schedule must be a non-empty list.")
    entries: list[tuple[str, str | int]] = []
    for step in raw:
        if not isinstance(step, dict) or "from" not in step or "amount" not in step:
            raise TariffError("Tariff schedule steps need 'from' and 'amount'.")
        entries.append((step["from"], step["amount"]))
    try:
        return FeeSchedule(entries)
    except ValidationError as exc:
        raise TariffError(f"Tariff manifest schedule is invalid: {exc}") from exc


def _build_manifest(data: dict, folder_name: str) -> TariffManifest:
    if not isinstance(data, dict):
        raise TariffError("Tariff manifest must be a JSON object.")
    missing = [key for key in _REQUIRED_KEYS if key not in data]
    if missing:
        raise TariffError(f"Tariff manifest missing keys: {', '.join(missing)}.")
    tariff_id = _require_string(data, "id")
    if tariff_id != folder_name:
        raise TariffError("Tariff manifest id must match its folder name.")
    timezone = _require_string(data, "timezone")
    try:
        load_timezone(timezone)
    except ConfigError as exc:
        raise TariffError(f"Tariff manifest timezone is invalid: {exc}") from exc
    subdivision = data.get("subdivision")
    if subdivision is not None and (not isinstance(subdivision, str) or not subdivision):
        raise TariffError("Tariff manifest subdivision must be a non-empty string or null.")
    try:
        max_daily_fee = parse_amount(data["max_daily_fee"])
    except ValidationError as exc:
        raise TariffError(f"Tariff manifest max_daily_fee is invalid: {exc}") from exc
    return TariffManifest(
        id=tariff_id,
        name=_require_string(data, "name"),
        country=_require_string(data, "country"),
        timezone=timezone,
        currency=_require_string(data, "currency"),
        max_daily_fee=max_daily_fee,
        schedule=_build_schedule(data["schedule"]),
        subdivision=subdivision,
    )


def iter_manifest_files() -> Iterable[tuple[str, Traversable]]:
    root = _tariff_root()
    for entry in root.iterdir():
        if not entry.is_dir():
            continue
        manifest_path = entry / MANIFEST_FILENAME
        if manifest_path.is_file():
            yield entry.name, manifest_path


def load_manifests() -> list[TariffManifest]:
    global _MANIFEST_CACHE
    if _MANIFEST_CACHE is not None:
        return list(_MANIFEST_CACHE)
    manifests: list[TariffManifest] = []
    try:
        for folder_name, manifest_path in iter_manifest_files():
            try:
                data = json.loads(manifest_path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise TariffError("Tariff manifest is not valid JSON.") from exc
            manifests.append(_build_manifest(data, folder_name))
    except (ModuleNotFoundError, PackageNotFoundError) as exc:
        _MANIFEST_CACHE = None
        raise TariffError("Tariff package was not found.") from exc
    manifests.sort(key=lambda manifest: manifest.id)
    _MANIFEST_CACHE = tuple(manifests)
    return list(_MANIFEST_CACHE)


def clear_manifest_cache() -> None:
    """Clear cached tariff manifests (used in tests)."""
    global _MANIFEST_CACHE
    _MANIFEST_CACHE = None


def list_tariffs() -> list[TariffInfo]:
    return [manifest.info for manifest in load_manifests()]


def get_manifest(tariff_id: str) -> TariffManifest:
    if not isinstance(tariff_id, str) or not tariff_id:
        raise ValidationError("Tariff id is required.")
    for manifest in load_manifests():
        if manifest.id == tariff_id:
            return manifest
    raise NotFoundError(f"Tariff {tariff_id!r} not found.")
