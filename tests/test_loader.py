from decimal import Decimal

import pytest

from pytollfee.exceptions import NotFoundError, TariffError, ValidationError
from pytollfee.tariff import loader as loader_module
from pytollfee.tariff.loader import _build_manifest, get_manifest, list_tariffs

VALID = {
    "id": "sample",
    "name": "Sample",
    "country": "SE",
    "timezone": "Europe/Stockholm",
    "currency": "SEK",
    "max_daily_fee": "60",
    "schedule": [{"from": "06:00", "amount": "8"}],
}


def test_list_tariffs_includes_gothenburg() -> None:
    loader_module.clear_manifest_cache()
    ids = {info.id for info in list_tariffs()}
    assert "gothenburg" in ids


def test_get_manifest_missing() -> None:
    with pytest.raises(NotFoundError):
        get_manifest("missing")


def test_get_manifest_requires_id() -> None:
    with pytest.raises(ValidationError):
        get_manifest("")


def test_build_manifest() -> None:
    manifest = _build_manifest(VALID, "sample")
    assert manifest.max_daily_fee == Decimal(60)
    assert manifest.subdivision is None
    assert len(manifest.schedule) == 1
    assert manifest.info.currency == "SEK"


def test_build_manifest_folder_mismatch() -> None:
    with pytest.raises(TariffError):
        _build_manifest(VALID, "other")


@pytest.mark.parametrize(
    "override",
    [
        {"schedule": []},
        {"schedule": [{"from": "06:00"}]},
        {"schedule": [{"from": "25:00", "amount": "8"}]},
        {"max_daily_fee": "-5"},
        {"name": ""},
        {"subdivision": ""},
        {"timezone": "Mars/Olympus_Mons"},
    ],
)
def test_build_manifest_invalid(override: dict) -> None:
    with pytest.raises(TariffError):
        _build_manifest({**VALID, **override}, "sample")


def test_build_manifest_missing_keys() -> None:
    data = dict(VALID)
    del data["timezone"]
    with pytest.raises(TariffError, match="timezone"):
        _build_manifest(data, "sample")
