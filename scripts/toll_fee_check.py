"""Compute toll fees for a list of passes against a packaged tariff.

Run from the repository root with:
  PYTHONPATH=src python scripts/toll_fee_check.py --tariff gothenburg \
    --vehicle-type car 2019-03-13T06:00:00 2019-03-13T06:59:00 2019-03-13T15:00:00

Timestamps without an offset are read in the tariff's timezone.

Optional environment variables:
  TARIFF_ID
  VEHICLE_TYPE
  REGISTRATION_NUMBER

The script avoids printing full registration numbers.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from decimal import Decimal

from pytollfee import Client, Vehicle
from pytollfee.exceptions import PyTollFeeError
from pytollfee.models import FeeEvent
from pytollfee.util import load_timezone, mask_registration_number, parse_timestamp

_LOGGER = logging.getLogger(__name__)


def _require_value(name: str, value: str | None) -> str:
    if not value:
        print(f"Missing required value: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute toll fees for a list of passes.")
    parser.add_argument("passes", nargs="*", help="Pass timestamps (ISO 8601).")
    parser.add_argument("--tariff", dest="tariff_id", help="Tariff id (e.g. gothenburg).")
    parser.add_argument("--vehicle-type", dest="vehicle_type", help="Vehicle type (e.g. car).")
    parser.add_argument(
        "--registration",
        dest="registration_number",
        help="Registration number (printed masked).",
    )
    parser.add_argument(
        "--list-tariffs",
        dest="list_tariffs",
        action="store_true",
        help="List packaged tariffs and exit.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        help="Logging level (default: WARNING).",
    )
    return parser.parse_args()


def _print_event(event: FeeEvent) -> None:
    print(f"Event: {event}", file=sys.stderr)


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=args.log_level.upper())
    client = Client(listener=_print_event)

    if args.list_tariffs:
        for info in client.list_tariffs():
            print(f"{info.id} | {info.name} | {info.currency}")
        return 0

    tariff_id = _require_value("tariff_id", args.tariff_id or os.getenv("TARIFF_ID"))
    vehicle_type = _require_value(
        "vehicle_type", args.vehicle_type or os.getenv("VEHICLE_TYPE")
    )
    registration_number = args.registration_number or os.getenv("REGISTRATION_NUMBER")
    if not args.passes:
        print("Missing required value: passes", file=sys.stderr)
        return 2

    try:
        tariff = client.get_tariff(tariff_id)
        tz = load_timezone(tariff.timezone)
        passes = [parse_timestamp(raw, tz) for raw in args.passes]
        vehicle = Vehicle(vehicle_type, registration_number)
        calculator = client.get_calculator(tariff_id)
        fees = calculator.compute_fees(vehicle, passes)
    except PyTollFeeError as exc:
        print(f"Error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
        return 1

    print(f"Tariff: {tariff.name} ({tariff.id})")
    print(f"Vehicle: {vehicle.vehicle_type} {mask_registration_number(registration_number)}")
    for fee in fees:
        print(f"- {fee.pass_time.isoformat()} | {fee.amount} {tariff.currency}")
    total = sum((fee.amount for fee in fees), Decimal(0))
    print(f"Total: {total} {tariff.currency}")
    _LOGGER.debug("Computed %d fees", len(fees))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
