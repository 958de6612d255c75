#!/usr/bin/env python3
"""
Cargo Ship Voyage Runner

Builds containers and ships directly through the library API, loads and
admits the containers, and prints each ship's report.

Usage:
    python scripts/run_voyage.py
    python scripts/run_voyage.py --max-weight 400 --hazardous-load 120
    python scripts/run_voyage.py --manifest voyage.json --json
"""

import argparse
import json
import sys
import os

# Ensure cargoship is importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cargoship.containers import ContainerFactory, HazardRecorder, SerialAllocator, console_hazard_sink
from cargoship.errors import CargoError
from cargoship.manifest import ManifestRunner, load_manifest
from cargoship.ship import ContainerShip


def print_header(title: str):
    """Print a formatted header."""
    print("\n" + "=" * 70)
    print(f" {title}")
    print("=" * 70)


def print_section(title: str):
    """Print a formatted section header."""
    print(f"\n--- {title} ---")


def run_voyage(
    max_containers: int = 10,
    max_weight: float = 500.0,
    hazardous_load: float = 90.0,
    gas_load: float = 80.0,
    fridge_load: float = 140.0,
) -> dict:
    """
    Board a gas, a hazardous liquid and a refrigerated container, then load them.

    Args:
        max_containers: Ship roster capacity
        max_weight: Ship maximum weight (tons)
        hazardous_load: Amount loaded into the hazardous liquid container
        gas_load: Amount loaded into the gas container
        fridge_load: Amount loaded into the refrigerated container

    Returns:
        Dictionary with the ship, its report and any hazards
    """
    print_header("CARGO SHIP VOYAGE")

    recorder = HazardRecorder(forward_to=console_hazard_sink)
    factory = ContainerFactory(allocator=SerialAllocator(), hazard_sink=recorder)
    ship = ContainerShip("Voyager", max_containers, max_weight)

    gas = factory.gas(100, pressure=5)
    liquid = factory.liquid(200, is_hazardous=True)
    fridge = factory.refrigerated(150, "Bananas", -5)

    print_section("Boarding")
    for container in (gas, liquid, fridge):
        try:
            ship.admit(container)
            print(f"       Admitted {container.serial_number}")
        except CargoError as e:
            print(f"       Rejected {container.serial_number}: {e.message}")

    print_section("Loading")
    for container, amount in ((liquid, hazardous_load), (gas, gas_load), (fridge, fridge_load)):
        try:
            container.load(amount)
            print(f"       {container.serial_number}: {container.current_load}/{container.max_payload}")
        except CargoError as e:
            print(f"       {container.serial_number}: {e.message}")

    print_section("Report")
    report = ship.print_report()

    print_section("Weights")
    print(f"       Cached:  {ship.sum_weight}")
    print(f"       Fresh:   {ship.total_weight()}")
    print(f"       Drift:   {ship.weight_drift}")

    return {
        "ship": ship.to_dict(),
        "report": report.to_dict(),
        "hazards": [h.to_dict() for h in recorder.events],
    }


def main():
    parser = argparse.ArgumentParser(description="Run a sample cargo ship voyage")
    parser.add_argument("--max-containers", type=int, default=10)
    parser.add_argument("--max-weight", type=float, default=500.0)
    parser.add_argument("--hazardous-load", type=float, default=90.0)
    parser.add_argument("--gas-load", type=float, default=80.0)
    parser.add_argument("--fridge-load", type=float, default=140.0)
    parser.add_argument("--manifest", help="Run a manifest file instead of the sample voyage")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args()

    if args.manifest:
        result = ManifestRunner(report_sink=print).run(load_manifest(args.manifest))
        data = result.to_dict()
        ok = result.success
    else:
        data = run_voyage(
            max_containers=args.max_containers,
            max_weight=args.max_weight,
            hazardous_load=args.hazardous_load,
            gas_load=args.gas_load,
            fridge_load=args.fridge_load,
        )
        ok = True

    if args.json:
        print(json.dumps(data, indent=2, default=str))

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
