"""LogiRoute database management CLI.

Provides commands to create and drop the LogiRoute database schema, and to
load a small demo fleet.

Usage:
    python src/manage.py setup-db   # Create all tables
    python src/manage.py drop-db    # Drop all tables
    python src/manage.py seed       # Register demo vehicles and packages
"""

import argparse
import sys
from datetime import UTC, datetime, timedelta

DEMO_VEHICLES = [
    ("ABC-1234", 1000.0),
    ("XYZ-5678", 1500.0),
]

# (address, weight in kg, hours until the deadline)
DEMO_PACKAGES = [
    ("123 Main St, New York, NY 10001", 150.0, 4),
    ("456 Oak Ave, Los Angeles, CA 90001", 250.0, 2),
    ("789 Pine Rd, Chicago, IL 60601", 300.0, 6),
    ("321 Elm Blvd, Houston, TX 77001", 500.0, 1),
    ("654 Maple Dr, Phoenix, AZ 85001", 200.0, 3),
]


def setup_database():
    """Create the database schema for the LogiRoute domain."""
    from logiroute.domain import logiroute
    from logiroute.utils.db import setup_db

    print("Initializing logiroute domain...")
    logiroute.init()
    print("Creating logiroute database schema...")
    setup_db(logiroute)
    print("Done.")


def drop_database():
    """Drop the database schema for the LogiRoute domain."""
    from logiroute.domain import logiroute
    from logiroute.utils.db import drop_db

    print("Initializing logiroute domain...")
    logiroute.init()
    print("Dropping logiroute database schema...")
    drop_db(logiroute)
    print("Done.")


def seed():
    """Register the demo fleet and a handful of packages."""
    from logiroute.domain import logiroute
    from logiroute.package.registration import RegisterPackage
    from logiroute.vehicle.registration import RegisterVehicle

    print("Initializing logiroute domain...")
    logiroute.init()

    now = datetime.now(UTC)
    with logiroute.domain_context():
        for license_plate, capacity_kg in DEMO_VEHICLES:
            vehicle_id = logiroute.process(
                RegisterVehicle(license_plate=license_plate, capacity_kg=capacity_kg),
                asynchronous=False,
            )
            print(f"  vehicle {license_plate} ({capacity_kg:.0f} kg): {vehicle_id}")

        for address, weight_kg, hours in DEMO_PACKAGES:
            package_id = logiroute.process(
                RegisterPackage(
                    delivery_address=address,
                    weight_kg=weight_kg,
                    delivery_deadline=now + timedelta(hours=hours),
                ),
                asynchronous=False,
            )
            print(f"  package {weight_kg:.0f} kg due in {hours}h: {package_id}")

    print("Done.")


def main():
    parser = argparse.ArgumentParser(description="LogiRoute database management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    subparsers.add_parser("seed", help="Register demo vehicles and packages")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed":
        seed()
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
