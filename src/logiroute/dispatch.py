"""Dispatch operations — the entry points callers use to move freight.

Every mutating operation holds the locks of the entities it touches while its
command is processed, so each check and the write-back that depends on it
happen as one step with respect to any other operation on the same vehicle,
route, package or license plate. Reads go straight to the repositories.

Must be called inside an active domain context.
"""

import json
from datetime import datetime

from protean.utils.globals import current_domain

from logiroute.locking import hold, package_key, plate_key, route_key, vehicle_key
from logiroute.package.management import RemovePackage, UpdatePackageDetails
from logiroute.package.package import Package, PackageStatus
from logiroute.package.status import UpdatePackageStatus
from logiroute.route.assignment import AssignPackages
from logiroute.route.completion import CompleteRoute
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.management import RemoveVehicle, UpdateVehicle
from logiroute.vehicle.registration import RegisterVehicle
from logiroute.vehicle.vehicle import Vehicle


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
def assign(vehicle_id: str, package_ids: list[str]) -> DeliveryRoute:
    """Load ``package_ids`` onto ``vehicle_id`` as a new route, ordered by deadline."""
    package_ids = [str(package_id) for package_id in package_ids]
    keys = [vehicle_key(vehicle_id), *(package_key(package_id) for package_id in package_ids)]
    with hold(*keys):
        route_id = current_domain.process(
            AssignPackages(vehicle_id=vehicle_id, package_ids=json.dumps(package_ids)),
            asynchronous=False,
        )
    return get_route(route_id)


def complete_route(route_id: str) -> DeliveryRoute:
    """Complete an active route and release its vehicle."""
    # A route never changes vehicle, so the key can be read before locking
    vehicle_id = get_route(route_id).vehicle_id
    with hold(vehicle_key(vehicle_id), route_key(route_id)):
        current_domain.process(CompleteRoute(route_id=route_id), asynchronous=False)
    return get_route(route_id)


# ---------------------------------------------------------------------------
# Packages
# ---------------------------------------------------------------------------
def update_status(package_id: str, new_status: PackageStatus | str) -> Package:
    """Move a package through its lifecycle."""
    status = new_status.value if isinstance(new_status, PackageStatus) else new_status
    with hold(package_key(package_id)):
        current_domain.process(
            UpdatePackageStatus(package_id=package_id, status=status),
            asynchronous=False,
        )
    return current_domain.repository_for(Package).find_by_id(package_id)


def update_package(package_id: str, delivery_address: str, weight_kg: float, delivery_deadline: datetime) -> Package:
    """Edit a package that is not on a route yet."""
    with hold(package_key(package_id)):
        current_domain.process(
            UpdatePackageDetails(
                package_id=package_id,
                delivery_address=delivery_address,
                weight_kg=weight_kg,
                delivery_deadline=delivery_deadline,
            ),
            asynchronous=False,
        )
    return current_domain.repository_for(Package).find_by_id(package_id)


def remove_package(package_id: str) -> None:
    with hold(package_key(package_id)):
        current_domain.process(RemovePackage(package_id=package_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------
def register_vehicle(license_plate: str, capacity_kg: float) -> str:
    """Add a vehicle to the fleet and return its id."""
    with hold(plate_key(license_plate)):
        return current_domain.process(
            RegisterVehicle(license_plate=license_plate, capacity_kg=capacity_kg),
            asynchronous=False,
        )


def update_vehicle(vehicle_id: str, license_plate: str, capacity_kg: float) -> Vehicle:
    with hold(vehicle_key(vehicle_id), plate_key(license_plate)):
        current_domain.process(
            UpdateVehicle(vehicle_id=vehicle_id, license_plate=license_plate, capacity_kg=capacity_kg),
            asynchronous=False,
        )
    return current_domain.repository_for(Vehicle).find_by_id(vehicle_id)


def remove_vehicle(vehicle_id: str) -> None:
    """Take a vehicle out of the fleet along with its completed routes.

    The packages on those routes are detached too, so their keys are held as
    well. Routes planned after the keys were read are active, which makes the
    removal fail anyway.
    """
    keys = [vehicle_key(vehicle_id)]
    for route in list_by_vehicle(vehicle_id):
        keys.append(route_key(route.id))
        keys.extend(package_key(package_id) for package_id in route.package_ids)

    with hold(*keys):
        current_domain.process(RemoveVehicle(vehicle_id=vehicle_id), asynchronous=False)


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_route(route_id: str) -> DeliveryRoute:
    return current_domain.repository_for(DeliveryRoute).find_by_id(route_id)


def list_active() -> list[DeliveryRoute]:
    return current_domain.repository_for(DeliveryRoute).find_active()


def list_by_vehicle(vehicle_id: str) -> list[DeliveryRoute]:
    return current_domain.repository_for(DeliveryRoute).find_by_vehicle(vehicle_id)
