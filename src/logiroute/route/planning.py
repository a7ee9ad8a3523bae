"""Route planning — turns a vehicle and a set of packages into a route.

All checks run before anything is touched: an empty request, the capacity
guard, then the CREATED precondition for every package. Only when all of them
pass are packages loaded, the route built and the vehicle weighed down. The
caller persists the results.

Stops are ordered by delivery deadline, earliest first. Python's sort is
stable, so packages sharing a deadline keep the order they were requested in.
There is no geographic optimisation.
"""

from operator import attrgetter

import structlog

from logiroute.exceptions import InvalidArgument, VehicleOverloaded
from logiroute.package.package import PackageStatus
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle import capacity

logger = structlog.get_logger(__name__)


def order_by_deadline(packages: list) -> list:
    return sorted(packages, key=attrgetter("delivery_deadline"))


def build_route(vehicle, packages: list) -> DeliveryRoute:
    """Assign ``packages`` to ``vehicle`` and return the new route.

    Raises:
        InvalidArgument: no packages, or a package is not in CREATED status.
        VehicleOverloaded: the combined weight exceeds the remaining capacity.
    """
    if not packages:
        raise InvalidArgument("package_ids", "Package IDs list cannot be empty")

    total_weight = sum(pkg.weight_kg for pkg in packages)
    if not capacity.can_accept(vehicle, total_weight):
        remaining = capacity.remaining_capacity(vehicle)
        logger.error(
            "Vehicle overload detected",
            vehicle_id=str(vehicle.id),
            license_plate=vehicle.license_plate,
            requested_kg=total_weight,
            remaining_kg=remaining,
        )
        raise VehicleOverloaded(vehicle.license_plate, total_weight, remaining)

    ordered = order_by_deadline(packages)
    for pkg in ordered:
        if PackageStatus(pkg.status) != PackageStatus.CREATED:
            raise InvalidArgument("package_ids", f"Package ID {pkg.id} is not in CREATED status")

    route = DeliveryRoute.plan(vehicle_id=str(vehicle.id), packages=ordered)
    for pkg in ordered:
        pkg.load_onto(str(route.id))
    vehicle.load(total_weight)
    return route
