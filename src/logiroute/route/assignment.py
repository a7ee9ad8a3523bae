"""Package assignment — command and handler.

Resolves the vehicle and every requested package, plans the route and
persists vehicle, packages and route together. The handler runs inside a
single unit of work, so a failure at any step leaves the store untouched.
"""

import json

import structlog
from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument
from logiroute.package.package import Package
from logiroute.route.planning import build_route
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.vehicle import Vehicle

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="DeliveryRoute")
class AssignPackages:
    """Load a set of packages onto a vehicle as a new delivery route."""

    vehicle_id = Identifier(required=True)
    package_ids = Text(required=True)  # JSON list of package IDs


def _parse_package_ids(raw) -> list[str]:
    package_ids = json.loads(raw) if isinstance(raw, str) else list(raw or [])
    if not package_ids:
        raise InvalidArgument("package_ids", "Package IDs list cannot be empty")

    package_ids = [str(package_id) for package_id in package_ids]
    if len(set(package_ids)) != len(package_ids):
        raise InvalidArgument("package_ids", "Package IDs must not contain duplicates")
    return package_ids


@logiroute.command_handler(part_of=DeliveryRoute)
class AssignPackagesHandler:
    @handle(AssignPackages)
    def assign_packages(self, command):
        package_ids = _parse_package_ids(command.package_ids)
        logger.info(
            "Attempting to assign packages to vehicle",
            vehicle_id=str(command.vehicle_id),
            package_count=len(package_ids),
        )

        vehicle_repo = current_domain.repository_for(Vehicle)
        package_repo = current_domain.repository_for(Package)
        route_repo = current_domain.repository_for(DeliveryRoute)

        vehicle = vehicle_repo.find_by_id(command.vehicle_id)
        packages = package_repo.find_by_ids(package_ids)

        route = build_route(vehicle, packages)

        route_repo.add(route)
        for pkg in packages:
            package_repo.add(pkg)
        vehicle_repo.add(vehicle)

        logger.info(
            "Packages assigned to vehicle",
            vehicle_id=str(vehicle.id),
            license_plate=vehicle.license_plate,
            route_id=str(route.id),
            package_count=len(packages),
            total_weight_kg=route.total_weight_kg,
        )
        return str(route.id)
