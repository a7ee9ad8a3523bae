"""Vehicle management — edit a vehicle or take it out of the fleet.

Removing a vehicle also removes its (completed) routes and clears the route
reference of the packages on them. A vehicle with an active route cannot be
removed.
"""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument
from logiroute.package.package import Package
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.vehicle import Vehicle

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="Vehicle")
class UpdateVehicle:
    vehicle_id = Identifier(required=True)
    license_plate = String(required=True, max_length=20)
    capacity_kg = Float(required=True, min_value=0.0)


@logiroute.command(part_of="Vehicle")
class RemoveVehicle:
    vehicle_id = Identifier(required=True)


@logiroute.command_handler(part_of=Vehicle)
class VehicleManagementHandler:
    @handle(UpdateVehicle)
    def update_vehicle(self, command):
        repo = current_domain.repository_for(Vehicle)
        vehicle = repo.find_by_id(command.vehicle_id)

        holder = repo.find_by_license_plate(command.license_plate)
        if holder is not None and str(holder.id) != str(vehicle.id):
            raise InvalidArgument("license_plate", f"License plate '{command.license_plate}' is already registered")

        vehicle.update_details(license_plate=command.license_plate, capacity_kg=command.capacity_kg)
        repo.add(vehicle)
        logger.info("Vehicle updated", vehicle_id=str(vehicle.id))

    @handle(RemoveVehicle)
    def remove_vehicle(self, command):
        vehicle_repo = current_domain.repository_for(Vehicle)
        route_repo = current_domain.repository_for(DeliveryRoute)
        package_repo = current_domain.repository_for(Package)

        vehicle = vehicle_repo.find_by_id(command.vehicle_id)
        routes = route_repo.find_by_vehicle(str(vehicle.id))
        active = [route for route in routes if route.is_active]
        if active:
            raise InvalidArgument(
                "vehicle_id",
                f"Vehicle '{vehicle.license_plate}' has {len(active)} active route(s) and cannot be removed",
            )

        for route in routes:
            for pkg in package_repo.find_by_route(str(route.id)):
                pkg.detach_from_route()
                package_repo.add(pkg)
            route_repo.discard(route)
        vehicle_repo.discard(vehicle)

        logger.info("Vehicle removed", vehicle_id=str(vehicle.id), routes_removed=len(routes))
