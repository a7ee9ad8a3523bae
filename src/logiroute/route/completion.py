"""Route completion — command and handler.

Closes an active route and hands its weight back to the vehicle. A route can
be completed exactly once; a second attempt is rejected rather than releasing
the same weight twice.
"""

import structlog
from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.vehicle import Vehicle

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="DeliveryRoute")
class CompleteRoute:
    route_id = Identifier(required=True)


def close_route(route: DeliveryRoute, vehicle: Vehicle) -> None:
    """Stamp the route complete and release its weight from the vehicle."""
    route.complete()
    vehicle.release(route.total_weight_kg)


@logiroute.command_handler(part_of=DeliveryRoute)
class CompleteRouteHandler:
    @handle(CompleteRoute)
    def complete_route(self, command):
        route_repo = current_domain.repository_for(DeliveryRoute)
        vehicle_repo = current_domain.repository_for(Vehicle)

        route = route_repo.find_by_id(command.route_id)
        vehicle = vehicle_repo.find_by_id(route.vehicle_id)

        close_route(route, vehicle)

        route_repo.add(route)
        vehicle_repo.add(vehicle)

        logger.info(
            "Route marked as completed",
            route_id=str(route.id),
            vehicle_id=str(vehicle.id),
            license_plate=vehicle.license_plate,
            released_kg=route.total_weight_kg,
        )
