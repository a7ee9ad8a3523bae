"""Repository for the DeliveryRoute aggregate."""

from protean.exceptions import ObjectNotFoundError

from logiroute.domain import logiroute
from logiroute.exceptions import NotFound
from logiroute.route.route import DeliveryRoute


@logiroute.repository(part_of=DeliveryRoute)
class DeliveryRouteRepository:
    def find_by_id(self, route_id: str) -> DeliveryRoute:
        """Fetch a route or raise ``NotFound``."""
        try:
            return self.get(route_id)
        except ObjectNotFoundError as exc:
            raise NotFound("Delivery route", route_id) from exc

    def find_all(self) -> list[DeliveryRoute]:
        return self._dao.query.order_by("created_at").all().items

    def find_active(self) -> list[DeliveryRoute]:
        """Routes whose completion timestamp is still empty."""
        return [route for route in self.find_all() if route.is_active]

    def find_by_vehicle(self, vehicle_id: str) -> list[DeliveryRoute]:
        return self._dao.query.filter(vehicle_id=vehicle_id).order_by("created_at").all().items

    def discard(self, route: DeliveryRoute) -> None:
        self._dao.delete(route)
