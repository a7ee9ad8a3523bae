"""Repository for the Vehicle aggregate."""

from protean.exceptions import ObjectNotFoundError

from logiroute.domain import logiroute
from logiroute.exceptions import NotFound
from logiroute.vehicle.vehicle import Vehicle, VehicleStatus


@logiroute.repository(part_of=Vehicle)
class VehicleRepository:
    """Fleet lookups on top of the base CRUD operations."""

    def find_by_id(self, vehicle_id: str) -> Vehicle:
        """Fetch a vehicle or raise ``NotFound``."""
        try:
            return self.get(vehicle_id)
        except ObjectNotFoundError as exc:
            raise NotFound("Vehicle", vehicle_id) from exc

    def find_all(self) -> list[Vehicle]:
        return self._dao.query.order_by("created_at").all().items

    def find_available(self) -> list[Vehicle]:
        return self._dao.query.filter(status=VehicleStatus.AVAILABLE.value).order_by("created_at").all().items

    def find_by_license_plate(self, license_plate: str) -> Vehicle | None:
        matches = self._dao.query.filter(license_plate=license_plate).all().items
        return matches[0] if matches else None

    def discard(self, vehicle: Vehicle) -> None:
        self._dao.delete(vehicle)
