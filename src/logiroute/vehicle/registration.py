"""Vehicle registration — command and handler."""

import structlog
from protean import handle
from protean.fields import Float, String
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument
from logiroute.vehicle.vehicle import Vehicle

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="Vehicle")
class RegisterVehicle:
    """Add a vehicle to the fleet."""

    license_plate = String(required=True, max_length=20)
    capacity_kg = Float(required=True, min_value=0.0)


@logiroute.command_handler(part_of=Vehicle)
class RegisterVehicleHandler:
    @handle(RegisterVehicle)
    def register_vehicle(self, command):
        repo = current_domain.repository_for(Vehicle)
        if repo.find_by_license_plate(command.license_plate) is not None:
            raise InvalidArgument("license_plate", f"License plate '{command.license_plate}' is already registered")

        vehicle = Vehicle.register(
            license_plate=command.license_plate,
            capacity_kg=command.capacity_kg,
        )
        repo.add(vehicle)
        logger.info("Vehicle registered", vehicle_id=str(vehicle.id), license_plate=vehicle.license_plate)
        return str(vehicle.id)
