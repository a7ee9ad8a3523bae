"""Vehicle domain events — facts about the fleet and vehicle load changes."""

from protean.fields import DateTime, Float, Identifier, String

from logiroute.domain import logiroute


@logiroute.event(part_of="Vehicle")
class VehicleRegistered:
    """A vehicle joined the fleet."""

    __version__ = 1

    vehicle_id = Identifier(required=True)
    license_plate = String(required=True)
    capacity_kg = Float(required=True)
    registered_at = DateTime(required=True)


@logiroute.event(part_of="Vehicle")
class VehicleUpdated:
    """A vehicle's plate or capacity changed."""

    __version__ = 1

    vehicle_id = Identifier(required=True)
    license_plate = String(required=True)
    capacity_kg = Float(required=True)
    updated_at = DateTime(required=True)


@logiroute.event(part_of="Vehicle")
class VehicleLoaded:
    """Weight was added to a vehicle and it left for delivery."""

    __version__ = 1

    vehicle_id = Identifier(required=True)
    added_kg = Float(required=True)
    current_load_kg = Float(required=True)
    loaded_at = DateTime(required=True)


@logiroute.event(part_of="Vehicle")
class VehicleReleased:
    """Weight was removed from a vehicle and it became available again."""

    __version__ = 1

    vehicle_id = Identifier(required=True)
    released_kg = Float(required=True)
    current_load_kg = Float(required=True)
    released_at = DateTime(required=True)

