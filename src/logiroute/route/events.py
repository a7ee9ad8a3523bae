"""Delivery route domain events."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from logiroute.domain import logiroute


@logiroute.event(part_of="DeliveryRoute")
class PackagesAssigned:
    """A route was created by loading packages onto a vehicle."""

    __version__ = 1

    route_id = Identifier(required=True)
    vehicle_id = Identifier(required=True)
    package_ids = Text(required=True)  # JSON list, in delivery order
    package_count = Integer(required=True)
    total_weight_kg = Float(required=True)
    assigned_at = DateTime(required=True)


@logiroute.event(part_of="DeliveryRoute")
class RouteCompleted:
    """Every stop on a route was delivered and the vehicle was released."""

    __version__ = 1

    route_id = Identifier(required=True)
    vehicle_id = Identifier(required=True)
    released_weight_kg = Float(required=True)
    completed_at = DateTime(required=True)
