"""DeliveryRoute aggregate (CQRS) — an ordered run of packages on one vehicle.

A route is active while ``completed_at`` is empty. Completing it is a one-way,
one-time step; a completed route never changes again.

The route refers to its vehicle and packages by identifier. Each stop keeps a
snapshot of the package weight and deadline taken at assignment time, which is
what the route's total weight is computed from.
"""

import json
from datetime import UTC, datetime

from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from logiroute.domain import logiroute
from logiroute.exceptions import RouteAlreadyCompleted
from logiroute.route.events import PackagesAssigned, RouteCompleted


@logiroute.entity(part_of="DeliveryRoute")
class RouteStop:
    """One package on the route, numbered in delivery order."""

    package_id = Identifier(required=True)
    sequence = Integer(required=True, min_value=1)
    weight_kg = Float(required=True)
    delivery_deadline = DateTime()
    delivery_address = String(max_length=500)


@logiroute.aggregate
class DeliveryRoute:
    vehicle_id = Identifier(required=True)
    stops = HasMany(RouteStop)
    created_at = DateTime(required=True)
    completed_at = DateTime()

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def plan(cls, vehicle_id: str, packages: list):
        """Create an active route visiting ``packages`` in the given order."""
        now = datetime.now(UTC)
        route = cls(vehicle_id=vehicle_id, created_at=now)
        for sequence, pkg in enumerate(packages, start=1):
            route.add_stops(
                RouteStop(
                    package_id=str(pkg.id),
                    sequence=sequence,
                    weight_kg=pkg.weight_kg,
                    delivery_deadline=pkg.delivery_deadline,
                    delivery_address=pkg.delivery_address,
                )
            )
        route.raise_(
            PackagesAssigned(
                route_id=str(route.id),
                vehicle_id=str(vehicle_id),
                package_ids=json.dumps(route.package_ids),
                package_count=len(packages),
                total_weight_kg=route.total_weight_kg,
                assigned_at=now,
            )
        )
        return route

    # -------------------------------------------------------------------
    # Derived attributes
    # -------------------------------------------------------------------
    @property
    def ordered_stops(self) -> list[RouteStop]:
        return sorted(self.stops or [], key=lambda stop: stop.sequence)

    @property
    def package_ids(self) -> list[str]:
        return [str(stop.package_id) for stop in self.ordered_stops]

    @property
    def total_weight_kg(self) -> float:
        return sum(stop.weight_kg for stop in self.stops or [])

    @property
    def is_active(self) -> bool:
        return self.completed_at is None

    # -------------------------------------------------------------------
    # Completion
    # -------------------------------------------------------------------
    def complete(self) -> None:
        if not self.is_active:
            raise RouteAlreadyCompleted(self.id)

        now = datetime.now(UTC)
        self.completed_at = now
        self.raise_(
            RouteCompleted(
                route_id=str(self.id),
                vehicle_id=str(self.vehicle_id),
                released_weight_kg=self.total_weight_kg,
                completed_at=now,
            )
        )
