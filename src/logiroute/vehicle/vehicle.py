"""Vehicle aggregate (CQRS) — a delivery vehicle with a weight capacity.

State Machine:
    AVAILABLE → IN_TRANSIT  (packages loaded)
    IN_TRANSIT → AVAILABLE  (route completed)

Loading more packages onto a vehicle already IN_TRANSIT is allowed as long as
the capacity guard accepts the extra weight.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, String

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument, VehicleOverloaded
from logiroute.vehicle import capacity
from logiroute.vehicle.events import VehicleLoaded, VehicleRegistered, VehicleReleased, VehicleUpdated


class VehicleStatus(Enum):
    AVAILABLE = "AVAILABLE"
    IN_TRANSIT = "IN_TRANSIT"


@logiroute.aggregate
class Vehicle:
    license_plate = String(required=True, max_length=20)
    capacity_kg = Float(required=True, min_value=0.0)
    current_load_kg = Float(default=0.0, min_value=0.0)
    status = String(
        max_length=20,
        choices=VehicleStatus,
        default=VehicleStatus.AVAILABLE.value,
    )
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def load_must_not_exceed_capacity(self):
        if not capacity.fits(self.current_load_kg or 0.0, self.capacity_kg or 0.0):
            raise ValidationError({"current_load_kg": ["Current load cannot exceed vehicle capacity"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, license_plate: str, capacity_kg: float):
        """Register a new, empty vehicle."""
        now = datetime.now(UTC)
        vehicle = cls(
            license_plate=license_plate,
            capacity_kg=capacity_kg,
            current_load_kg=0.0,
            status=VehicleStatus.AVAILABLE.value,
            created_at=now,
            updated_at=now,
        )
        vehicle.raise_(
            VehicleRegistered(
                vehicle_id=str(vehicle.id),
                license_plate=license_plate,
                capacity_kg=capacity_kg,
                registered_at=now,
            )
        )
        return vehicle

    # -------------------------------------------------------------------
    # Capacity
    # -------------------------------------------------------------------
    @property
    def remaining_capacity_kg(self) -> float:
        return capacity.remaining_capacity(self)

    def can_load(self, weight_kg: float) -> bool:
        return capacity.can_accept(self, weight_kg)

    def load(self, weight_kg: float) -> None:
        """Add weight and send the vehicle on its way."""
        if not self.can_load(weight_kg):
            raise VehicleOverloaded(self.license_plate, weight_kg, self.remaining_capacity_kg)

        now = datetime.now(UTC)
        self.current_load_kg = self.current_load_kg + weight_kg
        self.status = VehicleStatus.IN_TRANSIT.value
        self.updated_at = now
        self.raise_(
            VehicleLoaded(
                vehicle_id=str(self.id),
                added_kg=weight_kg,
                current_load_kg=self.current_load_kg,
                loaded_at=now,
            )
        )

    def release(self, weight_kg: float) -> None:
        """Remove weight (never below zero) and make the vehicle available."""
        now = datetime.now(UTC)
        remaining = self.current_load_kg - weight_kg
        self.current_load_kg = remaining if remaining > capacity.TOLERANCE_KG else 0.0
        self.status = VehicleStatus.AVAILABLE.value
        self.updated_at = now
        self.raise_(
            VehicleReleased(
                vehicle_id=str(self.id),
                released_kg=weight_kg,
                current_load_kg=self.current_load_kg,
                released_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, license_plate: str, capacity_kg: float) -> None:
        if not capacity.fits(self.current_load_kg, capacity_kg):
            raise InvalidArgument(
                "capacity_kg",
                f"Capacity {capacity_kg:.2f} kg is below the current load of {self.current_load_kg:.2f} kg",
            )

        now = datetime.now(UTC)
        with atomic_change(self):
            self.license_plate = license_plate
            self.capacity_kg = capacity_kg
            self.updated_at = now
        self.raise_(
            VehicleUpdated(
                vehicle_id=str(self.id),
                license_plate=license_plate,
                capacity_kg=capacity_kg,
                updated_at=now,
            )
        )
