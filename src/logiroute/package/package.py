"""Package aggregate (CQRS) and its lifecycle state machine.

State Machine:
    CREATED → LOADED → DELIVERED

Re-applying the current status is a permitted no-op. Nothing moves a package
backwards, and DELIVERED is terminal. A package is LOADED when it is placed on
a delivery route; ``route_id`` points at that route.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument, InvalidTransition
from logiroute.package.events import PackageDetailsUpdated, PackageRegistered, PackageStatusChanged


class PackageStatus(Enum):
    CREATED = "CREATED"
    LOADED = "LOADED"
    DELIVERED = "DELIVERED"


_VALID_TRANSITIONS = {
    PackageStatus.CREATED: {PackageStatus.CREATED, PackageStatus.LOADED},
    PackageStatus.LOADED: {PackageStatus.LOADED, PackageStatus.DELIVERED},
    PackageStatus.DELIVERED: {PackageStatus.DELIVERED},  # terminal
}


def can_transition(current: PackageStatus | str, target: PackageStatus | str) -> bool:
    """Whether ``current`` may move to ``target``."""
    return PackageStatus(target) in _VALID_TRANSITIONS[PackageStatus(current)]


def apply_transition(package: "Package", target: PackageStatus | str) -> "Package":
    """Move ``package`` to ``target`` or raise ``InvalidTransition``."""
    return package.transition_to(target)


def _as_utc(value: datetime) -> datetime:
    # Deadlines without an offset are taken to be UTC so they compare with the rest
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


@logiroute.aggregate
class Package:
    delivery_address = String(required=True, max_length=500)
    weight_kg = Float(required=True)
    status = String(
        max_length=20,
        choices=PackageStatus,
        default=PackageStatus.CREATED.value,
    )
    delivery_deadline = DateTime(required=True)
    route_id = Identifier()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def weight_must_be_positive(self):
        if self.weight_kg is not None and self.weight_kg <= 0:
            raise ValidationError({"weight_kg": ["Weight must be positive"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, delivery_address: str, weight_kg: float, delivery_deadline: datetime):
        """Register a new package awaiting assignment."""
        now = datetime.now(UTC)
        deadline = _as_utc(delivery_deadline)
        pkg = cls(
            delivery_address=delivery_address,
            weight_kg=weight_kg,
            status=PackageStatus.CREATED.value,
            delivery_deadline=deadline,
            created_at=now,
            updated_at=now,
        )
        pkg.raise_(
            PackageRegistered(
                package_id=str(pkg.id),
                delivery_address=delivery_address,
                weight_kg=weight_kg,
                delivery_deadline=deadline,
                registered_at=now,
            )
        )
        return pkg

    @property
    def is_assigned(self) -> bool:
        return self.route_id is not None

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def transition_to(self, target: PackageStatus | str) -> "Package":
        """Apply a lifecycle transition. Same-status requests change nothing."""
        current = PackageStatus(self.status)
        target = PackageStatus(target)
        if not can_transition(current, target):
            raise InvalidTransition(self.id, current.value, target.value)
        if current == target:
            return self

        now = datetime.now(UTC)
        self.status = target.value
        self.updated_at = now
        self.raise_(
            PackageStatusChanged(
                package_id=str(self.id),
                from_status=current.value,
                to_status=target.value,
                route_id=self.route_id,
                changed_at=now,
            )
        )
        return self

    def load_onto(self, route_id: str) -> None:
        """Place the package on a route, moving it to LOADED."""
        if PackageStatus(self.status) != PackageStatus.CREATED:
            raise InvalidArgument("package_ids", f"Package ID {self.id} is not in CREATED status")
        self.route_id = route_id
        self.transition_to(PackageStatus.LOADED)

    def detach_from_route(self) -> None:
        self.route_id = None
        self.updated_at = datetime.now(UTC)

    # -------------------------------------------------------------------
    # Details
    # -------------------------------------------------------------------
    def update_details(self, delivery_address: str, weight_kg: float, delivery_deadline: datetime) -> None:
        """Edit a package that has not been placed on a route yet."""
        if PackageStatus(self.status) != PackageStatus.CREATED or self.is_assigned:
            raise InvalidArgument("status", f"Package ID {self.id} can only be edited before it is assigned")

        now = datetime.now(UTC)
        deadline = _as_utc(delivery_deadline)
        with atomic_change(self):
            self.delivery_address = delivery_address
            self.weight_kg = weight_kg
            self.delivery_deadline = deadline
            self.updated_at = now
        self.raise_(
            PackageDetailsUpdated(
                package_id=str(self.id),
                delivery_address=delivery_address,
                weight_kg=weight_kg,
                delivery_deadline=deadline,
                updated_at=now,
            )
        )
