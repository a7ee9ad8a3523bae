"""Business-rule failures raised by the LogiRoute domain.

Every failure is a Protean exception so command handlers abort their unit of
work and callers can catch either the precise kind or the Protean base class.
None of them is transient; retrying the same request yields the same error.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class NotFound(ObjectNotFoundError):
    """A vehicle, package or route identifier did not resolve."""

    def __init__(self, entity: str, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with ID {identifier} not found")


class InvalidArgument(ValidationError):
    """A request is well-formed but violates a precondition."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__({field: [message]})


class VehicleOverloaded(ValidationError):
    """The capacity guard rejected a load."""

    def __init__(self, license_plate: str, requested_kg: float, remaining_kg: float):
        self.license_plate = license_plate
        self.requested_kg = requested_kg
        self.remaining_kg = remaining_kg
        super().__init__(
            {
                "capacity": [
                    f"Vehicle '{license_plate}' cannot load {requested_kg:.2f} kg. "
                    f"Remaining capacity: {remaining_kg:.2f} kg"
                ]
            }
        )


class InvalidTransition(ValidationError):
    """A package status change is not in the lifecycle graph."""

    def __init__(self, package_id, current: str, target: str):
        self.package_id = package_id
        self.current = current
        self.target = target
        super().__init__(
            {"status": [f"Package ID {package_id} cannot transition from {current} to {target}. Invalid state transition."]}
        )


class RouteAlreadyCompleted(InvalidArgument):
    def __init__(self, route_id):
        self.route_id = route_id
        super().__init__("route", f"Delivery route with ID {route_id} is already completed")
