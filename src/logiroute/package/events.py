"""Package domain events — facts about package registration and lifecycle."""

from protean.fields import DateTime, Float, Identifier, String

from logiroute.domain import logiroute


@logiroute.event(part_of="Package")
class PackageRegistered:
    """A package was registered for delivery."""

    __version__ = 1

    package_id = Identifier(required=True)
    delivery_address = String(required=True)
    weight_kg = Float(required=True)
    delivery_deadline = DateTime(required=True)
    registered_at = DateTime(required=True)


@logiroute.event(part_of="Package")
class PackageDetailsUpdated:
    """Address, weight or deadline of an unassigned package changed."""

    __version__ = 1

    package_id = Identifier(required=True)
    delivery_address = String(required=True)
    weight_kg = Float(required=True)
    delivery_deadline = DateTime(required=True)
    updated_at = DateTime(required=True)


@logiroute.event(part_of="Package")
class PackageStatusChanged:
    """A package moved forward in its lifecycle."""

    __version__ = 1

    package_id = Identifier(required=True)
    from_status = String(required=True)
    to_status = String(required=True)
    route_id = Identifier()
    changed_at = DateTime(required=True)
