"""Package management — edit and remove packages before they are dispatched."""

import structlog
from protean import handle
from protean.fields import DateTime, Float, Identifier, String
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidArgument
from logiroute.package.package import Package

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="Package")
class UpdatePackageDetails:
    """Change address, weight or deadline of an unassigned package."""

    package_id = Identifier(required=True)
    delivery_address = String(required=True, max_length=500)
    weight_kg = Float(required=True)
    delivery_deadline = DateTime(required=True)


@logiroute.command(part_of="Package")
class RemovePackage:
    """Delete a package that is not on any route."""

    package_id = Identifier(required=True)


@logiroute.command_handler(part_of=Package)
class PackageManagementHandler:
    @handle(UpdatePackageDetails)
    def update_details(self, command):
        repo = current_domain.repository_for(Package)
        pkg = repo.find_by_id(command.package_id)
        pkg.update_details(
            delivery_address=command.delivery_address,
            weight_kg=command.weight_kg,
            delivery_deadline=command.delivery_deadline,
        )
        repo.add(pkg)
        logger.info("Package updated", package_id=str(pkg.id))

    @handle(RemovePackage)
    def remove_package(self, command):
        repo = current_domain.repository_for(Package)
        pkg = repo.find_by_id(command.package_id)
        if pkg.is_assigned:
            raise InvalidArgument("package_id", f"Package ID {pkg.id} belongs to delivery route {pkg.route_id}")
        repo.discard(pkg)
        logger.info("Package removed", package_id=str(pkg.id))
