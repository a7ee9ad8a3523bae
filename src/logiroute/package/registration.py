"""Package registration — command and handler."""

import structlog
from protean import handle
from protean.fields import DateTime, Float, String
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.package.package import Package

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="Package")
class RegisterPackage:
    """Register a package for delivery."""

    delivery_address = String(required=True, max_length=500)
    weight_kg = Float(required=True)
    delivery_deadline = DateTime(required=True)


@logiroute.command_handler(part_of=Package)
class RegisterPackageHandler:
    @handle(RegisterPackage)
    def register_package(self, command):
        pkg = Package.register(
            delivery_address=command.delivery_address,
            weight_kg=command.weight_kg,
            delivery_deadline=command.delivery_deadline,
        )
        current_domain.repository_for(Package).add(pkg)
        logger.info("Package registered", package_id=str(pkg.id), weight_kg=pkg.weight_kg)
        return str(pkg.id)
