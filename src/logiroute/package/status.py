"""Package status updates — command and handler.

Moves a single package through its lifecycle outside of route assignment,
e.g. a driver confirming a drop-off (LOADED → DELIVERED).
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from logiroute.domain import logiroute
from logiroute.exceptions import InvalidTransition
from logiroute.package.package import Package, PackageStatus, apply_transition

logger = structlog.get_logger(__name__)


@logiroute.command(part_of="Package")
class UpdatePackageStatus:
    """Move a package to a new lifecycle status."""

    package_id = Identifier(required=True)
    status = String(required=True, max_length=20, choices=PackageStatus)


@logiroute.command_handler(part_of=Package)
class PackageStatusHandler:
    @handle(UpdatePackageStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Package)
        pkg = repo.find_by_id(command.package_id)
        previous = pkg.status
        try:
            apply_transition(pkg, command.status)
        except InvalidTransition:
            logger.error(
                "Invalid status transition for package",
                package_id=str(pkg.id),
                current_status=previous,
                target_status=command.status,
            )
            raise
        repo.add(pkg)
        logger.info(
            "Package status updated",
            package_id=str(pkg.id),
            from_status=previous,
            to_status=pkg.status,
        )
