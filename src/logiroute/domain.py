"""LogiRoute bounded context — Fleet Dispatch and Delivery Routes.

Assigns packages to vehicles under a weight-capacity guard, moves packages
through their CREATED → LOADED → DELIVERED lifecycle, and tracks delivery
routes until they are completed. Uses CQRS: vehicles, packages and routes are
separate aggregates that reference each other by identifier only.
"""

import structlog
from protean.domain import Domain

from logiroute.utils.logging import configure_logging

configure_logging()

logger = structlog.get_logger(__name__)

logiroute = Domain(name="logiroute")
