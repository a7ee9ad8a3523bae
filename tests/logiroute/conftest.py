import os
from datetime import UTC, datetime, timedelta

import pytest


@pytest.fixture(scope="session")
def _logiroute_domain(request):
    """Initialize the logiroute domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from logiroute.domain import logiroute

    logiroute.init()
    return logiroute


@pytest.fixture(scope="session", autouse=True)
def setup_db(_logiroute_domain):
    from logiroute.utils.db import drop_db, setup_db

    setup_db(_logiroute_domain)

    yield

    drop_db(_logiroute_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_logiroute_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _logiroute_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def now():
    return datetime.now(UTC)


@pytest.fixture()
def register_vehicle():
    """Register a vehicle through the command pipeline and return its id."""
    from logiroute.vehicle.registration import RegisterVehicle
    from protean import current_domain

    plates = iter(range(1, 1000))

    def _register(capacity_kg=1000.0, license_plate=None):
        plate = license_plate or f"TST-{next(plates):04d}"
        return current_domain.process(
            RegisterVehicle(license_plate=plate, capacity_kg=capacity_kg),
            asynchronous=False,
        )

    return _register


@pytest.fixture()
def register_package(now):
    """Register a package through the command pipeline and return its id."""
    from logiroute.package.registration import RegisterPackage
    from protean import current_domain

    def _register(weight_kg=100.0, hours=4, address="1 Test Street"):
        return current_domain.process(
            RegisterPackage(
                delivery_address=address,
                weight_kg=weight_kg,
                delivery_deadline=now + timedelta(hours=hours),
            ),
            asynchronous=False,
        )

    return _register
