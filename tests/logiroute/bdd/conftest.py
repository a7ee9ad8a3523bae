"""Shared BDD fixtures and step definitions for LogiRoute."""

import pytest
from logiroute.package.package import Package
from logiroute.vehicle.vehicle import Vehicle
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}

@pytest.fixture()
def package_ids():
    """Packages registered by the scenario, in registration order."""
    return []

# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a vehicle "{plate}" with a capacity of {capacity:g} kg'),
    target_fixture="vehicle_id",
)
def vehicle_with_capacity(plate, capacity, register_vehicle):
    return register_vehicle(capacity_kg=capacity, license_plate=plate)

@given(parsers.cfparse("a package of {weight:g} kg due in {hours:d} hours"))
def package_due_in(weight, hours, package_ids, register_package):
    package_ids.append(register_package(weight_kg=weight, hours=hours, address=f"{len(package_ids) + 1} Depot Road"))

# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the vehicle carries {weight:g} kg"))
def vehicle_carries(vehicle_id, weight):
    assert current_domain.repository_for(Vehicle).find_by_id(vehicle_id).current_load_kg == weight

@then(parsers.cfparse('the vehicle is "{status}"'))
def vehicle_status_is(vehicle_id, status):
    assert current_domain.repository_for(Vehicle).find_by_id(vehicle_id).status == status

@then(parsers.cfparse('every package is "{status}"'))
def every_package_is(package_ids, status):
    repo = current_domain.repository_for(Package)
    assert {repo.find_by_id(package_id).status for package_id in package_ids} == {status}
