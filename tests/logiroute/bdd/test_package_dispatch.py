"""BDD tests for package dispatch."""

from logiroute import dispatch
from logiroute.exceptions import RouteAlreadyCompleted, VehicleOverloaded
from logiroute.vehicle.vehicle import Vehicle
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/package_dispatch.feature")


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse("the vehicle already carries {weight:g} kg"))
def vehicle_already_carries(vehicle_id, weight):
    repo = current_domain.repository_for(Vehicle)
    vehicle = repo.find_by_id(vehicle_id)
    vehicle.load(weight)
    repo.add(vehicle)


@given("all packages are assigned to the vehicle", target_fixture="route_id")
def packages_already_assigned(vehicle_id, package_ids):
    return str(dispatch.assign(vehicle_id, package_ids).id)


@given("the route is completed")
def route_already_completed(route_id):
    dispatch.complete_route(route_id)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when("all packages are assigned to the vehicle", target_fixture="route_id")
def assign_all_packages(vehicle_id, package_ids, error):
    try:
        return str(dispatch.assign(vehicle_id, package_ids).id)
    except VehicleOverloaded as exc:
        error["exc"] = exc
        return None


@when("the route is completed")
def complete_the_route(route_id, error):
    try:
        dispatch.complete_route(route_id)
    except RouteAlreadyCompleted as exc:
        error["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the route visits the packages in the order {order}"))
def route_order(route_id, package_ids, order):
    expected = [package_ids[int(position) - 1] for position in order.split(", ")]
    assert dispatch.get_route(route_id).package_ids == expected


@then("the assignment is rejected as an overload")
def assignment_rejected(error):
    assert isinstance(error["exc"], VehicleOverloaded)


@then("the route is no longer active")
def route_not_active(route_id):
    assert not dispatch.get_route(route_id).is_active
    assert dispatch.list_active() == []


@then("the completion is rejected")
def completion_rejected(error):
    assert isinstance(error["exc"], RouteAlreadyCompleted)
