"""BDD tests for the package status lifecycle."""

from logiroute import dispatch
from logiroute.exceptions import InvalidTransition
from logiroute.package.package import Package
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/package_lifecycle.feature")

_PATH_TO = {
    "CREATED": [],
    "LOADED": ["LOADED"],
    "DELIVERED": ["LOADED", "DELIVERED"],
}


@given(parsers.cfparse('a package in status "{current}"'), target_fixture="package_id")
def package_in_status(current, register_package):
    package_id = register_package()
    for status in _PATH_TO[current]:
        dispatch.update_status(package_id, status)
    return package_id


@when(parsers.cfparse('the package status is set to "{target}"'))
def set_status(package_id, target, error):
    try:
        dispatch.update_status(package_id, target)
    except InvalidTransition as exc:
        error["exc"] = exc


@then(parsers.cfparse('the package status is "{status}"'))
def package_status_is(package_id, status):
    assert current_domain.repository_for(Package).find_by_id(package_id).status == status


@then("the status change is rejected")
def status_change_rejected(error):
    assert isinstance(error["exc"], InvalidTransition)
