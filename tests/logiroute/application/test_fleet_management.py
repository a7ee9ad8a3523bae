"""Application tests for vehicle registration, edits and removal."""

import threading

import pytest
from logiroute import dispatch
from logiroute.exceptions import InvalidArgument, NotFound
from logiroute.package.package import Package
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.vehicle import Vehicle, VehicleStatus
from protean import current_domain


class TestRegisterVehicle:
    def test_register_vehicle(self, register_vehicle):
        vehicle_id = register_vehicle(capacity_kg=1000.0, license_plate="ABC-1234")

        vehicle = current_domain.repository_for(Vehicle).find_by_id(vehicle_id)
        assert vehicle.license_plate == "ABC-1234"
        assert vehicle.capacity_kg == 1000.0
        assert vehicle.current_load_kg == 0.0
        assert vehicle.status == VehicleStatus.AVAILABLE.value

    def test_duplicate_license_plate_is_rejected(self, register_vehicle):
        register_vehicle(license_plate="ABC-1234")
        with pytest.raises(InvalidArgument) as exc:
            register_vehicle(license_plate="ABC-1234")
        assert "already registered" in str(exc.value)
        assert len(current_domain.repository_for(Vehicle).find_all()) == 1

    def test_dispatch_registration_returns_id(self):
        vehicle_id = dispatch.register_vehicle("DSP-0001", 1500.0)

        vehicle = current_domain.repository_for(Vehicle).find_by_id(vehicle_id)
        assert vehicle.license_plate == "DSP-0001"
        assert vehicle.capacity_kg == 1500.0

    def test_dispatch_registration_rejects_duplicate_plate(self):
        dispatch.register_vehicle("DSP-0001", 1500.0)
        with pytest.raises(InvalidArgument):
            dispatch.register_vehicle("DSP-0001", 900.0)


class TestVehicleQueries:
    def test_find_all_and_available(self, register_vehicle, register_package):
        busy = register_vehicle(license_plate="BUSY-001")
        idle = register_vehicle(license_plate="IDLE-001")
        dispatch.assign(busy, [register_package(weight_kg=10.0)])

        repo = current_domain.repository_for(Vehicle)
        assert {str(v.id) for v in repo.find_all()} == {busy, idle}
        assert [str(v.id) for v in repo.find_available()] == [idle]

    def test_unknown_vehicle(self):
        with pytest.raises(NotFound) as exc:
            current_domain.repository_for(Vehicle).find_by_id("missing")
        assert "Vehicle with ID missing not found" in str(exc.value)


class TestUpdateVehicle:
    def test_update_plate_and_capacity(self, register_vehicle):
        vehicle_id = register_vehicle(license_plate="OLD-0001", capacity_kg=500.0)

        vehicle = dispatch.update_vehicle(vehicle_id, "NEW-0001", 750.0)

        assert vehicle.license_plate == "NEW-0001"
        assert vehicle.capacity_kg == 750.0

    def test_keeping_own_plate_is_allowed(self, register_vehicle):
        vehicle_id = register_vehicle(license_plate="OWN-0001", capacity_kg=500.0)
        vehicle = dispatch.update_vehicle(vehicle_id, "OWN-0001", 900.0)
        assert vehicle.capacity_kg == 900.0

    def test_taking_another_vehicles_plate_is_rejected(self, register_vehicle):
        register_vehicle(license_plate="TAKEN-01")
        vehicle_id = register_vehicle(license_plate="MINE-001")

        with pytest.raises(InvalidArgument):
            dispatch.update_vehicle(vehicle_id, "TAKEN-01", 1000.0)

    def test_capacity_below_load_is_rejected(self, register_vehicle, register_package):
        vehicle_id = register_vehicle(capacity_kg=1000.0)
        dispatch.assign(vehicle_id, [register_package(weight_kg=600.0)])

        with pytest.raises(InvalidArgument):
            dispatch.update_vehicle(vehicle_id, "TST-0001", 500.0)

        vehicle = current_domain.repository_for(Vehicle).find_by_id(vehicle_id)
        assert vehicle.capacity_kg == 1000.0


class TestRemoveVehicle:
    def test_remove_idle_vehicle(self, register_vehicle):
        vehicle_id = register_vehicle()
        dispatch.remove_vehicle(vehicle_id)

        with pytest.raises(NotFound):
            current_domain.repository_for(Vehicle).find_by_id(vehicle_id)

    def test_vehicle_with_active_route_cannot_be_removed(self, register_vehicle, register_package):
        vehicle_id = register_vehicle()
        dispatch.assign(vehicle_id, [register_package()])

        with pytest.raises(InvalidArgument) as exc:
            dispatch.remove_vehicle(vehicle_id)

        assert "active route" in str(exc.value)
        assert str(current_domain.repository_for(Vehicle).find_by_id(vehicle_id).id) == vehicle_id

    def test_removal_cascades_completed_routes(self, register_vehicle, register_package):
        vehicle_id = register_vehicle()
        package_id = register_package()
        route = dispatch.assign(vehicle_id, [package_id])
        dispatch.complete_route(str(route.id))

        dispatch.remove_vehicle(vehicle_id)

        assert current_domain.repository_for(DeliveryRoute).find_by_vehicle(vehicle_id) == []
        pkg = current_domain.repository_for(Package).find_by_id(package_id)
        assert pkg.route_id is None

    def test_unknown_vehicle(self):
        with pytest.raises(NotFound):
            dispatch.remove_vehicle("missing")


def _in_threads(domain, count, action):
    """Start ``count`` threads together, each running ``action(index)`` in a domain context."""
    outcomes = []
    start = threading.Barrier(count)

    def run(index):
        with domain.domain_context():
            start.wait()
            try:
                action(index)
                outcomes.append("ok")
            except InvalidArgument:
                outcomes.append("rejected")

    threads = [threading.Thread(target=run, args=(index,)) for index in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return outcomes


class TestConcurrentFleetWrites:
    def test_a_plate_is_registered_once(self, _logiroute_domain):
        outcomes = _in_threads(_logiroute_domain, 6, lambda index: dispatch.register_vehicle("DUP-0001", 1000.0))

        assert sorted(outcomes) == ["ok"] + ["rejected"] * 5
        vehicles = current_domain.repository_for(Vehicle).find_all()
        assert [v.license_plate for v in vehicles] == ["DUP-0001"]

    def test_renames_to_one_plate_let_only_one_vehicle_have_it(self, _logiroute_domain, register_vehicle):
        vehicle_ids = [register_vehicle(license_plate=f"OLD-000{n}") for n in range(4)]

        outcomes = _in_threads(
            _logiroute_domain,
            4,
            lambda index: dispatch.update_vehicle(vehicle_ids[index], "NEW-0001", 1000.0),
        )

        assert sorted(outcomes) == ["ok", "rejected", "rejected", "rejected"]
        plates = [v.license_plate for v in current_domain.repository_for(Vehicle).find_all()]
        assert plates.count("NEW-0001") == 1

    def test_removal_and_status_update_leave_package_detached(
        self, _logiroute_domain, register_vehicle, register_package
    ):
        vehicle_id = register_vehicle()
        package_id = register_package()
        route = dispatch.assign(vehicle_id, [package_id])
        dispatch.complete_route(str(route.id))
        status = current_domain.repository_for(Package).find_by_id(package_id).status

        actions = [
            lambda: dispatch.remove_vehicle(vehicle_id),
            lambda: dispatch.update_status(package_id, status),
        ]
        _in_threads(_logiroute_domain, 2, lambda index: actions[index]())

        with pytest.raises(NotFound):
            current_domain.repository_for(Vehicle).find_by_id(vehicle_id)
        pkg = current_domain.repository_for(Package).find_by_id(package_id)
        assert pkg.route_id is None
        assert pkg.status == status
