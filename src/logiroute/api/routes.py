"""FastAPI routes for the LogiRoute domain."""

from fastapi import APIRouter, Response
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from logiroute import dispatch
from logiroute.api.schemas import (
    AssignPackagesRequest,
    DeliveryRouteResponse,
    PackageIdResponse,
    PackageRequest,
    PackageResponse,
    RouteStopResponse,
    UpdatePackageStatusRequest,
    VehicleIdResponse,
    VehicleRequest,
    VehicleResponse,
)
from logiroute.package.package import Package
from logiroute.package.registration import RegisterPackage
from logiroute.route.route import DeliveryRoute
from logiroute.vehicle.vehicle import Vehicle


def _vehicle_response(vehicle: Vehicle) -> VehicleResponse:
    return VehicleResponse(
        id=str(vehicle.id),
        license_plate=vehicle.license_plate,
        capacity_kg=vehicle.capacity_kg,
        current_load_kg=vehicle.current_load_kg,
        remaining_capacity_kg=vehicle.remaining_capacity_kg,
        status=vehicle.status,
    )


def _package_response(pkg: Package) -> PackageResponse:
    return PackageResponse(
        id=str(pkg.id),
        delivery_address=pkg.delivery_address,
        weight_kg=pkg.weight_kg,
        status=pkg.status,
        delivery_deadline=pkg.delivery_deadline,
        delivery_route_id=str(pkg.route_id) if pkg.route_id else None,
    )


def _route_response(route: DeliveryRoute) -> DeliveryRouteResponse:
    package_repo = current_domain.repository_for(Package)
    stops = []
    for stop in route.ordered_stops:
        try:
            status = package_repo.get(stop.package_id).status
        except ObjectNotFoundError:
            status = None
        stops.append(
            RouteStopResponse(
                sequence=stop.sequence,
                package_id=str(stop.package_id),
                delivery_address=stop.delivery_address,
                weight_kg=stop.weight_kg,
                delivery_deadline=stop.delivery_deadline,
                status=status,
            )
        )

    try:
        license_plate = current_domain.repository_for(Vehicle).get(route.vehicle_id).license_plate
    except ObjectNotFoundError:
        license_plate = None

    return DeliveryRouteResponse(
        id=str(route.id),
        vehicle_id=str(route.vehicle_id),
        vehicle_license_plate=license_plate,
        packages=stops,
        created_at=route.created_at,
        completed_at=route.completed_at,
        total_weight_kg=route.total_weight_kg,
    )


# ---------------------------------------------------------------------------
# Vehicle Router
# ---------------------------------------------------------------------------
vehicle_router = APIRouter(prefix="/api/vehicles", tags=["vehicles"])


@vehicle_router.post("", status_code=201, response_model=VehicleIdResponse)
def register_vehicle(body: VehicleRequest) -> VehicleIdResponse:
    """Register a vehicle with an empty load."""
    vehicle_id = dispatch.register_vehicle(body.license_plate, body.capacity_kg)
    return VehicleIdResponse(vehicle_id=vehicle_id)


@vehicle_router.get("", response_model=list[VehicleResponse])
async def list_vehicles() -> list[VehicleResponse]:
    return [_vehicle_response(v) for v in current_domain.repository_for(Vehicle).find_all()]


@vehicle_router.get("/available", response_model=list[VehicleResponse])
async def list_available_vehicles() -> list[VehicleResponse]:
    return [_vehicle_response(v) for v in current_domain.repository_for(Vehicle).find_available()]


@vehicle_router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(vehicle_id: str) -> VehicleResponse:
    return _vehicle_response(current_domain.repository_for(Vehicle).find_by_id(vehicle_id))


@vehicle_router.put("/{vehicle_id}", response_model=VehicleResponse)
def update_vehicle(vehicle_id: str, body: VehicleRequest) -> VehicleResponse:
    vehicle = dispatch.update_vehicle(vehicle_id, body.license_plate, body.capacity_kg)
    return _vehicle_response(vehicle)


@vehicle_router.delete("/{vehicle_id}", status_code=204)
def remove_vehicle(vehicle_id: str) -> Response:
    dispatch.remove_vehicle(vehicle_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Package Router
# ---------------------------------------------------------------------------
package_router = APIRouter(prefix="/api/packages", tags=["packages"])


@package_router.post("", status_code=201, response_model=PackageIdResponse)
async def register_package(body: PackageRequest) -> PackageIdResponse:
    """Register a package in CREATED status."""
    command = RegisterPackage(
        delivery_address=body.delivery_address,
        weight_kg=body.weight_kg,
        delivery_deadline=body.delivery_deadline,
    )
    result = current_domain.process(command, asynchronous=False)
    return PackageIdResponse(package_id=result)


@package_router.get("", response_model=list[PackageResponse])
async def list_packages() -> list[PackageResponse]:
    return [_package_response(p) for p in current_domain.repository_for(Package).find_all()]


@package_router.get("/unassigned", response_model=list[PackageResponse])
async def list_unassigned_packages() -> list[PackageResponse]:
    return [_package_response(p) for p in current_domain.repository_for(Package).find_unassigned()]


@package_router.get("/status/{status}", response_model=list[PackageResponse])
async def list_packages_by_status(status: str) -> list[PackageResponse]:
    repo = current_domain.repository_for(Package)
    return [_package_response(p) for p in repo.find_by_status(status.upper())]


@package_router.get("/{package_id}", response_model=PackageResponse)
async def get_package(package_id: str) -> PackageResponse:
    return _package_response(current_domain.repository_for(Package).find_by_id(package_id))


@package_router.put("/{package_id}", response_model=PackageResponse)
def update_package(package_id: str, body: PackageRequest) -> PackageResponse:
    """Edit a package that is not on a route yet."""
    pkg = dispatch.update_package(package_id, body.delivery_address, body.weight_kg, body.delivery_deadline)
    return _package_response(pkg)


@package_router.patch("/{package_id}/status", response_model=PackageResponse)
def update_package_status(package_id: str, body: UpdatePackageStatusRequest) -> PackageResponse:
    """Move a package through CREATED → LOADED → DELIVERED."""
    pkg = dispatch.update_status(package_id, body.status.upper())
    return _package_response(pkg)


@package_router.delete("/{package_id}", status_code=204)
def remove_package(package_id: str) -> Response:
    dispatch.remove_package(package_id)
    return Response(status_code=204)


# ---------------------------------------------------------------------------
# Delivery Router
# ---------------------------------------------------------------------------
delivery_router = APIRouter(prefix="/api/delivery", tags=["delivery"])


@delivery_router.post("/assign", status_code=201, response_model=DeliveryRouteResponse)
def assign_packages(body: AssignPackagesRequest) -> DeliveryRouteResponse:
    """Assign packages to a vehicle; stops are ordered by earliest deadline."""
    route = dispatch.assign(body.vehicle_id, body.package_ids)
    return _route_response(route)


@delivery_router.get("/routes", response_model=list[DeliveryRouteResponse])
async def list_active_routes() -> list[DeliveryRouteResponse]:
    return [_route_response(r) for r in dispatch.list_active()]


@delivery_router.get("/routes/vehicle/{vehicle_id}", response_model=list[DeliveryRouteResponse])
async def list_routes_by_vehicle(vehicle_id: str) -> list[DeliveryRouteResponse]:
    return [_route_response(r) for r in dispatch.list_by_vehicle(vehicle_id)]


@delivery_router.get("/routes/{route_id}", response_model=DeliveryRouteResponse)
async def get_route(route_id: str) -> DeliveryRouteResponse:
    return _route_response(dispatch.get_route(route_id))


@delivery_router.patch("/routes/{route_id}/complete", response_model=DeliveryRouteResponse)
def complete_route(route_id: str) -> DeliveryRouteResponse:
    """Complete a route and release its vehicle."""
    return _route_response(dispatch.complete_route(route_id))
