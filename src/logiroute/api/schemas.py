"""Pydantic API schemas for the LogiRoute domain.

These are the external API contracts — separate from domain commands.
The API layer translates between these schemas and domain commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------
class VehicleRequest(BaseModel):
    license_plate: str = Field(min_length=1, max_length=20)
    capacity_kg: float = Field(ge=0)


class PackageRequest(BaseModel):
    delivery_address: str = Field(min_length=1, max_length=500)
    weight_kg: float = Field(gt=0)
    delivery_deadline: datetime


class UpdatePackageStatusRequest(BaseModel):
    status: str


class AssignPackagesRequest(BaseModel):
    vehicle_id: str
    package_ids: list[str] = Field(min_length=1)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------
class VehicleIdResponse(BaseModel):
    vehicle_id: str


class PackageIdResponse(BaseModel):
    package_id: str


class VehicleResponse(BaseModel):
    id: str
    license_plate: str
    capacity_kg: float
    current_load_kg: float
    remaining_capacity_kg: float
    status: str


class PackageResponse(BaseModel):
    id: str
    delivery_address: str
    weight_kg: float
    status: str
    delivery_deadline: datetime
    delivery_route_id: str | None = None


class RouteStopResponse(BaseModel):
    sequence: int
    package_id: str
    delivery_address: str | None = None
    weight_kg: float
    delivery_deadline: datetime | None = None
    status: str | None = None


class DeliveryRouteResponse(BaseModel):
    id: str
    vehicle_id: str
    vehicle_license_plate: str | None = None
    packages: list[RouteStopResponse]
    created_at: datetime
    completed_at: datetime | None = None
    total_weight_kg: float


class ErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    path: str
