"""Capacity guard — decides whether a vehicle can absorb more weight.

Pure functions over anything exposing ``capacity_kg`` and
``current_load_kg``. The guard does not validate that the additional weight is
non-negative; package weights are always positive by construction.

Weights are floats, so sums like 0.1 + 0.2 carry rounding noise. Comparisons
allow ``TOLERANCE_KG`` of slack, far below any weight a scale reports.
"""

TOLERANCE_KG = 1e-6


def remaining_capacity(vehicle) -> float:
    return vehicle.capacity_kg - vehicle.current_load_kg


def can_accept(vehicle, additional_weight: float) -> bool:
    """Exact-fit loads are accepted."""
    return additional_weight <= remaining_capacity(vehicle) + TOLERANCE_KG


def fits(load_kg: float, capacity_kg: float) -> bool:
    """Whether ``load_kg`` stays within ``capacity_kg``."""
    return load_kg <= capacity_kg + TOLERANCE_KG
