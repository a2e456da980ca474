"""Cable routing and power budgeting from placed devices to the equipment rack."""

import math
from typing import Mapping, Optional, Sequence

from scipy.spatial import distance

from .catalog import DeviceCategory
from .metrics import round_half_up
from .models import (
    CableRoute,
    DevicePower,
    DeviceSpecification,
    Placement,
    PowerRequirements,
    WiringPlan,
)

LINE_VOLTAGE = 120
WATTS_PER_CIRCUIT = 1800  # 15A circuit with safety margin


def determine_cable_type(spec: Optional[DeviceSpecification]) -> str:
    if spec is None:
        return "DC Power Cable"
    if spec.category_id == DeviceCategory.WIFI:
        return "Cat6 Ethernet"
    if spec.category_id == DeviceCategory.SECURITY_CAMERAS:
        return "Cat6 Ethernet + Power"
    voltage = spec.voltage_requirements or ""
    if "PoE" in voltage:
        return "Cat6 Ethernet (PoE)"
    if "AC" in voltage:
        return "AC Power Cable"
    return "DC Power Cable"


def calculate_power_requirements(
    placements: Sequence[Placement],
    specs: Mapping[int, DeviceSpecification],
) -> PowerRequirements:
    """Sum power draw over all placements.

    Args:
        placements: Placed devices
        specs: Catalog indexed by id

    Returns:
        PowerRequirements at 120V; devices drawing nothing are left out
        of the breakdown
    """
    total_watts = 0.0
    breakdown = []

    for placement in placements:
        spec = specs.get(placement.device_spec_id)
        watts = spec.power_consumption_watts if spec else 0.0
        total_watts += watts
        if watts > 0:
            breakdown.append(DevicePower(
                device_name=placement.instance_name,
                watts=watts,
                voltage=spec.voltage_requirements or "Unknown",
            ))

    return PowerRequirements(
        total_watts=total_watts,
        estimated_amps=math.ceil(total_watts / LINE_VOLTAGE),
        device_breakdown=breakdown,
        recommended_circuits=math.ceil(total_watts / WATTS_PER_CIRCUIT),
    )


def find_central_rack(
    placements: Sequence[Placement],
    specs: Mapping[int, DeviceSpecification],
) -> Optional[Placement]:
    for placement in placements:
        spec = specs.get(placement.device_spec_id)
        if spec is not None and spec.category_id == DeviceCategory.CENTRAL_EQUIPMENT:
            return placement
    return None


def generate_wiring_plan(
    placements: Sequence[Placement],
    specs: Mapping[int, DeviceSpecification],
    scale: float,
) -> WiringPlan:
    """Route a straight cable from every device to the central rack.

    Without a placed central equipment device there are no routes, only
    the power budget.

    Args:
        placements: Placed devices
        specs: Catalog indexed by id
        scale: Pixels per foot

    Returns:
        WiringPlan with routes in feet
    """
    power = calculate_power_requirements(placements, specs)
    rack = find_central_rack(placements, specs)
    if rack is None:
        return WiringPlan(power_requirements=power)

    rack_xy = (rack.position.x, rack.position.y)
    routes = []
    for placement in placements:
        if placement is rack:
            continue
        spec = specs.get(placement.device_spec_id)
        d = distance.euclidean((placement.position.x, placement.position.y), rack_xy)
        routes.append(CableRoute(
            device_name=placement.instance_name,
            start=placement.position,
            end=rack.position,
            distance=round_half_up(float(d) / scale),
            cable_type=determine_cable_type(spec),
            power_required=spec.power_consumption_watts if spec else 0.0,
        ))

    return WiringPlan(
        central_rack_location=rack.position,
        cable_routes=routes,
        power_requirements=power,
        total_cable_length=sum(route.distance for route in routes),
    )
