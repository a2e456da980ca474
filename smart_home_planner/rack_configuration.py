"""Equipment rack layout for the central network cabinet."""

import math
from typing import List, Sequence

from .models import (
    CalculatedDevice,
    CoolingRequirements,
    RackConfiguration,
    RackDevice,
    RackPowerRequirements,
    RackSlot,
)

RACK_HEIGHT = 42  # rack units
WATTS_PER_CFM = 3.41
UPS_THRESHOLD_WATTS = 500
DEDICATED_CIRCUIT_WATTS = 1800

POE_SWITCH_THRESHOLD = 8
EXTRA_SWITCH_THRESHOLD = 16

NETWORKED_NAME_MARKERS = ("WiFi", "Security", "Smart")
CAMERA_NAME_MARKERS = ("Camera", "Security")

RACK_DEVICE_SPECS = {
    "ups": RackDevice(
        id="ups_battery", name="1500VA UPS", type="ups", rack_units=2,
        power_consumption=-900, connections=[{"type": "power", "count": 8}],
        cooling="active", depth=16,
    ),
    "router": RackDevice(
        id="main_router", name="Main Router", type="router", rack_units=1,
        power_consumption=50,
        connections=[{"type": "ethernet", "count": 8, "speed": "1Gbps"}, {"type": "power", "count": 1}],
        cooling="active", depth=12,
    ),
    "poe_switch": RackDevice(
        id="poe_switch", name="16-Port PoE+ Switch", type="switch", rack_units=1,
        power_consumption=150,
        connections=[{"type": "ethernet", "count": 16, "speed": "1Gbps"}, {"type": "power", "count": 1}],
        cooling="active", depth=14,
    ),
    "network_switch": RackDevice(
        id="network_switch", name="24-Port Gigabit Switch", type="switch", rack_units=1,
        power_consumption=75,
        connections=[{"type": "ethernet", "count": 24, "speed": "1Gbps"}, {"type": "power", "count": 1}],
        cooling="active", depth=14,
    ),
    "patch_panel": RackDevice(
        id="patch_panel", name="24-Port Cat6 Patch Panel", type="patch_panel", rack_units=1,
        power_consumption=0, connections=[{"type": "ethernet", "count": 24}],
        cooling="passive", depth=4,
    ),
    "nvr": RackDevice(
        id="nvr_server", name="Network Video Recorder", type="server", rack_units=2,
        power_consumption=200,
        connections=[{"type": "ethernet", "count": 2, "speed": "1Gbps"}, {"type": "power", "count": 1}],
        cooling="active", depth=20,
    ),
}


def count_networked_devices(devices: Sequence[CalculatedDevice]) -> int:
    """Total quantity of devices that need a network port."""
    return sum(
        device.quantity
        for device in devices
        if any(marker in device.device_name for marker in NETWORKED_NAME_MARKERS)
    )


def has_cameras(devices: Sequence[CalculatedDevice]) -> bool:
    return any(
        device.quantity > 0 and any(marker in device.device_name for marker in CAMERA_NAME_MARKERS)
        for device in devices
    )


def select_rack_devices(devices: Sequence[CalculatedDevice], tier_id: str) -> List[RackDevice]:
    """Rack equipment bottom to top."""
    networked = count_networked_devices(devices)
    selected = [RACK_DEVICE_SPECS["ups"], RACK_DEVICE_SPECS["router"]]

    if networked > POE_SWITCH_THRESHOLD:
        selected.append(RACK_DEVICE_SPECS["poe_switch"])
        if networked > EXTRA_SWITCH_THRESHOLD:
            selected.append(RACK_DEVICE_SPECS["network_switch"])

    selected.append(RACK_DEVICE_SPECS["patch_panel"])

    if has_cameras(devices) or tier_id == "advanced":
        selected.append(RACK_DEVICE_SPECS["nvr"])
    return selected


def calculate_cooling_requirements(total_watts: float) -> CoolingRequirements:
    cfm = math.ceil(total_watts / WATTS_PER_CFM)
    return CoolingRequirements(
        cfm_required=cfm,
        temperature_range="65-75°F (18-24°C)",
        ventilation=[
            "Ensure adequate airflow front-to-back",
            "Maintain 6-inch clearance at front and rear",
            "Consider rack-mounted cooling fans" if cfm > 100 else "Natural convection sufficient",
        ],
    )


def generate_rack_configuration(devices: Sequence[CalculatedDevice], tier_id: str) -> RackConfiguration:
    """Lay out the equipment rack for a device list.

    The UPS sits at the bottom, followed by the router, switches sized by
    the number of networked devices, a patch panel and, when cameras are
    present or the tier is advanced, a video recorder.

    Args:
        devices: Calculated devices with quantities
        tier_id: Automation tier id

    Returns:
        RackConfiguration with slot positions, power and cooling
    """
    slots = []
    position = 1
    for rack_device in select_rack_devices(devices, tier_id):
        slots.append(RackSlot(device=rack_device, position=position))
        position += rack_device.rack_units

    # The UPS supplies power, so negative draws are not counted
    total_watts = sum(max(0.0, slot.device.power_consumption) for slot in slots)

    return RackConfiguration(
        rack_height=RACK_HEIGHT,
        devices=slots,
        power_requirements=RackPowerRequirements(
            total_watts=total_watts,
            ups_recommended=total_watts > UPS_THRESHOLD_WATTS,
            circuit_requirements=(
                "20A dedicated circuit" if total_watts > DEDICATED_CIRCUIT_WATTS else "15A circuit sufficient"
            ),
        ),
        cooling_requirements=calculate_cooling_requirements(total_watts),
    )
