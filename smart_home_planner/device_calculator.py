"""Device quantity calculation from tier, floor plan and preferences."""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from .catalog import filter_by_icon, find_any_name, find_by_name
from .metrics import round_half_up
from .models import (
    CalculatedDevice,
    DeviceCalculationResult,
    DeviceSpecification,
    FloorPlanAnalysis,
    Tier,
    UserPreferences,
)

logger = logging.getLogger(__name__)

DEFAULT_ROOM_COUNT = 5
DEFAULT_AREA_SQFT = 2000.0
DEFAULT_PERIMETER_FEET = 200.0
DEFAULT_COVERAGE_PER_AP = 1500.0

BASE_COSTS = {"basic": 2500, "intermediate": 5000, "advanced": 10000}
COST_PER_DEVICE = 150
COST_PER_SQFT = 1.5

SWITCHES_PER_ROOM = {"basic": 2, "intermediate": 2.5, "advanced": 3}
RACK_SIZES = {"basic": "Small", "intermediate": "Medium", "advanced": "Large"}

CategoryResult = Tuple[List[CalculatedDevice], List[str]]


def _device(
    spec: DeviceSpecification,
    quantity: int,
    priority: str,
    reason: str,
) -> CalculatedDevice:
    return CalculatedDevice(
        device_spec_id=spec.id,
        category=spec.category_name,
        device_name=spec.device_name,
        quantity=quantity,
        priority=priority,
        placement_reason=reason,
    )


def count_exterior_doors(floor_plan: Optional[FloorPlanAnalysis]) -> int:
    """Count exterior doors.

    Doors typed ``exterior`` are counted directly. When no door carries
    that type the count is estimated as 30% of all doors, at least one.
    """
    doors = floor_plan.doors if floor_plan else []
    exterior = sum(1 for door in doors if door.type == "exterior")
    if exterior:
        return exterior
    return max(math.floor(len(doors) * 0.3), 1)


def floor_plan_metrics(floor_plan: Optional[FloorPlanAnalysis]) -> Tuple[int, float, float]:
    """Extract (room count, total sq ft, perimeter feet) with defaults.

    Args:
        floor_plan: Floor plan analysis, possibly None or partially filled

    Returns:
        Tuple of room count, total area in square feet and perimeter in feet
    """
    if floor_plan is None:
        return DEFAULT_ROOM_COUNT, DEFAULT_AREA_SQFT, DEFAULT_PERIMETER_FEET

    room_count = len(floor_plan.rooms) or DEFAULT_ROOM_COUNT

    sqft = floor_plan.total_area_sqft or sum(room.area_sqft for room in floor_plan.rooms)
    if not sqft:
        sqft = DEFAULT_AREA_SQFT

    perimeter = floor_plan.perimeter_feet
    if not perimeter and floor_plan.scale_pixels_per_foot:
        exterior_px = sum(
            math.hypot(w.end.x - w.start.x, w.end.y - w.start.y)
            for w in floor_plan.walls
            if w.type == "exterior"
        )
        perimeter = exterior_px / floor_plan.scale_pixels_per_foot
    if not perimeter:
        perimeter = DEFAULT_PERIMETER_FEET

    return room_count, float(sqft), float(perimeter)


def calculate_wifi_devices(
    sqft: float,
    detected_rooms: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    wifi_specs = filter_by_icon(catalog, "wifi")
    access_point = (
        find_by_name(wifi_specs, "access point")
        or find_by_name(wifi_specs, "wifi")
        or (wifi_specs[0] if wifi_specs else None)
    )
    if access_point is None:
        return [], []

    coverage_per_ap = access_point.coverage_area_sqft or DEFAULT_COVERAGE_PER_AP
    ap_count = max(1, math.ceil(sqft / coverage_per_ap))
    # Multi-room homes get at least one AP per four rooms, capped at two
    final_count = max(ap_count, min(2, math.ceil(detected_rooms / 4)))

    return (
        [_device(access_point, final_count, "high", f"Coverage optimization for {round_half_up(sqft)} sq ft")],
        [
            f"WiFi Coverage: {final_count} access points for {round_half_up(sqft)} sq ft "
            f"({round_half_up(coverage_per_ap)} sq ft per AP)"
        ],
    )


def calculate_security_devices(
    tier_id: str,
    room_count: int,
    exterior_doors: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    devices: List[CalculatedDevice] = []
    rationale: List[str] = []

    smoke_detector = find_by_name(catalog, "smoke")
    if smoke_detector:
        smoke_count = max(room_count, 3)
        devices.append(_device(smoke_detector, smoke_count, "high", "Fire safety code compliance"))
        rationale.append(f"Smoke Detectors: {smoke_count} units for fire safety compliance")

    door_sensor = find_by_name(catalog, "door", "sensor")
    if door_sensor:
        sensor_count = exterior_doors if tier_id == "basic" else exterior_doors + 2
        devices.append(_device(door_sensor, sensor_count, "high", "Entry point monitoring"))
        rationale.append(f"Entry Sensors: {sensor_count} sensors for doors and key windows")

    doorbell = find_by_name(catalog, "doorbell")
    if doorbell:
        devices.append(_device(doorbell, 1, "high", "Front door security and communication"))
        rationale.append("Smart Doorbell: 1 unit at main entrance")

    return devices, rationale


def calculate_switch_devices(
    tier_id: str,
    room_count: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    switch_specs = [spec for spec in catalog if "switch" in spec.device_name.lower()]
    smart_switch = find_by_name(switch_specs, "smart") or (switch_specs[0] if switch_specs else None)
    if smart_switch is None:
        return [], []

    switches_per_room = SWITCHES_PER_ROOM[tier_id]
    switch_count = math.ceil(room_count * switches_per_room)

    return (
        [_device(smart_switch, switch_count, "medium", "Complete lighting control automation")],
        [f"Smart Switches: {switch_count} switches ({switches_per_room} avg per room)"],
    )


def calculate_camera_devices(
    tier_id: str,
    exterior_doors: int,
    room_count: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    camera_specs = filter_by_icon(catalog, "camera")
    if not camera_specs:
        return [], []

    outdoor_camera = find_by_name(camera_specs, "outdoor") or camera_specs[0]
    indoor_camera = (
        find_by_name(camera_specs, "indoor")
        or (camera_specs[1] if len(camera_specs) > 1 else camera_specs[0])
    )

    devices: List[CalculatedDevice] = []
    rationale: List[str] = []

    if tier_id == "basic":
        outdoor_count = max(2, exterior_doors)
    elif tier_id == "intermediate":
        outdoor_count = max(3, exterior_doors + 1)
    else:
        outdoor_count = max(4, exterior_doors + 2)
    devices.append(_device(outdoor_camera, outdoor_count, "high", "Perimeter security monitoring"))
    rationale.append(f"Outdoor Cameras: {outdoor_count} cameras for perimeter security")

    if tier_id in ("intermediate", "advanced"):
        if tier_id == "advanced":
            indoor_count = min(4, math.ceil(room_count / 3))
        else:
            indoor_count = min(2, math.ceil(room_count / 4))
        devices.append(_device(indoor_camera, indoor_count, "medium", "Interior monitoring of common areas"))
        rationale.append(f"Indoor Cameras: {indoor_count} cameras for common area monitoring")

    return devices, rationale


def calculate_sensor_devices(
    tier_id: str,
    room_count: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    motion_sensor = find_by_name(catalog, "motion")
    if motion_sensor is None or tier_id == "basic":
        return [], []

    factor = 0.8 if tier_id == "advanced" else 0.5
    motion_count = math.ceil(room_count * factor)

    return (
        [_device(motion_sensor, motion_count, "medium", "Automated lighting and security detection")],
        [f"Motion Sensors: {motion_count} sensors for automation and security"],
    )


def calculate_environmental_devices(
    tier_id: str,
    sqft: float,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    thermostat = find_by_name(catalog, "thermostat")
    if thermostat is None:
        return [], []

    zone_count = 1
    if tier_id == "intermediate" and sqft > 2000:
        zone_count = 2
    elif tier_id == "advanced":
        zone_count = min(3, math.ceil(sqft / 1500))

    return (
        [_device(thermostat, zone_count, "high", "Climate control optimization")],
        [f"Smart Thermostats: {zone_count} zones for climate control"],
    )


def calculate_entertainment_devices(
    preferences: UserPreferences,
    room_count: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    devices: List[CalculatedDevice] = []
    rationale: List[str] = []

    audio = preferences.audio_preferences
    speaker = find_by_name(catalog, "speaker")
    if speaker and audio.type != "stereo":
        if audio.type == "whole-home":
            speaker_count = min(room_count, 8)
        elif audio.type == "zone-based":
            speaker_count = len(audio.primary_rooms) * 2
        else:  # surround
            speaker_count = 5

        if speaker_count > 0:
            devices.append(_device(speaker, speaker_count, "medium", f"{audio.type} audio system"))
            rationale.append(f"Audio Speakers: {speaker_count} speakers for {audio.type} system")

    tv_count = len(preferences.tv_placements)
    if tv_count > 0:
        tv_hub = find_any_name(catalog, "entertainment", "tv")
        if tv_hub:
            devices.append(_device(tv_hub, tv_count, "high", "TV mounting and connectivity"))
            rationale.append(f"TV Installation: {tv_count} TV locations configured")

    return devices, rationale


def calculate_comfort_devices(
    tier_id: str,
    room_count: int,
    window_count: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    if tier_id == "basic":
        return [], []

    window_treatment = find_any_name(catalog, "blind", "shade")
    if window_treatment is None:
        return [], []

    if tier_id == "advanced":
        treatment_count = min(window_count, room_count * 2)
    else:
        treatment_count = min(window_count / 2, room_count)
    quantity = math.ceil(treatment_count)

    return (
        [_device(window_treatment, quantity, "low", "Automated privacy and light control")],
        [f"Window Treatments: {quantity} automated blinds/shades"],
    )


def calculate_central_equipment(
    tier_id: str,
    device_entries: int,
    catalog: Sequence[DeviceSpecification],
) -> CategoryResult:
    equipment_rack = find_by_name(catalog, "rack") or find_by_name(catalog, "hub")
    if equipment_rack is None:
        return [], []

    rack_size = RACK_SIZES[tier_id]
    return (
        [_device(equipment_rack, 1, "high", "Central equipment and network hub")],
        [f"Equipment Rack: 1 {rack_size.lower()} rack for {device_entries} devices"],
    )


def estimate_project_cost(tier_id: str, device_count: int, sqft: float) -> int:
    """Estimate project cost with a linear model.

    Args:
        tier_id: Tier identifier
        device_count: Total number of devices
        sqft: Total floor area

    Returns:
        Rounded cost estimate in dollars
    """
    base_cost = BASE_COSTS.get(tier_id, 5000)
    return round_half_up(base_cost + device_count * COST_PER_DEVICE + sqft * COST_PER_SQFT)


def calculate_devices_for_tier(
    tier: Tier,
    floor_plan: Optional[FloorPlanAnalysis],
    preferences: Optional[UserPreferences],
    catalog: Sequence[DeviceSpecification],
) -> DeviceCalculationResult:
    """Calculate which devices, and how many, a project needs.

    Categories run in a fixed order and only when the tier includes them.
    A category whose prerequisite device is missing from the catalog
    contributes nothing. Inputs are not mutated.

    Args:
        tier: Selected automation tier
        floor_plan: Floor plan analysis (None falls back to defaults)
        preferences: User entertainment preferences (None means defaults)
        catalog: Device catalog

    Returns:
        DeviceCalculationResult with devices, totals, cost and rationale

    Raises:
        ValueError: If tier is None or catalog is not a list
    """
    if tier is None:
        raise ValueError("tier is required")
    if not isinstance(catalog, (list, tuple)):
        raise ValueError("catalog must be a list of device specifications")

    preferences = preferences or UserPreferences()
    room_count, sqft, _ = floor_plan_metrics(floor_plan)
    detected_rooms = len(floor_plan.rooms) if floor_plan else 0
    doors = len(floor_plan.doors) if floor_plan else 0
    windows = len(floor_plan.windows) if floor_plan else 0
    exterior_doors = count_exterior_doors(floor_plan)

    devices: List[CalculatedDevice] = []
    rationale = [
        f"Floor Plan Analysis: {room_count} rooms, {round_half_up(sqft)} sq ft, "
        f"{doors + windows} entry points",
        f"Selected Tier: {tier.name} ({tier.description})",
    ]

    categories = tier.device_categories
    steps = [
        (categories.wifi.included, "wifi", lambda: calculate_wifi_devices(sqft, detected_rooms, catalog)),
        (categories.security.included, "security",
         lambda: calculate_security_devices(tier.id, room_count, exterior_doors, catalog)),
        (categories.switches.included, "switches", lambda: calculate_switch_devices(tier.id, room_count, catalog)),
        (categories.cameras.included, "cameras",
         lambda: calculate_camera_devices(tier.id, exterior_doors, room_count, catalog)),
        (categories.sensors.included, "sensors", lambda: calculate_sensor_devices(tier.id, room_count, catalog)),
        (categories.environmental.included, "environmental",
         lambda: calculate_environmental_devices(tier.id, sqft, catalog)),
        (categories.entertainment.included, "entertainment",
         lambda: calculate_entertainment_devices(preferences, room_count, catalog)),
        (categories.comfort.included, "comfort",
         lambda: calculate_comfort_devices(tier.id, room_count, windows, catalog)),
    ]

    for included, name, calculate in steps:
        if not included:
            continue
        category_devices, category_rationale = calculate()
        if not category_devices:
            logger.info("No devices added for category %s", name)
        devices.extend(category_devices)
        rationale.extend(category_rationale)

    equipment, equipment_rationale = calculate_central_equipment(tier.id, len(devices), catalog)
    devices.extend(equipment)
    rationale.extend(equipment_rationale)

    total_devices = sum(device.quantity for device in devices)

    return DeviceCalculationResult(
        devices=devices,
        total_devices=total_devices,
        estimated_cost=estimate_project_cost(tier.id, total_devices, sqft),
        rationale=rationale,
    )
