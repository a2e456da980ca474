"""Device categories, the default device catalog and lookup helpers."""

from enum import IntEnum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .models import CategoryInclusion, DeviceSpecification, Tier, TierCategories


class DeviceCategory(IntEnum):
    """Category ids used for candidate generation."""

    WIFI = 1
    SECURITY_CAMERAS = 2
    ENTERTAINMENT = 3
    SECURITY_DEVICES = 4
    DOORBELLS = 5
    WINDOW_TREATMENTS = 6
    CENTRAL_EQUIPMENT = 7
    ENVIRONMENTAL = 8


CATEGORY_INFO = {
    DeviceCategory.WIFI: ("WiFi Infrastructure", "wifi"),
    DeviceCategory.SECURITY_CAMERAS: ("Security Cameras", "camera"),
    DeviceCategory.ENTERTAINMENT: ("Entertainment Systems", "speaker"),
    DeviceCategory.SECURITY_DEVICES: ("Security Devices", "shield"),
    DeviceCategory.DOORBELLS: ("Smart Doorbells", "doorbell"),
    DeviceCategory.WINDOW_TREATMENTS: ("Window Treatments", "window"),
    DeviceCategory.CENTRAL_EQUIPMENT: ("Central Equipment", "server"),
    DeviceCategory.ENVIRONMENTAL: ("Environmental Controls", "thermometer"),
}


_DEFAULT_SPECS: List[Dict[str, Any]] = [
    {
        "id": 1, "category_id": 1, "device_name": "Indoor WiFi Access Point",
        "description": "Standard indoor WiFi 6 access point with internal antennas",
        "coverage_area_sqft": 1963, "coverage_radius_feet": 25,
        "mounting_height_min_feet": 9, "mounting_height_max_feet": 15, "mounting_height_optimal_feet": 12,
        "power_consumption_watts": 25, "voltage_requirements": "802.3at PoE+", "interference_frequency_ghz": 2.4,
        "installation_constraints": "Ceiling mounting preferred. Avoid metal, glass, concrete surfaces.",
    },
    {
        "id": 2, "category_id": 1, "device_name": "Mesh WiFi Node",
        "description": "Mesh network node for extended coverage",
        "coverage_area_sqft": 1200, "coverage_radius_feet": 40,
        "mounting_height_min_feet": 6, "mounting_height_max_feet": 10, "mounting_height_optimal_feet": 8,
        "power_consumption_watts": 15, "voltage_requirements": "120V AC", "interference_frequency_ghz": 5.0,
    },
    {
        "id": 3, "category_id": 2, "device_name": "Outdoor Security Camera",
        "description": "4K outdoor camera with night vision",
        "coverage_area_sqft": 1200, "coverage_radius_feet": 40,
        "mounting_height_min_feet": 8, "mounting_height_max_feet": 15, "mounting_height_optimal_feet": 10,
        "power_consumption_watts": 15, "voltage_requirements": "12V DC or PoE",
        "installation_constraints": "Corner mounting recommended. Position to minimize blind spots.",
    },
    {
        "id": 4, "category_id": 2, "device_name": "Indoor Security Camera",
        "description": "1080p indoor camera with pan/tilt",
        "coverage_area_sqft": 600, "coverage_radius_feet": 25,
        "mounting_height_min_feet": 6, "mounting_height_max_feet": 12, "mounting_height_optimal_feet": 8,
        "power_consumption_watts": 8, "voltage_requirements": "12V DC or PoE", "interference_frequency_ghz": 2.4,
        "installation_constraints": "Wall or ceiling mount. Angle slightly downward. Avoid direct sunlight.",
    },
    {
        "id": 5, "category_id": 3, "device_name": "50-inch Smart TV",
        "description": "Smart TV with optimal viewing distance calculations",
        "mounting_height_min_feet": 4, "mounting_height_max_feet": 8, "mounting_height_optimal_feet": 5.5,
        "power_consumption_watts": 150, "voltage_requirements": "120V AC",
        "installation_constraints": "Eye-level mounting. Max 15 degree viewing angle.",
    },
    {
        "id": 6, "category_id": 3, "device_name": "In-Wall Speaker",
        "description": "Architectural speaker for multi-room audio",
        "coverage_radius_feet": 15,
        "mounting_height_min_feet": 2, "mounting_height_max_feet": 10, "mounting_height_optimal_feet": 6,
        "power_consumption_watts": 50, "voltage_requirements": "Speaker wire",
        "installation_constraints": "Tweeters at ear level when seated. Equal spacing triangle formation.",
    },
    {
        "id": 7, "category_id": 3, "device_name": "Audio Hub",
        "description": "Multi-zone audio controller and amplifier",
        "power_consumption_watts": 100, "voltage_requirements": "120V AC",
    },
    {
        "id": 8, "category_id": 4, "device_name": "PIR Motion Detector",
        "description": "Passive infrared motion detector with pet immunity",
        "coverage_area_sqft": 1520, "coverage_radius_feet": 20,
        "mounting_height_min_feet": 6, "mounting_height_max_feet": 8, "mounting_height_optimal_feet": 7,
        "power_consumption_watts": 5, "voltage_requirements": "3V DC Battery", "interference_frequency_ghz": 0.908,
        "installation_constraints": "Avoid direct sunlight, air vents, heat sources. Corner placement optimal.",
    },
    {
        "id": 9, "category_id": 4, "device_name": "Door/Window Sensor",
        "description": "Magnetic contact sensor for entry point monitoring",
        "power_consumption_watts": 2, "voltage_requirements": "3V DC Battery", "interference_frequency_ghz": 0.908,
        "installation_constraints": "Peel and stick mounting. Align magnetic components within 0.5 inches.",
    },
    {
        "id": 10, "category_id": 4, "device_name": "Smart Lock",
        "description": "Electronic deadbolt with smartphone control",
        "power_consumption_watts": 15, "voltage_requirements": "4 AA Batteries",
        "installation_constraints": "Single-cylinder deadbolt compatibility required.",
    },
    {
        "id": 11, "category_id": 5, "device_name": "Smart Video Doorbell",
        "description": "HD video doorbell with motion detection and two-way audio",
        "coverage_radius_feet": 23,
        "mounting_height_min_feet": 3.3, "mounting_height_max_feet": 4, "mounting_height_optimal_feet": 4,
        "power_consumption_watts": 12, "voltage_requirements": "16-24 VAC or Battery", "interference_frequency_ghz": 2.4,
        "installation_constraints": "Existing doorbell wiring preferred. Hardwired installation requires 40VA transformer.",
    },
    {
        "id": 12, "category_id": 6, "device_name": "AC Motorized Blinds",
        "description": "AC-powered motorized window blinds with smart home integration",
        "power_consumption_watts": 22, "voltage_requirements": "120V AC",
        "installation_constraints": "Motor housing typically left-side mounted.",
    },
    {
        "id": 13, "category_id": 7, "device_name": "Equipment Rack Cabinet",
        "description": "Central equipment rack for home automation infrastructure",
        "power_consumption_watts": 500, "voltage_requirements": "120V AC",
        "installation_constraints": "Adequate ventilation required. Cable management essential.",
    },
    {
        "id": 14, "category_id": 8, "device_name": "Smart Thermostat",
        "description": "WiFi-enabled programmable thermostat with smartphone control",
        "coverage_area_sqft": 2500,
        "mounting_height_min_feet": 4, "mounting_height_max_feet": 6, "mounting_height_optimal_feet": 5,
        "power_consumption_watts": 8, "voltage_requirements": "24V AC",
        "installation_constraints": "C-wire (common wire) required for continuous power.",
    },
    {
        "id": 15, "category_id": 8, "device_name": "Smoke Detector",
        "description": "Photoelectric smoke detector with smart home integration",
        "coverage_area_sqft": 400, "coverage_radius_feet": 15,
        "mounting_height_min_feet": 8, "mounting_height_max_feet": 12, "mounting_height_optimal_feet": 10,
        "power_consumption_watts": 3, "voltage_requirements": "9V Battery",
        "installation_constraints": "Ceiling mounting required. 4 inches from walls.",
    },
    {
        "id": 16, "category_id": 8, "device_name": "Smart Light Switch",
        "description": "WiFi-enabled smart switch with dimming capability",
        "power_consumption_watts": 5, "voltage_requirements": "120V AC",
        "installation_constraints": "Neutral wire required. Single-pole or 3-way configurations.",
    },
]


def make_specification(data: Dict[str, Any]) -> DeviceSpecification:
    """Validate a raw catalog entry, filling category name/icon from its id.

    Args:
        data: Raw specification mapping

    Returns:
        Validated DeviceSpecification
    """
    entry = dict(data)
    try:
        name, icon = CATEGORY_INFO[DeviceCategory(entry.get("category_id"))]
    except ValueError:
        name, icon = "", ""
    entry.setdefault("category_name", name)
    entry.setdefault("category_icon", icon)
    return DeviceSpecification.model_validate(entry)


def load_catalog(entries: Iterable[Dict[str, Any]]) -> List[DeviceSpecification]:
    """Validate a list of raw catalog entries.

    Raises:
        pydantic.ValidationError: If an entry is malformed
    """
    return [make_specification(entry) for entry in entries]


def default_catalog() -> List[DeviceSpecification]:
    """Return the built-in device catalog."""
    return load_catalog(_DEFAULT_SPECS)


def find_by_name(
    catalog: Sequence[DeviceSpecification],
    *fragments: str,
) -> Optional[DeviceSpecification]:
    """Find the first spec whose name contains every fragment (case-insensitive)."""
    for spec in catalog:
        name = spec.device_name.lower()
        if all(fragment in name for fragment in fragments):
            return spec
    return None


def find_any_name(
    catalog: Sequence[DeviceSpecification],
    *fragments: str,
) -> Optional[DeviceSpecification]:
    """Find the first spec whose name contains any of the fragments."""
    for spec in catalog:
        name = spec.device_name.lower()
        if any(fragment in name for fragment in fragments):
            return spec
    return None


def filter_by_icon(
    catalog: Sequence[DeviceSpecification],
    icon_name: str,
) -> List[DeviceSpecification]:
    return [spec for spec in catalog if spec.category_icon == icon_name]


def index_by_id(catalog: Sequence[DeviceSpecification]) -> Dict[int, DeviceSpecification]:
    return {spec.id: spec for spec in catalog}


def _tier_categories(**included: str) -> TierCategories:
    return TierCategories(**{
        name: CategoryInclusion(included=name in included, description=included.get(name, "Not included"))
        for name in TierCategories.model_fields
    })


DEFAULT_TIERS: Dict[str, Tier] = {
    "basic": Tier(
        id="basic",
        name="Basic Automation",
        description="Essential smart home foundation with security and connectivity",
        device_categories=_tier_categories(
            wifi="Optimal access point placement",
            security="Basic camera coverage",
            switches="All lighting switches",
            cameras="2-4 exterior cameras",
            sensors="Entry point sensors",
            environmental="Basic thermostat",
        ),
    ),
    "intermediate": Tier(
        id="intermediate",
        name="Enhanced Automation",
        description="Comprehensive security and comfort with intelligent environmental control",
        device_categories=_tier_categories(
            wifi="Enterprise-grade coverage",
            security="Comprehensive camera system",
            switches="Smart switches + dimmers",
            cameras="4-8 interior/exterior cameras",
            sensors="Motion + entry sensors",
            comfort="Multi-zone climate control",
            entertainment="Audio pre-wiring",
            environmental="Smart thermostats + sensors",
        ),
    ),
    "advanced": Tier(
        id="advanced",
        name="Premium Automation",
        description="Complete smart home ecosystem with AI-driven optimization and luxury features",
        device_categories=_tier_categories(
            wifi="Mesh network with redundancy",
            security="Professional security system",
            switches="Intelligent switch ecosystem",
            cameras="8+ high-resolution cameras",
            sensors="Comprehensive sensor network",
            comfort="Luxury climate control",
            entertainment="Whole-home A/V system",
            environmental="Complete environmental automation",
        ),
    ),
}


def get_tier(tier_id: str) -> Tier:
    """Look up a built-in tier.

    Raises:
        ValueError: If the tier id is unknown
    """
    try:
        return DEFAULT_TIERS[tier_id]
    except KeyError:
        raise ValueError(f"Unknown tier: {tier_id} (expected one of {', '.join(DEFAULT_TIERS)})")
