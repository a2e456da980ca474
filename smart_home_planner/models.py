"""Data models for smart home device planning."""

from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


TierId = Literal["basic", "intermediate", "advanced"]
Priority = Literal["high", "medium", "low"]


class Point(BaseModel):
    """A position in floor plan pixel space."""

    x: float
    y: float


class BoundingBox(BaseModel):
    """Axis-aligned room bounds in pixel space."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return Point(x=self.min_x + self.width / 2, y=self.min_y + self.height / 2)


class Room(BaseModel):
    """A detected room."""

    id: str
    type: str = "room"
    name: str = ""
    area_sqft: float = 0.0
    bounds: BoundingBox


class Wall(BaseModel):
    """A wall segment."""

    id: str
    start: Point
    end: Point
    length: Optional[float] = None
    type: Literal["exterior", "interior"] = "interior"


class Door(BaseModel):
    """A door opening."""

    id: str
    position: Point
    width: float = 0.0
    wall_id: Optional[str] = None
    type: str = "interior"


class Window(BaseModel):
    """A window opening."""

    id: str
    position: Point
    width: float = 0.0
    wall_id: Optional[str] = None
    type: str = "standard"


class FloorPlanAnalysis(BaseModel):
    """Floor plan analysis produced by the image-analysis service."""

    rooms: List[Room] = Field(default_factory=list)
    walls: List[Wall] = Field(default_factory=list)
    doors: List[Door] = Field(default_factory=list)
    windows: List[Window] = Field(default_factory=list)
    scale_pixels_per_foot: Optional[float] = None
    total_area_sqft: Optional[float] = None
    perimeter_feet: Optional[float] = None
    image_width: Optional[int] = None
    image_height: Optional[int] = None


class DeviceSpecification(BaseModel):
    """Catalog entry for a device model. Lengths are in feet."""

    model_config = ConfigDict(frozen=True)

    id: int
    category_id: int
    category_name: str = ""
    category_icon: str = ""
    device_name: str
    description: str = ""
    coverage_radius_feet: Optional[float] = None
    coverage_area_sqft: Optional[float] = None
    interference_frequency_ghz: Optional[float] = None
    mounting_height_min_feet: Optional[float] = None
    mounting_height_max_feet: Optional[float] = None
    mounting_height_optimal_feet: Optional[float] = None
    power_consumption_watts: float = 0.0
    voltage_requirements: Optional[str] = None
    installation_constraints: Optional[str] = None


class CategoryInclusion(BaseModel):
    """Whether a tier includes a device category."""

    included: bool = False
    description: str = ""


class TierCategories(BaseModel):
    """Per-category inclusion flags for a tier."""

    wifi: CategoryInclusion = Field(default_factory=CategoryInclusion)
    security: CategoryInclusion = Field(default_factory=CategoryInclusion)
    switches: CategoryInclusion = Field(default_factory=CategoryInclusion)
    cameras: CategoryInclusion = Field(default_factory=CategoryInclusion)
    sensors: CategoryInclusion = Field(default_factory=CategoryInclusion)
    comfort: CategoryInclusion = Field(default_factory=CategoryInclusion)
    entertainment: CategoryInclusion = Field(default_factory=CategoryInclusion)
    environmental: CategoryInclusion = Field(default_factory=CategoryInclusion)


class Tier(BaseModel):
    """Automation tier selected by the user."""

    model_config = ConfigDict(frozen=True)

    id: TierId
    name: str
    description: str = ""
    device_categories: TierCategories = Field(default_factory=TierCategories)


class TVPlacement(BaseModel):
    room: str
    size: str = '55"'
    mount_type: Literal["wall", "stand", "ceiling"] = "wall"
    priority: Priority = "medium"


class AudioPreferences(BaseModel):
    type: Literal["stereo", "surround", "whole-home", "zone-based"] = "stereo"
    primary_rooms: List[str] = Field(default_factory=list)
    quality_level: Literal["standard", "premium", "audiophile"] = "standard"
    outdoor_audio: bool = False


class RoomPriority(BaseModel):
    room: str
    priority: Priority = "medium"
    special_requirements: Optional[str] = None


class UserPreferences(BaseModel):
    """Entertainment and room preferences entered by the user."""

    tv_placements: List[TVPlacement] = Field(default_factory=list)
    audio_preferences: AudioPreferences = Field(default_factory=AudioPreferences)
    room_priorities: List[RoomPriority] = Field(default_factory=list)
    additional_requests: str = ""


class CalculatedDevice(BaseModel):
    """One quantity decision made by the device calculator."""

    device_spec_id: int
    category: str
    device_name: str
    quantity: int = Field(ge=0)
    priority: Priority
    placement_reason: str


class DeviceCalculationResult(BaseModel):
    devices: List[CalculatedDevice] = Field(default_factory=list)
    total_devices: int = 0
    estimated_cost: float = 0.0
    rationale: List[str] = Field(default_factory=list)


class Candidate(BaseModel):
    """A proposed, not yet committed device position."""

    x: float
    y: float
    room_id: Optional[str] = None
    mounting_height: float
    placement_type: str
    priority: float


class ScoreBreakdown(BaseModel):
    """Individual scoring terms for one candidate."""

    priority: float
    coverage: float
    interference: float
    accessibility: float
    installation: float
    separation: float
    total: float

    @property
    def eligible(self) -> bool:
        """Candidates on wall cells or outside the grid can never win."""
        return self.accessibility > 0


class RoomCoverage(BaseModel):
    room_id: str
    coverage_percent: int


class CoverageAnalysis(BaseModel):
    effective_radius: int
    covered_rooms: List[RoomCoverage] = Field(default_factory=list)
    total_coverage_percent: int = 0


class InterferenceStub(BaseModel):
    level: str = "low"
    conflicts: List[str] = Field(default_factory=list)


class Placement(BaseModel):
    """Committed position of a single device instance."""

    device_spec_id: int
    instance_name: str
    position: Point
    room_id: Optional[str] = None
    mounting_height: float = 0.0
    rotation: float = 0.0
    placement_type: str = "center"
    optimization_score: float = 0.0
    coverage_analysis: CoverageAnalysis
    interference_analysis: InterferenceStub = Field(default_factory=InterferenceStub)
    rationale: str = ""
    installation_notes: str = ""


class InterferenceConflict(BaseModel):
    device1: str
    device2: str
    distance: int  # feet
    severity: str = "medium"


class InterferenceReport(BaseModel):
    interference_level: Literal["low", "medium", "high"]
    conflicts: List[InterferenceConflict] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)


class OptimizationMetrics(BaseModel):
    overall_score: int
    coverage_efficiency: int
    installation_complexity: Literal["simple", "moderate", "complex"]
    estimated_install_time: str
    total_devices: int
    rooms_covered: int


class RoomCoverageSummary(BaseModel):
    room_id: str
    room_name: str
    coverage_percent: int
    device_count: int


class DeviceCoverageSummary(BaseModel):
    device_id: str
    effective_coverage: int


class CoverageSummary(BaseModel):
    total_coverage: float
    room_analysis: List[RoomCoverageSummary] = Field(default_factory=list)
    device_coverage: List[DeviceCoverageSummary] = Field(default_factory=list)


class CableRoute(BaseModel):
    device_name: str
    start: Point
    end: Point
    distance: int  # feet
    cable_type: str
    power_required: float


class DevicePower(BaseModel):
    device_name: str
    watts: float
    voltage: str


class PowerRequirements(BaseModel):
    total_watts: float
    estimated_amps: int
    device_breakdown: List[DevicePower] = Field(default_factory=list)
    recommended_circuits: int


class WiringPlan(BaseModel):
    central_rack_location: Optional[Point] = None
    cable_routes: List[CableRoute] = Field(default_factory=list)
    power_requirements: PowerRequirements
    total_cable_length: int = 0


class OptimizationResult(BaseModel):
    """Output of a full placement run."""

    placements: List[Placement] = Field(default_factory=list)
    metrics: OptimizationMetrics
    coverage_analysis: CoverageSummary
    interference_analysis: InterferenceReport
    recommendations: List[str] = Field(default_factory=list)
    wiring_plan: WiringPlan


class RackDevice(BaseModel):
    id: str
    name: str
    type: Literal["router", "switch", "hub", "modem", "ups", "patch_panel", "server", "nas"]
    rack_units: int
    power_consumption: float
    connections: List[Dict[str, object]] = Field(default_factory=list)
    cooling: Literal["passive", "active"] = "active"
    depth: float  # inches


class RackSlot(BaseModel):
    device: RackDevice
    position: int  # 1-based starting rack unit
    orientation: Literal["front", "back"] = "front"


class RackPowerRequirements(BaseModel):
    total_watts: float
    ups_recommended: bool
    circuit_requirements: str


class CoolingRequirements(BaseModel):
    cfm_required: int
    temperature_range: str
    ventilation: List[str] = Field(default_factory=list)


class RackConfiguration(BaseModel):
    rack_height: int = 42
    devices: List[RackSlot] = Field(default_factory=list)
    power_requirements: RackPowerRequirements
    cooling_requirements: CoolingRequirements

    @property
    def used_units(self) -> int:
        return sum(slot.device.rack_units for slot in self.devices)


class InstallationStep(BaseModel):
    id: str = ""
    category: Literal["preparation", "mounting", "wiring", "configuration", "testing"]
    title: str
    description: str
    tools: List[str] = Field(default_factory=list)
    materials: List[str] = Field(default_factory=list)
    estimated_time: int  # minutes
    safety: List[str] = Field(default_factory=list)


class TroubleshootingEntry(BaseModel):
    problem: str
    solutions: List[str] = Field(default_factory=list)


class InstallationGuide(BaseModel):
    project_name: str
    total_time: int  # minutes
    difficulty_level: Literal["beginner", "intermediate", "advanced"]
    required_tools: List[str] = Field(default_factory=list)
    safety_requirements: List[str] = Field(default_factory=list)
    steps: List[InstallationStep] = Field(default_factory=list)
    troubleshooting: List[TroubleshootingEntry] = Field(default_factory=list)
    warranty_info: List[str] = Field(default_factory=list)


class PlanResult(BaseModel):
    """Complete planning result for one project."""

    calculation: DeviceCalculationResult
    optimization: OptimizationResult
    rack_configuration: RackConfiguration
    installation_guide: InstallationGuide


class PlanningRun(BaseModel):
    """Record of one planning run as kept by the run log."""

    timestamp: str
    name: str
    tier_id: str
    success: bool = True
    error: Optional[str] = None
    calculated_devices: int = 0
    placed_devices: int = 0
    unplaced_instances: List[str] = Field(default_factory=list)
    category_quantities: Dict[str, int] = Field(default_factory=dict)
    estimated_cost: float = 0.0
    overall_score: int = 0
    coverage_efficiency: int = 0
    rack_units: int = 0
    install_minutes: int = 0

    @property
    def complete(self) -> bool:
        return self.success and not self.unplaced_instances


@dataclass
class PlacementParams:
    """Tunable constants for placement optimization."""

    grid_resolution: int = 5  # pixels per grid cell
    min_grid_extent: int = 1000  # pixels
    default_scale: float = 10.0  # pixels per foot
    default_coverage_radius_feet: float = 25.0
    priority_weight: float = 100.0
    coverage_weight: float = 40.0
    interference_weight: float = 30.0
    installation_weight: float = 10.0
    separation_weight: float = 20.0
    frequency_tolerance_ghz: float = 0.1
    conflict_distance_factor: float = 0.7
    minutes_per_device: int = 30
    complexity_multiplier: float = 1.5
    room_priority_factors: Tuple[float, float, float] = (1.2, 1.0, 0.8)  # high, medium, low
