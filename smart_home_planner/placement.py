"""Scored candidate search for device placement."""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .candidates import apply_room_priorities, generate_candidates
from .catalog import DeviceCategory, index_by_id
from .interference import InterferenceManager
from .metrics import analyze_coverage, calculate_optimization_metrics, generate_recommendations, round_half_up
from .models import (
    CalculatedDevice,
    Candidate,
    CoverageAnalysis,
    DeviceSpecification,
    FloorPlanAnalysis,
    OptimizationResult,
    Placement,
    PlacementParams,
    Point,
    RoomCoverage,
    ScoreBreakdown,
    UserPreferences,
)
from .occupancy_grid import OccupancyGrid
from .scoring import score_candidate
from .wiring import generate_wiring_plan

logger = logging.getLogger(__name__)


@dataclass
class PlacementContext:
    """Mutable state of one optimization run.

    Every run builds a fresh context; placements are committed in order
    and later instances see all earlier ones.
    """

    interference: InterferenceManager
    placements: List[Placement] = field(default_factory=list)

    def commit(self, placement: Placement, spec: DeviceSpecification) -> None:
        self.placements.append(placement)
        self.interference.add_device(placement, spec)


class PlacementOptimizer:
    """Place device instances on a floor plan one at a time."""

    def __init__(self, floor_plan: FloorPlanAnalysis, params: Optional[PlacementParams] = None):
        """Initialize the optimizer.

        Args:
            floor_plan: Floor plan analysis
            params: Placement parameters
        """
        self.params = params or PlacementParams()
        self.floor_plan = floor_plan
        self.rooms = floor_plan.rooms
        self.scale = floor_plan.scale_pixels_per_foot or self.params.default_scale
        self.grid = OccupancyGrid.from_floor_plan(
            floor_plan,
            resolution=self.params.grid_resolution,
            min_extent=self.params.min_grid_extent,
        )

    def new_context(self) -> PlacementContext:
        return PlacementContext(
            interference=InterferenceManager(
                self.scale,
                tolerance_ghz=self.params.frequency_tolerance_ghz,
                conflict_factor=self.params.conflict_distance_factor,
            )
        )

    def evaluate_candidates(
        self,
        spec: DeviceSpecification,
        existing: Sequence[Placement],
        interference: InterferenceManager,
        preferences: Optional[UserPreferences] = None,
    ) -> List[tuple]:
        """Score every candidate for a device.

        Returns:
            List of (candidate, ScoreBreakdown) in generation order
        """
        candidates = generate_candidates(spec, self.floor_plan)
        candidates = apply_room_priorities(
            candidates, self.rooms, preferences, self.params.room_priority_factors
        )
        return [
            (
                candidate,
                score_candidate(
                    candidate, spec, self.rooms, self.grid, interference,
                    existing, self.scale, self.params,
                ),
            )
            for candidate in candidates
        ]

    def optimize_one(
        self,
        spec: DeviceSpecification,
        existing: Sequence[Placement],
        interference: InterferenceManager,
        preferences: Optional[UserPreferences] = None,
        instance_index: int = 0,
    ) -> Optional[Placement]:
        """Find the best position for one device instance.

        Ties keep the earliest candidate in generation order.

        Args:
            spec: Specification of the device
            existing: Placements already committed in this run
            interference: Interference state of this run
            preferences: User preferences for room priority overrides
            instance_index: Zero-based instance number, used for naming

        Returns:
            Placement, or None when no eligible candidate exists
        """
        best: Optional[Candidate] = None
        best_score: Optional[ScoreBreakdown] = None

        for candidate, breakdown in self.evaluate_candidates(spec, existing, interference, preferences):
            if not breakdown.eligible:
                continue
            if best_score is None or breakdown.total > best_score.total:
                best, best_score = candidate, breakdown

        if best is None:
            logger.info("No eligible position for %s instance %d", spec.device_name, instance_index + 1)
            return None

        return self.create_placement(best, spec, best_score.total, instance_index)

    def create_placement(
        self,
        candidate: Candidate,
        spec: DeviceSpecification,
        score: float,
        instance_index: int,
    ) -> Placement:
        return Placement(
            device_spec_id=spec.id,
            instance_name=instance_name(spec.device_name, instance_index),
            position=Point(x=candidate.x, y=candidate.y),
            room_id=candidate.room_id,
            mounting_height=candidate.mounting_height,
            rotation=self.calculate_rotation(candidate, spec),
            placement_type=candidate.placement_type,
            optimization_score=score,
            coverage_analysis=self.calculate_detailed_coverage(candidate, spec),
            rationale=placement_rationale(candidate, score),
            installation_notes=installation_notes(candidate, spec),
        )

    def calculate_rotation(self, candidate: Candidate, spec: DeviceSpecification) -> float:
        """Point cameras at the center of their room; everything else faces 0."""
        if spec.category_id != DeviceCategory.SECURITY_CAMERAS or candidate.room_id is None:
            return 0.0
        room = next((r for r in self.rooms if r.id == candidate.room_id), None)
        if room is None:
            return 0.0
        center = room.bounds.center
        return math.degrees(math.atan2(center.y - candidate.y, center.x - candidate.x))

    def calculate_detailed_coverage(self, candidate: Candidate, spec: DeviceSpecification) -> CoverageAnalysis:
        radius = (spec.coverage_radius_feet or self.params.default_coverage_radius_feet) * self.scale
        covered_rooms = []
        total = 0.0

        for room in self.rooms:
            center = room.bounds.center
            d = math.hypot(candidate.x - center.x, candidate.y - center.y)
            if d <= radius:
                percent = max(0.0, (1 - d / radius) * 100)
                covered_rooms.append(RoomCoverage(room_id=room.id, coverage_percent=round_half_up(percent)))
                total += percent * (room.area_sqft / 1000)

        return CoverageAnalysis(
            effective_radius=round_half_up(radius / self.scale),
            covered_rooms=covered_rooms,
            total_coverage_percent=round_half_up(total),
        )

    def default_placement(self, device: CalculatedDevice, instance_index: int) -> Placement:
        """Center-of-image placement for a device missing from the catalog."""
        logger.info("Device type not recognized: %s (id %d)", device.device_name, device.device_spec_id)
        return Placement(
            device_spec_id=device.device_spec_id,
            instance_name=instance_name(device.device_name, instance_index),
            position=Point(x=self.grid.width_px * 0.5, y=self.grid.height_px * 0.5),
            coverage_analysis=CoverageAnalysis(effective_radius=0),
            rationale="Default center placement for unknown device type",
            installation_notes="Manual placement required - device type not recognized",
        )

    def optimize(
        self,
        devices: Sequence[CalculatedDevice],
        catalog: Sequence[DeviceSpecification],
        preferences: Optional[UserPreferences] = None,
    ) -> OptimizationResult:
        """Place every device instance and analyze the result.

        Instances are placed strictly in order: device list order, then
        instance number.

        Args:
            devices: Calculated devices with quantities
            catalog: Device catalog
            preferences: User preferences

        Returns:
            OptimizationResult with placements, metrics, coverage,
            interference, recommendations and wiring plan
        """
        specs = index_by_id(catalog)
        context = self.new_context()
        unknown: List[Placement] = []

        for device in devices:
            spec = specs.get(device.device_spec_id)
            for index in range(device.quantity):
                if spec is None:
                    unknown.append(self.default_placement(device, index))
                    continue
                placement = self.optimize_one(
                    spec, context.placements, context.interference, preferences, index
                )
                if placement is not None:
                    context.commit(placement, spec)

        placements = context.placements + unknown
        metrics = calculate_optimization_metrics(placements, self.rooms, self.params)

        return OptimizationResult(
            placements=placements,
            metrics=metrics,
            coverage_analysis=analyze_coverage(placements, self.rooms),
            interference_analysis=context.interference.get_interference_report(),
            recommendations=generate_recommendations(placements, metrics, specs),
            wiring_plan=generate_wiring_plan(placements, specs, self.scale),
        )


def optimize_placements(
    devices: Sequence[CalculatedDevice],
    catalog: Sequence[DeviceSpecification],
    floor_plan: FloorPlanAnalysis,
    preferences: Optional[UserPreferences] = None,
    params: Optional[PlacementParams] = None,
) -> OptimizationResult:
    """Run a fresh placement optimization for one project."""
    return PlacementOptimizer(floor_plan, params).optimize(devices, catalog, preferences)


def instance_name(device_name: str, instance_index: int) -> str:
    base = re.sub(r"\s+", "_", device_name).lower()
    return f"{base}_{instance_index + 1}" if instance_index > 0 else base


def placement_rationale(candidate: Candidate, score: float) -> str:
    reasons = []
    if candidate.placement_type == "ceiling_center":
        reasons.append("Central ceiling position provides optimal omnidirectional coverage")
    elif candidate.placement_type == "corner_mount":
        reasons.append("Corner placement minimizes blind spots and maximizes field of view")
    elif candidate.placement_type == "wall_mount":
        reasons.append("Wall mounting provides stable installation with optimal viewing angles")

    if candidate.priority > 0.8:
        reasons.append("High-priority room for this device type")

    reasons.append(f"Optimization score: {round_half_up(score)}/100")
    return ". ".join(reasons)


def installation_notes(candidate: Candidate, spec: DeviceSpecification) -> str:
    notes = []
    if spec.mounting_height_optimal_feet:
        notes.append(f"Mount at {spec.mounting_height_optimal_feet:g} feet height")
    if spec.voltage_requirements:
        notes.append(f"Power requirements: {spec.voltage_requirements}")
    if candidate.placement_type == "ceiling_center":
        notes.append("Ensure adequate ceiling support for mounting")
    if spec.installation_constraints:
        notes.append(spec.installation_constraints.rstrip("."))
    return ". ".join(notes)
