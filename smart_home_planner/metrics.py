"""Coverage and optimization metrics for a completed placement set."""

import math
from typing import Dict, List, Mapping, Optional, Sequence

import numpy as np

from .catalog import DeviceCategory
from .models import (
    CoverageSummary,
    DeviceCoverageSummary,
    DeviceSpecification,
    OptimizationMetrics,
    Placement,
    PlacementParams,
    Room,
    RoomCoverageSummary,
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return int(math.floor(value + 0.5))


SECURITY_CATEGORIES = (
    DeviceCategory.SECURITY_CAMERAS,
    DeviceCategory.SECURITY_DEVICES,
    DeviceCategory.DOORBELLS,
)


def calculate_room_coverage(placements: Sequence[Placement], rooms: Sequence[Room]) -> Dict[str, int]:
    """Best coverage percentage each room receives from any single placement.

    Overlapping devices do not add up; a room takes the maximum.

    Args:
        placements: Committed placements
        rooms: Floor plan rooms

    Returns:
        Mapping of room id to coverage percent (0 when uncovered)
    """
    coverage = {room.id: 0 for room in rooms}
    for placement in placements:
        for covered in placement.coverage_analysis.covered_rooms:
            if covered.room_id in coverage:
                coverage[covered.room_id] = max(coverage[covered.room_id], covered.coverage_percent)
    return coverage


def calculate_overall_coverage(placements: Sequence[Placement], rooms: Sequence[Room]) -> float:
    """Mean of per-room best coverage; 0 for a plan without rooms."""
    coverage = calculate_room_coverage(placements, rooms)
    if not coverage:
        return 0.0
    return float(np.mean(list(coverage.values())))


def placement_complexity(placement: Placement) -> int:
    points = 0
    if placement.mounting_height > 10:
        points += 2
    elif placement.mounting_height > 7:
        points += 1

    if placement.placement_type == "ceiling_center":
        points += 2
    elif placement.placement_type == "corner_mount":
        points += 1
    return points


def calculate_installation_complexity(placements: Sequence[Placement]) -> float:
    if not placements:
        return 0.0
    return sum(placement_complexity(p) for p in placements) / len(placements)


def categorize_complexity(score: float) -> str:
    if score < 1:
        return "simple"
    if score < 2:
        return "moderate"
    return "complex"


def estimate_installation_time(
    device_count: int,
    minutes_per_device: int = 30,
    complexity_multiplier: float = 1.5,
) -> str:
    """Estimate installation time.

    Args:
        device_count: Number of placed devices
        minutes_per_device: Base minutes per device
        complexity_multiplier: Average complexity factor

    Returns:
        Time formatted as "Xh Ym"
    """
    total_minutes = round_half_up(device_count * minutes_per_device * complexity_multiplier)
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


def calculate_optimization_metrics(
    placements: Sequence[Placement],
    rooms: Sequence[Room],
    params: Optional[PlacementParams] = None,
) -> OptimizationMetrics:
    """Aggregate whole-project metrics.

    Args:
        placements: All placements of the run
        rooms: Floor plan rooms
        params: Placement parameters for install time constants

    Returns:
        OptimizationMetrics
    """
    params = params or PlacementParams()
    scores = [p.optimization_score for p in placements]
    average_score = float(np.mean(scores)) if scores else 0.0

    return OptimizationMetrics(
        overall_score=round_half_up(average_score),
        coverage_efficiency=round_half_up(calculate_overall_coverage(placements, rooms)),
        installation_complexity=categorize_complexity(calculate_installation_complexity(placements)),
        estimated_install_time=estimate_installation_time(
            len(placements), params.minutes_per_device, params.complexity_multiplier
        ),
        total_devices=len(placements),
        rooms_covered=len({p.room_id for p in placements if p.room_id}),
    )


def analyze_coverage(placements: Sequence[Placement], rooms: Sequence[Room]) -> CoverageSummary:
    """Summarize coverage per room and per device."""
    room_analysis = []
    for room in rooms:
        percents = [
            covered.coverage_percent
            for placement in placements
            for covered in placement.coverage_analysis.covered_rooms
            if covered.room_id == room.id
        ]
        room_analysis.append(RoomCoverageSummary(
            room_id=room.id,
            room_name=room.name,
            coverage_percent=max(percents, default=0),
            device_count=len(percents),
        ))

    return CoverageSummary(
        total_coverage=calculate_overall_coverage(placements, rooms),
        room_analysis=room_analysis,
        device_coverage=[
            DeviceCoverageSummary(
                device_id=p.instance_name,
                effective_coverage=p.coverage_analysis.total_coverage_percent,
            )
            for p in placements
        ],
    )


def generate_recommendations(
    placements: Sequence[Placement],
    metrics: OptimizationMetrics,
    specs: Mapping[int, DeviceSpecification],
) -> List[str]:
    """Generate recommendations from placements and metrics.

    Args:
        placements: All placements of the run
        metrics: Optimization metrics
        specs: Catalog indexed by id

    Returns:
        List of recommendation sentences
    """
    recommendations = []
    categories = [specs[p.device_spec_id].category_id for p in placements if p.device_spec_id in specs]

    if metrics.coverage_efficiency < 70:
        recommendations.append("Consider adding additional devices to improve coverage in low-signal areas")

    if metrics.installation_complexity == "complex":
        recommendations.append("Professional installation recommended due to complex mounting requirements")

    if DeviceCategory.WIFI in categories:
        recommendations.append("Ensure proper cable routing from WiFi access points to central equipment rack")

    if any(category in SECURITY_CATEGORIES for category in categories):
        recommendations.append(
            "Configure security devices to eliminate blind spots and ensure proper coverage overlap"
        )

    if len(placements) > 10:
        recommendations.append("Consider implementing a central management system for device monitoring and control")

    return recommendations
