"""Candidate scoring for device placement."""

import math
from typing import Sequence

import numpy as np
from scipy.spatial import distance

from .interference import InterferenceManager
from .models import Candidate, DeviceSpecification, PlacementParams, Placement, Room, ScoreBreakdown
from .occupancy_grid import OccupancyGrid

INSTALLATION_BASE = 50
INSTALLATION_ADJUSTMENTS = {
    "ceiling_center": -15,
    "corner_mount": -10,
    "floor_rack": 10,
}


def coverage_radius_px(spec: DeviceSpecification, scale: float, default_feet: float = 25.0) -> float:
    return (spec.coverage_radius_feet or default_feet) * scale


def calculate_coverage_score(
    candidate: Candidate,
    spec: DeviceSpecification,
    rooms: Sequence[Room],
    scale: float,
    default_radius_feet: float = 25.0,
) -> float:
    """Area-weighted share of the floor plan covered from a candidate.

    A room contributes its area scaled by ``1 - d / r``, where ``d`` is the
    distance from the candidate to the room center and ``r`` the coverage
    radius in pixels.

    Returns:
        Coverage on a 0-100 scale
    """
    radius = coverage_radius_px(spec, scale, default_radius_feet)
    total_area = 0.0
    covered = 0.0

    for room in rooms:
        center = room.bounds.center
        d = math.hypot(candidate.x - center.x, candidate.y - center.y)
        total_area += room.area_sqft
        if radius > 0 and d <= radius:
            covered += room.area_sqft * max(0.0, 1 - d / radius)

    return covered / total_area * 100 if total_area > 0 else 0.0


def calculate_installation_score(candidate: Candidate) -> float:
    return INSTALLATION_BASE + INSTALLATION_ADJUSTMENTS.get(candidate.placement_type, 0)


def calculate_separation_score(
    candidate: Candidate,
    spec: DeviceSpecification,
    existing: Sequence[Placement],
    scale: float,
    default_radius_feet: float = 25.0,
) -> float:
    """Reward distance from already placed devices of the same spec.

    Returns:
        100 when no same-spec device exists, -50 when the nearest one is
        closer than half the minimum separation, 0 inside the minimum
        separation, otherwise proportional to distance and capped at 100
    """
    same_type = [p for p in existing if p.device_spec_id == spec.id]
    if not same_type:
        return 100.0

    min_separation = coverage_radius_px(spec, scale, default_radius_feet) * 0.7
    points = np.array([[p.position.x, p.position.y] for p in same_type], dtype=float)
    min_distance = float(distance.cdist([[candidate.x, candidate.y]], points).min())

    if min_distance < min_separation * 0.5:
        return -50.0
    if min_distance < min_separation:
        return 0.0
    return min(100.0, min_distance / min_separation * 50)


def score_candidate(
    candidate: Candidate,
    spec: DeviceSpecification,
    rooms: Sequence[Room],
    grid: OccupancyGrid,
    interference: InterferenceManager,
    existing: Sequence[Placement],
    scale: float,
    params: PlacementParams,
) -> ScoreBreakdown:
    """Score a candidate position.

    ``(priority*100 + coverage*40 - interference*30) * accessibility
    + installation*10 + separation*20``. A candidate on a wall cell or
    outside the grid scores 0 and is not eligible.

    Args:
        candidate: Position being evaluated
        spec: Specification of the device being placed
        rooms: Floor plan rooms
        grid: Accessibility grid
        interference: Interference state of the current run
        existing: Placements committed so far in the run
        scale: Pixels per foot
        params: Scoring weights and defaults

    Returns:
        ScoreBreakdown with every term and the total
    """
    radius_feet = params.default_coverage_radius_feet
    coverage = calculate_coverage_score(candidate, spec, rooms, scale, radius_feet)
    interference_score = interference.calculate_interference(candidate, spec)
    accessibility = grid.accessibility(candidate.x, candidate.y)
    installation = calculate_installation_score(candidate)
    separation = calculate_separation_score(candidate, spec, existing, scale, radius_feet)

    if accessibility > 0:
        total = candidate.priority * params.priority_weight
        total += coverage * params.coverage_weight
        total -= interference_score * params.interference_weight
        total *= accessibility
        total += installation * params.installation_weight
        total += separation * params.separation_weight
    else:
        total = 0.0

    return ScoreBreakdown(
        priority=candidate.priority,
        coverage=coverage,
        interference=interference_score,
        accessibility=accessibility,
        installation=installation,
        separation=separation,
        total=total,
    )
