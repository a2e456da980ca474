"""Tests for coverage and optimization metrics."""

import pytest

from smart_home_planner.catalog import default_catalog, index_by_id
from smart_home_planner.metrics import (
    analyze_coverage,
    calculate_optimization_metrics,
    calculate_room_coverage,
    categorize_complexity,
    estimate_installation_time,
    generate_recommendations,
    placement_complexity,
    round_half_up,
)
from smart_home_planner.models import CoverageAnalysis, Placement, Point, RoomCoverage


def _placement(name, spec_id=1, score=100.0, room_id="living", height=8.0, placement_type="center", covered=()):
    return Placement(
        device_spec_id=spec_id,
        instance_name=name,
        position=Point(x=0, y=0),
        room_id=room_id,
        mounting_height=height,
        placement_type=placement_type,
        optimization_score=score,
        coverage_analysis=CoverageAnalysis(
            effective_radius=25,
            covered_rooms=[RoomCoverage(room_id=r, coverage_percent=p) for r, p in covered],
        ),
    )


def test_room_coverage_takes_maximum(scenario_floor_plan):
    """Test overlapping devices do not add up coverage."""
    placements = [
        _placement("a", covered=[("living", 60), ("kitchen", 20)]),
        _placement("b", covered=[("living", 50), ("kitchen", 70)]),
    ]

    coverage = calculate_room_coverage(placements, scenario_floor_plan.rooms)

    assert coverage == {"living": 60, "kitchen": 70, "bed1": 0, "bed2": 0, "bed3": 0}


def test_placement_complexity_points():
    """Test complexity points from height and placement type."""
    assert placement_complexity(_placement("a", height=12, placement_type="ceiling_center")) == 4
    assert placement_complexity(_placement("b", height=8, placement_type="corner_mount")) == 2
    assert placement_complexity(_placement("c", height=7, placement_type="wall_mount")) == 0


def test_categorize_complexity():
    """Test complexity category thresholds."""
    assert categorize_complexity(0.5) == "simple"
    assert categorize_complexity(1.0) == "moderate"
    assert categorize_complexity(1.9) == "moderate"
    assert categorize_complexity(2.0) == "complex"


def test_estimate_installation_time():
    """Test install time formatting."""
    assert estimate_installation_time(24) == "18h 0m"
    assert estimate_installation_time(1) == "0h 45m"
    assert estimate_installation_time(0) == "0h 0m"
    assert estimate_installation_time(1, 3, 1.5) == "0h 5m"


def test_round_half_up():
    """Test halves round up instead of to even."""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(7514.5) == 7515
    assert round_half_up(2.49) == 2
    assert round_half_up(-0.5) == 0


def test_optimization_metrics(scenario_floor_plan):
    """Test aggregate metrics over a small placement set."""
    placements = [
        _placement("a", score=100, room_id="living", covered=[("living", 100)]),
        _placement("b", score=51, room_id="living", covered=[("kitchen", 50)]),
        _placement("c", score=0, room_id=None, height=4, placement_type="doorbell_mount"),
    ]

    metrics = calculate_optimization_metrics(placements, scenario_floor_plan.rooms)

    assert metrics.overall_score == 50
    assert metrics.coverage_efficiency == 30
    assert metrics.installation_complexity == "simple"
    assert metrics.estimated_install_time == "2h 15m"
    assert metrics.total_devices == 3
    assert metrics.rooms_covered == 1


def test_optimization_metrics_empty():
    """Test metrics for an empty run."""
    metrics = calculate_optimization_metrics([], [])

    assert metrics.overall_score == 0
    assert metrics.coverage_efficiency == 0
    assert metrics.installation_complexity == "simple"
    assert metrics.rooms_covered == 0


def test_analyze_coverage(scenario_floor_plan):
    """Test per-room and per-device coverage summaries."""
    placements = [
        _placement("a", covered=[("living", 80), ("kitchen", 10)]),
        _placement("b", covered=[("living", 40)]),
    ]

    summary = analyze_coverage(placements, scenario_floor_plan.rooms)
    living = summary.room_analysis[0]

    assert summary.total_coverage == pytest.approx((80 + 10) / 5)
    assert (living.room_name, living.coverage_percent, living.device_count) == ("Living Room", 80, 2)
    assert summary.room_analysis[2].device_count == 0
    assert [d.device_id for d in summary.device_coverage] == ["a", "b"]


def test_recommendations_by_category():
    """Test recommendations for coverage, WiFi, security and device count."""
    specs = index_by_id(default_catalog())
    placements = [_placement("ap", spec_id=1), _placement("cam", spec_id=3)] + [
        _placement(f"switch_{i}", spec_id=16) for i in range(9)
    ]
    metrics = calculate_optimization_metrics(placements, [])

    recommendations = generate_recommendations(placements, metrics, specs)

    assert recommendations == [
        "Consider adding additional devices to improve coverage in low-signal areas",
        "Ensure proper cable routing from WiFi access points to central equipment rack",
        "Configure security devices to eliminate blind spots and ensure proper coverage overlap",
        "Consider implementing a central management system for device monitoring and control",
    ]


def test_recommendations_for_complex_install(scenario_floor_plan):
    """Test complex installs recommend a professional."""
    specs = index_by_id(default_catalog())
    placements = [
        _placement("thermostat", spec_id=14, height=12, placement_type="ceiling_center",
                   covered=[(room.id, 100) for room in scenario_floor_plan.rooms]),
    ]
    metrics = calculate_optimization_metrics(placements, scenario_floor_plan.rooms)

    assert generate_recommendations(placements, metrics, specs) == [
        "Professional installation recommended due to complex mounting requirements",
    ]
