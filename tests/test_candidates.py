"""Tests for candidate generation."""

import pytest

from smart_home_planner.candidates import (
    CANDIDATE_GENERATORS,
    apply_room_priorities,
    calculate_room_priority,
    generate_candidates,
)
from smart_home_planner.catalog import DeviceCategory, index_by_id
from smart_home_planner.models import Candidate, FloorPlanAnalysis, Room, UserPreferences


def _room(room_type, area):
    return Room.model_validate({
        "id": "r", "type": room_type, "area_sqft": area,
        "bounds": {"min_x": 0, "min_y": 0, "max_x": 100, "max_y": 100},
    })


def test_room_priority_by_type():
    """Test suitability weights by room type."""
    assert calculate_room_priority(_room("living_room", 200), "wifi") == 1.0
    assert calculate_room_priority(_room("bedroom", 200), "wifi") == pytest.approx(0.8)
    assert calculate_room_priority(_room("bathroom", 200), "wifi") == pytest.approx(0.5)
    assert calculate_room_priority(_room("bathroom", 200), "equipment") == pytest.approx(0.3)
    assert calculate_room_priority(_room("utility", 200), "equipment") == 1.0


def test_room_priority_area_adjustments():
    """Test large rooms are boosted and small rooms reduced, capped at 1."""
    assert calculate_room_priority(_room("bedroom", 350), "wifi") == pytest.approx(0.88)
    assert calculate_room_priority(_room("bedroom", 80), "wifi") == pytest.approx(0.64)
    assert calculate_room_priority(_room("living_room", 500), "wifi") == 1.0


def test_dispatch_table_covers_categories():
    """Test each placed category has a dedicated generator."""
    assert set(CANDIDATE_GENERATORS) == {
        DeviceCategory.WIFI,
        DeviceCategory.SECURITY_CAMERAS,
        DeviceCategory.ENTERTAINMENT,
        DeviceCategory.SECURITY_DEVICES,
        DeviceCategory.DOORBELLS,
        DeviceCategory.CENTRAL_EQUIPMENT,
        DeviceCategory.ENVIRONMENTAL,
    }


def test_wifi_candidates(scenario_floor_plan, catalog):
    """Test WiFi candidates sit at centers of rooms over 100 sq ft."""
    candidates = generate_candidates(index_by_id(catalog)[1], scenario_floor_plan)

    assert len(candidates) == 5
    assert all(c.placement_type == "ceiling_center" for c in candidates)
    assert (candidates[0].x, candidates[0].y) == (120, 120)
    assert candidates[0].mounting_height == 12


def test_wifi_offset_in_large_room(catalog):
    """Test rooms over 400 sq ft get an extra offset candidate."""
    floor_plan = FloorPlanAnalysis.model_validate({
        "rooms": [{"id": "great", "type": "living_room", "area_sqft": 600,
                   "bounds": {"min_x": 0, "min_y": 0, "max_x": 400, "max_y": 200}}],
    })
    candidates = generate_candidates(index_by_id(catalog)[1], floor_plan)

    assert [c.placement_type for c in candidates] == ["ceiling_center", "ceiling_offset"]
    assert candidates[1].x == 100
    assert candidates[1].priority == pytest.approx(0.8)


def test_wifi_skips_small_rooms(catalog):
    """Test rooms of 100 sq ft or less get no WiFi candidate."""
    floor_plan = FloorPlanAnalysis.model_validate({
        "rooms": [{"id": "closet", "area_sqft": 100,
                   "bounds": {"min_x": 0, "min_y": 0, "max_x": 100, "max_y": 100}}],
    })

    assert generate_candidates(index_by_id(catalog)[1], floor_plan) == []


def test_camera_candidates_are_inset_corners(scenario_floor_plan, catalog):
    """Test four inset corners per room for cameras."""
    candidates = generate_candidates(index_by_id(catalog)[3], scenario_floor_plan)

    assert len(candidates) == 20
    assert {(c.x, c.y) for c in candidates[:4]} == {(20, 20), (220, 20), (20, 220), (220, 220)}
    assert all(c.placement_type == "corner_mount" and c.mounting_height == 10 for c in candidates)


def test_security_candidates_include_doors(scenario_floor_plan, catalog):
    """Test security devices get one motion corner per room and every door."""
    candidates = generate_candidates(index_by_id(catalog)[9], scenario_floor_plan)
    door_candidates = [c for c in candidates if c.placement_type == "door_sensor"]

    assert len(candidates) == 7
    assert [(c.x, c.y) for c in door_candidates] == [(120, 10), (330, 10)]
    assert all(c.room_id is None and c.priority == 1.0 for c in door_candidates)


def test_doorbell_candidates_only_at_exterior_doors(catalog):
    """Test doorbells are proposed beside exterior doors only."""
    floor_plan = FloorPlanAnalysis.model_validate({
        "doors": [
            {"id": "front", "position": {"x": 50, "y": 50}, "type": "exterior"},
            {"id": "hall", "position": {"x": 80, "y": 50}, "type": "interior"},
        ],
    })
    candidates = generate_candidates(index_by_id(catalog)[11], floor_plan)

    assert len(candidates) == 1
    assert (candidates[0].x, candidates[0].y) == (70, 50)
    assert candidates[0].mounting_height == 4


def test_rack_candidates_avoid_living_spaces(scenario_floor_plan, catalog):
    """Test rack candidates skip living rooms and bedrooms."""
    candidates = generate_candidates(index_by_id(catalog)[13], scenario_floor_plan)

    assert [c.room_id for c in candidates] == ["kitchen"]
    assert (candidates[0].x, candidates[0].y) == (290, 50)
    assert candidates[0].mounting_height == 0


def test_environmental_candidates(scenario_floor_plan, catalog):
    """Test environmental devices get one wall position per room."""
    candidates = generate_candidates(index_by_id(catalog)[14], scenario_floor_plan)

    assert len(candidates) == 5
    assert (candidates[0].x, candidates[0].y) == pytest.approx((72, 120))


def test_unmapped_category_uses_room_centers(scenario_floor_plan, catalog):
    """Test window treatments fall back to generic center candidates."""
    candidates = generate_candidates(index_by_id(catalog)[12], scenario_floor_plan)

    assert len(candidates) == 5
    assert all(c.placement_type == "center" and c.priority == 0.5 for c in candidates)


def test_apply_room_priorities(scenario_floor_plan):
    """Test overrides scale priorities by room id or name."""
    candidates = [
        Candidate(x=0, y=0, room_id="bed1", mounting_height=8, placement_type="center", priority=0.5),
        Candidate(x=0, y=0, room_id="kitchen", mounting_height=8, placement_type="center", priority=0.5),
        Candidate(x=0, y=0, room_id="living", mounting_height=8, placement_type="center", priority=0.9),
        Candidate(x=0, y=0, room_id=None, mounting_height=8, placement_type="door_sensor", priority=1.0),
    ]
    preferences = UserPreferences.model_validate({
        "room_priorities": [
            {"room": "bedroom 1", "priority": "low"},
            {"room": "LIVING", "priority": "high"},
        ],
    })

    adjusted = apply_room_priorities(candidates, scenario_floor_plan.rooms, preferences)

    assert [c.priority for c in adjusted] == pytest.approx([0.4, 0.5, 1.0, 1.0])
    assert candidates[0].priority == 0.5


def test_apply_room_priorities_without_preferences(scenario_floor_plan):
    """Test candidates pass through when there are no overrides."""
    candidates = [Candidate(x=0, y=0, room_id="bed1", mounting_height=8, placement_type="center", priority=0.5)]

    assert apply_room_priorities(candidates, scenario_floor_plan.rooms, None) == candidates
