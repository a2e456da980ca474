"""Shared fixtures for planner tests."""

import pytest

from smart_home_planner.catalog import DEFAULT_TIERS, default_catalog
from smart_home_planner.models import FloorPlanAnalysis


def _room(room_id, room_type, name, area, bounds):
    min_x, min_y, max_x, max_y = bounds
    return {
        "id": room_id,
        "type": room_type,
        "name": name,
        "area_sqft": area,
        "bounds": {"min_x": min_x, "min_y": min_y, "max_x": max_x, "max_y": max_y},
    }


def _wall(wall_id, start, end, wall_type="interior"):
    return {
        "id": wall_id,
        "start": {"x": start[0], "y": start[1]},
        "end": {"x": end[0], "y": end[1]},
        "type": wall_type,
    }


@pytest.fixture
def scenario_floor_plan_data():
    """Five-room home at 12 px/ft: living 400, kitchen 150, three bedrooms of 120 sq ft."""
    return {
        "rooms": [
            _room("living", "living_room", "Living Room", 400, (0, 0, 240, 240)),
            _room("kitchen", "kitchen", "Kitchen", 150, (240, 0, 420, 120)),
            _room("bed1", "bedroom", "Bedroom 1", 120, (240, 120, 384, 240)),
            _room("bed2", "bedroom", "Bedroom 2", 120, (0, 240, 144, 360)),
            _room("bed3", "bedroom", "Bedroom 3", 120, (144, 240, 288, 360)),
        ],
        "walls": [
            _wall("w1", (0, 0), (420, 0), "exterior"),
            _wall("w2", (420, 0), (420, 240), "exterior"),
            _wall("w3", (0, 0), (0, 360), "exterior"),
            _wall("w4", (0, 360), (288, 360), "exterior"),
            _wall("w5", (240, 0), (240, 240)),
            _wall("w6", (240, 120), (420, 120)),
            _wall("w7", (0, 240), (420, 240)),
            _wall("w8", (144, 240), (144, 360)),
        ],
        "doors": [
            {"id": "d1", "position": {"x": 120, "y": 10}, "width": 36, "wall_id": "w1", "type": "exterior"},
            {"id": "d2", "position": {"x": 330, "y": 10}, "width": 36, "wall_id": "w1", "type": "exterior"},
        ],
        "windows": [
            {"id": "win1", "position": {"x": 60, "y": 350}, "width": 36},
            {"id": "win2", "position": {"x": 210, "y": 350}, "width": 36},
            {"id": "win3", "position": {"x": 410, "y": 60}, "width": 36},
        ],
        "scale_pixels_per_foot": 12,
        "total_area_sqft": 940,
    }


@pytest.fixture
def scenario_floor_plan(scenario_floor_plan_data):
    return FloorPlanAnalysis.model_validate(scenario_floor_plan_data)


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def basic_tier():
    return DEFAULT_TIERS["basic"]


@pytest.fixture
def intermediate_tier():
    return DEFAULT_TIERS["intermediate"]


@pytest.fixture
def advanced_tier():
    return DEFAULT_TIERS["advanced"]
