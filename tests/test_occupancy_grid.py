"""Tests for the accessibility grid."""

import numpy as np

from smart_home_planner.models import FloorPlanAnalysis, Point, Wall
from smart_home_planner.occupancy_grid import OccupancyGrid, image_extent


def test_empty_grid_is_open():
    """Test a new grid is fully accessible."""
    grid = OccupancyGrid(100, 50, resolution=5)

    assert grid.cells.shape == (10, 20)
    assert np.all(grid.cells == 1)
    assert grid.width_px == 100
    assert grid.height_px == 50


def test_horizontal_wall_is_marked():
    """Test a horizontal wall blocks the cells it crosses."""
    grid = OccupancyGrid(100, 100, resolution=5)
    grid.mark_walls([Wall(id="w", start=Point(x=0, y=50), end=Point(x=99, y=50))])

    assert grid.accessibility(12, 52) == 0.0
    assert grid.accessibility(12, 40) == 1.0
    assert np.count_nonzero(grid.cells[10] == 0) == 20


def test_diagonal_wall_is_8_connected():
    """Test a diagonal wall marks exactly one cell per column."""
    grid = OccupancyGrid(100, 100, resolution=5)
    grid.mark_walls([Wall(id="w", start=Point(x=0, y=0), end=Point(x=99, y=99))])

    for i in range(20):
        assert grid.cells[i, i] == 0
    assert np.count_nonzero(grid.cells == 0) == 20


def test_outside_grid_is_inaccessible():
    """Test positions off the grid score 0."""
    grid = OccupancyGrid(100, 100, resolution=5)

    assert grid.accessibility(-1, 10) == 0.0
    assert grid.accessibility(10, 100) == 0.0
    assert not grid.contains(100, 10)
    assert grid.contains(0, 0)


def test_image_extent_minimum():
    """Test extent never falls below the minimum."""
    floor_plan = FloorPlanAnalysis.model_validate({
        "rooms": [{"id": "r", "bounds": {"min_x": 0, "min_y": 0, "max_x": 300, "max_y": 200}}],
    })

    assert image_extent(floor_plan, 1000) == (1000, 1000)


def test_image_extent_covers_plan_and_image():
    """Test extent grows to cover rooms, walls and declared image size."""
    floor_plan = FloorPlanAnalysis.model_validate({
        "rooms": [{"id": "r", "bounds": {"min_x": 0, "min_y": 0, "max_x": 1500, "max_y": 200}}],
        "walls": [{"id": "w", "start": {"x": 0, "y": 0}, "end": {"x": 10, "y": 1200.5}}],
        "image_height": 1100,
    })

    assert image_extent(floor_plan, 1000) == (1500, 1201)


def test_from_floor_plan_marks_walls(scenario_floor_plan):
    """Test grid construction from a floor plan marks its walls."""
    grid = OccupancyGrid.from_floor_plan(scenario_floor_plan)

    assert grid.width_px == 1000
    assert grid.accessibility(240, 60) == 0.0
    assert grid.accessibility(120, 120) == 1.0
