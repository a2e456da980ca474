"""Accessibility grid with walls rasterized as obstacles."""

import math
from typing import Sequence

import cv2
import numpy as np

from .models import FloorPlanAnalysis, Wall


class OccupancyGrid:
    """Coarse grid over the floor plan image.

    Cells hold 1 where a device can be installed and 0 on wall cells.
    Coordinates outside the grid are treated as inaccessible.
    """

    def __init__(self, width_px: int, height_px: int, resolution: int = 5):
        """Initialize an open grid.

        Args:
            width_px: Image width covered by the grid in pixels
            height_px: Image height covered by the grid in pixels
            resolution: Pixels per grid cell
        """
        self.resolution = resolution
        cols = max(1, math.ceil(width_px / resolution))
        rows = max(1, math.ceil(height_px / resolution))
        self.cells = np.ones((rows, cols), dtype=np.uint8)

    @classmethod
    def from_floor_plan(
        cls,
        floor_plan: FloorPlanAnalysis,
        resolution: int = 5,
        min_extent: int = 1000,
    ) -> "OccupancyGrid":
        """Build a grid sized to the floor plan and mark its walls.

        Args:
            floor_plan: Floor plan analysis
            resolution: Pixels per grid cell
            min_extent: Minimum grid width/height in pixels

        Returns:
            OccupancyGrid with wall cells set to 0
        """
        width, height = image_extent(floor_plan, min_extent)
        grid = cls(width, height, resolution)
        grid.mark_walls(floor_plan.walls)
        return grid

    @property
    def width_px(self) -> int:
        return self.cells.shape[1] * self.resolution

    @property
    def height_px(self) -> int:
        return self.cells.shape[0] * self.resolution

    def mark_walls(self, walls: Sequence[Wall]) -> None:
        """Rasterize wall segments onto the grid with 8-connected lines."""
        for wall in walls:
            start = (int(wall.start.x // self.resolution), int(wall.start.y // self.resolution))
            end = (int(wall.end.x // self.resolution), int(wall.end.y // self.resolution))
            cv2.line(self.cells, start, end, color=0, thickness=1, lineType=cv2.LINE_8)

    def accessibility(self, x: float, y: float) -> float:
        """Return the accessibility score (0 or 1) at a pixel position."""
        col = math.floor(x / self.resolution)
        row = math.floor(y / self.resolution)
        rows, cols = self.cells.shape
        if 0 <= row < rows and 0 <= col < cols:
            return float(self.cells[row, col])
        return 0.0

    def contains(self, x: float, y: float) -> bool:
        return 0 <= x < self.width_px and 0 <= y < self.height_px


def image_extent(floor_plan: FloorPlanAnalysis, min_extent: int = 1000) -> tuple:
    """Estimate the image size (width, height) in pixels covered by the plan.

    Args:
        floor_plan: Floor plan analysis
        min_extent: Lower bound for each dimension

    Returns:
        Tuple of (width, height)
    """
    xs = [room.bounds.max_x for room in floor_plan.rooms]
    ys = [room.bounds.max_y for room in floor_plan.rooms]
    for wall in floor_plan.walls:
        xs.extend([wall.start.x, wall.end.x])
        ys.extend([wall.start.y, wall.end.y])

    width = max(xs + [min_extent, floor_plan.image_width or 0])
    height = max(ys + [min_extent, floor_plan.image_height or 0])
    return int(math.ceil(width)), int(math.ceil(height))
