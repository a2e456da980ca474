"""Smart home planner package for device quantities and placement optimization."""

from .catalog import DEFAULT_TIERS, default_catalog, get_tier
from .device_calculator import calculate_devices_for_tier
from .models import FloorPlanAnalysis, PlacementParams, PlanResult, Tier, UserPreferences
from .placement import PlacementOptimizer, optimize_placements
from .planner import SmartHomePlanner

__version__ = "0.1.0"
__all__ = [
    "SmartHomePlanner",
    "PlacementOptimizer",
    "calculate_devices_for_tier",
    "optimize_placements",
    "default_catalog",
    "get_tier",
    "DEFAULT_TIERS",
    "FloorPlanAnalysis",
    "PlacementParams",
    "PlanResult",
    "Tier",
    "UserPreferences",
]
