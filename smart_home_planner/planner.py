"""Main smart home planner class."""

import logging
from typing import List, Optional, Sequence

from .catalog import default_catalog
from .device_calculator import calculate_devices_for_tier
from .installation_guide import generate_installation_guide
from .models import (
    DeviceSpecification,
    FloorPlanAnalysis,
    PlacementParams,
    PlanResult,
    Tier,
    UserPreferences,
)
from .placement import optimize_placements
from .rack_configuration import generate_rack_configuration

logger = logging.getLogger(__name__)


class SmartHomePlanner:
    """Plan device quantities and placements for a floor plan."""

    def __init__(
        self,
        catalog: Optional[Sequence[DeviceSpecification]] = None,
        params: Optional[PlacementParams] = None,
    ):
        """Initialize the planner.

        Args:
            catalog: Device catalog (defaults to the built-in catalog)
            params: Placement parameters
        """
        self.catalog = list(catalog) if catalog is not None else default_catalog()
        self.params = params or PlacementParams()

    def plan(
        self,
        tier: Tier,
        floor_plan: FloorPlanAnalysis,
        preferences: Optional[UserPreferences] = None,
    ) -> PlanResult:
        """Run the full planning pipeline.

        Device calculation feeds placement optimization; the rack layout
        and installation guide are derived from the calculated devices.

        Args:
            tier: Selected automation tier
            floor_plan: Floor plan analysis
            preferences: User preferences

        Returns:
            PlanResult with calculation, optimization, rack and guide
        """
        calculation = calculate_devices_for_tier(tier, floor_plan, preferences, self.catalog)
        logger.info(
            "Calculated %d devices across %d entries for tier %s",
            calculation.total_devices, len(calculation.devices), tier.id,
        )

        optimization = optimize_placements(
            calculation.devices, self.catalog, floor_plan, preferences, self.params
        )
        logger.info(
            "Placed %d of %d devices", len(optimization.placements), calculation.total_devices
        )

        rack_configuration = generate_rack_configuration(calculation.devices, tier.id)
        installation_guide = generate_installation_guide(calculation.devices, rack_configuration, tier.id)

        return PlanResult(
            calculation=calculation,
            optimization=optimization,
            rack_configuration=rack_configuration,
            installation_guide=installation_guide,
        )

    def print_report(self, result: PlanResult) -> None:
        """Print a formatted report of the plan.

        Args:
            result: Planning result
        """
        print("\n" + generate_plan_report(result))


def generate_plan_report(result: PlanResult) -> str:
    """Generate a formatted text report of a plan.

    Args:
        result: Planning result

    Returns:
        Formatted report string
    """
    calculation = result.calculation
    optimization = result.optimization
    metrics = optimization.metrics

    lines: List[str] = [
        "=" * 60,
        "SMART HOME DEVICE PLAN",
        "=" * 60,
        "",
    ]
    lines.extend(calculation.rationale)

    lines.extend(["", "DEVICES:", "-" * 60])
    for device in calculation.devices:
        lines.append(f"{device.device_name:32s}: {device.quantity:3d}  ({device.priority})")
    lines.extend([
        "-" * 60,
        f"{'TOTAL DEVICES':32s}: {calculation.total_devices:3d}",
        f"{'ESTIMATED COST':32s}: ${calculation.estimated_cost:,.0f}",
    ])

    lines.extend(["", "PLACEMENTS:", "-" * 60])
    for placement in optimization.placements:
        lines.append(
            f"{placement.instance_name:32s}: ({placement.position.x:7.1f}, {placement.position.y:7.1f}) "
            f"{placement.room_id or '-':>10s}  score {placement.optimization_score:7.1f}"
        )

    lines.extend([
        "",
        "METRICS:",
        "-" * 60,
        f"Overall score:          {metrics.overall_score}",
        f"Coverage efficiency:    {metrics.coverage_efficiency}%",
        f"Install complexity:     {metrics.installation_complexity}",
        f"Estimated install time: {metrics.estimated_install_time}",
        f"Rooms covered:          {metrics.rooms_covered}",
        f"Interference level:     {optimization.interference_analysis.interference_level}",
    ])

    wiring = optimization.wiring_plan
    lines.extend([
        "",
        "WIRING & POWER:",
        "-" * 60,
        f"Cable runs:             {len(wiring.cable_routes)} ({wiring.total_cable_length} ft)",
        f"Total power:            {wiring.power_requirements.total_watts:g} W "
        f"({wiring.power_requirements.recommended_circuits} circuits)",
        f"Rack units used:        {result.rack_configuration.used_units}U "
        f"of {result.rack_configuration.rack_height}U",
        f"Install guide:          {len(result.installation_guide.steps)} steps, "
        f"{result.installation_guide.total_time} min ({result.installation_guide.difficulty_level})",
    ])

    recommendations = optimization.recommendations + optimization.interference_analysis.recommendations
    if recommendations:
        lines.extend(["", "RECOMMENDATIONS:", "-" * 60])
        lines.extend(f"- {recommendation}" for recommendation in recommendations)

    lines.append("=" * 60)
    return "\n".join(lines)
