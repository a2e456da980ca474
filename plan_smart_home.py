#!/usr/bin/env python3
"""CLI script for planning smart home devices on an analyzed floor plan."""

import argparse
import json
import sys
from pathlib import Path

from smart_home_planner import FloorPlanAnalysis, SmartHomePlanner, Tier, UserPreferences, get_tier
from smart_home_planner.catalog import DEFAULT_TIERS, load_catalog
from smart_home_planner.run_log import PlanningRunLog


def load_json(path: str):
    with open(path, "r") as f:
        return json.load(f)


def main(argv=None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Calculate and place smart home devices for an analyzed floor plan"
    )
    parser.add_argument(
        "floor_plan",
        type=str,
        help="Path to floor plan analysis JSON",
    )
    parser.add_argument(
        "--tier",
        type=str,
        default="basic",
        choices=list(DEFAULT_TIERS),
        help="Automation tier (default: basic)",
    )
    parser.add_argument(
        "--tier-file",
        type=str,
        help="Path to a custom tier JSON (overrides --tier)",
    )
    parser.add_argument(
        "--preferences",
        type=str,
        help="Path to user preferences JSON",
    )
    parser.add_argument(
        "--catalog",
        type=str,
        help="Path to device catalog JSON (default: built-in catalog)",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Write the full plan as JSON to this path",
    )
    parser.add_argument(
        "--log-run",
        action="store_true",
        help="Log this run in planning_runs/",
    )
    parser.add_argument(
        "--run-name",
        type=str,
        help="Name for the logged run",
    )

    args = parser.parse_args(argv)

    if not Path(args.floor_plan).exists():
        print(f"❌ Error: Floor plan file not found: {args.floor_plan}", file=sys.stderr)
        return 1

    run_name = args.run_name or Path(args.floor_plan).stem
    tier_id = Path(args.tier_file).stem if args.tier_file else args.tier

    try:
        tier = Tier.model_validate(load_json(args.tier_file)) if args.tier_file else get_tier(args.tier)
        tier_id = tier.id
        floor_plan = FloorPlanAnalysis.model_validate(load_json(args.floor_plan))
        preferences = (
            UserPreferences.model_validate(load_json(args.preferences)) if args.preferences else None
        )
        catalog = load_catalog(load_json(args.catalog)) if args.catalog else None

        planner = SmartHomePlanner(catalog=catalog)

        print(f"\n🏠 Planning {tier.name} for: {args.floor_plan}\n")
        print(f"   Rooms: {len(floor_plan.rooms)}, doors: {len(floor_plan.doors)}, "
              f"windows: {len(floor_plan.windows)}")
        print("🧮 Calculating devices and optimizing placements...")
        result = planner.plan(tier, floor_plan, preferences)
        print(f"   Placed {len(result.optimization.placements)} of "
              f"{result.calculation.total_devices} devices")

        planner.print_report(result)

        if args.output:
            Path(args.output).write_text(result.model_dump_json(indent=2))
            print(f"\n💾 Plan written to {args.output}")

        if args.log_run:
            run = PlanningRunLog().record_plan(run_name, tier.id, result)
            print(f"\n📝 Run logged: {run_name}")
            if run.unplaced_instances:
                print(f"⚠️  Unplaced: {', '.join(run.unplaced_instances)}")

        print("\n✅ Planning complete!\n")
        return 0

    except Exception as e:
        print(f"\n❌ Error during planning: {e}", file=sys.stderr)
        import traceback

        traceback.print_exc()

        if args.log_run:
            PlanningRunLog().record_failure(run_name, tier_id, e)

        return 1


if __name__ == "__main__":
    sys.exit(main())
