"""Run history for planning jobs: what was calculated, what was placed, what was left out."""

import json
import logging
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from .models import PlanningRun, PlanResult
from .placement import instance_name

logger = logging.getLogger(__name__)


def find_unplaced_instances(result: PlanResult) -> List[str]:
    """Instance names the calculator asked for that have no placement.

    Instances are matched by catalog id and instance name, so a device listed
    twice with the same name needs two placements per instance.
    """
    placed = Counter((p.device_spec_id, p.instance_name) for p in result.optimization.placements)
    unplaced = []
    for device in result.calculation.devices:
        for index in range(device.quantity):
            key = (device.device_spec_id, instance_name(device.device_name, index))
            if placed[key] > 0:
                placed[key] -= 1
            else:
                unplaced.append(key[1])
    return unplaced


def count_by_category(result: PlanResult) -> Dict[str, int]:
    quantities: Dict[str, int] = {}
    for device in result.calculation.devices:
        quantities[device.category] = quantities.get(device.category, 0) + device.quantity
    return quantities


def summarize_plan(name: str, tier_id: str, result: PlanResult) -> PlanningRun:
    """Build a run record from a finished plan.

    Args:
        name: Run name
        tier_id: Tier the plan was made for
        result: Planner output

    Returns:
        PlanningRun with counts, gaps and headline metrics
    """
    metrics = result.optimization.metrics
    return PlanningRun(
        timestamp=datetime.now().isoformat(timespec="seconds"),
        name=name,
        tier_id=tier_id,
        calculated_devices=result.calculation.total_devices,
        placed_devices=len(result.optimization.placements),
        unplaced_instances=find_unplaced_instances(result),
        category_quantities=count_by_category(result),
        estimated_cost=result.calculation.estimated_cost,
        overall_score=metrics.overall_score,
        coverage_efficiency=metrics.coverage_efficiency,
        rack_units=result.rack_configuration.used_units,
        install_minutes=result.installation_guide.total_time,
    )


def failed_run(name: str, tier_id: str, error: Exception) -> PlanningRun:
    return PlanningRun(
        timestamp=datetime.now().isoformat(timespec="seconds"),
        name=name,
        tier_id=tier_id,
        success=False,
        error=f"{type(error).__name__}: {error}",
    )


class PlanningRunLog:
    """Planning runs stored as JSON lines with a rendered Markdown table."""

    def __init__(self, log_dir: str = "planning_runs"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(exist_ok=True, parents=True)
        self.runs_file = self.log_dir / "runs.jsonl"
        self.table_file = self.log_dir / "runs.md"

        self.runs: List[PlanningRun] = []
        if self.runs_file.exists():
            for line in self.runs_file.read_text().splitlines():
                if line.strip():
                    self.runs.append(PlanningRun.model_validate_json(line))

    def record(self, run: PlanningRun) -> PlanningRun:
        """Append a run and refresh the Markdown table."""
        self.runs.append(run)
        with open(self.runs_file, "a") as f:
            f.write(run.model_dump_json() + "\n")
        self.table_file.write_text(render_runs_table(self.runs))

        if run.unplaced_instances:
            logger.warning(
                "Run %s left %d instance(s) unplaced: %s",
                run.name, len(run.unplaced_instances), ", ".join(run.unplaced_instances),
            )
        return run

    def record_plan(self, name: str, tier_id: str, result: PlanResult) -> PlanningRun:
        return self.record(summarize_plan(name, tier_id, result))

    def record_failure(self, name: str, tier_id: str, error: Exception) -> PlanningRun:
        return self.record(failed_run(name, tier_id, error))

    def failed_runs(self) -> List[PlanningRun]:
        return [run for run in self.runs if not run.success]

    def incomplete_runs(self) -> List[PlanningRun]:
        """Successful runs that could not place every calculated instance."""
        return [run for run in self.runs if run.success and run.unplaced_instances]

    def best_run(self, tier_id: Optional[str] = None) -> Optional[PlanningRun]:
        """Highest-scoring complete run, optionally for one tier.

        Ties go to the higher coverage efficiency, then the lower cost.
        """
        candidates = [
            run for run in self.runs
            if run.complete and (tier_id is None or run.tier_id == tier_id)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: (r.overall_score, r.coverage_efficiency, -r.estimated_cost))


def render_runs_table(runs: List[PlanningRun]) -> str:
    """Markdown table of runs, newest first, with a section per run that has gaps."""
    lines = [
        "# Smart Home Planning Runs",
        "",
        "| Time | Run | Tier | Placed | Cost | Score | Coverage | Rack U | Install |",
        "|---|---|---|---|---|---|---|---|---|",
    ]
    for run in reversed(runs):
        if not run.success:
            lines.append(f"| {run.timestamp} | ❌ {run.name} | {run.tier_id} | - | - | - | - | - | - |")
            continue
        hours, minutes = divmod(run.install_minutes, 60)
        lines.append(
            f"| {run.timestamp} | {run.name} | {run.tier_id} "
            f"| {run.placed_devices}/{run.calculated_devices} | ${run.estimated_cost:,.0f} "
            f"| {run.overall_score} | {run.coverage_efficiency}% | {run.rack_units} | {hours}h {minutes}m |"
        )

    gaps = [run for run in reversed(runs) if not run.complete]
    if gaps:
        lines += ["", "## Issues", ""]
        for run in gaps:
            if not run.success:
                lines.append(f"- **{run.name}** failed: {run.error}")
            else:
                lines.append(f"- **{run.name}** unplaced: {', '.join(run.unplaced_instances)}")

    for run in reversed(runs):
        if run.category_quantities:
            lines += ["", f"## {run.name} ({run.tier_id})", ""]
            for category, quantity in sorted(run.category_quantities.items()):
                lines.append(f"- {category}: {quantity}")

    return "\n".join(lines) + "\n"
