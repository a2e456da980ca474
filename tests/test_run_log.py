"""Tests for the planning run log."""

import tempfile

from smart_home_planner import SmartHomePlanner
from smart_home_planner.models import PlanningRun
from smart_home_planner.run_log import (
    PlanningRunLog,
    find_unplaced_instances,
    render_runs_table,
    summarize_plan,
)


def _run(name, tier_id="basic", score=50, coverage=50, cost=1000.0, **kwargs):
    return PlanningRun(
        timestamp="2026-01-01T10:00:00", name=name, tier_id=tier_id,
        overall_score=score, coverage_efficiency=coverage, estimated_cost=cost, **kwargs,
    )


def test_summarize_scenario_plan(scenario_floor_plan, basic_tier):
    """Test a plan summary carries counts, categories and headline metrics."""
    result = SmartHomePlanner().plan(basic_tier, scenario_floor_plan)

    run = summarize_plan("scenario", basic_tier.id, result)

    assert run.calculated_devices == 24
    assert run.placed_devices == 24
    assert run.unplaced_instances == []
    assert run.complete
    assert sum(run.category_quantities.values()) == 24
    assert set(run.category_quantities) == {d.category for d in result.calculation.devices}
    assert run.estimated_cost == result.calculation.estimated_cost
    assert run.rack_units == 7
    assert run.install_minutes == result.installation_guide.total_time


def test_unplaced_instances_are_reported(scenario_floor_plan, basic_tier):
    """Test instances without a placement are listed by name."""
    result = SmartHomePlanner().plan(basic_tier, scenario_floor_plan).model_copy(deep=True)
    removed = result.optimization.placements.pop()

    assert find_unplaced_instances(result) == [removed.instance_name]

    run = summarize_plan("gap", basic_tier.id, result)
    assert run.placed_devices == 23
    assert run.calculated_devices == 24
    assert not run.complete


def test_record_persists_between_instances():
    """Test a new log loads runs written earlier."""
    with tempfile.TemporaryDirectory() as tmpdir:
        PlanningRunLog(log_dir=tmpdir).record(_run("first"))
        PlanningRunLog(log_dir=tmpdir).record(_run("second"))

        reloaded = PlanningRunLog(log_dir=tmpdir)

        assert [run.name for run in reloaded.runs] == ["first", "second"]
        assert len(reloaded.runs_file.read_text().splitlines()) == 2


def test_record_failure():
    """Test a failed run keeps the error and shows in the table."""
    with tempfile.TemporaryDirectory() as tmpdir:
        run_log = PlanningRunLog(log_dir=tmpdir)
        run = run_log.record_failure("broken", "advanced", ValueError("bad floor plan"))

        assert not run.success
        assert run.error == "ValueError: bad floor plan"
        assert run_log.failed_runs() == [run]
        assert "- **broken** failed: ValueError: bad floor plan" in run_log.table_file.read_text()


def test_best_run_skips_incomplete_runs():
    """Test the best run must place every instance and can be filtered by tier."""
    with tempfile.TemporaryDirectory() as tmpdir:
        run_log = PlanningRunLog(log_dir=tmpdir)
        run_log.record(_run("good", score=70))
        run_log.record(_run("gappy", score=95, unplaced_instances=["smoke_detector_3"]))
        run_log.record(_run("cheaper", score=70, cost=500.0))
        run_log.record(_run("advanced", tier_id="advanced", score=80))

        assert run_log.best_run().name == "advanced"
        assert run_log.best_run("basic").name == "cheaper"
        assert run_log.best_run("intermediate") is None
        assert [run.name for run in run_log.incomplete_runs()] == ["gappy"]


def test_render_runs_table():
    """Test the table lists runs newest first with placed counts and gaps."""
    runs = [
        _run("older", calculated_devices=24, placed_devices=24, install_minutes=820,
             category_quantities={"Smart Switches": 10}),
        _run("newer", calculated_devices=5, placed_devices=4, unplaced_instances=["smart_video_doorbell"]),
    ]

    table = render_runs_table(runs)
    rows = [line for line in table.splitlines() if line.startswith("| 2026")]

    assert "| newer | basic | 4/5 |" in rows[0]
    assert "| older | basic | 24/24 | $1,000 | 50 | 50% | 0 | 13h 40m |" in rows[1]
    assert "- **newer** unplaced: smart_video_doorbell" in table
    assert "- Smart Switches: 10" in table
