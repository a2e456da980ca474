"""Tests for the planner facade."""

from smart_home_planner import SmartHomePlanner
from smart_home_planner.catalog import default_catalog
from smart_home_planner.planner import generate_plan_report


def test_plan_scenario(scenario_floor_plan, basic_tier):
    """Test the full pipeline on the basic scenario."""
    result = SmartHomePlanner().plan(basic_tier, scenario_floor_plan)

    assert result.calculation.total_devices == 24
    assert len(result.optimization.placements) == 24
    assert result.optimization.metrics.total_devices == 24
    assert result.rack_configuration.used_units == 7
    assert result.installation_guide.project_name == "Basic Home Automation Installation"


def test_plan_with_custom_catalog(scenario_floor_plan, basic_tier):
    """Test a planner built on a reduced catalog."""
    catalog = [spec for spec in default_catalog() if "Rack" not in spec.device_name]
    result = SmartHomePlanner(catalog=catalog).plan(basic_tier, scenario_floor_plan)

    assert result.calculation.total_devices == 23
    assert result.optimization.wiring_plan.central_rack_location is None


def test_plan_is_deterministic(scenario_floor_plan, advanced_tier):
    """Test repeated plans serialize identically."""
    planner = SmartHomePlanner()

    first = planner.plan(advanced_tier, scenario_floor_plan)
    second = planner.plan(advanced_tier, scenario_floor_plan)

    assert first.model_dump_json() == second.model_dump_json()


def test_generate_plan_report(scenario_floor_plan, basic_tier):
    """Test the text report lists devices, metrics and recommendations."""
    result = SmartHomePlanner().plan(basic_tier, scenario_floor_plan)

    report = generate_plan_report(result)

    assert "SMART HOME DEVICE PLAN" in report
    assert "Smart Light Switch" in report
    assert "TOTAL DEVICES" in report
    assert "RECOMMENDATIONS:" in report
    assert result.calculation.rationale[0] in report


def test_print_report(scenario_floor_plan, basic_tier, capsys):
    """Test print_report writes the report to stdout."""
    planner = SmartHomePlanner()
    planner.print_report(planner.plan(basic_tier, scenario_floor_plan))

    assert "SMART HOME DEVICE PLAN" in capsys.readouterr().out
