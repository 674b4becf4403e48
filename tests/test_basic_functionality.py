"""
Basic functionality tests for the solar yield model facade.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.main import SolarYieldModel
from orbsolar.panel import AzimuthConvention


@pytest.fixture
def model():
    model = SolarYieldModel()
    assert model.create_scenario_from_template("Mexico_City_Summer")
    return model


class TestModelSetup:
    """Test scenario loading"""

    def test_uninitialized(self):
        """Running without a scenario is an error"""
        model = SolarYieldModel()
        with pytest.raises(ValueError):
            model.run_simulation()
        assert model.get_summary() == {"status": "No simulation completed"}
        assert model.get_configuration_info() == {"status": "No configuration loaded"}
        assert not model.validate_configuration()["feasible"]

    def test_template_with_overrides(self):
        """Template overrides reach the configuration"""
        model = SolarYieldModel()
        assert model.create_scenario_from_template("Mexico_City_Summer", panel={"inclination_deg": 35.0})
        assert model.config.panel.inclination_deg == 35.0

    def test_unknown_template(self):
        model = SolarYieldModel()
        assert not model.create_scenario_from_template("Atlantis")
        assert not model.is_initialized

    def test_missing_file(self, tmp_path):
        assert not SolarYieldModel().load_scenario(str(tmp_path / "missing.yaml"))

    def test_templates_listed(self, model):
        assert "Madrid_Winter" in model.list_available_templates()

    def test_configuration_info(self, model):
        info = model.get_configuration_info()
        assert info["site"]["location_name"] == "Mexico City"


class TestSimulation:
    """Test full simulation runs"""

    def test_run(self, model):
        report = model.run_simulation()

        assert model.is_simulation_complete
        assert report.has_data
        assert report.day.energy.total_kwh > 0

    def test_summary(self, model):
        model.run_simulation()
        summary = model.get_summary()

        assert summary["scenario"]["name"] == "Mexico_City_Summer"
        assert summary["has_data"]
        assert summary["simulation"]["data_points"] == 100
        assert summary["energy"]["total_kwh"] == pytest.approx(model.report.day.energy.total_kwh)
        assert summary["financial"]["payback_year"] == model.report.financial.payback_year

    def test_polar_night(self):
        model = SolarYieldModel()
        model.create_scenario_from_template("Polar_Night")
        report = model.run_simulation()

        assert not report.has_data
        assert model.get_summary()["energy"] is None

    def test_new_scenario_resets_results(self, model):
        model.run_simulation()
        model.create_scenario_from_template("Madrid_Winter")

        assert model.report is None
        assert not model.is_simulation_complete


class TestFreeMode:
    """Test manual sun placement"""

    def test_sun_normal_to_panel(self, model):
        result = model.evaluate_free_mode(45.0, 180.0, 45.0, 180.0)

        assert result["wall_solar_azimuth_deg"] == pytest.approx(0.0)
        assert result["efficiency_pct"] == pytest.approx(100.0)

    def test_south_convention(self, model):
        """Both azimuths in the south frame: sun in the west, panel facing south"""
        result = model.evaluate_free_mode(0.0, 90.0, 90.0, 0.0, AzimuthConvention.SOUTH_CLOCKWISE)

        assert result["wall_solar_azimuth_deg"] == pytest.approx(90.0)
        assert result["incidence_angle_deg"] == pytest.approx(90.0)
        assert result["efficiency_pct"] == pytest.approx(0.0, abs=1e-9)


class TestOutputs:
    """Test plots, exports and comparisons"""

    def test_plots_require_simulation(self, model):
        with pytest.raises(ValueError):
            model.plot_results()

    def test_plots(self, model, tmp_path):
        model.run_simulation()
        plots = model.plot_results(["sun_path", "power_curve", "unknown"], save_path=str(tmp_path))

        assert set(plots) == {"sun_path", "power_curve"}
        assert (tmp_path / "sun_path.html").exists()

    def test_export(self, model, tmp_path):
        model.run_simulation()

        assert model.export_results(str(tmp_path), ["csv", "excel"])
        assert (tmp_path / "Mexico_City_Summer_config.json").exists()
        assert any(tmp_path.glob("report_Mexico_City_Summer_*/data.xlsx"))

    def test_export_unknown_format(self, model, tmp_path):
        model.run_simulation()
        assert not model.export_results(str(tmp_path), ["docx"])

    def test_compare_scenarios(self, model):
        results = model.compare_scenarios({
            "equator": "Equator_Equinox",
            "madrid": "Madrid_Winter"
        })

        assert set(results) == {"equator", "madrid", "comparison_plot"}
        assert results["equator"].day.energy.total_kwh > results["madrid"].day.energy.total_kwh
