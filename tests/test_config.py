"""
Tests for scenario configuration and report data formats.
"""

import json
import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.config import DataFormats, ScenarioConfig, SimulationConfig
from orbsolar.energy import IntegrationMethod
from orbsolar.panel import AzimuthConvention


@pytest.fixture
def manager():
    return ScenarioConfig()


def _minimal(**overrides):
    data = {
        "scenario_name": "Test",
        "site": {"latitude_deg": 35.0, "date": "2025-06-21"}
    }
    data.update(overrides)
    return data


class TestSimulationConfig:
    """Test configuration models"""

    def test_defaults(self):
        config = SimulationConfig(**_minimal())

        assert config.site.location_name == "Unnamed site"
        assert config.panel.inclination_deg == 30.0
        assert config.panel.azimuth_deg == 180.0
        assert config.panel.azimuth_convention == AzimuthConvention.NORTH_CLOCKWISE
        assert config.thermal.peak_panel_power_w == 300.0
        assert config.financial.tariff_per_kwh == 0.15
        assert config.sample_count == 100
        assert config.integration_method == IntegrationMethod.RECTANGLE

    def test_date_parsed(self):
        config = SimulationConfig(**_minimal())
        assert config.site.date.isoformat() == "2025-06-21"

    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(site={"latitude_deg": 95.0, "date": "2025-06-21"}))

    def test_inclination_range(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(panel={"inclination_deg": 120.0}))

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(scenario_name="   "))

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(orbit={"altitude_km": 500}))

    def test_sample_count_bounds(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(sample_count=0))

    def test_north_azimuth_range(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(panel={"azimuth_deg": 400.0}))

    def test_south_convention(self):
        """South-referenced -90° faces east"""
        config = SimulationConfig(**_minimal(
            panel={"azimuth_deg": -90.0, "azimuth_convention": "south_clockwise"}
        ))
        assert config.panel.to_orientation().azimuth_deg == pytest.approx(90.0)

    def test_south_azimuth_range(self):
        with pytest.raises(ValidationError):
            SimulationConfig(**_minimal(
                panel={"azimuth_deg": 270.0, "azimuth_convention": "south_clockwise"}
            ))

    def test_degradation_defaults_to_thermal_coefficient(self):
        config = SimulationConfig(**_minimal(thermal={"temp_derate_coefficient": 0.005}))
        assert config.financial_parameters().degradation_rate == pytest.approx(0.005)

    def test_explicit_degradation(self):
        config = SimulationConfig(**_minimal(financial={"degradation_rate": 0.0}))
        assert config.financial_parameters().degradation_rate == 0.0


class TestScenarioConfig:
    """Test the configuration manager"""

    def test_templates(self, manager):
        templates = manager.list_templates()
        for name in ("Equator_Equinox", "Mexico_City_Summer", "Madrid_Winter", "Polar_Night"):
            assert name in templates
            assert manager.create_from_template(name).scenario_name == name

    def test_unknown_template(self, manager):
        with pytest.raises(ValueError):
            manager.create_from_template("Atlantis")

    def test_template_override_merges(self, manager):
        config = manager.create_from_template("Mexico_City_Summer", site={"latitude_deg": 10.0})

        assert config.site.latitude_deg == 10.0
        assert config.site.location_name == "Mexico City"
        assert config.site.date.isoformat() == "2025-06-21"

    def test_overrides_do_not_leak(self, manager):
        manager.create_from_template("Mexico_City_Summer", site={"latitude_deg": 10.0})
        assert manager.create_from_template("Mexico_City_Summer").site.latitude_deg == 19.43

    @pytest.mark.parametrize("suffix,fmt", [(".json", "json"), (".yaml", "yaml")])
    def test_save_and_load(self, manager, tmp_path, suffix, fmt):
        config = manager.create_from_template("Madrid_Winter")
        path = tmp_path / f"scenario{suffix}"

        manager.save_config(config, str(path), format=fmt)
        loaded = manager.load_config(str(path))

        assert loaded == config
        assert manager.config == loaded

    def test_load_missing_file(self, manager, tmp_path):
        with pytest.raises(FileNotFoundError):
            manager.load_config(str(tmp_path / "missing.json"))

    def test_load_invalid_file(self, manager, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"scenario_name": "Bad"}))
        with pytest.raises(ValueError):
            manager.load_config(str(path))

    def test_schema(self, manager):
        schema = manager.get_config_schema()
        assert "site" in schema["properties"]
        assert "scenario_name" in schema["required"]

    def test_summary(self, manager):
        summary = manager.generate_config_summary(manager.create_from_template("Madrid_Winter"))

        assert summary["panel"]["azimuth_deg"] == pytest.approx(180.0)
        assert summary["panel"]["input_azimuth_deg"] == 0.0
        assert summary["panel"]["azimuth_convention"] == "south_clockwise"
        assert summary["financial"]["degradation_rate"] == pytest.approx(0.004)
        assert summary["thermal"]["thermal_coefficient"] == pytest.approx(0.03)

    def test_compare_configs(self, manager):
        a = manager.create_from_template("Mexico_City_Summer")
        b = manager.create_from_template("Mexico_City_Summer", panel={"inclination_deg": 35.0})

        differences = manager.compare_configs(a, b)

        assert list(differences) == ["panel.inclination_deg"]
        assert differences["panel.inclination_deg"] == {"config1": 20.0, "config2": 35.0}


class TestFeasibility:
    """Test scenario feasibility checks"""

    def test_reasonable_scenario(self, manager):
        result = manager.validate_site_feasibility(manager.create_from_template("Mexico_City_Summer"))
        assert result["feasible"]
        assert result["issues"] == []
        assert result["warnings"] == []

    def test_polar_night_warns(self, manager):
        result = manager.validate_site_feasibility(manager.create_from_template("Polar_Night"))
        assert result["feasible"]
        assert any("does not rise" in w for w in result["warnings"])

    def test_panel_facing_away_from_equator(self, manager):
        config = manager.create_from_template("Mexico_City_Summer", panel={"azimuth_deg": 0.0})
        result = manager.validate_site_feasibility(config)
        assert any("away from the equator" in w for w in result["warnings"])

    def test_southern_hemisphere_north_facing_is_fine(self, manager):
        config = SimulationConfig(**_minimal(
            site={"latitude_deg": -33.9, "date": "2025-01-15"},
            panel={"inclination_deg": 30.0, "azimuth_deg": 0.0}
        ))
        result = manager.validate_site_feasibility(config)
        assert not any("equator" in w for w in result["warnings"])

    def test_coarse_sampling(self, manager):
        config = manager.create_from_template("Mexico_City_Summer", sample_count=10)
        result = manager.validate_site_feasibility(config)
        assert any("coarse" in w for w in result["warnings"])

    def test_single_point_is_infeasible(self, manager):
        config = manager.create_from_template("Mexico_City_Summer", sample_count=1)
        result = manager.validate_site_feasibility(config)
        assert not result["feasible"]
        assert len(result["issues"]) == 1

    def test_zero_tariff(self, manager):
        config = manager.create_from_template("Mexico_City_Summer", financial={"tariff_per_kwh": 0.0})
        result = manager.validate_site_feasibility(config)
        assert any("tariff" in w.lower() for w in result["warnings"])


class TestDataFormats:
    """Test report record formats"""

    @pytest.fixture
    def formats(self):
        return DataFormats()

    @pytest.fixture
    def row(self):
        return {
            "index": 1,
            "solar_time": "06:00",
            "hour_angle_deg": -90.0,
            "altitude_deg": 0.0,
            "azimuth_deg": 90.0,
            "wall_solar_azimuth_deg": -90.0,
            "incidence_angle_deg": 90.0,
            "efficiency_pct": 0.0,
            "incident_radiation_wm2": 0.0,
            "panel_temp_c": 25.0,
            "power_output_w": 0.0
        }

    def test_valid_row(self, formats, row):
        assert formats.validate_data("trajectory", row)
        assert formats.validate_data("trajectory", [row, row])

    def test_invalid_rows(self, formats, row):
        assert not formats.validate_data("trajectory", dict(row, solar_time="6:00"))
        assert not formats.validate_data("trajectory", dict(row, efficiency_pct=120.0))
        assert not formats.validate_data("trajectory", dict(row, azimuth_deg=360.0))

    def test_unknown_type(self, formats):
        with pytest.raises(ValueError):
            formats.validate_data("orbit", {})

    def test_dataframe_columns(self, formats, row):
        df = formats.convert_to_dataframe("trajectory", [row])
        assert list(df.columns) == list(formats.schemas["trajectory"].fields)

        headed = formats.convert_to_dataframe("trajectory", [row], use_headers=True)
        assert "Solar time" in headed.columns

    def test_empty_dataframe(self, formats):
        df = formats.convert_to_dataframe("energy", [])
        assert df.empty
        assert list(df.columns) == ["total_kwh", "peak_w", "active_hours"]

    def test_invalid_dataframe(self, formats):
        with pytest.raises(ValueError):
            formats.convert_to_dataframe("energy", [{"total_kwh": -1.0, "peak_w": 0.0, "active_hours": 0.0}])

    def test_csv_import(self, formats, row, tmp_path):
        path = tmp_path / "rows.csv"
        formats.convert_to_dataframe("trajectory", [row]).to_csv(path, index=False)

        imported = formats.import_from_format("trajectory", str(path), "csv")
        assert imported[0]["solar_time"] == "06:00"
        assert imported[0]["azimuth_deg"] == 90.0

    def test_schema_info(self, formats):
        info = formats.get_schema_info("financial")
        assert info["fields"] == ["year", "annual_savings", "accumulated_cash_flow"]
        assert info["field_types"]["year"] == "int"

    def test_statistics(self, formats):
        data = [
            {"year": 1, "annual_savings": 80.0, "accumulated_cash_flow": -420.0},
            {"year": 2, "annual_savings": 79.0, "accumulated_cash_flow": -341.0}
        ]
        stats = formats.get_data_statistics("financial", data)
        assert stats["total_records"] == 2
        assert stats["field_statistics"]["annual_savings"]["mean"] == pytest.approx(79.5)
