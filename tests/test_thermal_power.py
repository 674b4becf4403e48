"""
Tests for radiation, panel temperature and power output.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.thermal import ThermalConstants, ThermalPowerModel


@pytest.fixture
def model():
    return ThermalPowerModel()


def test_default_constants(model):
    """Default panel and ambient values"""
    constants = model.constants
    assert constants.ambient_temp_c == 25.0
    assert constants.peak_panel_power_w == 300.0
    assert constants.temp_derate_coefficient == 0.004
    assert constants.thermal_coefficient == pytest.approx(0.03)


def test_wind_coefficient_override():
    """An explicit k replaces τα/U_L"""
    constants = ThermalConstants(wind_coefficient=0.05)
    assert constants.thermal_coefficient == 0.05


def test_extraterrestrial_irradiance():
    """I0 varies ±3.3% around the solar constant"""
    assert ThermalPowerModel.extraterrestrial_irradiance(365) == pytest.approx(1367 * 1.033)
    for n in range(1, 366, 7):
        value = ThermalPowerModel.extraterrestrial_irradiance(n)
        assert 1367 * 0.967 - 1e-9 <= value <= 1367 * 1.033 + 1e-9


def test_air_mass():
    """Air mass is ~1 overhead and absent at or below the horizon"""
    assert ThermalPowerModel.air_mass(90.0) == pytest.approx(1.0, abs=1e-3)
    assert ThermalPowerModel.air_mass(30.0) > ThermalPowerModel.air_mass(60.0)
    assert ThermalPowerModel.air_mass(0.0) is None
    assert ThermalPowerModel.air_mass(-5.0) is None


class TestIncidentRadiation:
    """Test beam radiation on the panel plane"""

    def test_zero_with_sun_down(self, model):
        assert model.incident_radiation(172, 10.0, 0.0) == 0.0
        assert model.incident_radiation(172, 10.0, -3.0) == 0.0

    def test_zero_behind_panel(self, model):
        assert model.incident_radiation(172, 90.0, 45.0) == 0.0
        assert model.incident_radiation(172, 120.0, 45.0) == 0.0

    def test_decreases_with_incidence(self, model):
        """Radiation falls monotonically as θ grows"""
        values = [model.incident_radiation(172, theta, 60.0) for theta in range(0, 90, 5)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_decreases_toward_horizon(self, model):
        """Radiation falls as the sun sinks"""
        values = [model.incident_radiation(172, 0.0, beta) for beta in (80.0, 60.0, 40.0, 20.0, 5.0)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_below_extraterrestrial(self, model):
        """The atmosphere always attenuates the beam"""
        assert model.incident_radiation(1, 0.0, 90.0) < ThermalPowerModel.extraterrestrial_irradiance(1)


class TestPowerOutput:
    """Test panel temperature and derated power"""

    def test_panel_temperature(self, model):
        """Tt = Ta + k·I"""
        assert model.panel_temperature(0.0) == pytest.approx(25.0)
        assert model.panel_temperature(1000.0) == pytest.approx(55.0)

    def test_derated_power(self, model):
        """30 °C above STC loses 12% at the default coefficient"""
        assert model.power_output(55.0, 1000.0) == pytest.approx(264.0)

    def test_no_derate_below_stc_temperature(self, model):
        assert model.power_output(20.0, 1000.0) == pytest.approx(300.0)

    def test_proportional_to_irradiance(self, model):
        assert model.power_output(25.0, 500.0) == pytest.approx(150.0)

    def test_clamped_at_zero(self):
        """Excessive derating never produces negative power"""
        model = ThermalPowerModel(ThermalConstants(temp_derate_coefficient=0.05))
        assert model.power_output(55.0, 1000.0) == 0.0

    def test_evaluate(self, model):
        """Evaluate chains radiation, temperature and power"""
        sample = model.evaluate(172, 20.0, 70.0)
        expected_radiation = model.incident_radiation(172, 20.0, 70.0)

        assert sample.incident_radiation_wm2 == pytest.approx(expected_radiation)
        assert sample.panel_temp_c == pytest.approx(25.0 + 0.03 * expected_radiation)
        assert sample.power_output_w == pytest.approx(
            model.power_output(sample.panel_temp_c, expected_radiation)
        )

    def test_evaluate_sun_down(self, model):
        sample = model.evaluate(172, 10.0, 0.0)
        assert sample.incident_radiation_wm2 == 0.0
        assert sample.panel_temp_c == pytest.approx(25.0)
        assert sample.power_output_w == 0.0
