"""
Tests for the savings and payback projection.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from orbsolar.financial import FinancialParameters, FinancialProjector


@pytest.fixture
def projector():
    """1.5 kWh/day at 0.15 $/kWh against a 500 $ system"""
    return FinancialProjector(FinancialParameters(
        tariff_per_kwh=0.15,
        system_cost=500.0,
        degradation_rate=0.0
    ))


class TestProjection:
    """Test the reference projection without degradation"""

    def test_savings_summary(self, projector):
        projection = projector.project(1.5)

        assert projection.daily_savings == pytest.approx(0.225)
        assert projection.monthly_savings == pytest.approx(6.75)
        assert projection.annual_savings == pytest.approx(82.125)
        assert projection.total_savings == pytest.approx(1642.5)

    def test_payback(self, projector):
        """Cash flow turns positive during year 7"""
        projection = projector.project(1.5)

        assert projection.payback_year == 7
        assert projection.payback_years == pytest.approx(6.088, abs=1e-3)
        assert projection.simple_payback_years == pytest.approx(500.0 / 82.125)

    def test_cash_flow_table(self, projector):
        projection = projector.project(1.5)

        assert len(projection.years) == 20
        assert projection.years[0].year == 1
        assert projection.years[0].accumulated_cash_flow == pytest.approx(-500.0 + 82.125)
        assert projection.years[5].accumulated_cash_flow == pytest.approx(-7.25)
        assert projection.years[6].accumulated_cash_flow == pytest.approx(74.875)
        assert projection.final_cash_flow == pytest.approx(1142.5)

    def test_accumulated_is_monotonic(self, projector):
        flows = [entry.accumulated_cash_flow for entry in projector.project(1.5).years]
        assert all(a < b for a, b in zip(flows, flows[1:]))

    def test_no_energy_data(self, projector):
        """A polar day yields no projection"""
        assert projector.project(None) is None


class TestDegradation:
    """Test compounded output degradation"""

    def test_degradation_factor(self):
        projector = FinancialProjector(FinancialParameters(0.15, 500.0, degradation_rate=0.004))
        assert projector.degradation_factor(1) == 1.0
        assert projector.degradation_factor(3) == pytest.approx(0.996 ** 2)

    def test_yearly_savings_decline(self):
        projector = FinancialProjector(FinancialParameters(0.15, 500.0, degradation_rate=0.004))
        years = projector.project(1.5).years

        assert years[0].annual_savings == pytest.approx(82.125)
        assert years[1].annual_savings == pytest.approx(82.125 * 0.996)
        assert all(a.annual_savings > b.annual_savings for a, b in zip(years, years[1:]))


class TestPaybackEdgeCases:
    """Test payback without recovery and with free systems"""

    def test_never_recovered(self, projector):
        projection = projector.project(0.01)
        assert projection.payback_year is None
        assert projection.payback_years is None
        assert projection.final_cash_flow < 0

    def test_zero_energy(self, projector):
        projection = projector.project(0.0)
        assert projection.annual_savings == 0.0
        assert projection.simple_payback_years is None
        assert projection.payback_year is None

    def test_free_system_pays_back_immediately(self):
        projector = FinancialProjector(FinancialParameters(0.15, 0.0))
        projection = projector.project(1.5)
        assert projection.payback_year == 1
        assert projection.payback_years == pytest.approx(0.0)

    def test_custom_horizon(self):
        projector = FinancialProjector(FinancialParameters(0.15, 500.0, projection_years=5))
        assert len(projector.project(1.5).years) == 5


class TestPaybackMonotonicity:
    """Higher tariffs and cheaper systems never delay payback"""

    def test_tariff(self):
        paybacks = [
            FinancialProjector(FinancialParameters(tariff, 500.0, 0.004)).project(1.5).payback_year
            for tariff in (0.05, 0.10, 0.15, 0.25, 0.40)
        ]
        assert None not in paybacks
        assert paybacks == sorted(paybacks, reverse=True)

    def test_system_cost(self):
        paybacks = [
            FinancialProjector(FinancialParameters(0.15, cost, 0.004)).project(1.5).payback_year
            for cost in (900.0, 700.0, 500.0, 300.0, 100.0)
        ]
        assert paybacks == sorted(paybacks, reverse=True)
