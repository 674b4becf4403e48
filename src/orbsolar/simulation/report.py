"""
Simulation Report Module

Runs a validated scenario through the per-day pipeline and the financial
projection, and packages everything the exporters need: header metadata,
per-point rows, the daily energy summary and the yearly cash flow.

A polar day or night yields a report without data rather than an error.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..config.data_formats import ReportMetadata
from ..config.scenario_config import SimulationConfig
from ..financial.financial_projector import FinancialProjection, FinancialProjector
from .day_simulation import DaySimulationResult, simulate_day


@dataclass(frozen=True)
class SimulationReport:
    """Complete result of one scenario"""
    scenario_name: str
    metadata: ReportMetadata
    day: Optional[DaySimulationResult]
    financial: Optional[FinancialProjection]

    @property
    def has_data(self) -> bool:
        return self.day is not None

    def rows(self) -> List[Dict[str, Any]]:
        """Per-point report rows, empty without data"""
        return self.day.to_rows() if self.day is not None else []

    def energy_dict(self) -> Optional[Dict[str, float]]:
        if self.day is None:
            return None
        energy = self.day.energy
        return {
            "total_kwh": energy.total_kwh,
            "peak_w": energy.peak_w,
            "active_hours": energy.active_hours
        }

    def financial_rows(self) -> List[Dict[str, Any]]:
        if self.financial is None:
            return []
        return [
            {
                "year": entry.year,
                "annual_savings": entry.annual_savings,
                "accumulated_cash_flow": entry.accumulated_cash_flow
            }
            for entry in self.financial.years
        ]

    def financial_summary(self) -> Optional[Dict[str, Any]]:
        if self.financial is None:
            return None
        projection = self.financial
        return {
            "daily_savings": projection.daily_savings,
            "monthly_savings": projection.monthly_savings,
            "annual_savings": projection.annual_savings,
            "total_savings": projection.total_savings,
            "payback_year": projection.payback_year,
            "payback_years": projection.payback_years,
            "simple_payback_years": projection.simple_payback_years,
            "final_cash_flow": projection.final_cash_flow
        }

    def trajectory_summary(self) -> Optional[Dict[str, Any]]:
        if self.day is None:
            return None
        trajectory = self.day.trajectory
        return {
            "day_of_year": trajectory.day_of_year,
            "declination_deg": trajectory.declination_deg,
            "sunrise": trajectory.sunrise_label,
            "sunset": trajectory.sunset_label,
            "day_length_hours": trajectory.day_length_hours,
            "peak_altitude_deg": trajectory.peak_altitude_deg,
            "hour_angle_step_deg": trajectory.hour_angle_step_deg
        }

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready view of the whole report"""
        return {
            "scenario_name": self.scenario_name,
            "metadata": self.metadata.model_dump(),
            "has_data": self.has_data,
            "trajectory": self.trajectory_summary(),
            "rows": self.rows(),
            "energy": self.energy_dict(),
            "financial": {
                "summary": self.financial_summary(),
                "years": self.financial_rows()
            } if self.financial is not None else None
        }


def build_metadata(config: SimulationConfig) -> ReportMetadata:
    orientation = config.panel.to_orientation()
    return ReportMetadata(
        location_label=config.site.location_name,
        date=config.site.date.isoformat(),
        latitude_deg=config.site.latitude_deg,
        longitude_deg=config.site.longitude_deg,
        panel_inclination_deg=orientation.inclination_deg,
        panel_azimuth_deg=orientation.azimuth_deg,
        sample_count=config.sample_count
    )


def run_scenario(config: SimulationConfig) -> SimulationReport:
    """
    Simulate one configured day and project its savings

    Args:
        config: Validated simulation configuration

    Returns:
        SimulationReport; day and financial are None when the sun does not
        rise or set on the configured date
    """
    day = simulate_day(
        config.site.date,
        config.site.latitude_deg,
        config.panel.to_orientation(),
        config.sample_count,
        config.thermal.to_constants(),
        config.integration_method
    )

    projector = FinancialProjector(config.financial_parameters())
    financial = projector.project(day.energy.total_kwh if day is not None else None)

    return SimulationReport(
        scenario_name=config.scenario_name,
        metadata=build_metadata(config),
        day=day,
        financial=financial
    )
