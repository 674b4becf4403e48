"""
Day Simulation Module

This module chains the solar position, panel geometry, thermal/power and
energy stages into a single per-day result for one panel orientation. It
also produces the flat row-oriented view consumed by exporters and the
HTTP API.

Results are memoized by their full input tuple. Every stage is pure, so a
cached result is identical to a recomputed one.

When the sun does not rise or set on the requested day, simulate_day()
returns None; no partial result is produced.
"""

from dataclasses import dataclass
from datetime import date
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from ..energy.energy_integrator import EnergyIntegrator, EnergySummary, IntegrationMethod
from ..panel.panel_geometry import PanelGeometryResolver, PanelOrientation
from ..solar.solar_position import (
    SIMULATION_SAMPLE_COUNT,
    SolarTrajectory,
    TrajectoryPoint,
    compute_trajectory,
)
from ..thermal.thermal_power import ThermalConstants, ThermalPowerModel


REPORT_FIELDS = (
    "index",
    "solar_time",
    "hour_angle_deg",
    "altitude_deg",
    "azimuth_deg",
    "wall_solar_azimuth_deg",
    "incidence_angle_deg",
    "efficiency_pct",
    "incident_radiation_wm2",
    "panel_temp_c",
    "power_output_w",
)


@dataclass(frozen=True)
class IncidenceSample:
    """Panel response at one trajectory point"""
    wall_solar_azimuth_deg: float  # ψ
    incidence_angle_deg: float     # θ
    efficiency_pct: float          # η
    incident_radiation_wm2: float  # I
    panel_temp_c: float            # Tt
    power_output_w: float          # Pt


@dataclass(frozen=True)
class DaySimulationResult:
    """Trajectory, per-point panel response and daily energy for one day"""
    trajectory: SolarTrajectory
    orientation: PanelOrientation
    samples: Tuple[IncidenceSample, ...]
    energy: EnergySummary

    @property
    def powers_w(self) -> List[float]:
        return [sample.power_output_w for sample in self.samples]

    def iter_points(self):
        """Yield (TrajectoryPoint, IncidenceSample) pairs in order"""
        return zip(self.trajectory.points, self.samples)

    def to_rows(self) -> List[Dict[str, Any]]:
        """
        Flat per-point view combining geometry and panel response

        Returns:
            One dictionary per trajectory point with REPORT_FIELDS keys
        """
        return [_build_row(point, sample) for point, sample in self.iter_points()]


def _build_row(point: TrajectoryPoint, sample: IncidenceSample) -> Dict[str, Any]:
    return {
        "index": point.index,
        "solar_time": point.solar_time_label,
        "hour_angle_deg": point.hour_angle_deg,
        "altitude_deg": point.altitude_deg,
        "azimuth_deg": point.azimuth_deg,
        "wall_solar_azimuth_deg": sample.wall_solar_azimuth_deg,
        "incidence_angle_deg": sample.incidence_angle_deg,
        "efficiency_pct": sample.efficiency_pct,
        "incident_radiation_wm2": sample.incident_radiation_wm2,
        "panel_temp_c": sample.panel_temp_c,
        "power_output_w": sample.power_output_w,
    }


class DaySimulator:
    """
    Runs the per-day pipeline for one panel and thermal configuration.

    Stages:
    1. Solar trajectory for (date, latitude, sample count)
    2. Wall-solar azimuth, incidence and efficiency per point
    3. Radiation, panel temperature and power per point
    4. Daily energy integration
    """

    def __init__(self, orientation: PanelOrientation,
                 thermal_constants: Optional[ThermalConstants] = None,
                 method: IntegrationMethod = IntegrationMethod.RECTANGLE):
        """
        Initialize day simulator

        Args:
            orientation: Panel orientation (canonical azimuth frame)
            thermal_constants: Ambient conditions and panel ratings
            method: Energy quadrature rule
        """
        self.orientation = orientation
        self.resolver = PanelGeometryResolver()
        self.thermal_model = ThermalPowerModel(thermal_constants)
        self.integrator = EnergyIntegrator(method)

    def sample(self, trajectory: SolarTrajectory, point: TrajectoryPoint) -> IncidenceSample:
        """Evaluate the panel response at one trajectory point"""
        geometry = self.resolver.resolve(point, self.orientation)
        thermal = self.thermal_model.evaluate(
            trajectory.day_of_year,
            geometry.incidence_angle_deg,
            point.altitude_deg
        )
        return IncidenceSample(
            wall_solar_azimuth_deg=geometry.wall_solar_azimuth_deg,
            incidence_angle_deg=geometry.incidence_angle_deg,
            efficiency_pct=geometry.efficiency_pct,
            incident_radiation_wm2=thermal.incident_radiation_wm2,
            panel_temp_c=thermal.panel_temp_c,
            power_output_w=thermal.power_output_w
        )

    def run(self, trajectory: Optional[SolarTrajectory]) -> Optional[DaySimulationResult]:
        """
        Evaluate a full trajectory

        Returns:
            DaySimulationResult, or None when the trajectory is absent
        """
        if trajectory is None:
            return None

        samples = tuple(self.sample(trajectory, point) for point in trajectory.points)
        energy = self.integrator.integrate(
            [s.power_output_w for s in samples],
            trajectory.hour_angle_step_deg
        )
        if energy is None:
            return None

        return DaySimulationResult(
            trajectory=trajectory,
            orientation=self.orientation,
            samples=samples,
            energy=energy
        )


@lru_cache(maxsize=64)
def simulate_day(day: date, latitude_deg: float, orientation: PanelOrientation,
                 sample_count: int = SIMULATION_SAMPLE_COUNT,
                 thermal_constants: ThermalConstants = ThermalConstants(),
                 method: IntegrationMethod = IntegrationMethod.RECTANGLE) -> Optional[DaySimulationResult]:
    """
    Cached per-day simulation keyed by every input

    Args:
        day: Calendar date
        latitude_deg: Observer latitude
        orientation: Panel orientation
        sample_count: Trajectory points
        thermal_constants: Ambient conditions and panel ratings
        method: Energy quadrature rule

    Returns:
        DaySimulationResult, or None for a polar day or night
    """
    trajectory = compute_trajectory(day, latitude_deg, sample_count)
    return DaySimulator(orientation, thermal_constants, method).run(trajectory)


def clear_caches() -> None:
    """Drop every memoized trajectory and day simulation"""
    compute_trajectory.cache_clear()
    simulate_day.cache_clear()
