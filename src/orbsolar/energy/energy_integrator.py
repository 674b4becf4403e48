"""
Energy Integrator Module

This module integrates a sequence of evenly spaced power samples over one
day into total energy, peak power and active generation hours.

The samples come from a trajectory whose hour-angle step is constant, so
the time step is dt = |Δh| / 15 hours (15° of hour angle per hour of
Earth rotation). The rectangle rule is the default; the trapezoid rule is
available for comparison.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

import numpy as np


class IntegrationMethod(str, Enum):
    """Supported quadrature rules"""
    RECTANGLE = "rectangle"
    TRAPEZOID = "trapezoid"


@dataclass(frozen=True)
class EnergySummary:
    """Daily energy aggregate for one panel"""
    total_kwh: float      # Total daily energy (kWh)
    peak_w: float         # Maximum instantaneous power (W)
    active_hours: float   # Hours with power output above zero


class EnergyIntegrator:
    """Daily energy integration over trajectory-spaced power samples"""

    EARTH_ROTATION_RATE = 15.0  # degrees of hour angle per hour

    def __init__(self, method: IntegrationMethod = IntegrationMethod.RECTANGLE):
        """
        Initialize energy integrator

        Args:
            method: Quadrature rule for the total energy
        """
        self.method = IntegrationMethod(method)

    @classmethod
    def time_step_hours(cls, hour_angle_step_deg: float) -> float:
        """Convert a constant hour-angle step into hours"""
        return abs(hour_angle_step_deg) / cls.EARTH_ROTATION_RATE

    def integrate(self, powers_w: Optional[Sequence[float]],
                  hour_angle_step_deg: float) -> Optional[EnergySummary]:
        """
        Integrate power samples into a daily energy summary

        Args:
            powers_w: Power output per trajectory point (W)
            hour_angle_step_deg: Constant hour-angle spacing of the samples

        Returns:
            EnergySummary, or None when there are no samples
        """
        if powers_w is None or len(powers_w) == 0:
            return None

        powers = np.asarray(powers_w, dtype=float)
        dt = self.time_step_hours(hour_angle_step_deg)

        if self.method == IntegrationMethod.TRAPEZOID:
            energy_wh = float(np.sum((powers[1:] + powers[:-1]) / 2.0) * dt)
        else:
            energy_wh = float(np.sum(powers) * dt)

        return EnergySummary(
            total_kwh=energy_wh / 1000.0,
            peak_w=float(np.max(powers)),
            active_hours=float(np.count_nonzero(powers > 0.0) * dt)
        )
