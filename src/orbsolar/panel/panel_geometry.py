"""
Panel Geometry Module

This module resolves the sun's position against an arbitrarily oriented
flat panel. It computes the wall-solar azimuth ψ, the angle of incidence θ
between the sunlight and the panel normal, and the geometric collection
efficiency η.

Azimuth frame: every function in this module expects North-referenced,
clockwise-positive azimuths (0° = North, 90° = East, 180° = South,
270° = West). Callers working in the south-referenced convention
(0° = South, +90° = West, -90° = East) convert at the boundary with
to_canonical_azimuth() or PanelOrientation.from_convention().

References:
- "Solar Engineering of Thermal Processes" - Duffie & Beckman, ch. 1.6
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from ..solar.angles import (
    acos_deg,
    cos_deg,
    normalize_positive,
    normalize_signed,
    sin_deg,
)
from ..solar.solar_position import SolarTrajectory, TrajectoryPoint


class AzimuthConvention(str, Enum):
    """Supported azimuth reference frames"""
    NORTH_CLOCKWISE = "north_clockwise"  # 0° = N, 90° = E, 180° = S
    SOUTH_CLOCKWISE = "south_clockwise"  # 0° = S, 90° = W, -90° = E


def to_canonical_azimuth(azimuth_deg: float,
                         convention: AzimuthConvention = AzimuthConvention.NORTH_CLOCKWISE) -> float:
    """
    Convert an azimuth into the North-referenced clockwise frame

    Args:
        azimuth_deg: Azimuth in the given convention
        convention: Frame the azimuth is expressed in

    Returns:
        Azimuth in [0, 360), North-referenced clockwise
    """
    if AzimuthConvention(convention) == AzimuthConvention.SOUTH_CLOCKWISE:
        return normalize_positive(azimuth_deg + 180.0)
    return normalize_positive(azimuth_deg)


def from_canonical_azimuth(azimuth_deg: float,
                           convention: AzimuthConvention = AzimuthConvention.NORTH_CLOCKWISE) -> float:
    """
    Convert a North-referenced azimuth into another convention

    South-referenced results are returned in (-180, 180].
    """
    if AzimuthConvention(convention) == AzimuthConvention.SOUTH_CLOCKWISE:
        return normalize_signed(azimuth_deg - 180.0)
    return normalize_positive(azimuth_deg)


@dataclass(frozen=True)
class PanelOrientation:
    """Panel tilt and facing direction"""
    inclination_deg: float  # α, tilt from horizontal [0, 90]
    azimuth_deg: float      # Facing direction, North-referenced clockwise

    @classmethod
    def from_convention(cls, inclination_deg: float, azimuth_deg: float,
                        convention: AzimuthConvention) -> "PanelOrientation":
        """Build an orientation from an azimuth in any supported convention"""
        return cls(
            inclination_deg=inclination_deg,
            azimuth_deg=to_canonical_azimuth(azimuth_deg, convention)
        )

    @classmethod
    def facing_sun(cls, altitude_deg: float, azimuth_deg: float) -> "PanelOrientation":
        """Orientation whose normal points straight at the given sun position"""
        return cls(inclination_deg=90.0 - altitude_deg, azimuth_deg=azimuth_deg)


@dataclass(frozen=True)
class IncidenceGeometry:
    """Angular relationship between the sun and the panel"""
    wall_solar_azimuth_deg: float  # ψ, (-180, 180]
    incidence_angle_deg: float     # θ, [0, 180]
    efficiency_pct: float          # η, [0, 100]


class PanelGeometryResolver:
    """
    Resolves sun positions against a panel orientation.

    Features:
    - Wall-solar azimuth normalization
    - Angle of incidence on a tilted surface
    - Cosine-law geometric efficiency
    - Whole-trajectory resolution with polar-day propagation
    """

    @staticmethod
    def wall_solar_azimuth(sun_azimuth_deg: float, panel_azimuth_deg: float) -> float:
        """
        Wall-solar azimuth ψ = γ_sun - γ_panel normalized into (-180, 180]

        Args:
            sun_azimuth_deg: Solar azimuth γ
            panel_azimuth_deg: Panel facing azimuth

        Returns:
            ψ in degrees
        """
        return normalize_signed(sun_azimuth_deg - panel_azimuth_deg)

    @staticmethod
    def incidence_angle(altitude_deg: float, inclination_deg: float,
                        wall_solar_azimuth_deg: float) -> float:
        """
        Angle of incidence θ on a tilted panel

        cos(θ) = sin(β)cos(α) + cos(β)sin(α)cos(ψ)

        θ = 0 means the sun is normal to the panel; θ >= 90 means the sun
        is behind the panel plane.

        Returns:
            θ in degrees, [0, 180]
        """
        cos_theta = (sin_deg(altitude_deg) * cos_deg(inclination_deg) +
                     cos_deg(altitude_deg) * sin_deg(inclination_deg) * cos_deg(wall_solar_azimuth_deg))
        return acos_deg(cos_theta)

    @staticmethod
    def efficiency(incidence_angle_deg: float) -> float:
        """
        Geometric collection efficiency η = max(0, cos θ) · 100

        Returns:
            Efficiency in percent, exactly 0 for θ >= 90
        """
        if incidence_angle_deg >= 90.0:
            return 0.0
        return max(0.0, cos_deg(incidence_angle_deg)) * 100.0

    def resolve_position(self, altitude_deg: float, azimuth_deg: float,
                         orientation: PanelOrientation) -> IncidenceGeometry:
        """
        Resolve a single sun position against a panel

        Args:
            altitude_deg: Solar altitude β
            azimuth_deg: Solar azimuth γ, North-referenced clockwise
            orientation: Panel orientation

        Returns:
            IncidenceGeometry for this position
        """
        psi = self.wall_solar_azimuth(azimuth_deg, orientation.azimuth_deg)
        theta = self.incidence_angle(altitude_deg, orientation.inclination_deg, psi)
        return IncidenceGeometry(
            wall_solar_azimuth_deg=psi,
            incidence_angle_deg=theta,
            efficiency_pct=self.efficiency(theta)
        )

    def resolve(self, point: TrajectoryPoint, orientation: PanelOrientation) -> IncidenceGeometry:
        """Resolve one trajectory point against a panel"""
        return self.resolve_position(point.altitude_deg, point.azimuth_deg, orientation)

    def resolve_trajectory(self, trajectory: Optional[SolarTrajectory],
                           orientation: PanelOrientation) -> Optional[Tuple[IncidenceGeometry, ...]]:
        """
        Resolve every point of a trajectory

        Returns:
            One IncidenceGeometry per point, or None when the trajectory is
            absent (polar day or night)
        """
        if trajectory is None:
            return None
        return tuple(self.resolve(point, orientation) for point in trajectory.points)

    def evaluate_free_mode(self, altitude_deg: float, azimuth_deg: float,
                           orientation: PanelOrientation,
                           convention: AzimuthConvention = AzimuthConvention.NORTH_CLOCKWISE) -> IncidenceGeometry:
        """
        Evaluate a manually placed sun against a panel

        The sun azimuth may be given in either convention; the panel
        orientation is always canonical.
        """
        return self.resolve_position(
            altitude_deg,
            to_canonical_azimuth(azimuth_deg, convention),
            orientation
        )
