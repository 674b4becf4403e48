"""
Angle Utilities

Degree-based helpers shared by the solar geometry, panel geometry and
thermal modules.

Azimuth frame used throughout the package: North-referenced, clockwise
positive (0° = North, 90° = East, 180° = South, 270° = West).
"""

import math


def clamp_unit(value: float) -> float:
    """Clamp a trigonometric argument into [-1, 1] before an inverse call"""
    return max(-1.0, min(1.0, value))


def sin_deg(angle_deg: float) -> float:
    return math.sin(math.radians(angle_deg))


def cos_deg(angle_deg: float) -> float:
    return math.cos(math.radians(angle_deg))


def tan_deg(angle_deg: float) -> float:
    return math.tan(math.radians(angle_deg))


def asin_deg(value: float) -> float:
    """Inverse sine in degrees with round-off clamping"""
    return math.degrees(math.asin(clamp_unit(value)))


def acos_deg(value: float) -> float:
    """Inverse cosine in degrees with round-off clamping"""
    return math.degrees(math.acos(clamp_unit(value)))


def normalize_signed(angle_deg: float) -> float:
    """
    Normalize an angle into (-180, 180]

    Args:
        angle_deg: Angle in degrees

    Returns:
        Equivalent angle in the half-open interval (-180, 180]
    """
    while angle_deg > 180.0:
        angle_deg -= 360.0
    while angle_deg <= -180.0:
        angle_deg += 360.0
    return angle_deg


def normalize_positive(angle_deg: float) -> float:
    """Normalize an angle into [0, 360)"""
    angle_deg = angle_deg % 360.0
    # -1e-17 % 360 rounds to 360.0
    if angle_deg >= 360.0:
        angle_deg -= 360.0
    return angle_deg


def zenith_angle(altitude_deg: float) -> float:
    """
    Solar zenith angle θz = 90° - β

    0° means the sun is directly overhead, 90° on the horizon and values
    above 90° below the horizon.
    """
    return 90.0 - altitude_deg


def altitude_from_zenith(zenith_deg: float) -> float:
    """Solar altitude β from the zenith angle"""
    return 90.0 - zenith_deg


def horizontal_incidence_angle(altitude_deg: float) -> float:
    """Incidence angle on a horizontal surface, equal to the zenith angle"""
    return zenith_angle(altitude_deg)
