"""
Panel Geometry Module

This module provides tools for resolving sun positions against a tilted
panel: wall-solar azimuth, angle of incidence and geometric efficiency.
"""

from .panel_geometry import (
    AzimuthConvention,
    PanelOrientation,
    IncidenceGeometry,
    PanelGeometryResolver,
    to_canonical_azimuth,
    from_canonical_azimuth,
)

__all__ = [
    "AzimuthConvention",
    "PanelOrientation",
    "IncidenceGeometry",
    "PanelGeometryResolver",
    "to_canonical_azimuth",
    "from_canonical_azimuth",
]
