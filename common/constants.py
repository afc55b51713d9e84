"""
Geodetic Constants for Transverse Mercator Projection.

This module provides the reference constants with their uncertainty bounds and
sources. All constants are defined with SI units (or degrees for angles) and
traceable to authoritative sources.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- UTM parameters: DMA TM 8358.2, The Universal Grids, 1989
- Series orders: Karney, C.F.F. (2011). Transverse Mercator with an
  accuracy of a few nanometers. J. Geodesy 85(8), 475-485.
"""

from dataclasses import dataclass
from typing import Final, Tuple


@dataclass(frozen=True)
class Constant:
    """A geodetic constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of constants used throughout the projection system.

    All constants are class attributes with full metadata including
    uncertainty bounds and authoritative sources.

    Earth Geometry (WGS84)
    ----------------------
    These constants define the default reference ellipsoid. The WGS84
    ellipsoid is the standard for GPS and UTM.

    Projection Parameters
    ---------------------
    Grid constants of the Universal Transverse Mercator system and the
    truncation order of the Krüger series.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    EARTH_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    EARTH_FLATTENING: Final[Constant] = Constant(
        value=1.0 / 298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Flattening of WGS84 ellipsoid: f = (a - b) / a"
    )

    EARTH_QUARTER_MERIDIAN: Final[Constant] = Constant(
        value=10_001_965.729_312_7,
        uncertainty=1e-7,
        unit="m",
        source="GeographicLib, Geodesic::WGS84()",
        description="Length of the WGS84 meridian from equator to pole"
    )

    # =========================================================================
    # Universal Transverse Mercator
    # Reference: DMA TM 8358.2
    # =========================================================================

    UTM_CENTRAL_SCALE: Final[Constant] = Constant(
        value=0.9996,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="DMA TM 8358.2",
        description="Scale factor on the central meridian of a UTM zone"
    )

    UTM_ZONE_WIDTH: Final[Constant] = Constant(
        value=6.0,
        uncertainty=0.0,
        unit="degree",
        source="DMA TM 8358.2",
        description="Longitudinal width of a UTM zone"
    )

    # =========================================================================
    # Series Configuration
    # Reference: Karney (2011), Table 1
    # =========================================================================

    DEFAULT_SERIES_ORDER: Final[int] = 6
    SUPPORTED_SERIES_ORDERS: Final[Tuple[int, ...]] = (4, 5, 6, 7, 8)

    # Round-trip tolerance in degrees achievable at the default order
    ROUND_TRIP_TOLERANCE: Final[Constant] = Constant(
        value=1e-9,
        uncertainty=0.0,
        unit="degree",
        source="Karney (2011), Table 3",
        description="Angular round-trip error bound at order 6 over the UTM range"
    )


DEFAULT_SERIES_ORDER = GeodeticConstants.DEFAULT_SERIES_ORDER
