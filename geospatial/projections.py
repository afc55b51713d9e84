"""
Projection Interface for Transverse Mercator Engines.

This module defines the interface shared by the series engine
(:class:`geospatial.transverse_mercator.TransverseMercator`) and the
exact engine it can delegate to
(:class:`geospatial.exact_engine.EllipticTransverseMercator`), plus small
helpers for UTM zone geometry and PROJ definition strings. Every engine
exposes its equivalent `pyproj` CRS so results can be handed to other
PROJ-based tools.

All angles are in degrees. Forward results carry the meridian convergence
and the point scale alongside the coordinates, because downstream users
(bearings on the grid, distance corrections) need them at the same point.
"""

from abc import ABC, abstractmethod

from pyproj import CRS

from common.constants import GeodeticConstants
from common.types import GeographicResult, ProjectedPoint


class ProjectionAdapter(ABC):
    """Abstract base class for Transverse Mercator engines.

    Implementations are immutable once constructed; forward and reverse
    are pure functions of the configuration and the input point.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @property
    @abstractmethod
    def proj4_string(self) -> str:
        """Equivalent PROJ definition (central meridian 0, no false origin)."""
        pass

    @property
    def crs(self) -> CRS:
        """Equivalent pyproj CRS, built from :attr:`proj4_string`."""
        return CRS.from_proj4(self.proj4_string)

    @property
    def preserves_angles(self) -> bool:
        """Transverse Mercator is conformal."""
        return True

    @property
    def preserves_area(self) -> bool:
        return False

    @abstractmethod
    def forward(self, lon0: float, lat: float, lon: float) -> ProjectedPoint:
        """Project a geographic position.

        Parameters
        ----------
        lon0 : float
            Central meridian in degrees.
        lat, lon : float
            Latitude and longitude in degrees.

        Returns
        -------
        ProjectedPoint
            Easting and northing in meters, convergence in degrees, scale.
        """
        pass

    @abstractmethod
    def reverse(self, lon0: float, x: float, y: float) -> GeographicResult:
        """Recover a geographic position from projected coordinates.

        Parameters
        ----------
        lon0 : float
            Central meridian in degrees.
        x, y : float
            Easting and northing in meters.

        Returns
        -------
        GeographicResult
            Latitude, longitude and convergence in degrees, scale.
        """
        pass


def tmerc_proj4_string(a: float, f: float, k0: float) -> str:
    """PROJ definition of a Transverse Mercator with central meridian 0.

    Uses the Poder/Engsager algorithm explicitly; PROJ's default switches
    to a less accurate series close to the central meridian.
    """
    return (
        f"+proj=tmerc +algo=poder_engsager +lat_0=0 +lon_0=0 "
        f"+k_0={float(k0)!r} +x_0=0 +y_0=0 "
        f"+a={float(a)!r} +f={float(f)!r} +units=m +no_defs"
    )


def utm_central_meridian(zone: int) -> float:
    """Central meridian of a UTM zone.

    Parameters
    ----------
    zone : int
        UTM zone number, 1 to 60.

    Returns
    -------
    float
        Longitude of the central meridian in degrees.

    Examples
    --------
    >>> utm_central_meridian(33)
    15.0
    """
    if not 1 <= zone <= 60:
        raise ValueError(f"UTM zone {zone} out of range [1, 60]")
    width = GeodeticConstants.UTM_ZONE_WIDTH.value
    return (zone - 1) * width - 180 + width / 2
