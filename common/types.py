"""
Type Definitions for Transverse Mercator Coordinates.

This module defines dataclasses that represent geographic and projected
coordinates with attached units. These types provide clear interfaces
between the projection engines, the array API, and the validation tools.

Design Rationale
----------------
Using typed dataclasses instead of raw tuples provides:
1. Self-documenting code - field names describe the data
2. Compile-time checking with mypy
3. Clear unit expectations in docstrings

All result types still unpack like tuples, so
``x, y, gamma, k = tm.forward(lon0, lat, lon)`` works.
"""

from dataclasses import dataclass, astuple
from typing import Iterator, Tuple


@dataclass(frozen=True)
class GeographicPoint:
    """A geographic position relative to a central meridian.

    Attributes
    ----------
    lat : float
        Geodetic latitude in DEGREES. Values outside [-90, 90] project to NaN.
    lon : float
        Longitude in DEGREES. Any finite value; it is reduced against the
        central meridian by the projection.

    Examples
    --------
    >>> GeographicPoint(lat=40.3, lon=-74.7).to_tuple()
    (40.3, -74.7)
    """
    lat: float  # degrees
    lon: float  # degrees

    def to_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lon)


@dataclass(frozen=True)
class ProjectedPoint:
    """Result of a forward Transverse Mercator projection.

    Attributes
    ----------
    x : float
        Easting in METERS, relative to the central meridian (no false easting).
    y : float
        Northing in METERS, relative to the equator (no false northing).
    gamma : float
        Meridian convergence in DEGREES: the bearing of grid north measured
        clockwise from true north.
    k : float
        Point scale (dimensionless, 1 means no distortion).
    """
    x: float  # m
    y: float  # m
    gamma: float  # degrees
    k: float

    def __iter__(self) -> Iterator[float]:
        return iter(astuple(self))


@dataclass(frozen=True)
class GeographicResult:
    """Result of a reverse Transverse Mercator projection.

    Attributes
    ----------
    lat : float
        Geodetic latitude in DEGREES, in [-90, 90].
    lon : float
        Longitude in DEGREES, in [-180, 180].
    gamma : float
        Meridian convergence in DEGREES.
    k : float
        Point scale (dimensionless).
    """
    lat: float  # degrees
    lon: float  # degrees
    gamma: float  # degrees
    k: float

    def __iter__(self) -> Iterator[float]:
        return iter(astuple(self))

    @property
    def point(self) -> GeographicPoint:
        """The recovered position without convergence and scale."""
        return GeographicPoint(lat=self.lat, lon=self.lon)
