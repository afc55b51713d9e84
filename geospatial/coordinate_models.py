"""
Ellipsoid Models for Transverse Mercator Projection.

This module defines the reference ellipsoid and the eccentricity-related
constants the projection series are expressed in.

Scientific Context
------------------
Domain: Geodesy, conformal mapping of the ellipsoid
Model: Oblate (or, formally, prolate) ellipsoid of revolution

Derived Constants
-----------------
1. e2 = f (2 - f): first eccentricity squared; negative for prolate shapes.
2. es = sign(f) sqrt(|e2|): signed eccentricity, lets one code path
   handle both shapes.
3. n = f / (2 - f): third flattening; the Krüger series are power series
   in n, which is why they converge so quickly for the Earth (n ≈ 1/595).
4. c = sqrt(1 - e2) exp(eatanhe(1, es)): point scale of the Gauss-Schreiber
   mapping at the pole (Lee, 1976, p. 100).

References
----------
- NIMA TR8350.2: WGS84 parameters
- Lee, L.P. (1976). Conformal Projections Based on Elliptic Functions.
  Cartographica Monograph 16.
"""

from dataclasses import dataclass
import math

import numpy as np

from common.constants import GeodeticConstants
from common.errors import ConfigurationError
from common.logging_config import get_logger, log_configuration_error
from geospatial.geomath import eatanhe, sincosd, sq

logger = get_logger(__name__)


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a. Negative for a prolate ellipsoid.
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = f (2 - f)
    es : float
        Signed eccentricity.
    e2m : float
        1 - e².
    n : float
        Third flattening: n = f / (2 - f)
    c : float
        Gauss-Schreiber point scale at the pole.
    """
    a: float
    f: float
    name: str = "custom"

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def es(self) -> float:
        """Signed eccentricity."""
        return (-1 if self.f < 0 else 1) * math.sqrt(abs(self.e2))

    @property
    def e2m(self) -> float:
        """Complement of the first eccentricity squared."""
        return 1 - self.e2

    @property
    def n(self) -> float:
        """Third flattening."""
        return self.f / (2 - self.f)

    @property
    def c(self) -> float:
        """Meridian-radius constant sqrt((1+e)^(1+e) (1-e)^(1-e))."""
        return float(math.sqrt(self.e2m) * np.exp(eatanhe(1.0, self.es)))

    def validate(self) -> "EllipsoidParameters":
        """Check that the ellipsoid can be projected.

        Returns
        -------
        EllipsoidParameters
            self, to allow chaining.

        Raises
        ------
        ConfigurationError
            If the radius is not finite and positive or the flattening
            is not finite and below 1.
        """
        if not (math.isfinite(self.a) and self.a > 0):
            raise ConfigurationError(log_configuration_error(
                logger, f"Equatorial radius is not positive: a={self.a}"))
        if not (math.isfinite(self.f) and self.f < 1):
            raise ConfigurationError(log_configuration_error(
                logger, f"Polar semi-axis is not positive: f={self.f}"))
        return self


# WGS84 ellipsoid - the standard reference for UTM
WGS84Ellipsoid = EllipsoidParameters(
    a=GeodeticConstants.EARTH_SEMI_MAJOR_AXIS.value,
    f=GeodeticConstants.EARTH_FLATTENING.value,
    name="WGS84"
)


def meridional_radius(lat: float, ellipsoid: EllipsoidParameters = WGS84Ellipsoid) -> float:
    """Radius of curvature of the meridian, M = a (1 - e²) / w³.

    ``lat`` is in degrees and w = sqrt(1 - e² sin²φ). M grows from
    a (1 - e²) at the equator to a / sqrt(1 - e²) at the poles.
    """
    sphi, _ = sincosd(lat)
    w = np.sqrt(1 - ellipsoid.e2 * sq(sphi))
    return float(ellipsoid.a * ellipsoid.e2m / w**3)


def parallel_radius(lat: float, ellipsoid: EllipsoidParameters = WGS84Ellipsoid) -> float:
    """Radius of the parallel circle, N cos(φ) with N = a / w.

    Parameters
    ----------
    lat : float
        Geodetic latitude in degrees.
    ellipsoid : EllipsoidParameters
        Reference ellipsoid (default: WGS84).

    Returns
    -------
    float
        Distance in meters from the rotation axis; exactly 0 at the poles.
    """
    sphi, cphi = sincosd(lat)
    return float(ellipsoid.a * cphi / np.sqrt(1 - ellipsoid.e2 * sq(sphi)))
