"""
Exact Transverse Mercator Engine.

When a :class:`TransverseMercator` is built with ``exact=True`` it hands
every call to this engine instead of evaluating its own series. The engine
wraps `pygeodesy`'s ``ExactTransverseMercator``, Lee's closed-form mapping
in terms of Jacobi elliptic functions. It has no truncation error and stays
accurate far from the central meridian, where the Krüger series drifts by
metres.

The wrapped projection is fixed at central meridian 0; the longitude
difference from ``lon0`` is reduced with :func:`ang_diff` before it is
passed on, so one instance serves every central meridian.

Domain
------
By default the back side of the cylinder (longitude differences beyond 90°)
is handled by reflection, as in the series engine. With ``extendp`` the
mapping is continued over the extended domain of Lee's solution instead;
results agree in the standard domain and differ on the back side.

References
----------
- Lee, L.P. (1976). Conformal Projections Based on Elliptic Functions.
  Cartographica Monograph 16.
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. J. Geodesy 85(8), 475-485. Section 3.
"""

import math

from pygeodesy.ellipsoids import Ellipsoid
from pygeodesy.etm import ExactTransverseMercator

from common.errors import ConfigurationError
from common.logging_config import get_logger, log_configuration_error
from common.types import GeographicResult, ProjectedPoint
from geospatial.coordinate_models import EllipsoidParameters
from geospatial.geomath import ang_diff, ang_normalize, lat_fix
from geospatial.projections import ProjectionAdapter, tmerc_proj4_string

logger = get_logger(__name__)

_NAN_PROJECTED = ProjectedPoint(x=math.nan, y=math.nan, gamma=math.nan, k=math.nan)
_NAN_GEOGRAPHIC = GeographicResult(lat=math.nan, lon=math.nan, gamma=math.nan, k=math.nan)


class EllipticTransverseMercator(ProjectionAdapter):
    """Transverse Mercator evaluated with elliptic functions.

    Parameters
    ----------
    a : float
        Equatorial radius in meters.
    f : float
        Flattening; must satisfy 0 < f < 1.
    k0 : float
        Central scale factor.
    extendp : bool
        Use the extended domain instead of reflecting the back side.

    Raises
    ------
    ConfigurationError
        If a, f or k0 are out of range.
    """

    def __init__(self, a: float, f: float, k0: float, extendp: bool = False):
        if not (math.isfinite(a) and a > 0):
            raise ConfigurationError(log_configuration_error(
                logger, f"Equatorial radius is not positive: a={a}"))
        if not (math.isfinite(f) and 0 < f < 1):
            raise ConfigurationError(log_configuration_error(
                logger, f"Flattening must lie in (0, 1) for the exact engine: f={f}"))
        if not (math.isfinite(k0) and k0 > 0):
            raise ConfigurationError(log_configuration_error(
                logger, f"Scale is not positive: k0={k0}"))

        self._ellipsoid = EllipsoidParameters(a=a, f=f)
        self._k0 = k0
        self._extendp = extendp
        self._etm = ExactTransverseMercator(
            datum=Ellipsoid(a, self._ellipsoid.b),
            lon0=0,
            k0=k0,
            extendp=extendp,
        )

        logger.debug(f"Exact engine ready: a={a}, f={f}, k0={k0}, extendp={extendp}")

    @property
    def name(self) -> str:
        return f"Transverse Mercator (elliptic, extendp={self._extendp})"

    @property
    def proj4_string(self) -> str:
        return tmerc_proj4_string(self._ellipsoid.a, self._ellipsoid.f, self._k0)

    @property
    def ellipsoid(self) -> EllipsoidParameters:
        return self._ellipsoid

    @property
    def extended_domain(self) -> bool:
        return self._extendp

    def forward(self, lon0: float, lat: float, lon: float) -> ProjectedPoint:
        lat = lat_fix(lat)
        dlon, _ = ang_diff(lon0, lon)
        if not (math.isfinite(lat) and math.isfinite(dlon)):
            return _NAN_PROJECTED
        x, y, gamma, k = self._etm.forward(lat, dlon, lon0=0)[:4]
        return ProjectedPoint(x=float(x), y=float(y), gamma=float(gamma), k=float(k))

    def reverse(self, lon0: float, x: float, y: float) -> GeographicResult:
        if not (math.isfinite(x) and math.isfinite(y)):
            return _NAN_GEOGRAPHIC
        lat, dlon, gamma, k = self._etm.reverse(x, y, lon0=0)[:4]
        return GeographicResult(
            lat=float(lat),
            lon=float(ang_normalize(dlon + lon0)),
            gamma=float(gamma),
            k=float(k),
        )
