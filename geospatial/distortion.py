"""
Numerical Distortion Analysis for Map Projections.

The engines report the point scale analytically. This module measures the
same quantity independently: it differentiates the forward projection
numerically and compares the image of an infinitesimal circle with the
ellipsoid's radii of curvature, giving Tissot's indicatrix.

For a conformal projection both semi-axes equal the point scale k and the
angular distortion vanishes, which makes the indicatrix a useful check of
the analytic scale and of conformality.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
- Tissot, A. (1859). Mémoire sur la représentation des surfaces.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from geospatial.coordinate_models import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    meridional_radius,
    parallel_radius,
)
from geospatial.projections import ProjectionAdapter


@dataclass
class TissotIndicatrix:
    """Tissot's indicatrix describing local distortion at a point.

    Attributes
    ----------
    semi_major : float
        Semi-major axis of the distortion ellipse (scale factor).
    semi_minor : float
        Semi-minor axis of the distortion ellipse (scale factor).
    meridional_scale : float
        h: scale along the meridian.
    parallel_scale : float
        k: scale along the parallel.
    area_scale : float
        Area distortion factor.
    angular_distortion_deg : float
        Maximum angular distortion in degrees.
    """
    semi_major: float
    semi_minor: float
    meridional_scale: float
    parallel_scale: float
    area_scale: float
    angular_distortion_deg: float

    @property
    def is_conformal(self) -> bool:
        """Check if projection is locally conformal (circle, no angular distortion)."""
        return np.abs(self.semi_major - self.semi_minor) < 1e-6


def compute_tissot_indicatrix(
    projection: ProjectionAdapter,
    lon0: float,
    lat: float,
    lon: float,
    delta: float = 1e-5,
    ellipsoid: Optional[EllipsoidParameters] = None
) -> TissotIndicatrix:
    """Compute Tissot's indicatrix numerically.

    Parameters
    ----------
    projection : ProjectionAdapter
        The projection to analyze.
    lon0 : float
        Central meridian in degrees.
    lat, lon : float
        Location in degrees. Keep |lat| + delta below 90.
    delta : float
        Half step in degrees for the central differences.
    ellipsoid : EllipsoidParameters, optional
        Defaults to the projection's own ellipsoid, or WGS84.

    Returns
    -------
    TissotIndicatrix
        Local distortion characteristics.
    """
    if ellipsoid is None:
        ellipsoid = getattr(projection, "ellipsoid", WGS84Ellipsoid)

    step = 2 * np.radians(delta)

    # ∂x/∂λ, ∂y/∂λ (east-west)
    east = projection.forward(lon0, lat, lon + delta)
    west = projection.forward(lon0, lat, lon - delta)
    dxdl = (east.x - west.x) / step
    dydl = (east.y - west.y) / step

    # ∂x/∂φ, ∂y/∂φ (north-south)
    north = projection.forward(lon0, lat + delta, lon)
    south = projection.forward(lon0, lat - delta, lon)
    dxdp = (north.x - south.x) / step
    dydp = (north.y - south.y) / step

    M = meridional_radius(lat, ellipsoid)
    R = parallel_radius(lat, ellipsoid)

    h = np.hypot(dxdp, dydp) / M
    k = np.hypot(dxdl, dydl) / R
    area_scale = np.abs(dxdp * dydl - dydp * dxdl) / (M * R)

    return TissotIndicatrix(
        semi_major=float(max(h, k)),
        semi_minor=float(min(h, k)),
        meridional_scale=float(h),
        parallel_scale=float(k),
        area_scale=float(area_scale),
        angular_distortion_deg=float(
            2 * np.degrees(np.arcsin(np.abs(h - k) / (h + k))))
    )
