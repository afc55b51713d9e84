"""
Array API for Transverse Mercator Engines.

The engines work point by point; these helpers broadcast numpy arrays (or
pint Quantities wrapping them) through an engine and collect the results in
arrays of the broadcast shape. Bare numbers are taken to be degrees for
angles and meters for lengths.
"""

from typing import Tuple

import numpy as np
from numpy.typing import NDArray

from common.units import STANDARD_UNITS, validate_units
from geospatial.projections import ProjectionAdapter

ArrayQuad = Tuple[
    NDArray[np.float64], NDArray[np.float64],
    NDArray[np.float64], NDArray[np.float64]
]


def _as_arrays(*values) -> Tuple[NDArray[np.float64], ...]:
    return np.broadcast_arrays(*(np.asarray(v, dtype=np.float64) for v in values))


@validate_units({
    'lon0': STANDARD_UNITS['longitude'],
    'lat': STANDARD_UNITS['latitude'],
    'lon': STANDARD_UNITS['longitude'],
})
def forward_array(
    projection: ProjectionAdapter,
    lon0,
    lat,
    lon
) -> ArrayQuad:
    """Project arrays of geographic coordinates.

    Parameters
    ----------
    projection : ProjectionAdapter
        Engine to use.
    lon0, lat, lon : array_like or pint.Quantity
        Central meridian, latitude and longitude; broadcast together.

    Returns
    -------
    Tuple[ndarray, ndarray, ndarray, ndarray]
        (x, y, gamma, k) with x, y in meters and gamma in degrees.

    Examples
    --------
    >>> import numpy as np
    >>> from common.units import Q_
    >>> from geospatial.transverse_mercator import TransverseMercator
    >>> tm = TransverseMercator.utm()
    >>> x, y, gamma, k = forward_array(tm, 0.0, Q_(np.array([0.1, 0.2]), 'radian'), 1.0)
    """
    lon0, lat, lon = _as_arrays(lon0, lat, lon)
    out = np.empty((4,) + lat.shape, dtype=np.float64)
    for idx in np.ndindex(lat.shape):
        out[(slice(None),) + idx] = tuple(
            projection.forward(lon0[idx], lat[idx], lon[idx]))
    return out[0], out[1], out[2], out[3]


@validate_units({
    'lon0': STANDARD_UNITS['longitude'],
    'x': STANDARD_UNITS['easting'],
    'y': STANDARD_UNITS['northing'],
})
def reverse_array(
    projection: ProjectionAdapter,
    lon0,
    x,
    y
) -> ArrayQuad:
    """Invert arrays of projected coordinates.

    Parameters
    ----------
    projection : ProjectionAdapter
        Engine to use.
    lon0 : array_like or pint.Quantity
        Central meridian.
    x, y : array_like or pint.Quantity
        Easting and northing.

    Returns
    -------
    Tuple[ndarray, ndarray, ndarray, ndarray]
        (lat, lon, gamma, k) with angles in degrees.
    """
    lon0, x, y = _as_arrays(lon0, x, y)
    out = np.empty((4,) + x.shape, dtype=np.float64)
    for idx in np.ndindex(x.shape):
        out[(slice(None),) + idx] = tuple(
            projection.reverse(lon0[idx], x[idx], y[idx]))
    return out[0], out[1], out[2], out[3]
