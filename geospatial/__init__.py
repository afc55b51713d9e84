"""
Geospatial Module for the Transverse Mercator Projection.

All Transverse Mercator calculations originate from this module.

This module provides:
- Ellipsoid models and degree-based trigonometry
- Krüger series coefficients and Clenshaw summation
- The series engine and its exact elliptic-function alternative
- Array API and numerical distortion analysis
"""

from geospatial.coordinate_models import (
    EllipsoidParameters,
    WGS84Ellipsoid,
    meridional_radius,
    parallel_radius,
)

from geospatial.tm_coefficients import (
    SeriesCoefficients,
    generate_coefficients,
)

from geospatial.clenshaw import clenshaw_sum

from geospatial.projections import (
    ProjectionAdapter,
    utm_central_meridian,
)

from geospatial.exact_engine import EllipticTransverseMercator

from geospatial.transverse_mercator import (
    TransverseMercator,
    create_projection,
)

from geospatial.batch import forward_array, reverse_array

from geospatial.distortion import (
    TissotIndicatrix,
    compute_tissot_indicatrix,
)

__all__ = [
    # Ellipsoid
    "EllipsoidParameters",
    "WGS84Ellipsoid",
    "meridional_radius",
    "parallel_radius",
    # Series
    "SeriesCoefficients",
    "generate_coefficients",
    "clenshaw_sum",
    # Projections
    "ProjectionAdapter",
    "EllipticTransverseMercator",
    "TransverseMercator",
    "create_projection",
    "utm_central_meridian",
    # Arrays and distortion
    "forward_array",
    "reverse_array",
    "TissotIndicatrix",
    "compute_tissot_indicatrix",
]
