"""
Common utilities and infrastructure for the Transverse Mercator projection.

This package provides foundational components used across all modules:
- Geodetic constants with uncertainty bounds
- Unit registry for array inputs
- Coordinate and result types
- Configuration errors
- Logging infrastructure
"""

from common.constants import GeodeticConstants, DEFAULT_SERIES_ORDER
from common.errors import ConfigurationError
from common.units import ureg, Q_, magnitude_in, validate_units
from common.types import (
    GeographicPoint,
    ProjectedPoint,
    GeographicResult,
)
from common.logging_config import get_logger

__all__ = [
    "GeodeticConstants",
    "DEFAULT_SERIES_ORDER",
    "ConfigurationError",
    "ureg",
    "Q_",
    "magnitude_in",
    "validate_units",
    "GeographicPoint",
    "ProjectedPoint",
    "GeographicResult",
    "get_logger",
]
