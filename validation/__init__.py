"""
Validation Framework for the Transverse Mercator Projection.

This module provides consistency checks for configured engines.
"""

from validation.projection_checks import (
    ProjectionConsistencyChecker,
    ValidationResult,
    default_test_points,
)

__all__ = [
    "ProjectionConsistencyChecker",
    "ValidationResult",
    "default_test_points",
]
