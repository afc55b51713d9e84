"""
Unit Registry for Projection Inputs.

This module provides a centralized unit system using the `pint` library so
that array inputs to the projection can carry their own units. Angles are
handled internally in degrees and lengths in meters; a caller holding
radians or kilometres passes a Quantity and the conversion happens once at
the API boundary.

Example Usage
-------------
>>> from common.units import Q_, magnitude_in
>>> magnitude_in(Q_(1.5, 'km'), 'meter')
1500.0
>>> magnitude_in(12.0, 'degree')
12.0
"""

from functools import wraps
import inspect
from typing import Any, Callable, Union

import numpy as np
import pint
from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity

# Units assumed for bare numbers
STANDARD_UNITS = {
    "latitude": "degree",
    "longitude": "degree",
    "easting": "meter",
    "northing": "meter",
}


def magnitude_in(value: Union[float, np.ndarray, pint.Quantity], unit: str) -> Any:
    """Strip units from a value, converting to ``unit`` first.

    Parameters
    ----------
    value : float, ndarray or pint.Quantity
        Bare numbers are assumed to already be in ``unit``.
    unit : str
        Target unit string (e.g. 'degree', 'meter').

    Returns
    -------
    float or ndarray
        The magnitude expressed in ``unit``.

    Raises
    ------
    ValueError
        If the quantity's dimensionality does not match ``unit``.
    """
    if isinstance(value, pint.Quantity):
        try:
            return value.to(unit).magnitude
        except pint.DimensionalityError as e:
            raise ValueError(
                f"Incompatible units: expected {unit}, got {value.units}"
            ) from e
    return value


def validate_units(expected_units: dict[str, str]):
    """Decorator to validate and strip units of function arguments.

    Quantity arguments named in ``expected_units`` are converted with
    :func:`magnitude_in` before the call, so the function body only sees
    plain magnitudes; bare numbers pass through untouched.

    Parameters
    ----------
    expected_units : dict[str, str]
        Mapping from argument names to expected unit strings.

    Examples
    --------
    >>> @validate_units({'lat': 'degree', 'lon': 'degree'})
    ... def project(engine, lon0, lat, lon):
    ...     ...
    """
    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()

            for param_name, expected_unit in expected_units.items():
                if param_name in bound.arguments:
                    bound.arguments[param_name] = magnitude_in(
                        bound.arguments[param_name], expected_unit)

            return func(*bound.args, **bound.kwargs)
        return wrapper
    return decorator
