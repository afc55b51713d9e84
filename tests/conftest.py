"""
Shared fixtures for the Transverse Mercator test suite.
"""

import os
import sys

import pytest

# Add parent directory to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from geospatial.coordinate_models import WGS84Ellipsoid
from geospatial.transverse_mercator import TransverseMercator


@pytest.fixture(scope="session")
def utm():
    """Shared WGS84 engine with k0 = 0.9996."""
    return TransverseMercator.utm()


@pytest.fixture(scope="session")
def wgs84():
    return WGS84Ellipsoid


@pytest.fixture(scope="session")
def unit_scale_tm(wgs84):
    """WGS84 engine with k0 = 1, so that y at the pole is the quarter meridian."""
    return TransverseMercator(wgs84.a, wgs84.f, 1.0)


@pytest.fixture
def utm_points():
    """(lon0, lat, lon) triples inside or near UTM zones."""
    return [
        (-75.0, 40.3, -74.7),
        (3.0, 40.4, -3.7),
        (15.0, -33.9, 18.4),
        (0.0, 0.0, 0.0),
        (0.0, 1e-7, 2.5),
        (177.0, 60.0, -178.5),
        (-123.0, -80.0, -120.0),
        (9.0, 84.0, 12.0),
    ]
