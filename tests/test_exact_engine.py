"""
Tests for the elliptic-function engine and exact delegation.
"""

import math

import pytest

from common.errors import ConfigurationError
from geospatial.exact_engine import EllipticTransverseMercator
from geospatial.transverse_mercator import TransverseMercator


@pytest.fixture(scope="module")
def exact_tm(wgs84):
    return TransverseMercator(wgs84.a, wgs84.f, 0.9996, exact=True)


class TestExactDelegation:
    """The exact flag routes every call through the elliptic engine."""

    def test_flags(self, exact_tm):
        assert exact_tm.is_exact
        assert exact_tm.coefficients is None
        assert "+proj=tmerc" in exact_tm.proj4_string

    def test_agrees_with_series(self, exact_tm, utm, utm_points):
        for lon0, lat, lon in utm_points:
            series = utm.forward(lon0, lat, lon)
            exact = exact_tm.forward(lon0, lat, lon)
            assert exact.x == pytest.approx(series.x, abs=1e-5)
            assert exact.y == pytest.approx(series.y, abs=1e-5)
            assert exact.k == pytest.approx(series.k, rel=1e-9)
            assert exact.gamma == pytest.approx(series.gamma, abs=1e-9)

    def test_round_trip(self, exact_tm, utm_points):
        for lon0, lat, lon in utm_points:
            x, y, gamma, k = exact_tm.forward(lon0, lat, lon)
            rlat, rlon, rgamma, rk = exact_tm.reverse(lon0, x, y)
            assert rlat == pytest.approx(lat, abs=1e-9)
            assert math.remainder(rlon - lon, 360.0) == pytest.approx(0.0, abs=1e-9)
            assert rgamma == pytest.approx(gamma, abs=1e-9)
            assert rk == pytest.approx(k, rel=1e-9)

    def test_reverse_agrees_with_series(self, exact_tm, utm):
        series = utm.reverse(-75.0, 25_000.0, 4_460_000.0)
        exact = exact_tm.reverse(-75.0, 25_000.0, 4_460_000.0)
        assert exact.lat == pytest.approx(series.lat, abs=1e-9)
        assert exact.lon == pytest.approx(series.lon, abs=1e-9)
        assert exact.gamma == pytest.approx(series.gamma, abs=1e-9)

    def test_far_from_central_meridian(self, exact_tm, utm):
        # the truncated series drifts by metres here
        exact = exact_tm.forward(0.0, 10.0, 95.0)
        series = utm.forward(0.0, 10.0, 95.0)
        assert exact.x == pytest.approx(14_658_571.24, abs=0.05)
        assert abs(series.x - exact.x) > 1.0

    def test_equator_beyond_quarter_turn(self, exact_tm, utm):
        exact = exact_tm.forward(0.0, 0.0, 120.0)
        series = utm.forward(0.0, 0.0, 120.0)
        assert exact.y < 0
        assert exact.y == pytest.approx(series.y, abs=1e-3)
        assert math.isfinite(exact.k)
        assert exact.k == pytest.approx(series.k, rel=1e-6)
        assert abs(exact.gamma) == pytest.approx(180.0, abs=1e-9)

        lat, lon, _, k = exact_tm.reverse(0.0, exact.x, exact.y)
        assert lat == pytest.approx(0.0, abs=1e-8)
        assert lon == pytest.approx(120.0, abs=1e-8)
        assert math.isfinite(k)

    def test_latitude_out_of_range_does_not_raise(self, exact_tm):
        x, y, _, _ = exact_tm.forward(0.0, 95.0, 3.0)
        assert math.isnan(x) and math.isnan(y)

    def test_non_finite_input_does_not_raise(self, exact_tm):
        lat, lon, _, _ = exact_tm.reverse(0.0, math.nan, 1000.0)
        assert math.isnan(lat) and math.isnan(lon)


class TestEllipticTransverseMercator:
    """Configuration of the elliptic engine itself."""

    def test_extended_domain(self, wgs84):
        engine = EllipticTransverseMercator(wgs84.a, wgs84.f, 0.9996, extendp=True)
        assert engine.extended_domain
        assert "+k_0=0.9996" in engine.proj4_string
        assert engine.ellipsoid.b == pytest.approx(6_356_752.314_245, abs=1e-6)

    def test_standard_domain_unaffected_by_extendp(self, wgs84):
        plain = EllipticTransverseMercator(wgs84.a, wgs84.f, 0.9996)
        extended = EllipticTransverseMercator(wgs84.a, wgs84.f, 0.9996, extendp=True)
        a, b = plain.forward(0.0, 40.3, 2.7), extended.forward(0.0, 40.3, 2.7)
        assert b.x == pytest.approx(a.x, abs=1e-6)
        assert b.y == pytest.approx(a.y, abs=1e-6)

    def test_extendp_allowed_with_exact(self, wgs84):
        tm = TransverseMercator(wgs84.a, wgs84.f, 0.9996, exact=True, extendp=True)
        assert tm.is_exact

    @pytest.mark.parametrize("a, f, k0", [
        (6378137.0, 0.0, 1.0),
        (6378137.0, -1 / 300.0, 1.0),
        (6378137.0, 1.0, 1.0),
        (-6378137.0, 1 / 298.257223563, 1.0),
        (6378137.0, 1 / 298.257223563, 0.0),
        (6378137.0, 1 / 298.257223563, math.nan),
    ])
    def test_invalid_parameters(self, a, f, k0):
        with pytest.raises(ConfigurationError):
            TransverseMercator(a, f, k0, exact=True)
