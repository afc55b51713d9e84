"""
Tests for the series Transverse Mercator engine.
"""

import math

import pytest
from pyproj import Proj

from common.constants import GeodeticConstants
from common.errors import ConfigurationError
from common.types import GeographicResult, ProjectedPoint
from geospatial.projections import tmerc_proj4_string
from geospatial.transverse_mercator import TransverseMercator, create_projection


class TestConfiguration:
    """Tests for construction and accessors."""

    def test_accessors(self, wgs84):
        tm = TransverseMercator(wgs84.a, wgs84.f, 0.9996)
        assert tm.equatorial_radius == wgs84.a
        assert tm.flattening == wgs84.f
        assert tm.central_scale == 0.9996
        assert tm.order == 6
        assert not tm.is_exact
        assert tm.coefficients.order == 6
        assert tm.preserves_angles and not tm.preserves_area
        assert "+proj=tmerc" in tm.proj4_string

    @pytest.mark.parametrize("a, f, k0", [
        (0.0, 1 / 298.257223563, 0.9996),
        (-1.0, 1 / 298.257223563, 0.9996),
        (math.inf, 1 / 298.257223563, 0.9996),
        (math.nan, 1 / 298.257223563, 0.9996),
        (6378137.0, 1.0, 0.9996),
        (6378137.0, 1.5, 0.9996),
        (6378137.0, math.nan, 0.9996),
        (6378137.0, 1 / 298.257223563, 0.0),
        (6378137.0, 1 / 298.257223563, -0.9996),
        (6378137.0, 1 / 298.257223563, math.inf),
    ])
    def test_invalid_parameters(self, a, f, k0):
        with pytest.raises(ConfigurationError):
            TransverseMercator(a, f, k0)

    def test_extendp_requires_exact(self, wgs84):
        with pytest.raises(ConfigurationError, match="extendp not allowed"):
            TransverseMercator(wgs84.a, wgs84.f, 0.9996, extendp=True)

    def test_invalid_order(self, wgs84):
        with pytest.raises(ConfigurationError):
            TransverseMercator(wgs84.a, wgs84.f, 0.9996, order=3)

    def test_configuration_error_is_logged(self, wgs84, caplog):
        with pytest.raises(ConfigurationError):
            TransverseMercator(-wgs84.a, wgs84.f, 0.9996)
        assert "CONFIGURATION ERROR" in caplog.text

    def test_utm_is_shared(self):
        assert TransverseMercator.utm() is TransverseMercator.utm()
        assert create_projection() is TransverseMercator.utm()
        assert TransverseMercator.utm().central_scale == 0.9996

    def test_factory_builds_new_engine(self, wgs84):
        tm = create_projection(k0=1.0, order=8)
        assert tm is not TransverseMercator.utm()
        assert tm.order == 8 and tm.central_scale == 1.0


class TestForward:
    """Tests for the forward projection."""

    def test_origin(self, utm):
        x, y, gamma, k = utm.forward(0.0, 0.0, 0.0)
        assert x == 0.0 and y == 0.0 and gamma == 0.0
        assert k == pytest.approx(0.9996, rel=1e-13)

    def test_result_type(self, utm):
        result = utm.forward(-75.0, 40.3, -74.7)
        assert isinstance(result, ProjectedPoint)
        assert all(isinstance(value, float) for value in result)

    def test_quarter_meridian(self, unit_scale_tm):
        x, y, gamma, k = unit_scale_tm.forward(0.0, 90.0, 0.0)
        assert x == 0.0
        assert y == pytest.approx(
            GeodeticConstants.EARTH_QUARTER_MERIDIAN.value, abs=1e-6)

    @pytest.mark.parametrize("lon", [0.0, 30.0, 90.0, 150.0, -60.0])
    def test_pole_independent_of_longitude(self, utm, lon):
        x, y, gamma, k = utm.forward(0.0, 90.0, lon)
        ref = utm.forward(0.0, 90.0, 0.0)
        assert x == 0.0
        assert y == pytest.approx(ref.y, abs=1e-8)
        assert k == pytest.approx(ref.k, rel=1e-14)
        assert gamma == pytest.approx(lon, abs=1e-12)

    def test_pole_scale_is_central_scale(self, utm):
        _, _, _, k = utm.forward(0.0, 90.0, 45.0)
        assert k == pytest.approx(0.9996, rel=1e-12)

    def test_southern_pole(self, utm):
        north = utm.forward(0.0, 90.0, 0.0)
        south = utm.forward(0.0, -90.0, 0.0)
        assert south.y == -north.y

    def test_central_meridian_scale(self, utm):
        for lat in (-70.0, -10.0, 25.0, 60.0):
            x, _, gamma, k = utm.forward(0.0, lat, 0.0)
            assert x == 0.0
            assert gamma == 0.0
            assert k == pytest.approx(0.9996, rel=1e-13)

    def test_mirror_symmetry(self, utm):
        for lat, lon in [(40.3, 2.7), (-12.5, 1.0), (75.0, 5.5), (10.0, 120.0)]:
            base = utm.forward(0.0, lat, lon)
            south = utm.forward(0.0, -lat, lon)
            west = utm.forward(0.0, lat, -lon)
            assert (south.x, south.y, south.gamma, south.k) == (
                base.x, -base.y, -base.gamma, base.k)
            assert (west.x, west.y, west.gamma, west.k) == (
                -base.x, base.y, -base.gamma, base.k)

    def test_central_meridian_shift(self, utm):
        shifted = utm.forward(-75.0, 40.3, -74.7)
        centered = utm.forward(0.0, 40.3, 0.3)
        assert shifted.x == pytest.approx(centered.x, abs=1e-9)
        assert shifted.y == pytest.approx(centered.y, abs=1e-9)

    def test_convergence_sign(self, utm):
        # grid north lies east of true north in the NE quadrant
        assert utm.forward(0.0, 45.0, 2.0).gamma > 0
        assert utm.forward(0.0, -45.0, 2.0).gamma < 0

    def test_back_side_is_continuous(self, utm):
        before = utm.forward(0.0, 10.0, 90.0 - 1e-7)
        after = utm.forward(0.0, 10.0, 90.0 + 1e-7)
        assert after.x == pytest.approx(before.x, abs=1.0)
        assert after.y == pytest.approx(before.y, abs=1.0)
        assert after.k == pytest.approx(before.k, rel=1e-6)
        assert after.gamma == pytest.approx(before.gamma, abs=1e-6)

    def test_equator_beyond_quarter_turn(self, utm):
        # lat = 0, lon > 90 is placed on the southern edge, y = -pi a1 k0
        x, y, _, _ = utm.forward(0.0, 0.0, 120.0)
        assert y == pytest.approx(-math.pi * utm.coefficients.a1 * 0.9996, rel=1e-12)
        assert x > 0

    def test_latitude_out_of_range_gives_nan(self, utm):
        result = utm.forward(0.0, 91.0, 3.0)
        assert all(math.isnan(value) for value in result)

    @pytest.mark.parametrize("lat, lon", [
        (math.nan, 3.0), (45.0, math.nan), (45.0, math.inf), (math.inf, 0.0),
    ])
    def test_non_finite_input_does_not_raise(self, utm, lat, lon):
        x, y, _, _ = utm.forward(0.0, lat, lon)
        assert math.isnan(x) or math.isnan(y)

    @pytest.mark.parametrize("lon0, lat, lon", [
        (0.0, 0.0, 3.0),
        (0.0, 40.3, 2.7),
        (0.0, -33.9, -3.4),
        (0.0, 65.0, 6.0),
        (0.0, 84.0, -3.0),
        (0.0, -80.0, 3.0),
        (0.0, 20.0, 25.0),
        (-75.0, 40.3, -74.7),
    ])
    def test_agrees_with_proj(self, utm, lon0, lat, lon):
        ref = Proj(tmerc_proj4_string(utm.equatorial_radius, utm.flattening, 0.9996))
        x_ref, y_ref = ref(lon - lon0, lat)
        x, y, _, k = utm.forward(lon0, lat, lon)
        assert x == pytest.approx(x_ref, abs=1e-4)
        assert y == pytest.approx(y_ref, abs=1e-4)
        factors = ref.get_factors(lon - lon0, lat)
        assert k == pytest.approx(factors.parallel_scale, rel=1e-8)

    def test_sphere_closed_form(self):
        a, k0 = 6_371_000.0, 1.0
        tm = TransverseMercator(a, 0.0, k0)
        for lat, lon in [(10.0, 5.0), (-45.0, 30.0), (60.0, -80.0)]:
            phi, lam = math.radians(lat), math.radians(lon)
            x, y, gamma, k = tm.forward(0.0, lat, lon)
            b = math.cos(phi) * math.sin(lam)
            assert x == pytest.approx(a * k0 * math.atanh(b), rel=1e-12)
            assert y == pytest.approx(
                a * k0 * math.atan2(math.tan(phi), math.cos(lam)), rel=1e-12)
            assert k == pytest.approx(k0 / math.sqrt(1 - b * b), rel=1e-12)
            assert gamma == pytest.approx(
                math.degrees(math.atan(math.tan(lam) * math.sin(phi))), abs=1e-11)


class TestReverse:
    """Tests for the reverse projection."""

    def test_origin(self, utm):
        lat, lon, gamma, k = utm.reverse(0.0, 0.0, 0.0)
        assert lat == 0.0 and lon == 0.0 and gamma == 0.0
        assert k == pytest.approx(0.9996, rel=1e-13)

    def test_result_type(self, utm):
        result = utm.reverse(-75.0, 25_000.0, 4_460_000.0)
        assert isinstance(result, GeographicResult)
        assert result.point.to_tuple() == (result.lat, result.lon)

    def test_round_trip(self, utm, utm_points):
        for lon0, lat, lon in utm_points:
            x, y, gamma, k = utm.forward(lon0, lat, lon)
            rlat, rlon, rgamma, rk = utm.reverse(lon0, x, y)
            assert rlat == pytest.approx(lat, abs=1e-9)
            assert math.remainder(rlon - lon, 360.0) == pytest.approx(0.0, abs=1e-9)
            assert rgamma == pytest.approx(gamma, abs=1e-9)
            assert rk == pytest.approx(k, rel=1e-9)

    @pytest.mark.parametrize("order", [4, 5, 6, 7, 8])
    def test_round_trip_all_orders(self, wgs84, order):
        tm = TransverseMercator(wgs84.a, wgs84.f, 0.9996, order=order)
        x, y, _, _ = tm.forward(0.0, 52.0, 2.5)
        lat, lon, _, _ = tm.reverse(0.0, x, y)
        assert lat == pytest.approx(52.0, abs=1e-9)
        assert lon == pytest.approx(2.5, abs=1e-9)

    def test_round_trip_prolate(self):
        tm = TransverseMercator(6_378_137.0, -1 / 150.0, 1.0)
        x, y, _, _ = tm.forward(0.0, 35.0, 4.0)
        lat, lon, _, _ = tm.reverse(0.0, x, y)
        assert lat == pytest.approx(35.0, abs=1e-9)
        assert lon == pytest.approx(4.0, abs=1e-9)

    @pytest.mark.parametrize("lat, lon", [
        (10.0, 120.0), (-30.0, 150.0), (60.0, 100.0), (5.0, 170.0),
    ])
    def test_round_trip_back_side(self, utm, lat, lon):
        x, y, gamma, k = utm.forward(0.0, lat, lon)
        rlat, rlon, rgamma, rk = utm.reverse(0.0, x, y)
        assert rlat == pytest.approx(lat, abs=1e-8)
        assert rlon == pytest.approx(lon, abs=1e-8)
        assert rgamma == pytest.approx(gamma, abs=1e-8)
        assert rk == pytest.approx(k, rel=1e-8)

    def test_pole(self, utm):
        y_pole = utm.forward(0.0, 90.0, 0.0).y
        lat, lon, _, _ = utm.reverse(10.0, 0.0, y_pole)
        assert lat == pytest.approx(90.0, abs=1e-9)

    def test_longitude_is_normalized(self, utm):
        x, y, _, _ = utm.forward(177.0, 60.0, -178.5)
        _, lon, _, _ = utm.reverse(177.0, x, y)
        assert -180.0 <= lon <= 180.0
        assert lon == pytest.approx(-178.5, abs=1e-9)

    def test_non_finite_input_does_not_raise(self, utm):
        lat, lon, _, _ = utm.reverse(0.0, math.nan, 1000.0)
        assert math.isnan(lat) and math.isnan(lon)
