"""
Consistency Checks for Transverse Mercator Engines.

This module provides checks that a configured engine obeys the properties
the projection guarantees, plus one comparison with PROJ as an
independent reference.

Check Categories
----------------
1. Round trip (reverse(forward(p)) reproduces p)
2. Mirror symmetry (odd in latitude and in longitude)
3. Scale consistency (analytic k agrees with the numerical indicatrix)
4. Conformality (the indicatrix is a circle)
5. Reference agreement (positions match PROJ for the engine's CRS)
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
from pyproj import Transformer

from common.constants import GeodeticConstants
from common.logging_config import get_logger
from common.types import GeographicPoint
from geospatial.distortion import compute_tissot_indicatrix
from geospatial.geomath import ang_diff
from geospatial.projections import ProjectionAdapter

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the test.
    passed : bool
        Whether the test passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


def default_test_points(
    half_width_deg: float = 3.0,
    num_lat: int = 17,
    num_lon: int = 7
) -> List[GeographicPoint]:
    """Grid of longitude offsets and latitudes spanning a UTM zone.

    Latitudes run from 80°S to 84°N; longitudes are offsets from the
    central meridian.
    """
    lats = np.linspace(-80.0, 84.0, num_lat)
    lons = np.linspace(-half_width_deg, half_width_deg, num_lon)
    return [
        GeographicPoint(lat=float(lat), lon=float(lon))
        for lat in lats
        for lon in lons
    ]


class ProjectionConsistencyChecker:
    """Checker for the internal consistency of a projection engine.

    Parameters
    ----------
    projection : ProjectionAdapter
        Engine under test.
    lon0 : float
        Central meridian used for every check, in degrees.
    strict_mode : bool
        If True, raise AssertionError when any check in
        :meth:`check_all` fails.
    log_violations : bool
        Whether to log failed checks.
    """

    def __init__(
        self,
        projection: ProjectionAdapter,
        lon0: float = 0.0,
        strict_mode: bool = False,
        log_violations: bool = True
    ):
        self.projection = projection
        self.lon0 = lon0
        self.strict_mode = strict_mode
        self.log_violations = log_violations

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed and self.log_violations:
            logger.warning(
                f"CHECK FAILED | {result.test_name} | {result.message}"
            )
        return result

    def check_all(
        self,
        points: Optional[Sequence[GeographicPoint]] = None
    ) -> List[ValidationResult]:
        """Run all consistency checks.

        Parameters
        ----------
        points : sequence of GeographicPoint, optional
            Positions relative to ``lon0`` (default: :func:`default_test_points`).

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        if points is None:
            points = default_test_points()

        results = [
            self.check_round_trip(points),
            self.check_mirror_symmetry(points),
            self.check_scale_consistency(points),
            self.check_reference_agreement(points),
        ]

        failed = [r.test_name for r in results if not r.passed]
        if failed and self.strict_mode:
            raise AssertionError(f"Projection checks failed: {', '.join(failed)}")
        return results

    def check_round_trip(
        self,
        points: Sequence[GeographicPoint],
        tolerance_deg: float = GeodeticConstants.ROUND_TRIP_TOLERANCE.value
    ) -> ValidationResult:
        """Check that reverse(forward(p)) reproduces p."""
        errors = []
        for p in points:
            fwd = self.projection.forward(self.lon0, p.lat, self.lon0 + p.lon)
            rev = self.projection.reverse(self.lon0, fwd.x, fwd.y)
            dlon, _ = ang_diff(self.lon0 + p.lon, rev.lon)
            errors.append(max(abs(rev.lat - p.lat), abs(dlon)))

        max_error = float(np.max(errors)) if errors else 0.0
        return self._report(ValidationResult(
            test_name="round_trip",
            passed=max_error <= tolerance_deg,
            message=f"Round trip: max error {max_error:.3e} deg",
            details={
                'max_error_deg': max_error,
                'tolerance_deg': tolerance_deg,
                'num_points': len(errors),
            }
        ))

    def check_mirror_symmetry(
        self,
        points: Sequence[GeographicPoint],
        tolerance_m: float = 1e-6
    ) -> ValidationResult:
        """Check that the projection is odd in latitude and in longitude."""
        max_dev = 0.0
        for p in points:
            base = self.projection.forward(self.lon0, p.lat, self.lon0 + p.lon)
            south = self.projection.forward(self.lon0, -p.lat, self.lon0 + p.lon)
            west = self.projection.forward(self.lon0, p.lat, self.lon0 - p.lon)
            max_dev = max(
                max_dev,
                abs(south.x - base.x), abs(south.y + base.y),
                abs(west.x + base.x), abs(west.y - base.y),
            )

        return self._report(ValidationResult(
            test_name="mirror_symmetry",
            passed=max_dev <= tolerance_m,
            message=f"Mirror symmetry: max deviation {max_dev:.3e} m",
            details={'max_deviation_m': max_dev, 'tolerance_m': tolerance_m}
        ))

    def check_scale_consistency(
        self,
        points: Sequence[GeographicPoint],
        rel_tolerance: float = 1e-7
    ) -> ValidationResult:
        """Compare the analytic point scale with Tissot's indicatrix."""
        max_rel = 0.0
        all_conformal = True
        for p in points:
            fwd = self.projection.forward(self.lon0, p.lat, self.lon0 + p.lon)
            tissot = compute_tissot_indicatrix(
                self.projection, self.lon0, p.lat, self.lon0 + p.lon)
            max_rel = max(
                max_rel,
                abs(tissot.semi_major - fwd.k) / fwd.k,
                abs(tissot.semi_minor - fwd.k) / fwd.k,
            )
            all_conformal = all_conformal and tissot.is_conformal

        return self._report(ValidationResult(
            test_name="scale_consistency",
            passed=max_rel <= rel_tolerance and all_conformal,
            message=f"Scale consistency: max relative error {max_rel:.3e}",
            details={
                'max_relative_error': max_rel,
                'rel_tolerance': rel_tolerance,
                'conformal': all_conformal,
            }
        ))

    def check_reference_agreement(
        self,
        points: Sequence[GeographicPoint],
        tolerance_m: float = 1e-4
    ) -> ValidationResult:
        """Compare projected positions with PROJ for the engine's CRS.

        PROJ's tmerc is itself a series, so keep the points within a few
        thousand kilometres of the central meridian.
        """
        crs = self.projection.crs
        to_proj = Transformer.from_crs(crs.geodetic_crs, crs, always_xy=True)
        max_dev = 0.0
        for p in points:
            fwd = self.projection.forward(self.lon0, p.lat, self.lon0 + p.lon)
            x_ref, y_ref = to_proj.transform(p.lon, p.lat)
            max_dev = max(max_dev, abs(fwd.x - x_ref), abs(fwd.y - y_ref))

        return self._report(ValidationResult(
            test_name="reference_agreement",
            passed=max_dev <= tolerance_m,
            message=f"Reference agreement: max deviation {max_dev:.3e} m",
            details={'max_deviation_m': max_dev, 'tolerance_m': tolerance_m}
        ))
