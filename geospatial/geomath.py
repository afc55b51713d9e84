"""
Degree-Based Trigonometry and Auxiliary-Latitude Utilities.

This module supplies the numerical primitives the Transverse Mercator
engines are built on. Angles are in degrees throughout and the functions
are written to be exact where exactness is possible:

- sines and cosines of multiples of 90° are exactly 0 or ±1;
- the sign of zero is preserved through reductions;
- angle differences are computed with an error term so that
  ``ang_diff(x, y)`` is accurate even when x and y are large.

Scalar results are numpy float64 values so that downstream arithmetic
degrades to inf/nan (under ``numpy.errstate``) instead of raising
ZeroDivisionError or OverflowError as Python floats would.

References
----------
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. J. Geodesy 85(8), 475-485. Eqs. (7)-(9), (19)-(21).
- Goldberg, D. (1991). What every computer scientist should know about
  floating-point arithmetic. Theorem 7 (error-free sum).
"""

import math
from typing import Sequence, Tuple

import numpy as np

QUARTER_TURN = 90.0
HALF_TURN = 180.0
FULL_TURN = 360.0

EPSILON = float(np.finfo(np.float64).eps)

# Newton iteration controls for tauf
_TAUF_MAX_ITERATIONS = 5
_TAUF_TOL = math.sqrt(EPSILON) / 10
_TAUF_MAX = 2 / math.sqrt(EPSILON)


def sq(x):
    """Square of x."""
    return x * x


def polyval(n: int, p: Sequence[float], x: float) -> float:
    """Evaluate a polynomial by Horner's method.

    Parameters
    ----------
    n : int
        Degree of the polynomial; n < 0 yields 0.
    p : sequence
        Coefficients p[0..n], highest power first.
    x : float
        Argument.
    """
    y = 0.0 if n < 0 else float(p[0])
    for i in range(1, n + 1):
        y = y * x + p[i]
    return y


def sum_error(u: float, v: float) -> Tuple[float, float]:
    """Error-free sum: returns (s, t) with s = round(u + v) and t = u + v - s."""
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    t = s if s == 0 else 0.0 - (up + vpp)
    return s, t


def remainder(x: float, y: float) -> float:
    """IEEE remainder of x/y in [-y/2, y/2]; NaN for non-finite x."""
    return math.remainder(x, y) if math.isfinite(x) else math.nan


def ang_normalize(x: float) -> float:
    """Reduce an angle to [-180, 180].

    ±180 keeps the sign of the input, so -180 stays -180 and 540 maps to 180.
    """
    y = remainder(x, FULL_TURN)
    return math.copysign(HALF_TURN, x) if abs(y) == HALF_TURN else y


def ang_diff(x: float, y: float) -> Tuple[float, float]:
    """Exact difference of two angles reduced to [-180, 180].

    Parameters
    ----------
    x, y : float
        Angles in degrees.

    Returns
    -------
    Tuple[float, float]
        (d, e) where d + e = y - x exactly and d is rounded. A zero or
        ±180 result takes the sign of the unrounded difference.
    """
    d, t = sum_error(remainder(-x, FULL_TURN), remainder(y, FULL_TURN))
    d, t = sum_error(remainder(d, FULL_TURN), t)
    if d == 0 or abs(d) == HALF_TURN:
        d = math.copysign(d, y - x if t == 0 else -t)
    return d, t


def lat_fix(x: float) -> float:
    """Replace latitudes outside [-90, 90] by NaN."""
    return math.nan if abs(x) > QUARTER_TURN else x


def sincosd(x: float) -> Tuple[np.float64, np.float64]:
    """Sine and cosine of an angle in degrees.

    The argument is reduced to [-45, 45] before conversion to radians so
    that multiples of 90 give exact results. sin(-0) is -0 and cos never
    returns -0.
    """
    r = math.fmod(x, FULL_TURN) if math.isfinite(x) else math.nan
    q = 0 if math.isnan(r) else int(round(r / QUARTER_TURN))
    r -= QUARTER_TURN * q
    r = np.radians(np.float64(r))
    s, c = np.sin(r), np.cos(r)
    q %= 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    c = c + 0.0
    if s == 0:
        s = np.copysign(s, x)
    return s, c


def atan2d(y: float, x: float) -> np.float64:
    """atan2 in degrees.

    The arguments are permuted so that the radian result lies in
    [-45, 45] before conversion; exact quadrant boundaries come out as
    exact multiples of 90.
    """
    q = 0
    if abs(y) > abs(x):
        x, y = y, x
        q = 2
    if np.signbit(x):
        x = -x
        q += 1
    ang = np.degrees(np.arctan2(y, x))
    if q == 1:
        ang = np.copysign(HALF_TURN, y) - ang
    elif q == 2:
        ang = QUARTER_TURN - ang
    elif q == 3:
        ang = -QUARTER_TURN + ang
    return ang


def atand(x: float) -> np.float64:
    """atan in degrees."""
    return atan2d(x, 1.0)


def eatanhe(x: float, es: float) -> np.float64:
    """e * atanh(e * x), continued to prolate ellipsoids (es < 0) as
    -|e| * atan(|e| * x)."""
    return es * np.arctanh(es * x) if es > 0 else -es * np.arctan(es * x)


def taupf(tau: float, es: float) -> np.float64:
    """Tangent of the conformal latitude from tangent of the latitude.

    Parameters
    ----------
    tau : float
        tan(phi), phi the geodetic latitude.
    es : float
        Signed eccentricity.

    Returns
    -------
    float
        tan(phi') = sinh(psi), phi' the conformal latitude and psi the
        isometric latitude. Infinite tau is passed through.
    """
    if not np.isfinite(tau):
        return tau
    tau1 = np.hypot(1.0, tau)
    sig = np.sinh(eatanhe(tau / tau1, es))
    return np.hypot(1.0, sig) * tau - sig * tau1


def tauf(taup: float, es: float) -> np.float64:
    """Inverse of :func:`taupf` by Newton's method.

    Starts from taup / (1 - e^2) (or the large-tau asymptote beyond about
    89°) and typically converges in two iterations to within a few ulps
    of the fixed point of taupf.
    """
    e2m = 1 - es * abs(es)
    tau = (taup * np.exp(eatanhe(1.0, es)) if abs(taup) > 70
           else taup / e2m)
    stol = _TAUF_TOL * max(1.0, abs(taup))
    # handles +/-inf and nan
    if not abs(tau) < _TAUF_MAX:
        return tau
    for _ in range(_TAUF_MAX_ITERATIONS):
        taupa = taupf(tau, es)
        dtau = ((taup - taupa) * (1 + e2m * sq(tau)) /
                (e2m * np.hypot(1.0, tau) * np.hypot(1.0, taupa)))
        tau += dtau
        if not abs(dtau) >= stol:
            break
    return tau
