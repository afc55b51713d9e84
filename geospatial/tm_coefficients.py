"""
Krüger Series Coefficients for the Transverse Mercator Projection.

The mapping from the Gauss-Schreiber coordinate zeta' = xi' + i eta' to the
Gauss-Krüger coordinate zeta = xi + i eta is a trigonometric series in the
third flattening n:

    zeta  = zeta' + sum(alp[j] sin(2 j zeta'), j = 1..order)
    zeta' = zeta  - sum(bet[j] sin(2 j zeta),  j = 1..order)

with alp[j], bet[j] = O(n^j). The rectifying radius a1 = b1 a scales xi to a
meridian distance.

The tables below give, for each order and each j, the numerator polynomial
of alp[j] / n^j (highest power of n first) followed by its denominator. They
are exact rational coefficients (generated by Maxima, 2015-05-14) and must
not be edited.

Accuracy
--------
Over the UTM range the series error is about 200 nm at order 4 and 5 nm at
order 6. Orders 7 and 8 cost a little more time for sub-nanometer error.

References
----------
- Krüger, L. (1912). Konforme Abbildung des Erdellipsoids in der Ebene.
- Karney, C.F.F. (2011). Transverse Mercator with an accuracy of a few
  nanometers. J. Geodesy 85(8), 475-485. Eqs. (35), (36).
"""

from dataclasses import dataclass
from typing import Dict, Tuple

from common.constants import DEFAULT_SERIES_ORDER, GeodeticConstants
from common.errors import ConfigurationError
from common.logging_config import get_logger, log_configuration_error
from geospatial.geomath import polyval, sq

logger = get_logger(__name__)

Table = Tuple[Tuple[int, ...], ...]

# b1 * (1 + n) as a polynomial in n^2, keyed by order // 2
B1_COEFFS: Dict[int, Tuple[int, ...]] = {
    2: (1, 16, 64, 64),
    3: (1, 4, 64, 256, 256),
    4: (25, 64, 256, 4096, 16384, 16384),
}

ALP_COEFFS: Dict[int, Table] = {
    4: (
        (164, 225, -480, 360, 720),
        (557, -864, 390, 1440),
        (-1236, 427, 1680),
        (49561, 161280),
    ),
    5: (
        (-635, 328, 450, -960, 720, 1440),
        (4496, 3899, -6048, 2730, 10080),
        (15061, -19776, 6832, 26880),
        (-171840, 49561, 161280),
        (34729, 80640),
    ),
    6: (
        (31564, -66675, 34440, 47250, -100800, 75600, 151200),
        (-1983433, 863232, 748608, -1161216, 524160, 1935360),
        (670412, 406647, -533952, 184464, 725760),
        (6601661, -7732800, 2230245, 7257600),
        (-13675556, 3438171, 7983360),
        (212378941, 319334400),
    ),
    7: (
        (1804025, 2020096, -4267200, 2204160, 3024000, -6451200, 4838400,
         9676800),
        (4626384, -9917165, 4316160, 3743040, -5806080, 2620800, 9676800),
        (-67102379, 26816480, 16265880, -21358080, 7378560, 29030400),
        (155912000, 72618271, -85060800, 24532695, 79833600),
        (102508609, -109404448, 27505368, 63866880),
        (-12282192400, 2760926233, 4151347200),
        (1522256789, 1383782400),
    ),
    8: (
        (-75900428, 37884525, 42422016, -89611200, 46287360, 63504000,
         -135475200, 101606400, 203212800),
        (148003883, 83274912, -178508970, 77690880, 67374720, -104509440,
         47174400, 174182400),
        (318729724, -738126169, 294981280, 178924680, -234938880, 81164160,
         319334400),
        (-40176129013, 14967552000, 6971354016, -8165836800, 2355138720,
         7664025600),
        (10421654396, 3997835751, -4266773472, 1072709352, 2490808320),
        (175214326799, -171950693600, 38652967262, 58118860800),
        (-67039739596, 13700311101, 12454041600),
        (1424729850961, 743921418240),
    ),
}

BET_COEFFS: Dict[int, Table] = {
    4: (
        (-4, 555, -960, 720, 1440),
        (-437, 96, 30, 1440),
        (-148, 119, 3360),
        (4397, 161280),
    ),
    5: (
        (-3645, -64, 8880, -15360, 11520, 23040),
        (4416, -3059, 672, 210, 10080),
        (-627, -592, 476, 13440),
        (-3520, 4397, 161280),
        (4583, 161280),
    ),
    6: (
        (384796, -382725, -6720, 932400, -1612800, 1209600, 2419200),
        (-1118711, 1695744, -1174656, 258048, 80640, 3870720),
        (22276, -16929, -15984, 12852, 362880),
        (-830251, -158400, 197865, 7257600),
        (-435388, 453717, 15966720),
        (20648693, 638668800),
    ),
    7: (
        (-5406467, 6156736, -6123600, -107520, 14918400, -25804800, 19353600,
         38707200),
        (829456, -5593555, 8478720, -5873280, 1290240, 403200, 19353600),
        (9261899, 3564160, -2708640, -2557440, 2056320, 58060800),
        (14928352, -9132761, -1742400, 2176515, 79833600),
        (-8005831, -1741552, 1814868, 63866880),
        (-261810608, 268433009, 8302694400),
        (219941297, 5535129600),
    ),
    8: (
        (31777436, -37845269, 43097152, -42865200, -752640, 104428800,
         -180633600, 135475200, 270950400),
        (24749483, 14930208, -100683990, 152616960, -105719040, 23224320,
         7257600, 348364800),
        (-232468668, 101880889, 39205760, -29795040, -28131840, 22619520,
         638668800),
        (324154477, 1433121792, -876745056, -167270400, 208945440,
         7664025600),
        (457888660, -312227409, -67920528, 70779852, 2490808320),
        (-19841813847, -3665348512, 3758062126, 116237721600),
        (-1989295244, 1979471673, 49816166400),
        (191773887257, 3719607091200),
    ),
}


@dataclass(frozen=True)
class SeriesCoefficients:
    """Coefficients of the forward and reverse Krüger series.

    Attributes
    ----------
    order : int
        Truncation order of the series.
    n : float
        Third flattening the coefficients were computed for.
    b1 : float
        Ratio of the rectifying radius to the equatorial radius.
    a1 : float
        Rectifying radius b1 * a in meters.
    alp : tuple of float
        Forward coefficients; alp[0] is unused, alp[1..order] are the terms.
    bet : tuple of float
        Reverse coefficients, same layout as alp.
    """
    order: int
    n: float
    b1: float
    a1: float
    alp: Tuple[float, ...]
    bet: Tuple[float, ...]


def check_series_order(order: int) -> int:
    """Validate a truncation order.

    Raises
    ------
    ConfigurationError
        If the order is not one of the tabulated orders (4..8).
    """
    if order not in GeodeticConstants.SUPPORTED_SERIES_ORDERS:
        raise ConfigurationError(log_configuration_error(
            logger,
            f"Series order {order!r} not supported; choose one of "
            f"{GeodeticConstants.SUPPORTED_SERIES_ORDERS}"
        ))
    return order


def generate_coefficients(
    n: float,
    a: float,
    order: int = DEFAULT_SERIES_ORDER
) -> SeriesCoefficients:
    """Evaluate the Krüger series coefficients for an ellipsoid.

    Parameters
    ----------
    n : float
        Third flattening of the ellipsoid.
    a : float
        Equatorial radius in meters.
    order : int
        Truncation order, 4 to 8.

    Returns
    -------
    SeriesCoefficients
        Immutable coefficient set.

    Notes
    -----
    b1 = P(n²) / (D (1 + n)) and alp[j] = n^j Q_j(n) / D_j, with P, Q_j
    evaluated by Horner's method. For a sphere (n = 0) b1 is exactly 1
    and every alp[j], bet[j] vanishes.
    """
    check_series_order(order)

    m = order // 2
    b1coeff = B1_COEFFS[m]
    b1 = polyval(m, b1coeff, sq(n)) / (b1coeff[m + 1] * (1 + n))

    alp = [0.0]
    bet = [0.0]
    d = n
    for l, (alpcoeff, betcoeff) in enumerate(
            zip(ALP_COEFFS[order], BET_COEFFS[order]), start=1):
        m = order - l
        alp.append(d * polyval(m, alpcoeff, n) / alpcoeff[m + 1])
        bet.append(d * polyval(m, betcoeff, n) / betcoeff[m + 1])
        d *= n

    logger.debug(f"Generated order-{order} Krüger coefficients for n={n:.12g}")

    return SeriesCoefficients(
        order=order,
        n=n,
        b1=b1,
        a1=b1 * a,
        alp=tuple(alp),
        bet=tuple(bet),
    )
