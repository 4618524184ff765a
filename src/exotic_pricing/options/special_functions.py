"""
Standard normal CDF and inverse CDF approximations.

Both functions accept scalars or numpy arrays and return the same shape.
They are fixed-coefficient rational approximations, so results are
deterministic and identical across platforms.

References
----------
[T1] Abramowitz, M. & Stegun, I. (1964). Handbook of Mathematical Functions, 26.2.17.
[T1] Acklam, P. J. (2003). An algorithm for computing the inverse normal
     cumulative distribution function.
"""

import numpy as np

from exotic_pricing.errors import ParameterValidationError

# A&S 26.2.17
_CDF_P = 0.2316419
_CDF_B = (0.319381530, -0.356563782, 1.781477937, -1.821255978, 1.330274429)
_INV_SQRT_2PI = 0.3989422804014327

# Acklam
_A = (-39.6968302866538, 220.946098424521, -275.928510446969,
      138.357751867269, -30.6647980661472, 2.50662827745924)
_B = (-54.4760987982241, 161.585836858041, -155.698979859887,
      66.8013118877197, -13.2806815528857)
_C = (-7.78489400243029e-03, -0.322396458041136, -2.40075827716184,
      -2.54973253934373, 4.37466414146497, 2.93816398269878)
_D = (7.78469570904146e-03, 0.32246712907004, 2.445134137143,
      3.75440866190742)

P_LOW = 0.02425
P_HIGH = 1.0 - P_LOW


def _as_output(values: np.ndarray, scalar: bool):
    return float(values) if scalar else values


def normal_cdf(x):
    """
    Standard normal CDF Φ(x).

    [T1] Φ(x) ≈ 1 - φ(x)(b1·t + b2·t² + b3·t³ + b4·t⁴ + b5·t⁵),
         t = 1 / (1 + p|x|), mirrored for x <= 0.

    Parameters
    ----------
    x : float or np.ndarray
        Evaluation point(s)

    Returns
    -------
    float or np.ndarray
        Φ(x), accurate to about 1e-7

    Examples
    --------
    >>> round(normal_cdf(0.0), 6)
    0.5
    """
    scalar = np.ndim(x) == 0
    x = np.asarray(x, dtype=float)

    t = 1.0 / (1.0 + _CDF_P * np.abs(x))
    d = _INV_SQRT_2PI * np.exp(-x * x / 2.0)
    b1, b2, b3, b4, b5 = _CDF_B
    p = d * t * (b1 + t * (b2 + t * (b3 + t * (b4 + t * b5))))

    return _as_output(np.where(x > 0, 1.0 - p, p), scalar)


def normal_inverse(p):
    """
    Inverse standard normal CDF Φ⁻¹(p) using Acklam's algorithm.

    Three regions with distinct coefficient sets:
    lower tail p < 0.02425, central region, upper tail p > 0.97575.

    Parameters
    ----------
    p : float or np.ndarray
        Probabilities, strictly inside (0, 1)

    Returns
    -------
    float or np.ndarray
        Quantile(s) z with Φ(z) = p

    Raises
    ------
    ParameterValidationError
        If any probability is outside the open interval (0, 1)
    """
    scalar = np.ndim(p) == 0
    p = np.asarray(p, dtype=float)

    if np.any(~((p > 0.0) & (p < 1.0))):
        raise ParameterValidationError(
            "CRITICAL: normal_inverse requires p in (0, 1)"
        )

    z = np.empty_like(p)
    lower = p < P_LOW
    upper = p > P_HIGH
    central = ~(lower | upper)

    c1, c2, c3, c4, c5, c6 = _C
    d1, d2, d3, d4 = _D

    if np.any(lower):
        q = np.sqrt(-2.0 * np.log(p[lower]))
        z[lower] = (((((c1 * q + c2) * q + c3) * q + c4) * q + c5) * q + c6) / (
            (((d1 * q + d2) * q + d3) * q + d4) * q + 1.0
        )

    if np.any(central):
        a1, a2, a3, a4, a5, a6 = _A
        b1, b2, b3, b4, b5 = _B
        q = p[central] - 0.5
        r = q * q
        z[central] = (((((a1 * r + a2) * r + a3) * r + a4) * r + a5) * r + a6) * q / (
            ((((b1 * r + b2) * r + b3) * r + b4) * r + b5) * r + 1.0
        )

    if np.any(upper):
        q = np.sqrt(-2.0 * np.log(1.0 - p[upper]))
        z[upper] = -(((((c1 * q + c2) * q + c3) * q + c4) * q + c5) * q + c6) / (
            (((d1 * q + d2) * q + d3) * q + d4) * q + 1.0
        )

    return _as_output(z, scalar)
