"""Least-squares line fitting shared by the baseline and the scaling fits."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike

FIT_EPS = 1e-12


class LineFit(NamedTuple):
    slope: float
    intercept: float
    r2: float


def linear_fit(x: ArrayLike, y: ArrayLike) -> LineFit:
    """
    Ordinary least-squares fit ``y ~ slope * x + intercept``.

    Returns ``LineFit(0, 0, 0)`` when the normal-equation denominator
    ``n*Σx² - (Σx)²`` is within ``FIT_EPS`` of zero. R² is clamped to
    ``[0, 1]`` and is 1 when ``y`` has no variance.
    """
    xs = np.asarray(x, dtype=float)
    ys = np.asarray(y, dtype=float)
    n = xs.size
    if n == 0:
        return LineFit(0.0, 0.0, 0.0)

    sx = xs.sum()
    sy = ys.sum()
    sxx = np.dot(xs, xs)
    sxy = np.dot(xs, ys)
    denom = n * sxx - sx * sx
    if not abs(denom) > FIT_EPS:
        return LineFit(0.0, 0.0, 0.0)

    slope = (n * sxy - sx * sy) / denom
    intercept = (sy - slope * sx) / n

    resid = ys - (slope * xs + intercept)
    ss_res = float(np.dot(resid, resid))
    centered = ys - sy / n
    ss_tot = float(np.dot(centered, centered))
    r2 = 1.0 if ss_tot <= 0 else 1.0 - ss_res / ss_tot
    return LineFit(float(slope), float(intercept), float(np.clip(r2, 0.0, 1.0)))


def trend_slope_vol(window: ArrayLike) -> tuple[float, float, float]:
    """
    Linear trend against the sample index ``0..N-1`` plus sample volatility.

    Returns
    -------
    slope, vol, r2
        OLS slope, sample standard deviation (``max(1, N-1)`` denominator)
        and goodness of fit of the trend line.
    """
    y = np.asarray(window, dtype=float)
    n = y.size
    if n == 0:
        return 0.0, 0.0, 0.0
    fit = linear_fit(np.arange(n, dtype=float), y)
    centered = y - y.mean()
    var = float(np.dot(centered, centered)) / max(1, n - 1)
    return fit.slope, float(np.sqrt(var)), fit.r2


__all__ = ["FIT_EPS", "LineFit", "linear_fit", "trend_slope_vol"]
