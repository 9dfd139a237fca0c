"""Hurst exponent estimation via Detrended Fluctuation Analysis (order 1)."""

from __future__ import annotations

from typing import NamedTuple, Optional

import numpy as np
from numpy.typing import ArrayLike

from .fitting import linear_fit

MIN_SAMPLES = 64
MIN_SCALE = 8
SCALE_COUNT = 8


class DfaResult(NamedTuple):
    hurst: float
    r2: float
    scales_used: int


def build_log_scales(min_scale: int, max_scale: int, count: int = SCALE_COUNT) -> np.ndarray:
    """
    Return ``count`` log-spaced integer box sizes between ``min_scale`` and
    ``max_scale``, strictly increasing.

    ``min_scale`` is raised to at least 4. Rounding collisions are bumped by
    one so no box size repeats.
    """
    min_scale = max(4, int(min_scale))
    max_scale = max(min_scale + 1, int(max_scale))
    if count < 2:
        return np.array([min_scale], dtype=np.int64)
    t = np.arange(count) / (count - 1)
    lmin, lmax = np.log(min_scale), np.log(max_scale)
    scales = np.round(np.exp(lmin + t * (lmax - lmin))).astype(np.int64)
    for i in range(1, count):
        if scales[i] <= scales[i - 1]:
            scales[i] = scales[i - 1] + 1
    return scales


def _fluctuation(profile: np.ndarray, s: int) -> float:
    """Root-mean-square residual of per-segment linear detrending at scale ``s``."""
    m = profile.size // s
    segments = profile[: m * s].reshape(m, s)

    # closed-form OLS over t = 1..s
    t = np.arange(1, s + 1, dtype=float)
    sum_t = s * (s + 1) * 0.5
    sum_t2 = s * (s + 1) * (2 * s + 1) / 6.0
    denom = s * sum_t2 - sum_t * sum_t

    sum_y = segments.sum(axis=1)
    sum_ty = segments @ t
    a = (s * sum_ty - sum_t * sum_y) / denom
    b = (sum_y - a * sum_t) / s

    resid = segments - (a[:, None] * t[None, :] + b[:, None])
    seg_var = np.mean(resid * resid, axis=1)
    return float(np.sqrt(seg_var.mean()))


def hurst_dfa(x: ArrayLike, *, profile: Optional[np.ndarray] = None) -> DfaResult:
    """
    Estimate the Hurst exponent of a stationary series with DFA-1.

    Parameters
    ----------
    x:
        1-D series, typically increments/returns. At least ``MIN_SAMPLES``
        points are needed for a meaningful estimate.
    profile:
        Optional caller-owned buffer of at least ``len(x)`` floats used for the
        cumulative profile, so repeated calls do not allocate.

    Returns
    -------
    DfaResult
        ``(hurst, r2, scales_used)``. Degenerate inputs yield ``hurst=0.5`` and
        ``r2=0``; the estimate is clamped to ``[0, 1]``.
    """
    arr = np.asarray(x, dtype=float)
    n = arr.size
    if n < MIN_SAMPLES:
        return DfaResult(0.5, 0.0, 0)

    if profile is None or profile.size < n:
        profile = np.empty(n, dtype=float)
    prof = profile[:n]
    np.subtract(arr, arr.mean(), out=prof)
    np.cumsum(prof, out=prof)

    log_s: list[float] = []
    log_f: list[float] = []
    for s in build_log_scales(MIN_SCALE, max(16, n // 4)):
        s = int(s)
        if n // s < 2:
            continue
        f = _fluctuation(prof, s)
        if f > 0 and np.isfinite(f):
            log_s.append(np.log(s))
            log_f.append(np.log(f))

    k = len(log_s)
    if k < 3:
        return DfaResult(0.5, 0.0, k)

    fit = linear_fit(log_s, log_f)
    h = fit.slope
    h = float(np.clip(h, 0.0, 1.0)) if np.isfinite(h) else 0.5
    return DfaResult(h, fit.r2, k)


__all__ = ["DfaResult", "MIN_SAMPLES", "build_log_scales", "hurst_dfa"]
