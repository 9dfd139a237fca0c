"""Spectral descriptors computed from a one-sided PSD."""

from __future__ import annotations

from typing import NamedTuple, Tuple

import numpy as np
from numpy.typing import ArrayLike

from .fitting import linear_fit

POWER_FLOOR = 1e-30
MIN_SLOPE_POINTS = 5


class ShapeFeatures(NamedTuple):
    entropy: float
    flatness: float
    top_peak_hz: float
    peak_power_ratio: float


def spectral_slope_beta(
    freqs: ArrayLike,
    psd: ArrayLike,
    f_max_ratio: float = 0.1,
) -> Tuple[float, float]:
    """
    Fit ``log S(f) ~ -beta * log f + c`` over the low-frequency band.

    Only bins with ``0 < f <= f_max_ratio * f[-1]`` and positive power are
    used. Fewer than ``MIN_SLOPE_POINTS`` bins, or an ill-conditioned fit,
    yields ``(0.0, 0.0)``.

    Interpretation: beta ~ 0 is white noise, beta > 0 persistence/long memory,
    beta < 0 high-frequency dominance. For fGn ``H ~ (beta + 1) / 2``.

    Returns
    -------
    beta, r2
    """
    f = np.asarray(freqs, dtype=float)
    p = np.asarray(psd, dtype=float)
    if f.size < 2:
        return 0.0, 0.0

    f_max = f[-1] * f_max_ratio
    band = slice(1, None)
    mask = (f[band] > 0) & (f[band] <= f_max) & (p[band] > 0)
    if np.count_nonzero(mask) < MIN_SLOPE_POINTS:
        return 0.0, 0.0

    fit = linear_fit(np.log(f[band][mask]), np.log(p[band][mask]))
    return -fit.slope, fit.r2


def shape_features(freqs: ArrayLike, psd: ArrayLike) -> ShapeFeatures:
    """
    Normalised spectral entropy, flatness, strongest peak and peak power ratio.

    - entropy: Shannon entropy of the PSD as a distribution, divided by
      ``log(N)``; ~1 noise-like, lower when power is concentrated.
    - flatness: geometric over arithmetic mean; ~1 white, ~0 tonal.
    - top_peak_hz: frequency of the maximum bin.
    - peak_power_ratio: share of total power within ``max(1, N // 100)`` bins
      of the peak.

    Each bin is floored at ``POWER_FLOOR`` before taking logs.
    """
    f = np.asarray(freqs, dtype=float)
    raw = np.asarray(psd, dtype=float)
    n = raw.size
    if n == 0:
        return ShapeFeatures(0.0, 0.0, 0.0, 0.0)

    total = float(raw.sum())
    norm = max(total, POWER_FLOOR)
    p = np.maximum(raw, POWER_FLOOR)
    q = p / norm
    entropy = float(-(q * np.log(q)).sum())
    if n > 1:
        entropy /= np.log(n)

    arith = total / n
    flatness = float(np.exp(np.log(p).mean()) / max(arith, POWER_FLOOR))

    peak = int(np.argmax(p))
    half_width = max(1, n // 100)
    lo = max(0, peak - half_width)
    hi = min(n - 1, peak + half_width)
    peak_ratio = float(raw[lo : hi + 1].sum()) / norm

    return ShapeFeatures(entropy, flatness, float(f[peak]), peak_ratio)


__all__ = [
    "MIN_SLOPE_POINTS",
    "POWER_FLOOR",
    "ShapeFeatures",
    "shape_features",
    "spectral_slope_beta",
]
