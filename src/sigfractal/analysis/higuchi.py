"""Higuchi (1988) fractal dimension of a time series."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from .fitting import linear_fit


def curve_lengths(x: np.ndarray, k_max: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Mean normalised curve length ``L(k)`` for ``k = 1..k_max``.

    Returns the ``k`` values and lengths for which ``L(k)`` is positive and
    finite.
    """
    n = x.size
    ks: list[int] = []
    lengths: list[float] = []
    for k in range(1, k_max + 1):
        total = 0.0
        used = 0
        for m in range(min(k, n - 2)):
            sub = x[m::k]
            count = sub.size - 1
            if count <= 0:
                continue
            # L_m(k) = (N - 1) / (count * k^2) * sum |x[t] - x[t-k]|
            total += (n - 1.0) / (count * k * k) * float(np.abs(np.diff(sub)).sum())
            used += 1
        if used == 0:
            continue
        lk = total / used
        if lk > 0 and np.isfinite(lk):
            ks.append(k)
            lengths.append(lk)
    return np.asarray(ks, dtype=float), np.asarray(lengths, dtype=float)


def higuchi_fd(x: ArrayLike, k_max: int = 8) -> float:
    """
    Higuchi fractal dimension in ``[1, 2]``.

    ``log L(k) ~ -D log k``, so the dimension is minus the fitted slope.
    Windows shorter than ``k_max + 2`` return 1.0; a non-finite fit returns
    1.5.
    """
    if k_max < 1:
        raise ValueError(f"k_max must be >= 1, got {k_max}")
    arr = np.asarray(x, dtype=float)
    if arr.size < k_max + 2:
        return 1.0

    ks, lengths = curve_lengths(arr, k_max)
    if ks.size < 2:
        return 1.0

    fd = -linear_fit(np.log(ks), np.log(lengths)).slope
    return float(np.clip(fd, 1.0, 2.0)) if np.isfinite(fd) else 1.5


__all__ = ["curve_lengths", "higuchi_fd"]
