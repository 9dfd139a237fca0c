"""In-place window transforms applied before feature extraction."""

from __future__ import annotations

import numpy as np

LOG_FLOOR = 1e-12


class FirstDifference:
    """Replace each sample with its increment; the first sample becomes 0."""

    name = "diff"

    def apply(self, window: np.ndarray) -> None:
        if window.size == 0:
            return
        window[1:] = np.diff(window)
        window[0] = 0.0


class LogReturn:
    """
    Log returns ``ln(x[i]) - ln(x[i-1])`` with non-positive values floored at
    ``LOG_FLOOR``; the first sample becomes 0.
    """

    name = "logret"

    def apply(self, window: np.ndarray) -> None:
        if window.size == 0:
            return
        logs = np.log(np.maximum(window, LOG_FLOOR))
        window[1:] = np.diff(logs)
        window[0] = 0.0


class Winsorize:
    """
    Clamp samples into the ``[p_low, p_high]`` quantile range of the window.

    Quantiles use linear interpolation between order statistics of a sorted
    copy, so the cost is O(N log N) per call.
    """

    name = "winsor"

    def __init__(self, p_low: float = 0.01, p_high: float = 0.99) -> None:
        p_low = float(p_low)
        p_high = float(p_high)
        if not (0.0 <= p_low <= 1.0 and 0.0 <= p_high <= 1.0):
            raise ValueError(f"quantiles must lie in [0, 1], got ({p_low}, {p_high})")
        if p_low > p_high:
            raise ValueError(f"p_low must not exceed p_high, got ({p_low}, {p_high})")
        self.p_low = p_low
        self.p_high = p_high

    def apply(self, window: np.ndarray) -> None:
        if window.size == 0:
            return
        lo, hi = np.quantile(window, [self.p_low, self.p_high])
        np.clip(window, lo, hi, out=window)

    def __repr__(self) -> str:
        return f"Winsorize(p_low={self.p_low}, p_high={self.p_high})"


__all__ = ["FirstDifference", "LOG_FLOOR", "LogReturn", "Winsorize"]
