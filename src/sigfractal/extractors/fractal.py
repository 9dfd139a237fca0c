"""Fractal feature extractors: Hurst exponent (DFA) and Higuchi dimension."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Deque, Optional

import numpy as np

from ..analysis.dfa import hurst_dfa
from ..analysis.higuchi import higuchi_fd

if TYPE_CHECKING:
    from ..core.models import FeatureVector


class HurstDfaExtractor:
    """
    Writes ``hurst``, ``hurst_delta`` and lowers ``fit_r2`` to the DFA fit.

    ``hurst_delta`` is the current estimate minus the median of up to
    ``history`` previous estimates from this instance (0 on the first call).
    The DFA profile buffer is kept between calls and only grows.
    """

    name = "hurst_dfa"

    def __init__(self, history: int = 60) -> None:
        if history < 1:
            raise ValueError(f"history must be >= 1, got {history}")
        self._history: Deque[float] = deque(maxlen=int(history))
        self._profile: Optional[np.ndarray] = None

    def extract(self, window: np.ndarray, dst: FeatureVector) -> None:
        if self._profile is None or self._profile.size < window.size:
            self._profile = np.empty(window.size, dtype=np.float64)
        result = hurst_dfa(window, profile=self._profile)

        dst.hurst = result.hurst
        dst.hurst_delta = (
            result.hurst - float(np.median(np.fromiter(self._history, dtype=float)))
            if self._history
            else 0.0
        )
        self._history.append(result.hurst)
        # keep the weaker of the baseline/DFA fits for diagnostics
        dst.fit_r2 = min(dst.fit_r2, result.r2)


class HiguchiExtractor:
    """Writes ``higuchi_fd``."""

    name = "higuchi"

    def __init__(self, k_max: int = 8) -> None:
        if k_max < 1:
            raise ValueError(f"k_max must be >= 1, got {k_max}")
        self.k_max = int(k_max)

    def extract(self, window: np.ndarray, dst: FeatureVector) -> None:
        dst.higuchi_fd = higuchi_fd(window, self.k_max)


__all__ = ["HiguchiExtractor", "HurstDfaExtractor"]
