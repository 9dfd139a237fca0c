"""
Spectral feature extractors built on a Welch PSD.

:class:`SpectralSlopeExtractor` computes the PSD once per window and caches
it; it also acts as a :class:`PsdProvider` so :class:`SpectralShapeExtractor`
can reuse that PSD instead of running a second FFT pass. The reuse only
happens when the slope extractor runs first on the same window, so it must be
registered before the shape extractor (see
:func:`sigfractal.core.pipeline_wiring.register_spectral_extractors`).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional, Protocol, Tuple, runtime_checkable

import numpy as np

from ..analysis.fft import welch_psd
from ..analysis.spectral import shape_features, spectral_slope_beta

if TYPE_CHECKING:
    from ..core.models import FeatureVector

logger = logging.getLogger(__name__)

Psd = Tuple[np.ndarray, np.ndarray]


@runtime_checkable
class PsdProvider(Protocol):
    """Source of a one-sided PSD already computed for the current window."""

    def try_get(self, window: np.ndarray) -> Optional[Psd]:  # pragma: no cover - protocol
        """Return ``(freq, psd)`` for ``window``, or ``None`` if unavailable."""
        ...


def _validate_welch_params(sample_hz: float, seg_len: int, overlap: int) -> None:
    if sample_hz <= 0:
        raise ValueError(f"sample_hz must be > 0, got {sample_hz}")
    if seg_len < 2:
        raise ValueError(f"seg_len must be >= 2, got {seg_len}")
    if overlap < 0:
        raise ValueError(f"overlap must be >= 0, got {overlap}")


class SpectralSlopeExtractor:
    """
    Writes ``beta`` (low-frequency PSD slope) and lowers ``fit_r2``.

    The last PSD is cached together with a copy of the window it came from;
    :meth:`try_get` only hands it out for that same window. Each pipeline
    needs its own instance.
    """

    name = "beta"

    def __init__(
        self,
        sample_hz: float,
        seg_len: int = 128,
        overlap: int = 64,
        f_max_ratio: float = 0.1,
    ) -> None:
        _validate_welch_params(sample_hz, seg_len, overlap)
        self.sample_hz = float(sample_hz)
        self.seg_len = int(seg_len)
        self.overlap = int(overlap)
        self.f_max_ratio = float(f_max_ratio)
        self._last: Optional[Psd] = None
        self._last_window: Optional[np.ndarray] = None

    def extract(self, window: np.ndarray, dst: FeatureVector) -> None:
        freqs, psd = welch_psd(window, self.sample_hz, self.seg_len, self.overlap)
        if freqs.size == 0:
            self._last = None
            return

        self._remember(window, (freqs, psd))

        beta, r2 = spectral_slope_beta(freqs, psd, f_max_ratio=self.f_max_ratio)
        dst.beta = beta
        dst.fit_r2 = min(dst.fit_r2, r2)

    def try_get(self, window: np.ndarray) -> Optional[Psd]:
        if self._last is None or self._last_window is None:
            return None
        if not np.array_equal(self._last_window, window, equal_nan=True):
            return None
        return self._last

    def _remember(self, window: np.ndarray, psd: Psd) -> None:
        if self._last_window is None or self._last_window.shape != window.shape:
            self._last_window = np.empty_like(window, dtype=np.float64)
        np.copyto(self._last_window, window)
        self._last = psd


class SpectralShapeExtractor:
    """
    Writes ``spec_entropy``, ``spec_flatness``, ``top_peak_hz`` and
    ``peak_power_ratio``.

    When ``psd_provider`` is given its PSD is preferred; on a miss the PSD is
    recomputed with this extractor's own Welch parameters.
    """

    name = "spectral_shape"

    def __init__(
        self,
        sample_hz: float,
        seg_len: int = 128,
        overlap: int = 64,
        psd_provider: Optional[PsdProvider] = None,
    ) -> None:
        _validate_welch_params(sample_hz, seg_len, overlap)
        self.sample_hz = float(sample_hz)
        self.seg_len = int(seg_len)
        self.overlap = int(overlap)
        self.psd_provider = psd_provider
        self.cache_hits = 0
        self.cache_misses = 0

    def extract(self, window: np.ndarray, dst: FeatureVector) -> None:
        cached = self.psd_provider.try_get(window) if self.psd_provider is not None else None
        if cached is not None:
            self.cache_hits += 1
            freqs, psd = cached
        else:
            if self.psd_provider is not None:
                self.cache_misses += 1
                logger.debug("PSD provider miss; recomputing Welch PSD")
            freqs, psd = welch_psd(window, self.sample_hz, self.seg_len, self.overlap)
            if freqs.size == 0:
                return

        shape = shape_features(freqs, psd)
        dst.spec_entropy = shape.entropy
        dst.spec_flatness = shape.flatness
        dst.top_peak_hz = shape.top_peak_hz
        dst.peak_power_ratio = shape.peak_power_ratio


__all__ = ["PsdProvider", "Psd", "SpectralShapeExtractor", "SpectralSlopeExtractor"]
