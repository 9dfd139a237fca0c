"""FFT helpers: Welch power spectral density."""

from __future__ import annotations

from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike
from scipy import signal


def hann_window(length: int) -> np.ndarray:
    """Symmetric Hann window ``0.5 - 0.5*cos(2*pi*i/(length-1))``."""
    return signal.windows.hann(int(length), sym=True)


def welch_psd(
    x: ArrayLike,
    sample_rate_hz: float,
    seg_len: int = 128,
    overlap: int = 64,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    One-sided power spectral density using Welch's method.

    Parameters
    ----------
    x:
        1-D input series.
    sample_rate_hz:
        Sampling rate in Hz. Must be > 0.
    seg_len:
        Segment length; clamped to ``len(x)``.
    overlap:
        Samples shared by consecutive segments. Segments advance by
        ``max(1, seg_len - overlap)``.

    Returns
    -------
    freqs : np.ndarray
        ``seg_len // 2 + 1`` frequency bins in Hz.
    psd : np.ndarray
        Density-scaled power, ``1 / (segments * sum(w**2) * fs)``, with every
        bin doubled except DC and the last bin ``seg_len // 2`` (for odd
        ``seg_len`` as well). Both arrays are empty when no
        segment of at least two samples fits.
    """
    if sample_rate_hz <= 0:
        raise ValueError(f"sample_rate_hz must be > 0, got {sample_rate_hz}")
    if overlap < 0:
        raise ValueError(f"overlap must be >= 0, got {overlap}")

    arr = np.asarray(x, dtype=float)
    seg_len = min(int(seg_len), arr.size)
    if seg_len < 2:
        return np.empty(0, dtype=float), np.empty(0, dtype=float)

    step = max(1, seg_len - int(overlap))
    noverlap = seg_len - step

    freqs, psd = signal.welch(
        arr,
        fs=float(sample_rate_hz),
        window=hann_window(seg_len),
        nperseg=seg_len,
        noverlap=noverlap,
        detrend=False,
        return_onesided=True,
        scaling="density",
        average="mean",
    )
    if seg_len % 2:
        # scipy doubles the last bin of an odd segment; bin seg_len // 2 stays single
        psd[-1] *= 0.5
    return freqs, psd


__all__ = ["hann_window", "welch_psd"]
