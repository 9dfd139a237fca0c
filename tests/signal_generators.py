"""Synthetic series used across the test-suite."""

from __future__ import annotations

import numpy as np


def white_noise(n: int, seed: int = 42, sigma: float = 1.0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.standard_normal(n) * sigma


def random_walk(n: int, seed: int = 43, step_sigma: float = 0.5) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return np.cumsum(rng.standard_normal(n) * step_sigma)


def ar1(n: int, phi: float, seed: int = 44, sigma: float = 1.0) -> np.ndarray:
    rng = np.random.default_rng(seed)
    eps = rng.standard_normal(n) * sigma
    x = np.empty(n)
    y = 0.0
    for i in range(n):
        y = phi * y + eps[i]
        x[i] = y
    return x


def sine_plus_noise(
    n: int,
    freq_hz: float,
    sample_hz: float,
    snr: float = 3.0,
    seed: int = 45,
) -> np.ndarray:
    """``snr`` is the sine amplitude relative to a unit noise sigma."""
    rng = np.random.default_rng(seed)
    w = 2.0 * np.pi * freq_hz / sample_hz
    return snr * np.sin(w * np.arange(n)) + rng.standard_normal(n)
