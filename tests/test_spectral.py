import numpy as np
import pytest

from signal_generators import random_walk, sine_plus_noise, white_noise
from sigfractal.analysis.fft import hann_window, welch_psd
from sigfractal.analysis.spectral import shape_features, spectral_slope_beta


def test_hann_window_is_symmetric() -> None:
    np.testing.assert_allclose(hann_window(5), [0.0, 0.5, 1.0, 0.5, 0.0], atol=1e-12)


def test_welch_white_noise_density_level() -> None:
    freqs, psd = welch_psd(white_noise(8192), 1.0, seg_len=128, overlap=64)
    assert freqs.size == psd.size == 65
    assert freqs[-1] == pytest.approx(0.5)
    # one-sided density of unit-variance noise is 2 / fs
    assert np.mean(psd[1:-1]) == pytest.approx(2.0, rel=0.1)


def test_welch_clamps_segment_to_input_length() -> None:
    freqs, psd = welch_psd(white_noise(50), 2.0, seg_len=128, overlap=64)
    assert freqs.size == 26
    assert freqs[-1] == pytest.approx(1.0)
    assert np.all(psd >= 0)


def test_welch_too_short_input_is_empty() -> None:
    freqs, psd = welch_psd([1.0], 1.0)
    assert freqs.size == 0
    assert psd.size == 0


@pytest.mark.parametrize("fs,overlap", [(0.0, 4), (-1.0, 4), (1.0, -1)])
def test_welch_rejects_bad_parameters(fs: float, overlap: int) -> None:
    with pytest.raises(ValueError):
        welch_psd(white_noise(64), fs, seg_len=16, overlap=overlap)


def test_beta_recovers_power_law() -> None:
    freqs = np.linspace(0.0, 0.5, 257)
    psd = np.ones_like(freqs)
    psd[1:] = freqs[1:] ** -1.5

    beta, r2 = spectral_slope_beta(freqs, psd, f_max_ratio=0.1)

    assert beta == pytest.approx(1.5)
    assert r2 == pytest.approx(1.0)


def test_beta_needs_enough_low_frequency_bins() -> None:
    freqs = np.linspace(0.0, 0.5, 20)
    psd = np.ones_like(freqs)
    assert spectral_slope_beta(freqs, psd, f_max_ratio=0.1) == (0.0, 0.0)


def test_beta_white_noise_near_zero() -> None:
    freqs, psd = welch_psd(white_noise(8192), 1.0, seg_len=128, overlap=64)
    beta, _ = spectral_slope_beta(freqs, psd)
    assert abs(beta) < 0.3


def test_beta_random_walk_is_steep() -> None:
    freqs, psd = welch_psd(random_walk(8192), 1.0, seg_len=128, overlap=64)
    beta_walk, _ = spectral_slope_beta(freqs, psd)
    freqs, psd = welch_psd(white_noise(8192), 1.0, seg_len=128, overlap=64)
    beta_white, _ = spectral_slope_beta(freqs, psd)
    assert beta_walk > 1.2
    assert beta_walk > beta_white


def test_shape_features_flat_spectrum() -> None:
    freqs = np.linspace(0.0, 0.5, 50)
    shape = shape_features(freqs, np.ones(50))

    assert shape.entropy == pytest.approx(1.0)
    assert shape.flatness == pytest.approx(1.0)
    assert shape.top_peak_hz == 0.0
    assert shape.peak_power_ratio == pytest.approx(2.0 / 50.0)


def test_shape_features_single_spike() -> None:
    freqs = np.linspace(0.0, 0.5, 50)
    psd = np.zeros(50)
    psd[10] = 3.0
    shape = shape_features(freqs, psd)

    assert shape.entropy == pytest.approx(0.0, abs=1e-6)
    assert shape.flatness == pytest.approx(0.0, abs=1e-6)
    assert shape.top_peak_hz == pytest.approx(freqs[10])
    assert shape.peak_power_ratio == pytest.approx(1.0)


def test_shape_features_empty_psd() -> None:
    assert tuple(shape_features([], [])) == (0.0, 0.0, 0.0, 0.0)


def test_sine_peak_located_within_one_bin() -> None:
    fs = 1.0 / 30.0
    target = 1.0 / 600.0
    x = sine_plus_noise(2048, target, fs, snr=2.5)

    freqs, psd = welch_psd(x, fs, seg_len=256, overlap=128)
    shape = shape_features(freqs, psd)
    noise_shape = shape_features(*welch_psd(white_noise(2048), fs, seg_len=256, overlap=128))

    bin_width = fs / 256
    assert abs(shape.top_peak_hz - target) <= bin_width
    assert shape.peak_power_ratio > 0.10
    assert shape.flatness < 0.6
    assert shape.flatness < noise_shape.flatness
    assert shape.entropy < noise_shape.entropy


def _periodogram_average(x: np.ndarray, fs: float, seg_len: int, overlap: int) -> np.ndarray:
    w = hann_window(seg_len)
    step = max(1, seg_len - overlap)
    starts = range(0, x.size - seg_len + 1, step)
    power = np.mean([np.abs(np.fft.rfft(x[s : s + seg_len] * w)) ** 2 for s in starts], axis=0)
    power /= np.dot(w, w) * fs
    # DC and bin seg_len // 2 single-sided, the rest doubled
    power[1:-1] *= 2.0
    return power


@pytest.mark.parametrize("n,seg_len,overlap", [(256, 128, 64), (255, 127, 64), (101, 128, 64)])
def test_welch_matches_segment_periodogram_average(n: int, seg_len: int, overlap: int) -> None:
    x = white_noise(n, seed=9)
    freqs, psd = welch_psd(x, 2.0, seg_len=seg_len, overlap=overlap)

    expected = _periodogram_average(x, 2.0, min(seg_len, n), overlap)
    assert freqs.size == min(seg_len, n) // 2 + 1
    np.testing.assert_allclose(psd, expected, rtol=1e-10)
