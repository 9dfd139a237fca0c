"""Signal analysis utilities (transforms, fractal and spectral estimators).

This package gathers pure numerical helpers that operate on NumPy arrays of
samples. Modules such as :mod:`dfa`, :mod:`higuchi`, :mod:`fft` and
:mod:`spectral` stay free of pipeline state so they can be reused in
command-line scripts, automated tests, or offline notebooks alike.
"""

from .dfa import DfaResult, hurst_dfa
from .fft import welch_psd
from .fitting import LineFit, linear_fit, trend_slope_vol
from .higuchi import higuchi_fd
from .spectral import ShapeFeatures, shape_features, spectral_slope_beta
from .transforms import FirstDifference, LogReturn, Winsorize

__all__ = [
    "DfaResult",
    "FirstDifference",
    "LineFit",
    "LogReturn",
    "ShapeFeatures",
    "Winsorize",
    "higuchi_fd",
    "hurst_dfa",
    "linear_fit",
    "shape_features",
    "spectral_slope_beta",
    "trend_slope_vol",
    "welch_psd",
]
