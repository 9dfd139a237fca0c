"""Shared dataclasses for pipeline output."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass, fields
from datetime import datetime
from typing import Any, Dict, Tuple, Union

Timestamp = Union[datetime, float]


class FeatureFlags(enum.IntFlag):
    """Bit flags carried in :attr:`FeatureVector.flags`."""

    NONE = 0
    READY = 0x1
    STABLE_FIT = 0x2


@dataclass(slots=True)
class FeatureVector:
    """
    Features computed for one full window.

    A fresh instance is created by the pipeline on every ready tick and handed
    to each extractor in turn. Extractors only write the fields they own:

    - pipeline: ``as_of``, ``n``, ``slope_z``, ``vol_z``, ``fit_r2`` (baseline
      R², later lowered by fitting extractors) and ``flags``
    - Hurst/DFA: ``hurst``, ``hurst_delta``, ``fit_r2``
    - Higuchi: ``higuchi_fd``
    - spectral slope: ``beta``, ``fit_r2``
    - spectral shape: ``spec_entropy``, ``spec_flatness``, ``top_peak_hz``,
      ``peak_power_ratio``
    """

    as_of: Timestamp | None = None
    n: int = 0  # points in window
    fit_r2: float = 0.0
    hurst: float = 0.0  # [0, 1]
    hurst_delta: float = 0.0  # relative to median of recent Hurst values
    higuchi_fd: float = 0.0  # [1, 2]
    beta: float = 0.0  # spectral slope
    spec_entropy: float = 0.0  # [0, 1]
    spec_flatness: float = 0.0  # ~1 white, ~0 tonal
    top_peak_hz: float = 0.0
    peak_power_ratio: float = 0.0  # [0, 1]
    slope_z: float = 0.0
    vol_z: float = 0.0
    flags: FeatureFlags = FeatureFlags.NONE

    @property
    def is_ready(self) -> bool:
        return bool(self.flags & FeatureFlags.READY)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["flags"] = int(self.flags)
        return data


FEATURE_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(FeatureVector))


__all__ = ["FEATURE_FIELDS", "FeatureFlags", "FeatureVector", "Timestamp"]
