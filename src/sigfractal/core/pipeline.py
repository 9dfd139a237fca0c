"""Windowed feature pipeline: ring buffer -> transforms -> extractors."""

from __future__ import annotations

import logging
import math
from collections import deque
from datetime import datetime, timezone
from typing import Deque, List, Literal, Optional, Protocol, Tuple, Union, runtime_checkable

import numpy as np

from ..analysis.fitting import trend_slope_vol
from ..config.runtime import NAN_POLICIES
from ..tools.debug import time_block
from .models import FeatureFlags, FeatureVector, Timestamp
from .ringbuffer import RingBuffer

__all__ = [
    "FeatureExtractor",
    "NanPolicy",
    "SignalPipeline",
    "Transformer",
    "rolling_zscore",
]

logger = logging.getLogger(__name__)

NanPolicy = Literal["propagate", "skip", "raise"]

MIN_Z_HISTORY = 5
Z_VAR_EPS = 1e-12


@runtime_checkable
class Transformer(Protocol):
    """In-place operator over a window snapshot."""

    name: str

    def apply(self, window: np.ndarray) -> None:  # pragma: no cover - protocol
        ...


@runtime_checkable
class FeatureExtractor(Protocol):
    """Computes one or more descriptors of a window into ``dst``."""

    name: str

    def extract(self, window: np.ndarray, dst: FeatureVector) -> None:  # pragma: no cover - protocol
        ...


def rolling_zscore(history: Deque[float], value: float) -> float:
    """
    Append ``value`` to ``history`` and return its z-score against the queue.

    The deque's ``maxlen`` bounds the history. Returns 0 until
    ``MIN_Z_HISTORY`` values are present, or when the variance (``n - 1``
    denominator) is at most ``Z_VAR_EPS``.
    """
    history.append(value)
    count = len(history)
    if count < MIN_Z_HISTORY:
        return 0.0
    values = np.fromiter(history, dtype=float, count=count)
    mu = values.mean()
    centered = values - mu
    var = float(np.dot(centered, centered)) / max(1, count - 1)
    if var <= Z_VAR_EPS:
        return 0.0
    return float((value - mu) / math.sqrt(var))


class SignalPipeline:
    """
    Streaming feature pipeline for a single scalar signal.

    Samples accumulate in a ring buffer of ``window_size``. Once it is full,
    every push snapshots the window into a scratch array, applies the
    registered transforms in order, computes a linear-trend baseline with
    rolling z-scores, and runs the registered extractors in order over the
    same array.

    Registration order matters: an extractor that consumes another one's
    output (e.g. a spectral shape extractor reusing a slope extractor's PSD)
    must be registered after its producer.

    Instances are not thread-safe; feed each pipeline from one thread.
    """

    def __init__(
        self,
        window_size: int,
        history_for_z: int = 60,
        *,
        stable_fit_r2: float = 0.9,
        nan_policy: NanPolicy = "propagate",
    ) -> None:
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        if history_for_z < MIN_Z_HISTORY:
            raise ValueError(f"history_for_z must be >= {MIN_Z_HISTORY}, got {history_for_z}")
        if nan_policy not in NAN_POLICIES:
            raise ValueError(f"nan_policy must be one of {NAN_POLICIES}, got {nan_policy!r}")

        self._window = RingBuffer(window_size)
        self._scratch = np.zeros(window_size, dtype=np.float64)
        self._transforms: List[Transformer] = []
        self._extractors: List[FeatureExtractor] = []
        self._history_for_z = int(history_for_z)
        self._slope_hist: Deque[float] = deque(maxlen=self._history_for_z)
        self._vol_hist: Deque[float] = deque(maxlen=self._history_for_z)
        self._stable_fit_r2 = float(stable_fit_r2)
        self._nan_policy: NanPolicy = nan_policy
        self._skipped = 0
        self._announced_ready = False

    # ------------------------------------------------------------ properties
    @property
    def window_size(self) -> int:
        return self._window.capacity

    @property
    def history_for_z(self) -> int:
        return self._history_for_z

    @property
    def is_ready(self) -> bool:
        return self._window.is_full

    @property
    def transforms(self) -> Tuple[Transformer, ...]:
        return tuple(self._transforms)

    @property
    def extractors(self) -> Tuple[FeatureExtractor, ...]:
        return tuple(self._extractors)

    @property
    def skipped_samples(self) -> int:
        """Non-finite samples dropped under ``nan_policy="skip"``."""
        return self._skipped

    # ---------------------------------------------------------- registration
    def use(self, component: Union[Transformer, FeatureExtractor]) -> "SignalPipeline":
        """Register a transformer or extractor; returns ``self`` for chaining."""
        if isinstance(component, Transformer):
            self._transforms.append(component)
        elif isinstance(component, FeatureExtractor):
            self._extractors.append(component)
        else:
            raise TypeError(
                f"{type(component).__name__} is neither a transformer (apply) "
                "nor a feature extractor (extract)"
            )
        return self

    # ---------------------------------------------------------------- ingest
    def try_push(
        self, value: float, timestamp: Optional[Timestamp] = None
    ) -> Tuple[bool, Optional[FeatureVector]]:
        """
        Push one sample.

        Returns
        -------
        ready, vector
            ``(False, None)`` while the window is filling (or when the sample
            was skipped), otherwise ``(True, vector)`` with a freshly computed
            :class:`FeatureVector`.
        """
        value = float(value)
        if not math.isfinite(value):
            if self._nan_policy == "raise":
                raise ValueError(f"non-finite sample: {value}")
            if self._nan_policy == "skip":
                self._skipped += 1
                logger.debug("Skipping non-finite sample (%d skipped so far)", self._skipped)
                return False, None

        self._window.push(value)
        if not self._window.is_full:
            return False, None

        if not self._announced_ready:
            self._announced_ready = True
            logger.debug(
                "Window of %d samples filled; running %d transform(s) and %d extractor(s)",
                self.window_size,
                len(self._transforms),
                len(self._extractors),
            )

        self._window.copy_to(self._scratch)
        window = self._scratch

        for transform in self._transforms:
            transform.apply(window)

        slope, vol, r2 = trend_slope_vol(window)
        vec = FeatureVector(
            as_of=timestamp if timestamp is not None else datetime.now(timezone.utc),
            n=window.size,
            fit_r2=r2,
            slope_z=rolling_zscore(self._slope_hist, slope),
            vol_z=rolling_zscore(self._vol_hist, vol),
        )

        for extractor in self._extractors:
            with time_block(f"extract[{extractor.name}]"):
                extractor.extract(window, vec)

        vec.flags |= FeatureFlags.READY
        if vec.fit_r2 >= self._stable_fit_r2:
            vec.flags |= FeatureFlags.STABLE_FIT
        return True, vec

    def reset(self) -> None:
        """Drop buffered samples and z-score history."""
        self._window.clear()
        self._slope_hist.clear()
        self._vol_hist.clear()
        self._skipped = 0
        self._announced_ready = False
