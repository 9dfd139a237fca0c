"""Core streaming pipeline: buffers, output record and orchestration.

This package owns the per-signal state machine. Samples land in a
:class:`RingBuffer`; once the window is full, :class:`SignalPipeline` runs the
registered transforms and feature extractors over a snapshot and hands back a
:class:`FeatureVector`.
"""

from .models import FEATURE_FIELDS, FeatureFlags, FeatureVector
from .pipeline import FeatureExtractor, SignalPipeline, Transformer
from .ringbuffer import RingBuffer

# Wiring helpers
from .pipeline_wiring import build_pipeline, make_transform, register_spectral_extractors

__all__ = [
    "FEATURE_FIELDS",
    "FeatureExtractor",
    "FeatureFlags",
    "FeatureVector",
    "RingBuffer",
    "SignalPipeline",
    "Transformer",
    "build_pipeline",
    "make_transform",
    "register_spectral_extractors",
]
