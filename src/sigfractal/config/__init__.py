"""Configuration objects and helpers for sigfractal.

This package knows how to load YAML descriptors for a feature pipeline:
window length, z-score history, the ordered pre-transforms and the Welch /
Higuchi parameters of the extractors. The resulting typed dataclass (see
:mod:`runtime`) is consumed by :func:`sigfractal.core.build_pipeline`.
"""

from .runtime import PipelineConfig, config_from_mapping, load_config

__all__ = ["PipelineConfig", "config_from_mapping", "load_config"]
