"""Factory helpers that wire a :class:`SignalPipeline` from configuration."""

from __future__ import annotations

import logging
from typing import Callable, Dict

from ..analysis.transforms import FirstDifference, LogReturn, Winsorize
from ..config import PipelineConfig
from ..extractors import (
    HiguchiExtractor,
    HurstDfaExtractor,
    SpectralShapeExtractor,
    SpectralSlopeExtractor,
)
from .pipeline import SignalPipeline, Transformer

logger = logging.getLogger(__name__)

TransformFactory = Callable[[PipelineConfig], Transformer]

TRANSFORM_FACTORIES: Dict[str, TransformFactory] = {
    "diff": lambda cfg: FirstDifference(),
    "logret": lambda cfg: LogReturn(),
    "winsor": lambda cfg: Winsorize(cfg.winsor_p_low, cfg.winsor_p_high),
}


def make_transform(name: str, cfg: PipelineConfig | None = None) -> Transformer:
    """Instantiate the transform registered under ``name``."""
    key = str(name).strip().lower()
    try:
        factory = TRANSFORM_FACTORIES[key]
    except KeyError:
        known = ", ".join(sorted(TRANSFORM_FACTORIES))
        raise ValueError(f"Unknown transform {name!r} (known: {known})") from None
    return factory(cfg or PipelineConfig())


def register_spectral_extractors(
    pipeline: SignalPipeline,
    sample_hz: float,
    seg_len: int = 128,
    overlap: int = 64,
    f_max_ratio: float = 0.1,
) -> SpectralSlopeExtractor:
    """
    Register the spectral slope extractor followed by a shape extractor that
    reuses its PSD.

    Both use the same Welch parameters so the cached PSD is exactly what the
    shape extractor would compute itself. Returns the slope extractor, which
    doubles as the PSD provider.
    """
    slope = SpectralSlopeExtractor(sample_hz, seg_len, overlap, f_max_ratio=f_max_ratio)
    shape = SpectralShapeExtractor(sample_hz, seg_len, overlap, psd_provider=slope)
    pipeline.use(slope).use(shape)
    return slope


def build_pipeline(cfg: PipelineConfig | None = None) -> SignalPipeline:
    """
    Build a :class:`SignalPipeline` from configuration.

    Transforms are registered in the configured order. Extractors always run
    Hurst -> Higuchi -> spectral slope -> spectral shape, which keeps the PSD
    producer ahead of its consumer.

    Raises
    ------
    ValueError
        If ``cfg.transforms`` names an unknown transform.
    """
    normalized = (cfg or PipelineConfig()).sanitized()

    pipeline = SignalPipeline(
        normalized.window_size,
        normalized.history_for_z,
        stable_fit_r2=normalized.stable_fit_r2,
        nan_policy=normalized.nan_policy,  # type: ignore[arg-type]
    )

    for name in normalized.transforms:
        pipeline.use(make_transform(name, normalized))

    if normalized.hurst_enabled:
        pipeline.use(HurstDfaExtractor(history=normalized.history_for_z))
    if normalized.higuchi_enabled:
        pipeline.use(HiguchiExtractor(normalized.k_max))
    if normalized.spectral_enabled:
        register_spectral_extractors(
            pipeline,
            normalized.sample_hz,
            normalized.seg_len,
            normalized.overlap,
            normalized.f_max_ratio,
        )

    logger.info(
        "Built pipeline: window=%d transforms=%s extractors=%s",
        pipeline.window_size,
        [t.name for t in pipeline.transforms],
        [e.name for e in pipeline.extractors],
    )
    return pipeline


__all__ = [
    "TRANSFORM_FACTORIES",
    "build_pipeline",
    "make_transform",
    "register_spectral_extractors",
]
