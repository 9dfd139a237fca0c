"""Feature extractor plugins registered on a :class:`~sigfractal.core.pipeline.SignalPipeline`.

Each extractor exposes a ``name`` and ``extract(window, dst)`` and writes only
the :class:`~sigfractal.core.models.FeatureVector` fields it owns.
"""

from .fractal import HiguchiExtractor, HurstDfaExtractor
from .spectral import PsdProvider, SpectralShapeExtractor, SpectralSlopeExtractor

__all__ = [
    "HiguchiExtractor",
    "HurstDfaExtractor",
    "PsdProvider",
    "SpectralShapeExtractor",
    "SpectralSlopeExtractor",
]
