"""Runtime configuration helpers for the feature pipeline."""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple

import yaml

NAN_POLICIES = ("propagate", "skip", "raise")


@dataclass(slots=True)
class PipelineConfig:
    """
    Tuning knobs for the window, pre-transforms and extractors.

    The defaults describe a 256-sample window over first differences with all
    fractal and spectral extractors enabled.
    """

    window_size: int = 256
    history_for_z: int = 60
    transforms: Tuple[str, ...] = ("diff",)
    winsor_p_low: float = 0.01
    winsor_p_high: float = 0.99

    hurst_enabled: bool = True
    higuchi_enabled: bool = True
    k_max: int = 8

    spectral_enabled: bool = True
    sample_hz: float = 1.0
    seg_len: int = 128
    overlap: int = 64
    f_max_ratio: float = 0.1

    stable_fit_r2: float = 0.9
    nan_policy: str = "propagate"

    def sanitized(self) -> PipelineConfig:
        """Return a copy with derived limits applied."""
        window = max(1, int(self.window_size))
        seg_len = max(2, int(self.seg_len))
        p_low = min(1.0, max(0.0, float(self.winsor_p_low)))
        p_high = min(1.0, max(p_low, float(self.winsor_p_high)))
        sample_hz = float(self.sample_hz)
        if not math.isfinite(sample_hz) or sample_hz <= 0.0:
            sample_hz = 1.0
        policy = str(self.nan_policy or "").strip().lower()
        if policy not in NAN_POLICIES:
            policy = "propagate"
        return PipelineConfig(
            window_size=window,
            history_for_z=max(5, int(self.history_for_z)),
            transforms=_normalize_transforms(self.transforms),
            winsor_p_low=p_low,
            winsor_p_high=p_high,
            hurst_enabled=bool(self.hurst_enabled),
            higuchi_enabled=bool(self.higuchi_enabled),
            k_max=max(1, int(self.k_max)),
            spectral_enabled=bool(self.spectral_enabled),
            sample_hz=sample_hz,
            seg_len=seg_len,
            overlap=min(seg_len - 1, max(0, int(self.overlap))),
            f_max_ratio=min(1.0, max(1e-6, float(self.f_max_ratio))),
            stable_fit_r2=float(self.stable_fit_r2),
            nan_policy=policy,
        )


def _normalize_transforms(value: Any) -> Tuple[str, ...]:
    """Accept a single name or a sequence of names; lower-case and strip them."""
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    return tuple(str(name).strip().lower() for name in value if str(name).strip())


_FIELD_NAMES = frozenset(f.name for f in fields(PipelineConfig))


def _flatten(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Hoist the keys of a top-level ``pipeline:`` block next to the other
    top-level keys. Keys inside the block win over duplicates outside it.
    """
    flat = {key: value for key, value in data.items() if key != "pipeline"}
    block = data.get("pipeline")
    if isinstance(block, Mapping):
        flat.update(block)
    return flat


def config_from_mapping(data: Mapping[str, Any] | None) -> PipelineConfig:
    """Build a sanitized :class:`PipelineConfig`; unknown keys are ignored."""
    if not data:
        return PipelineConfig()
    payload = {key: value for key, value in _flatten(data).items() if key in _FIELD_NAMES}
    if "transforms" in payload:
        payload["transforms"] = _normalize_transforms(payload["transforms"])
    return PipelineConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> PipelineConfig:
    """
    Read a YAML pipeline description.

    ``None``, a missing file or an empty document give the defaults. Any other
    top-level value than a mapping raises ``ValueError``.
    """
    if path is None:
        return PipelineConfig()
    cfg_path = Path(path)
    try:
        text = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return PipelineConfig()
    raw = yaml.safe_load(text)
    if raw is None:
        return PipelineConfig()
    if not isinstance(raw, Mapping):
        raise ValueError(f"{cfg_path}: expected a mapping at the top level, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["NAN_POLICIES", "PipelineConfig", "config_from_mapping", "load_config"]
