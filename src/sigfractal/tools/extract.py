"""Replay a recorded series through a feature pipeline and write the vectors to CSV."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterator, Sequence

import numpy as np

from ..config import PipelineConfig, load_config
from ..core import FEATURE_FIELDS, FeatureVector, build_pipeline
from ..dataio.csv_writer import feature_row, write_rows, write_rows_to
from ..dataio.log_loader import load_csv

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Extract fractal/spectral features from a CSV series")
    parser.add_argument("input", type=Path, help="CSV file with one sample per row")
    parser.add_argument(
        "--column",
        type=int,
        default=0,
        help="Column holding the sample values (default: 0)",
    )
    parser.add_argument(
        "--time-column",
        type=int,
        help="Optional column holding timestamps; defaults to the row index",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Optional YAML file describing PipelineConfig overrides",
    )
    parser.add_argument(
        "--window",
        type=int,
        help="Override window_size without editing the YAML",
    )
    parser.add_argument(
        "--sample-hz",
        type=float,
        help="Override sample_hz without editing the YAML",
    )
    parser.add_argument(
        "--every",
        type=int,
        default=1,
        help="Only keep every N-th ready vector (default: 1)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="CSV file for feature rows (default: stdout)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> PipelineConfig:
    cfg = load_config(args.config) if args.config else PipelineConfig()
    if args.window is not None:
        cfg.window_size = int(args.window)
    if args.sample_hz is not None:
        cfg.sample_hz = float(args.sample_hz)
    return cfg.sanitized()


def extract_features(
    values: np.ndarray,
    cfg: PipelineConfig,
    timestamps: np.ndarray | None = None,
    *,
    every: int = 1,
) -> Iterator[FeatureVector]:
    """Yield every ``every``-th feature vector produced while replaying ``values``."""
    if every <= 0:
        raise ValueError(f"every must be a positive integer, got {every}")
    pipeline = build_pipeline(cfg)
    emitted = 0
    for i, value in enumerate(values):
        ts = float(timestamps[i]) if timestamps is not None else float(i)
        ready, vec = pipeline.try_push(float(value), ts)
        if not ready or vec is None:
            continue
        if emitted % every == 0:
            yield vec
        emitted += 1
    if pipeline.skipped_samples:
        logger.warning("Skipped %d non-finite sample(s)", pipeline.skipped_samples)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=str(args.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.every < 1:
        logger.error("--every must be a positive integer, got %d", args.every)
        return 2

    cfg = _resolve_config(args)
    try:
        data = load_csv(args.input)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1
    if data.size == 0:
        logger.error("No samples found in %s", args.input)
        return 1
    try:
        values = data[:, args.column]
        timestamps = data[:, args.time_column] if args.time_column is not None else None
    except IndexError:
        logger.error("Column out of range for %s (%d column(s))", args.input, data.shape[1])
        return 2

    rows = [feature_row(vec) for vec in extract_features(values, cfg, timestamps, every=args.every)]
    logger.info("Extracted %d feature vector(s) from %d sample(s)", len(rows), values.size)

    if args.output is not None:
        write_rows(args.output, FEATURE_FIELDS, rows)
    else:
        write_rows_to(sys.stdout, FEATURE_FIELDS, rows)
    return 0


if __name__ == "__main__":
    sys.exit(main())
