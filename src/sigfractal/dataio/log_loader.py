"""Read recorded series back from CSV for offline replay."""

from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np


def _parse_row(line: str) -> Optional[List[float]]:
    """Return the row as floats, or ``None`` if any cell is empty or not numeric."""
    try:
        return [float(c) for c in line.split(",")]
    except ValueError:
        return None


def split_header(lines: List[str]) -> Tuple[Optional[List[str]], List[str]]:
    """
    Separate an optional header row from the data rows.

    Blank lines are dropped first. The first remaining line counts as a header
    when it does not parse as numbers.
    """
    rows = [ln for ln in lines if ln.strip()]
    if not rows or _parse_row(rows[0]) is not None:
        return None, rows
    return [c.strip() for c in rows[0].split(",")], rows[1:]


def load_csv(path: Path) -> np.ndarray:
    """
    Load a comma separated numeric file as a ``(rows, columns)`` array.

    A single non-numeric header row is skipped. Single-column files still come
    back 2-D so callers can always index ``data[:, column]``.

    Raises
    ------
    ValueError
        If a data row has an empty or non-numeric cell.
    """
    path = Path(path)
    lines = path.read_text(encoding="utf-8").splitlines()
    _, rows = split_header(lines)
    if not rows:
        return np.empty((0, 0), dtype=float)
    bad = next((row for row in rows if _parse_row(row) is None), None)
    if bad is not None:
        raise ValueError(f"{path}: empty or non-numeric cell in row {bad.strip()!r}")
    return np.loadtxt(rows, delimiter=",", ndmin=2)
