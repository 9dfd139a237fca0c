"""CSV writing helpers for extracted feature rows."""

import csv
from pathlib import Path
from typing import Any, Iterable, Sequence, TextIO

from ..core.models import FEATURE_FIELDS, FeatureVector


def write_rows(path: Path, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    """
    Write a header row and all data rows to a CSV file.

    Directories are created as needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as csvfile:
        write_rows_to(csvfile, headers, rows)


def write_rows_to(stream: TextIO, headers: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    """Same as :func:`write_rows` but into an already open text stream."""
    writer = csv.writer(stream)
    writer.writerow(headers)
    writer.writerows(rows)


def feature_row(vec: FeatureVector) -> list[Any]:
    """Flatten a :class:`FeatureVector` into values ordered like ``FEATURE_FIELDS``."""
    data = vec.as_dict()
    as_of = data["as_of"]
    if hasattr(as_of, "isoformat"):
        data["as_of"] = as_of.isoformat()
    return [data[name] for name in FEATURE_FIELDS]
