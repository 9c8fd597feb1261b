"""Sample loading from CSV or plain-text files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import pandas as pd

from normal_reference.exceptions import DataSourceError
from normal_reference.utils.logging import get_logger

log = get_logger(__name__, component="data")

CSV_SUFFIXES = {".csv", ".tsv"}


def _load_csv(path: Path, column: Optional[str]) -> np.ndarray:
    sep = "\t" if path.suffix.lower() == ".tsv" else ","
    try:
        df = pd.read_csv(path, sep=sep)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataSourceError(f"Could not parse {path}: {exc}") from exc

    if column is None:
        numeric = df.select_dtypes(include="number").columns
        if len(numeric) == 0:
            raise DataSourceError(f"No numeric column in {path}")
        column = str(numeric[0])
    elif column not in df.columns:
        available = ", ".join(map(str, df.columns))
        raise DataSourceError(f"Column '{column}' not found in {path}. Available: {available}")

    series = pd.to_numeric(df[column], errors="coerce").dropna()
    return series.to_numpy(dtype=float)


def _load_text(path: Path) -> np.ndarray:
    try:
        return np.array(path.read_text().split(), dtype=float)
    except ValueError as exc:
        raise DataSourceError(f"Could not parse numbers from {path}: {exc}") from exc


def load_sample(path: Path | str, column: Optional[str] = None) -> np.ndarray:
    """Load a 1-D sample from ``path``.

    CSV/TSV files use ``column`` (or the first numeric column); missing cells
    are dropped. Any other file is read as whitespace-separated numbers.
    """
    path = Path(path)
    if not path.exists():
        raise DataSourceError(f"Sample file not found: {path}")

    if path.suffix.lower() in CSV_SUFFIXES:
        values = _load_csv(path, column)
    else:
        values = _load_text(path)
    log.debug("Loaded sample", extra={"n_samples": int(values.size)})
    return values


__all__ = ["load_sample"]
