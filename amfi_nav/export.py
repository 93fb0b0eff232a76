"""
Tabular adapter and exporter for amfi-nav.

Turns a parsed stream into a ``pandas.DataFrame`` (one row per
``NavRecord``, columns in ``NavRecord`` field order) and writes it as
CSV or Parquet.  Line errors are split off and returned to the caller,
who decides whether to log, count or fail on them.

Money columns stay fixed-point:
- In the DataFrame they hold ``decimal.Decimal`` (or ``None`` for N.A.).
- In Parquet they are written as strings, so no float rounding sneaks in
  on the way to disk.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Literal

import pandas as pd

from amfi_nav.exceptions import ExportError
from amfi_nav.layout_registry import DECIMAL_COLUMNS
from amfi_nav.models import LineError, NavRecord, ParseOutcome

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}

RECORD_FIELDS = list(NavRecord.model_fields)


def _cell(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    return value


def records_to_frame(
    outcomes: Iterable[ParseOutcome],
) -> tuple[pd.DataFrame, list[LineError]]:
    """Consume a parsed stream into a DataFrame plus the list of line errors."""
    rows: list[dict[str, object]] = []
    errors: list[LineError] = []
    for outcome in outcomes:
        if isinstance(outcome, LineError):
            errors.append(outcome)
            continue
        rows.append({name: _cell(getattr(outcome, name)) for name in RECORD_FIELDS})

    df = pd.DataFrame(rows, columns=RECORD_FIELDS)
    logger.info("Collected %d records, %d line errors", len(df), len(errors))
    return df, errors


def _write_dataframe(df: pd.DataFrame, path: Path, output_format: str) -> None:
    try:
        if output_format == "csv":
            df.to_csv(path, index=False, encoding="utf-8")
        else:  # parquet
            out = df.copy()
            for col in DECIMAL_COLUMNS:
                out[col] = out[col].map(lambda v: None if pd.isna(v) else str(v))
            out.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc


def export_records(
    outcomes: Iterable[ParseOutcome],
    path: str | Path,
    output_format: Literal["csv", "parquet"] = "parquet",
) -> list[LineError]:
    """Write the records of a parsed stream to *path*.

    The parent directory is created if needed.

    Returns:
        The line errors seen in the stream, in input order.

    Raises:
        ExportError: If *output_format* is unsupported, or the write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    df, errors = records_to_frame(outcomes)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    _write_dataframe(df, path, output_format)
    logger.info(
        "Exported %d records -> %s (%d line errors skipped)",
        len(df),
        path.name,
        len(errors),
    )
    return errors
