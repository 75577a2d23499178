"""Load batch quote requests from JSON or CSV files.

Public API
----------
load_quote_requests(path) – Parse + shape-check a ``.json`` or ``.csv`` batch.
quote_requests_from_data(data) – Wrap an already-parsed JSON document.

All error messages name the file, row and field that caused the problem so
the user can fix the input without guessing. Value rules (bill limits, enum
membership) are not checked here; rejected rows are reported per quote by
the batch runner.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from solar_sizing_model.config.defaults import (
    CSV_DELIMITER,
    REQUIRED_CALCULATOR_FIELDS,
)
from solar_sizing_model.config.schema import validate_batch
from solar_sizing_model.sizing.batch import QuoteRequest

logger = logging.getLogger(__name__)

_LABEL_KEY = "label"


def load_quote_requests(path: str | Path) -> list[QuoteRequest]:
    """Load quote requests from a batch file.

    Parameters
    ----------
    path:
        ``.json`` file holding one quote object or a list of them, or a
        ``.csv`` file with one quote per row.

    Returns
    -------
    list[QuoteRequest]
        Requests in file order.

    Raises
    ------
    FileNotFoundError
        When *path* does not exist.
    json.JSONDecodeError
        When a ``.json`` file contains invalid JSON.
    jsonschema.ValidationError
        When a JSON document does not match the batch schema.
    ValueError
        When a CSV file is unreadable, lacks columns or has empty cells, or
        the file extension is not supported.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(
            f"Batch file not found: '{path}'. "
            "Check that the path is correct and the file exists."
        )

    suffix = path.suffix.lower()
    if suffix == ".json":
        requests = _load_json(path)
    elif suffix == ".csv":
        requests = _load_csv(path)
    else:
        raise ValueError(
            f"Unsupported batch file type '{path.suffix}' for '{path}'. "
            "Use a .json or .csv file."
        )

    logger.info("Loaded %d quote request(s) from '%s'", len(requests), path)
    return requests


def quote_requests_from_data(data: Any) -> list[QuoteRequest]:
    """Validate and wrap an already-parsed batch JSON document.

    Raises
    ------
    jsonschema.ValidationError
        When *data* does not conform to the batch schema.
    """
    validate_batch(data)
    entries = data if isinstance(data, list) else [data]
    return [_to_request(entry, index) for index, entry in enumerate(entries, start=1)]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _to_request(entry: dict[str, Any], row_number: int) -> QuoteRequest:
    label = entry.get(_LABEL_KEY)
    if label is None or label == "":
        label = f"row-{row_number}"
    return QuoteRequest(
        label=str(label),
        data={name: entry[name] for name in REQUIRED_CALCULATOR_FIELDS},
    )


def _load_json(path: Path) -> list[QuoteRequest]:
    logger.debug("Loading batch JSON from '%s'", path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except json.JSONDecodeError as exc:
        raise json.JSONDecodeError(
            f"Invalid JSON in batch file '{path}': {exc.msg}",
            exc.doc,
            exc.pos,
        ) from exc
    return quote_requests_from_data(data)


def _load_csv(path: Path) -> list[QuoteRequest]:
    logger.debug("Loading batch CSV from '%s'", path)
    try:
        # Keep every cell as text; numeric coercion matches the HTTP path.
        df = pd.read_csv(path, sep=CSV_DELIMITER, dtype=str, keep_default_na=False)
    except Exception as exc:
        raise ValueError(f"Failed to parse batch CSV '{path}': {exc}") from exc

    _check_required_columns(df, path)
    _check_no_empty_cells(df, path)

    records = df.to_dict(orient="records")
    return [_to_request(record, index) for index, record in enumerate(records, start=1)]


def _check_required_columns(df: pd.DataFrame, path: Path) -> None:
    """Raise ValueError listing all missing columns."""
    available = set(df.columns)
    missing = [c for c in REQUIRED_CALCULATOR_FIELDS if c not in available]
    if missing:
        raise ValueError(
            f"Batch CSV '{path}' is missing required column(s): "
            f"{missing}. "
            f"Available columns: {sorted(available)}."
        )


def _check_no_empty_cells(df: pd.DataFrame, path: Path) -> None:
    """Raise ValueError naming each required column that has empty cells."""
    empty_cols = []
    for col in REQUIRED_CALCULATOR_FIELDS:
        blank = df[col].str.strip() == ""
        if blank.any():
            n_blank = int(blank.sum())
            first_row = int(blank.idxmax()) + 1
            empty_cols.append(
                f"'{col}' ({n_blank} empty value(s), first at row {first_row})"
            )

    if empty_cols:
        raise ValueError(
            f"Batch CSV '{path}' has empty values in the following "
            f"column(s): {'; '.join(empty_cols)}. "
            "Every quote needs all four fields."
        )
