"""Write batch quote results to CSV.

One row per quote request, in input order. Valid quotes carry the sized
results (raw and display-formatted); rejected quotes leave the result
columns empty and list their field errors in ``errors``.

Public API
----------
write_quotes_csv – Write the batch results table.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from solar_sizing_model.config.defaults import (
    CSV_DELIMITER,
    ERROR_JOIN_SEPARATOR,
)
from solar_sizing_model.output.formatting import (
    fmt_float,
    format_capacity,
    format_currency,
    format_payback_period,
)
from solar_sizing_model.sizing.batch import QuoteOutcome

logger = logging.getLogger(__name__)


def write_quotes_csv(path: Path | str, outcomes: list[QuoteOutcome]) -> None:
    """Write the batch results table.

    Parameters
    ----------
    path:
        Destination file path.
    outcomes:
        Outcomes from :func:`~solar_sizing_model.sizing.batch.run_batch`.
    """
    rows = [_outcome_row(outcome) for outcome in outcomes]
    _write_dicts(path, rows)
    logger.info("Wrote quotes CSV (%d rows): %s", len(rows), path)


def _outcome_row(outcome: QuoteOutcome) -> dict[str, str]:
    wire = outcome.input.to_dict()
    row = {
        "label": outcome.label,
        "status": "ok" if outcome.ok else "invalid",
        **{key: "" if value is None else str(value) for key, value in wire.items()},
    }
    result = outcome.result
    if result is None:
        row.update({
            "recommended_capacity_kw": "",
            "estimated_cost_thb": "",
            "monthly_savings_thb": "",
            "payback_period_years": "",
            "capacity_display": "",
            "cost_display": "",
            "savings_display": "",
            "payback_display": "",
        })
    else:
        row.update({
            "recommended_capacity_kw": fmt_float(result.recommended_capacity),
            "estimated_cost_thb": str(result.estimated_cost),
            "monthly_savings_thb": str(result.monthly_savings),
            "payback_period_years": fmt_float(result.payback_period),
            "capacity_display": format_capacity(result.recommended_capacity),
            "cost_display": format_currency(result.estimated_cost),
            "savings_display": format_currency(result.monthly_savings),
            "payback_display": format_payback_period(result.payback_period),
        })
    row["errors"] = ERROR_JOIN_SEPARATOR.join(
        f"{error.field}: {error.message}" for error in outcome.errors
    )
    return row


# ---------------------------------------------------------------------------
# Internal helper
# ---------------------------------------------------------------------------


def _write_dicts(path: Path | str, rows: list[dict]) -> None:
    """Write a list of dicts to a CSV file, creating parent directories.

    Parameters
    ----------
    path:
        Destination file path.
    rows:
        List of row dicts.  All dicts must have the same keys; the first
        dict determines the column order.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not rows:
        path.write_text("", encoding="utf-8")
        return

    fieldnames = list(rows[0].keys())
    with path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=fieldnames, delimiter=CSV_DELIMITER)
        writer.writeheader()
        writer.writerows(rows)
