"""Run the calculator over many quote requests.

Each request is validated and sized on its own; a bad row yields an outcome
carrying its field errors and never stops the rest of the batch.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from solar_sizing_model.sizing.calculator import calculate_solar_system
from solar_sizing_model.sizing.models import (
    DEFAULT_CONSTANTS,
    CalculatorInput,
    CalculatorResult,
    FieldError,
    SizingConstants,
)
from solar_sizing_model.sizing.validator import validate_calculator_input

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuoteRequest:
    """One quote request from a batch file.

    Attributes
    ----------
    label:
        Identifier for reports (``label`` column/key, or ``row-<n>``).
    data:
        camelCase wire dictionary with the four calculator fields.
    """

    label: str
    data: dict[str, Any]


@dataclass(frozen=True)
class QuoteOutcome:
    """Result of sizing one :class:`QuoteRequest`."""

    label: str
    input: CalculatorInput
    result: CalculatorResult | None = None
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.result is not None


def run_batch(
    requests: list[QuoteRequest],
    constants: SizingConstants = DEFAULT_CONSTANTS,
) -> list[QuoteOutcome]:
    """Size every request, keeping the input order.

    Parameters
    ----------
    requests:
        Parsed quote requests.
    constants:
        Sizing assumptions shared by every request.

    Returns
    -------
    list[QuoteOutcome]
        One outcome per request.
    """
    outcomes: list[QuoteOutcome] = []
    for request in requests:
        calc_input = CalculatorInput.from_dict(request.data)
        errors = validate_calculator_input(calc_input, constants)
        if errors:
            logger.debug(
                "Quote '%s' rejected: %s",
                request.label,
                ", ".join(e.field for e in errors),
            )
            outcomes.append(QuoteOutcome(request.label, calc_input, errors=errors))
            continue
        result = calculate_solar_system(calc_input, constants)
        outcomes.append(QuoteOutcome(request.label, calc_input, result=result))

    n_ok = sum(1 for o in outcomes if o.ok)
    logger.info(
        "Batch sized %d/%d quote(s); %d rejected.",
        n_ok,
        len(outcomes),
        len(outcomes) - n_ok,
    )
    return outcomes
