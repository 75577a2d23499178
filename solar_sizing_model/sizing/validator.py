"""Input validation for the solar sizing calculator.

Every rule is checked and every violation is reported; invalid input is an
expected outcome, returned as a list of :class:`FieldError`, never raised.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from solar_sizing_model.config.defaults import (
    CALCULATOR_MESSAGES,
    DAY_RATIO_MAX_PCT,
    DAY_RATIO_MIN_PCT,
    FIELD_DAY_NIGHT_RATIO,
    FIELD_ELECTRIC_SYSTEM,
    FIELD_LOCATION_TYPE,
    FIELD_MONTHLY_BILL,
)
from solar_sizing_model.sizing.models import (
    DEFAULT_CONSTANTS,
    CalculatorInput,
    ElectricSystem,
    FieldError,
    LocationType,
    SizingConstants,
)


def _is_number(value: Any) -> bool:
    """``True`` for ints and floats other than NaN (bools excluded).

    Infinities and ints too large for a float count as numbers; the range
    checks reject them without converting to float.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def _is_member(enum_cls: type, value: Any) -> bool:
    if isinstance(value, enum_cls):
        return True
    try:
        enum_cls(value)
    except ValueError:
        return False
    return True


def validate_calculator_input(
    data: CalculatorInput | Mapping[str, Any],
    constants: SizingConstants = DEFAULT_CONSTANTS,
) -> list[FieldError]:
    """Check a sizing request against the domain rules.

    Parameters
    ----------
    data:
        A :class:`CalculatorInput`, or a camelCase wire dictionary.
    constants:
        Sizing assumptions; supplies the monthly bill upper bound.

    Returns
    -------
    list[FieldError]
        All violations, in rule order: monthly bill, day/night ratio,
        location type, electric system. Empty when the input is valid.
    """
    if not isinstance(data, CalculatorInput):
        data = CalculatorInput.from_dict(data)

    errors: list[FieldError] = []

    bill = data.monthly_bill
    if not _is_number(bill):
        errors.append(
            FieldError(FIELD_MONTHLY_BILL, CALCULATOR_MESSAGES["monthly_bill_not_number"])
        )
    else:
        if bill <= 0:
            errors.append(
                FieldError(FIELD_MONTHLY_BILL, CALCULATOR_MESSAGES["monthly_bill_min"])
            )
        if bill > constants.max_monthly_bill:
            errors.append(
                FieldError(FIELD_MONTHLY_BILL, CALCULATOR_MESSAGES["monthly_bill_max"])
            )

    ratio = data.day_night_ratio
    if not _is_number(ratio) or not (
        DAY_RATIO_MIN_PCT <= ratio <= DAY_RATIO_MAX_PCT
    ):
        errors.append(
            FieldError(FIELD_DAY_NIGHT_RATIO, CALCULATOR_MESSAGES["day_night_ratio"])
        )

    if not _is_member(LocationType, data.location_type):
        errors.append(
            FieldError(FIELD_LOCATION_TYPE, CALCULATOR_MESSAGES["location_type"])
        )

    if not _is_member(ElectricSystem, data.electric_system):
        errors.append(
            FieldError(FIELD_ELECTRIC_SYSTEM, CALCULATOR_MESSAGES["electric_system"])
        )

    return errors
