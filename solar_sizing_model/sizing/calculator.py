"""Solar system sizing from a monthly electricity bill.

Calculation chain (each step feeds the next)::

    monthly_kwh      = bill / electricity_rate
    daily_kwh        = monthly_kwh / 30
    offsettable_kwh  = daily_kwh × day_ratio / 100
    raw_kw           = offsettable_kwh / (peak_sun_hours × efficiency)
    adjusted_kw      = raw_kw × location_multiplier
    capacity_kw      = ceil(adjusted_kw × 10) / 10
    cost             = capacity_kw × cost_per_kw
    daily_gen_kwh    = capacity_kw × peak_sun_hours × efficiency
    monthly_savings  = daily_gen_kwh × 30 × electricity_rate
    payback_years    = cost / (monthly_savings × 12)

Savings are derived from the rounded capacity so they match what is actually
recommended. Only daytime consumption is offset (no battery storage).
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from solar_sizing_model.config.defaults import (
    CAPACITY_STEP_DECIMALS,
    CEILING_NOISE_ULPS,
)
from solar_sizing_model.sizing.models import (
    DEFAULT_CONSTANTS,
    CalculatorInput,
    CalculatorResult,
    FieldError,
    SizingConstants,
)
from solar_sizing_model.sizing.validator import validate_calculator_input


class InvalidCalculatorInputError(ValueError):
    """Raised when the calculator is given input that fails validation.

    Attributes
    ----------
    errors:
        The validator's field errors, in rule order.
    """

    def __init__(self, errors: list[FieldError]) -> None:
        self.errors = list(errors)
        super().__init__(
            "Invalid input: " + ", ".join(error.message for error in self.errors)
        )


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round half away from zero for non-negative values (``2.5`` → ``3``)."""
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def ceil_to_step(value: float, decimals: int = CAPACITY_STEP_DECIMALS) -> float:
    """Round *value* up to the next multiple of ``10**-decimals``.

    A scaled value at most :data:`CEILING_NOISE_ULPS` ulps above a whole step
    (``10.000000000000002``) is treated as representation noise and kept on
    that step, so the result can sit below *value* by that many ulps at most.
    Anything further above the step rounds up.
    """
    factor = 10**decimals
    scaled = value * factor
    steps = math.ceil(scaled)
    if scaled - (steps - 1) <= CEILING_NOISE_ULPS * math.ulp(scaled):
        steps -= 1
    return steps / factor


def calculate_solar_system(
    data: CalculatorInput | Mapping[str, Any],
    constants: SizingConstants = DEFAULT_CONSTANTS,
) -> CalculatorResult:
    """Recommend a system size, cost, savings and payback period.

    Parameters
    ----------
    data:
        A :class:`CalculatorInput`, or a camelCase wire dictionary.
    constants:
        Sizing assumptions.

    Returns
    -------
    CalculatorResult
        ``payback_period`` is ``None`` when there is no daytime usage to
        offset (capacity, cost and savings are then all zero).

    Raises
    ------
    InvalidCalculatorInputError
        When *data* fails :func:`validate_calculator_input`.
    """
    if not isinstance(data, CalculatorInput):
        data = CalculatorInput.from_dict(data)

    errors = validate_calculator_input(data, constants)
    if errors:
        raise InvalidCalculatorInputError(errors)

    generation_factor = constants.peak_sun_hours * constants.system_efficiency

    monthly_consumption_kwh = data.monthly_bill / constants.electricity_rate
    daily_consumption_kwh = monthly_consumption_kwh / constants.days_per_month
    offsettable_kwh = daily_consumption_kwh * (data.day_night_ratio / 100.0)

    raw_capacity_kw = offsettable_kwh / generation_factor
    adjusted_capacity_kw = raw_capacity_kw * constants.multiplier_for(
        data.location_type
    )
    capacity_kw = ceil_to_step(adjusted_capacity_kw)

    estimated_cost = capacity_kw * constants.solar_cost_per_kw

    daily_generation_kwh = capacity_kw * generation_factor
    monthly_savings = (
        daily_generation_kwh * constants.days_per_month * constants.electricity_rate
    )

    if monthly_savings > 0:
        annual_savings = monthly_savings * constants.months_per_year
        payback_period: float | None = round_half_up(estimated_cost / annual_savings, 1)
    else:
        payback_period = None

    return CalculatorResult(
        recommended_capacity=round_half_up(capacity_kw, CAPACITY_STEP_DECIMALS),
        estimated_cost=int(round_half_up(estimated_cost)),
        monthly_savings=int(round_half_up(monthly_savings)),
        payback_period=payback_period,
    )
