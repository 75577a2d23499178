"""Typed records for the solar sizing calculator.

Inputs arrive as loosely-typed wire dictionaries (camelCase keys, possibly
malformed values) and are wrapped in :class:`CalculatorInput` without
rejecting anything; rejecting is the validator's job. Results and field
errors convert back to the camelCase wire form via ``to_dict()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from solar_sizing_model.config.defaults import (
    DAYS_PER_MONTH,
    ELECTRICITY_RATE_THB_PER_KWH,
    FIELD_DAY_NIGHT_RATIO,
    FIELD_ELECTRIC_SYSTEM,
    FIELD_LOCATION_TYPE,
    FIELD_MONTHLY_BILL,
    LOCATION_MULTIPLIERS,
    MAX_MONTHLY_BILL_THB,
    MONTHS_PER_YEAR,
    PEAK_SUN_HOURS,
    SOLAR_COST_THB_PER_KW,
    SYSTEM_EFFICIENCY,
)


class LocationType(str, Enum):
    """Installation category; selects the capacity multiplier."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class ElectricSystem(str, Enum):
    """Grid connection type. Informational only."""

    SINGLE_PHASE = "single-phase"
    THREE_PHASE = "three-phase"


def _coerce_enum(enum_cls: type[Enum], value: Any) -> Any:
    """Return the enum member for *value*, or *value* unchanged if unknown."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _coerce_number(value: Any) -> Any:
    """Convert a wire value the way JavaScript's ``Number()`` does.

    ``"3000"`` becomes ``3000.0``; ``null`` and blank strings become ``0.0``;
    an unparsable string becomes NaN. Booleans and other non-numeric types
    are passed through untouched so the validator can reject them.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        try:
            return float(value.strip())
        except ValueError:
            return float("nan")
    return value


def _number_field(data: Mapping[str, Any], key: str) -> Any:
    return _coerce_number(data[key]) if key in data else None


@dataclass(frozen=True)
class CalculatorInput:
    """Caller-supplied sizing request.

    Attributes
    ----------
    location_type:
        :class:`LocationType` member, or the raw value when unrecognised.
    monthly_bill:
        Average monthly electricity cost in THB.
    electric_system:
        :class:`ElectricSystem` member, or the raw value when unrecognised.
    day_night_ratio:
        Share of consumption during daylight hours, in percent (0–100).
    """

    location_type: LocationType | Any
    monthly_bill: float | Any
    electric_system: ElectricSystem | Any
    day_night_ratio: float | Any

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CalculatorInput:
        """Build an input from a camelCase wire dictionary.

        Missing keys become ``None`` and are reported by the validator; a
        numeric key that is present but ``null`` or blank reads as ``0``.
        """
        return cls(
            location_type=_coerce_enum(LocationType, data.get(FIELD_LOCATION_TYPE)),
            monthly_bill=_number_field(data, FIELD_MONTHLY_BILL),
            electric_system=_coerce_enum(
                ElectricSystem, data.get(FIELD_ELECTRIC_SYSTEM)
            ),
            day_night_ratio=_number_field(data, FIELD_DAY_NIGHT_RATIO),
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire form."""
        return {
            FIELD_LOCATION_TYPE: _enum_value(self.location_type),
            FIELD_MONTHLY_BILL: self.monthly_bill,
            FIELD_ELECTRIC_SYSTEM: _enum_value(self.electric_system),
            FIELD_DAY_NIGHT_RATIO: self.day_night_ratio,
        }


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


@dataclass(frozen=True)
class CalculatorResult:
    """Sizing outcome.

    Attributes
    ----------
    recommended_capacity:
        kW, rounded up to the next 0.1 kW.
    estimated_cost:
        Installation cost in whole THB.
    monthly_savings:
        Bill reduction in whole THB per month.
    payback_period:
        Years until savings repay the cost (1 decimal), or ``None`` when the
        system saves nothing (0 % daytime usage).
    """

    recommended_capacity: float
    estimated_cost: int
    monthly_savings: int
    payback_period: float | None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire form."""
        return {
            "recommendedCapacity": self.recommended_capacity,
            "estimatedCost": self.estimated_cost,
            "paybackPeriod": self.payback_period,
            "monthlySavings": self.monthly_savings,
        }


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class SizingConstants:
    """Physical and financial assumptions used by the validator and calculator.

    Built once (see :data:`DEFAULT_CONSTANTS`) and passed by reference; the
    multiplier table is exposed as a read-only mapping.

    Raises
    ------
    ValueError
        If any :class:`LocationType` member lacks a multiplier.
    """

    electricity_rate: float = ELECTRICITY_RATE_THB_PER_KWH
    solar_cost_per_kw: float = SOLAR_COST_THB_PER_KW
    peak_sun_hours: float = PEAK_SUN_HOURS
    system_efficiency: float = SYSTEM_EFFICIENCY
    days_per_month: int = DAYS_PER_MONTH
    months_per_year: int = MONTHS_PER_YEAR
    max_monthly_bill: float = MAX_MONTHLY_BILL_THB
    location_multipliers: Mapping[LocationType, float] = field(
        default_factory=lambda: {
            LocationType(name): factor for name, factor in LOCATION_MULTIPLIERS.items()
        }
    )

    def __post_init__(self) -> None:
        table = {
            LocationType(key): float(factor)
            for key, factor in self.location_multipliers.items()
        }
        missing = [member.value for member in LocationType if member not in table]
        if missing:
            raise ValueError(
                f"No location multiplier defined for: {missing}. "
                "Every location type needs a multiplier."
            )
        object.__setattr__(self, "location_multipliers", MappingProxyType(table))

    def multiplier_for(self, location_type: LocationType) -> float:
        """Return the capacity multiplier for *location_type*."""
        return self.location_multipliers[LocationType(location_type)]


DEFAULT_CONSTANTS = SizingConstants()
"""Process-wide sizing assumptions."""
