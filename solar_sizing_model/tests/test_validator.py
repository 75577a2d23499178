"""Unit tests for solar_sizing_model.sizing.validator.

Covers:
  - Valid reference input produces no errors
  - Every violated rule is reported, in rule order
  - Monthly bill bounds (0, negative, upper limit)
  - Day/night ratio bounds (inclusive 0 and 100)
  - Unknown location type / electric system
  - Non-numeric, NaN and boolean values
  - Infinite and oversized values checked against the bounds without overflow
  - null and blank numeric values read as 0
"""

from __future__ import annotations

import math

import pytest

from solar_sizing_model.config.defaults import CALCULATOR_MESSAGES
from solar_sizing_model.sizing.models import CalculatorInput, SizingConstants
from solar_sizing_model.sizing.validator import validate_calculator_input


def _fields(errors):
    return [e.field for e in errors]


class TestValidInput:
    def test_reference_body_is_valid(self, reference_body):
        assert validate_calculator_input(reference_body) == []

    def test_accepts_calculator_input(self, reference_body):
        assert validate_calculator_input(CalculatorInput.from_dict(reference_body)) == []

    @pytest.mark.parametrize("location", ["residential", "commercial", "industrial"])
    @pytest.mark.parametrize("system", ["single-phase", "three-phase"])
    def test_all_enum_combinations(self, reference_body, location, system):
        body = {**reference_body, "locationType": location, "electricSystem": system}
        assert validate_calculator_input(body) == []

    def test_numeric_strings_are_accepted(self, reference_body):
        body = {**reference_body, "monthlyBill": "3000", "dayNightRatio": "60"}
        assert validate_calculator_input(body) == []


class TestCompleteness:
    def test_two_violations_two_errors(self, reference_body):
        body = {**reference_body, "monthlyBill": -100, "dayNightRatio": 150}
        errors = validate_calculator_input(body)
        assert _fields(errors) == ["monthlyBill", "dayNightRatio"]

    def test_all_rules_violated_in_order(self):
        errors = validate_calculator_input(
            {
                "locationType": "castle",
                "monthlyBill": -1,
                "electricSystem": "dc",
                "dayNightRatio": -5,
            }
        )
        assert _fields(errors) == [
            "monthlyBill",
            "dayNightRatio",
            "locationType",
            "electricSystem",
        ]

    def test_messages_come_from_catalogue(self, reference_body):
        errors = validate_calculator_input({**reference_body, "dayNightRatio": 101})
        assert errors[0].message == CALCULATOR_MESSAGES["day_night_ratio"]


class TestMonthlyBill:
    @pytest.mark.parametrize("bill", [0, -1, -0.01])
    def test_non_positive_rejected(self, reference_body, bill):
        errors = validate_calculator_input({**reference_body, "monthlyBill": bill})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_min"]

    @pytest.mark.parametrize("bill", [0.01, 1, 1_000_000])
    def test_positive_up_to_limit_accepted(self, reference_body, bill):
        assert validate_calculator_input({**reference_body, "monthlyBill": bill}) == []

    def test_above_limit_rejected(self, reference_body):
        errors = validate_calculator_input({**reference_body, "monthlyBill": 2_000_000})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_max"]

    def test_custom_limit(self, reference_body):
        constants = SizingConstants(max_monthly_bill=2_000)
        errors = validate_calculator_input(reference_body, constants)
        assert _fields(errors) == ["monthlyBill"]

    @pytest.mark.parametrize("bill", ["abc", math.nan, True, [3000]])
    def test_not_a_number(self, reference_body, bill):
        errors = validate_calculator_input({**reference_body, "monthlyBill": bill})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_not_number"]

    @pytest.mark.parametrize("bill", [10**400, math.inf, "1e400"])
    def test_huge_values_are_too_high(self, reference_body, bill):
        errors = validate_calculator_input({**reference_body, "monthlyBill": bill})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_max"]

    @pytest.mark.parametrize("bill", [-(10**400), -math.inf])
    def test_huge_negative_values_are_too_low(self, reference_body, bill):
        errors = validate_calculator_input({**reference_body, "monthlyBill": bill})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_min"]

    @pytest.mark.parametrize("bill", [None, "", "  "])
    def test_null_or_blank_reads_as_zero(self, reference_body, bill):
        errors = validate_calculator_input({**reference_body, "monthlyBill": bill})
        assert len(errors) == 1
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_min"]

    def test_absent_key_is_not_a_number(self, reference_body):
        del reference_body["monthlyBill"]
        errors = validate_calculator_input(reference_body)
        assert errors[0].message == CALCULATOR_MESSAGES["monthly_bill_not_number"]


class TestDayNightRatio:
    @pytest.mark.parametrize("ratio", [0, 0.5, 50, 100])
    def test_inclusive_range_accepted(self, reference_body, ratio):
        assert validate_calculator_input({**reference_body, "dayNightRatio": ratio}) == []

    @pytest.mark.parametrize(
        "ratio", [-0.1, 100.1, 150, math.nan, "x", math.inf, 10**400, -(10**400)]
    )
    def test_out_of_range_rejected(self, reference_body, ratio):
        errors = validate_calculator_input({**reference_body, "dayNightRatio": ratio})
        assert _fields(errors) == ["dayNightRatio"]

    def test_null_reads_as_zero(self, reference_body):
        assert validate_calculator_input({**reference_body, "dayNightRatio": None}) == []


class TestEnums:
    def test_unknown_location(self, reference_body):
        errors = validate_calculator_input({**reference_body, "locationType": "farm"})
        assert _fields(errors) == ["locationType"]

    def test_location_is_case_sensitive(self, reference_body):
        errors = validate_calculator_input(
            {**reference_body, "locationType": "Residential"}
        )
        assert _fields(errors) == ["locationType"]

    def test_unknown_electric_system(self, reference_body):
        errors = validate_calculator_input(
            {**reference_body, "electricSystem": "two-phase"}
        )
        assert _fields(errors) == ["electricSystem"]
