"""Framework-independent handlers for the calculator and lead endpoints.

Each handler takes the parsed JSON body and returns ``(status, payload)``;
:mod:`solar_sizing_model.api.server` turns that into an HTTP response.

Calculator responses
--------------------
- 400 ``Missing required fields`` – a key is absent, or a text field is
  null or empty.
- 400 ``Validation failed``       – the validator reported field errors.
- 200 ``{"success": true, "data": {...}}`` – sized result.
- 500 ``Internal server error``   – anything unexpected (logged).
"""

from __future__ import annotations

import logging
from typing import Any

from solar_sizing_model.config.defaults import (
    API_MESSAGES,
    CALCULATOR_ENDPOINT,
    REQUIRED_CALCULATOR_FIELDS,
    REQUIRED_LEAD_FIELDS,
)
from solar_sizing_model.config.schema import (
    missing_calculator_fields,
    missing_lead_fields,
)
from solar_sizing_model.leads.cms_client import PayloadAPIError, PayloadClient
from solar_sizing_model.leads.validation import LeadFormData, validate_lead_form
from solar_sizing_model.sizing.calculator import calculate_solar_system
from solar_sizing_model.sizing.models import (
    DEFAULT_CONSTANTS,
    CalculatorInput,
    SizingConstants,
)
from solar_sizing_model.sizing.validator import validate_calculator_input

logger = logging.getLogger(__name__)

Response = tuple[int, dict[str, Any]]


def handle_calculator_post(
    body: Any,
    constants: SizingConstants = DEFAULT_CONSTANTS,
) -> Response:
    """Size a solar system from a calculator request body."""
    try:
        missing = missing_calculator_fields(body)
        if missing:
            logger.info("Calculator request missing fields: %s", missing)
            return 400, {
                "error": "Missing required fields",
                "message": API_MESSAGES["missing_fields"],
                "details": {"required": list(REQUIRED_CALCULATOR_FIELDS)},
            }

        calc_input = CalculatorInput.from_dict(body)
        errors = validate_calculator_input(calc_input, constants)
        if errors:
            logger.info(
                "Calculator request failed validation: %s",
                [e.field for e in errors],
            )
            return 400, {
                "error": "Validation failed",
                "message": API_MESSAGES["validation_failed"],
                "details": [e.to_dict() for e in errors],
            }

        result = calculate_solar_system(calc_input, constants)
        return 200, {"success": True, "data": result.to_dict()}

    except Exception as exc:
        logger.exception("Calculator API error")
        return 500, {
            "error": "Internal server error",
            "message": API_MESSAGES["calculation_failed"],
            "details": str(exc) or "Unknown error",
        }


def describe_calculator_endpoint() -> dict[str, Any]:
    """Static description of the calculator request/response shape."""
    return {
        "message": "Solar Calculator API",
        "description": "Use POST method to calculate solar system specifications",
        "endpoint": CALCULATOR_ENDPOINT,
        "method": "POST",
        "requiredFields": {
            "locationType": "residential | commercial | industrial",
            "monthlyBill": "number (THB)",
            "electricSystem": "single-phase | three-phase",
            "dayNightRatio": "number (0-100)",
        },
        "responseFields": {
            "recommendedCapacity": "number (kW)",
            "estimatedCost": "number (THB)",
            "paybackPeriod": "number (years) | null when no daytime usage",
            "monthlySavings": "number (THB)",
        },
    }


def handle_lead_post(body: Any, client: PayloadClient) -> Response:
    """Validate a contact form submission and forward it to the CMS."""
    missing = missing_lead_fields(body)
    if missing:
        return 400, {
            "error": "Missing required fields",
            "message": API_MESSAGES["missing_fields"],
            "details": {"required": list(REQUIRED_LEAD_FIELDS)},
        }

    lead = LeadFormData.from_dict(body)
    errors = validate_lead_form(lead)
    if errors:
        return 400, {
            "error": "Validation failed",
            "message": API_MESSAGES["validation_failed"],
            "details": [e.to_dict() for e in errors],
        }

    try:
        doc = client.submit_lead(lead)
    except PayloadAPIError as exc:
        logger.error("Failed to submit lead: %s", exc)
        return 502, {
            "success": False,
            "error": str(exc),
            "message": API_MESSAGES["lead_submit_failed"],
        }

    return 201, {
        "success": True,
        "message": API_MESSAGES["lead_submitted"],
        "data": doc,
    }
