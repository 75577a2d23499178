"""JSON schema definitions and validation for request bodies and batch files.

Validation uses the ``jsonschema`` library (Draft 7). The schemas only check
*shape* (presence of keys, container types); value rules such as bill limits
belong to :mod:`solar_sizing_model.sizing.validator` so that every violation
is reported with a user-facing message.

Usage::

    from solar_sizing_model.config.schema import missing_calculator_fields
    missing = missing_calculator_fields(body)   # [] when all keys present
"""

from __future__ import annotations

from typing import Any

import jsonschema

from solar_sizing_model.config.defaults import (
    FIELD_ELECTRIC_SYSTEM,
    FIELD_LOCATION_TYPE,
    REQUIRED_CALCULATOR_FIELDS,
    REQUIRED_LEAD_FIELDS,
)

# ---------------------------------------------------------------------------
# Re-usable sub-schemas
# ---------------------------------------------------------------------------

# A present text value: not null and not an empty string.
_PRESENT = {"not": {"anyOf": [{"type": "null"}, {"const": ""}]}}

# Numeric fields only need the key; null and "" read as 0 downstream.
_QUOTE_PROPERTIES = {
    FIELD_LOCATION_TYPE: _PRESENT,
    FIELD_ELECTRIC_SYSTEM: _PRESENT,
}

_TEXT = {"type": "string"}

# ---------------------------------------------------------------------------
# Calculator request body
# ---------------------------------------------------------------------------

CALCULATOR_REQUEST_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Solar Calculator Request",
    "type": "object",
    "required": list(REQUIRED_CALCULATOR_FIELDS),
    "properties": _QUOTE_PROPERTIES,
}

# ---------------------------------------------------------------------------
# Lead request body
# ---------------------------------------------------------------------------

LEAD_REQUEST_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Lead Form Submission",
    "type": "object",
    "required": list(REQUIRED_LEAD_FIELDS),
    "properties": {name: _TEXT for name in REQUIRED_LEAD_FIELDS},
}

# ---------------------------------------------------------------------------
# Batch quote file
# ---------------------------------------------------------------------------

_QUOTE_ENTRY = {
    "type": "object",
    "required": list(REQUIRED_CALCULATOR_FIELDS),
    "properties": {
        "label": {"type": ["string", "integer"]},
        **_QUOTE_PROPERTIES,
    },
}

BATCH_FILE_SCHEMA: dict = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Solar Quote Batch",
    "oneOf": [
        _QUOTE_ENTRY,
        {"type": "array", "items": _QUOTE_ENTRY, "minItems": 1},
    ],
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def _missing_fields(schema: dict, body: Any, required: tuple[str, ...]) -> list[str]:
    """Return required keys that are absent or empty in *body*.

    A body that is not a JSON object is missing everything.
    """
    if not isinstance(body, dict):
        return list(required)
    validator = jsonschema.Draft7Validator(schema)
    missing: set[str] = set()
    for error in validator.iter_errors(body):
        if error.validator == "required":
            missing.update(k for k in required if k not in body)
        elif error.absolute_path:
            missing.add(str(error.absolute_path[0]))
    return [name for name in required if name in missing]


def missing_calculator_fields(body: Any) -> list[str]:
    """List the calculator keys missing from *body*, in display order."""
    return _missing_fields(CALCULATOR_REQUEST_SCHEMA, body, REQUIRED_CALCULATOR_FIELDS)


def missing_lead_fields(body: Any) -> list[str]:
    """List the lead keys missing from (or not text in) *body*."""
    return _missing_fields(LEAD_REQUEST_SCHEMA, body, REQUIRED_LEAD_FIELDS)


def validate_batch(data: Any) -> None:
    """Validate a parsed batch JSON document.

    Raises a ``jsonschema.ValidationError`` whose message names the entry
    index and field that failed.

    Raises
    ------
    jsonschema.ValidationError
        When *data* is neither a quote object nor a non-empty list of them.
    """
    entries = data if isinstance(data, list) else [data]
    if isinstance(data, list) and not data:
        raise jsonschema.ValidationError(
            "Batch validation failed at '(root)': the quote list is empty"
        )
    entry_validator = jsonschema.Draft7Validator(_QUOTE_ENTRY)
    for index, entry in enumerate(entries):
        errors = sorted(
            entry_validator.iter_errors(entry), key=lambda e: list(e.absolute_path)
        )
        if errors:
            first = errors[0]
            path_str = " → ".join(
                [str(index)] + [str(p) for p in first.absolute_path]
            )
            raise jsonschema.ValidationError(
                f"Batch validation failed at '{path_str}': {first.message}",
                path=first.absolute_path,
                schema_path=first.absolute_schema_path,
                validator=first.validator,
                validator_value=first.validator_value,
                instance=first.instance,
                schema=first.schema,
                cause=first.cause,
            )
    jsonschema.Draft7Validator(BATCH_FILE_SCHEMA).validate(data)


def get_schema(name: str = "calculator") -> dict:
    """Return a copy of a named schema.

    Parameters
    ----------
    name:
        ``"calculator"``, ``"lead"`` or ``"batch"``.

    Raises
    ------
    KeyError
        For an unknown schema name.
    """
    schemas = {
        "calculator": CALCULATOR_REQUEST_SCHEMA,
        "lead": LEAD_REQUEST_SCHEMA,
        "batch": BATCH_FILE_SCHEMA,
    }
    return schemas[name].copy()
