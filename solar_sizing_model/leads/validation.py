"""Lead (contact form) validation.

A lead is a name, phone number and e-mail address submitted from the
website's contact form. Phone numbers are sanitised (spaces, dashes and
parentheses removed) before both validation and submission, mirroring the
CMS collection's own sanitising hook.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

from solar_sizing_model.config.defaults import (
    FIELD_EMAIL,
    FIELD_FULL_NAME,
    FIELD_PHONE,
    LEAD_EMAIL_MAX_LENGTH,
    LEAD_EMAIL_PATTERN,
    LEAD_MESSAGES,
    LEAD_NAME_MAX_LENGTH,
    LEAD_NAME_MIN_LENGTH,
    LEAD_PHONE_PATTERN,
    PHONE_FORMATTING_PATTERN,
)
from solar_sizing_model.sizing.models import FieldError

_PHONE_RE = re.compile(LEAD_PHONE_PATTERN)
_EMAIL_RE = re.compile(LEAD_EMAIL_PATTERN)
_PHONE_FORMATTING_RE = re.compile(PHONE_FORMATTING_PATTERN)


@dataclass(frozen=True)
class LeadFormData:
    """Contact form contents as submitted."""

    full_name: str
    phone: str
    email: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> LeadFormData:
        """Build from the camelCase wire form; missing keys become ``""``."""
        return cls(
            full_name=str(data.get(FIELD_FULL_NAME) or ""),
            phone=str(data.get(FIELD_PHONE) or ""),
            email=str(data.get(FIELD_EMAIL) or ""),
        )

    def to_payload(self) -> dict[str, str]:
        """Return the CMS request body, with trimmed text and a sanitised phone."""
        return {
            FIELD_FULL_NAME: self.full_name.strip(),
            FIELD_PHONE: sanitize_phone(self.phone),
            FIELD_EMAIL: self.email.strip(),
        }


def sanitize_phone(phone: str) -> str:
    """Strip formatting characters, e.g. ``"081-234 5678"`` → ``"0812345678"``."""
    return _PHONE_FORMATTING_RE.sub("", phone)


def _is_blank(value: str) -> bool:
    return not value or not value.strip()


def validate_full_name(full_name: str) -> FieldError | None:
    """Require 2–100 characters after trimming."""
    if _is_blank(full_name):
        return FieldError(FIELD_FULL_NAME, LEAD_MESSAGES["full_name_required"])
    length = len(full_name.strip())
    if length < LEAD_NAME_MIN_LENGTH:
        return FieldError(FIELD_FULL_NAME, LEAD_MESSAGES["full_name_min_length"])
    if length > LEAD_NAME_MAX_LENGTH:
        return FieldError(FIELD_FULL_NAME, LEAD_MESSAGES["full_name_max_length"])
    return None


def validate_phone(phone: str) -> FieldError | None:
    """Require 9–10 digits once formatting characters are removed."""
    if _is_blank(phone):
        return FieldError(FIELD_PHONE, LEAD_MESSAGES["phone_required"])
    if not _PHONE_RE.match(sanitize_phone(phone)):
        return FieldError(FIELD_PHONE, LEAD_MESSAGES["phone_invalid"])
    return None


def validate_email(email: str) -> FieldError | None:
    if _is_blank(email):
        return FieldError(FIELD_EMAIL, LEAD_MESSAGES["email_required"])
    email = email.strip()
    if len(email) > LEAD_EMAIL_MAX_LENGTH or not _EMAIL_RE.match(email):
        return FieldError(FIELD_EMAIL, LEAD_MESSAGES["email_invalid"])
    return None


def validate_lead_form(data: LeadFormData | Mapping[str, Any]) -> list[FieldError]:
    """Validate every lead field and return all errors (empty if valid)."""
    if not isinstance(data, LeadFormData):
        data = LeadFormData.from_dict(data)
    checks = (
        validate_full_name(data.full_name),
        validate_phone(data.phone),
        validate_email(data.email),
    )
    return [error for error in checks if error is not None]

