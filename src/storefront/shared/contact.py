"""Contact detail formats shared by accounts and order snapshots."""

import re

from protean.exceptions import ValidationError

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
MOBILE_PATTERN = re.compile(r"^[6-9]\d{9}$")
POSTAL_CODE_PATTERN = re.compile(r"^[1-9][0-9]{5}$")


def normalize_email(email: str | None) -> str | None:
    if email is None:
        return None
    return email.strip().lower()


def contact_errors(email=None, phone=None, postal_code=None, field_prefix="") -> dict[str, list[str]]:
    """Collect format errors for whichever contact fields are present."""
    errors: dict[str, list[str]] = {}
    if email is not None and not EMAIL_PATTERN.match(email):
        errors[f"{field_prefix}email"] = ["Please provide a valid email address"]
    if phone is not None and not MOBILE_PATTERN.match(phone):
        errors[f"{field_prefix}phone"] = ["Phone number must be 10 digits starting with 6-9"]
    if postal_code is not None and not POSTAL_CODE_PATTERN.match(postal_code):
        errors[f"{field_prefix}postal_code"] = ["Postal code must be 6 digits and cannot start with 0"]
    return errors


def validate_contact(email=None, phone=None, postal_code=None, field_prefix="") -> None:
    errors = contact_errors(email, phone, postal_code, field_prefix)
    if errors:
        raise ValidationError(errors)
