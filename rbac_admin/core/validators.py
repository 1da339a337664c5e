"""
Input Validators

This module provides the validation rules shared by every service.
Each rule raises ValidationError naming the offending field, so the caller
can tell exactly which part of the payload was rejected.

Rules:
- Identifiers must be positive integers
- Required text must be non-empty after stripping whitespace
- Amounts and numeric references must be strictly positive
- Required dates must be set
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Union

from rbac_admin.core.exceptions import ValidationError

Number = Union[int, float, Decimal]


def require_payload(payload: Any, entity_name: str) -> None:
    """
    Reject a missing payload.

    Args:
        payload: The DTO received from the caller
        entity_name: Entity name used in the error message

    Raises:
        ValidationError: If payload is None
    """
    if payload is None:
        raise ValidationError(None, f"The {entity_name} payload cannot be null")


def require_positive_id(value: Optional[int], field: str = "id") -> None:
    """
    Validate an identifier.

    Args:
        value: The identifier to check
        field: Field name reported on failure

    Raises:
        ValidationError: If value is missing, not an integer, or <= 0
    """
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(field, "The id must be greater than zero")


def require_text(value: Optional[str], field: str) -> None:
    """
    Validate a required string.

    Raises:
        ValidationError: If value is None, empty or only whitespace
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(field, f"{field} cannot be empty")


def require_positive(value: Optional[Number], field: str) -> None:
    """
    Validate a required amount or numeric reference.

    Raises:
        ValidationError: If value is missing, not a number, or <= 0
    """
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValidationError(field, f"{field} must be a number")
    if value <= 0:
        raise ValidationError(field, f"{field} must be greater than zero")


def require_date(value: Optional[date], field: str) -> None:
    """Validate that a required date was provided."""
    if value is None:
        raise ValidationError(field, f"{field} must be provided")
    if not isinstance(value, date):
        raise ValidationError(field, f"{field} must be a date")
