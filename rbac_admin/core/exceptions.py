"""
Custom Exceptions

This module defines the exceptions raised by the service layer. Callers
(an API layer, a CLI, tests) only ever see these four error types coming out
of a service method.

Taxonomy:
- ValidationError: caller-supplied input fails a precondition. Always raised
  before any store access.
- EntityNotFoundError: a referenced id does not exist in the store.
- BusinessRuleViolationError: the request is well-formed but breaks a
  business rule (stale row version, inactive referenced person).
- ExternalServiceError: anything unexpected coming from the data-access
  layer, or an explicit failure flag returned by an update/delete.
"""

from typing import Any, Optional


class RBACAdminException(Exception):
    """Base exception for the RBAC admin service layer."""
    pass


class DomainError(RBACAdminException):
    """
    Base for errors a service raises on purpose.

    Services re-raise these unchanged and wrap everything else in
    ExternalServiceError.
    """
    pass


class ValidationError(DomainError):
    """Raised when input data fails validation."""

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        self.message = message
        if field:
            super().__init__(f"Validation failed for '{field}': {message}")
        else:
            super().__init__(f"Validation failed: {message}")


class EntityNotFoundError(DomainError):
    """Raised when an entity is not found in the store."""

    def __init__(self, entity_name: str, entity_id: Any):
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} with id '{entity_id}' not found")


class BusinessRuleViolationError(DomainError):
    """Raised when an operation would break a business rule."""

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ExternalServiceError(DomainError):
    """Raised when the backing store fails or reports an unsuccessful write."""

    def __init__(
        self,
        service_name: str,
        message: str,
        original_error: Optional[Exception] = None
    ):
        self.service_name = service_name
        self.message = message
        self.original_error = original_error
        super().__init__(f"{service_name}: {message}")
