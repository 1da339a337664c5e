"""
API Response Schemas

Pydantic models for the responses the HTTP boundary produces itself.
Entity payloads are the service DTOs (rbac_admin.services.dtos).
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned for every domain error."""
    error: str = Field(..., description="Error class, e.g. ValidationError")
    message: str = Field(..., description="Human readable message")
    field: Optional[str] = Field(default=None, description="Offending field, for validation errors")
    code: Optional[str] = Field(default=None, description="Business rule code, for rule violations")


class HealthResponse(BaseModel):
    status: str
    database: Optional[str] = None
