"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request model for account registration."""

    username: str = Field(..., min_length=1, description="Account username (required)")
    email: EmailStr
    password: str = Field(..., min_length=8, description="User password (min 8 characters)")


class RegisterResponse(BaseModel):
    """Response model for successful registration."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    success: bool = False
    message: str


class FieldError(BaseModel):
    """A single failed field rule."""

    field: str
    message: str


class ValidationErrorResponse(ErrorResponse):
    """Error response for rejected registration input."""

    errors: list[FieldError]
