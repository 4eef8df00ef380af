"""
API v1 routes.

Defines REST endpoints for the Account Registration API.
"""

from fastapi import APIRouter, BackgroundTasks, Depends

from src.api.dependencies import get_registration_service
from src.api.models import (
    ErrorResponse,
    RegisterRequest,
    RegisterResponse,
    ValidationErrorResponse,
)
from src.domain.registration import RegistrationService

router = APIRouter(tags=["v1"])

ACTIVATION_SENT = "Activation Link Sent to Your Mail"


@router.post(
    "/registerAccount",
    response_model=RegisterResponse,
    responses={
        409: {"model": ErrorResponse, "description": "Email or username already registered"},
        422: {"model": ValidationErrorResponse, "description": "Validation error"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
    summary="Register a new account",
    description="Register a new user account. The first account created "
    "becomes the superadmin. An activation link is emailed to the address.",
)
def register_account(
    request_data: RegisterRequest,
    background_tasks: BackgroundTasks,
    service: RegistrationService = Depends(get_registration_service),
) -> RegisterResponse:
    """
    Register a new account and email an activation link.

    - **username**: Unique username (required)
    - **email**: Unique, valid email address
    - **password**: Password (minimum 8 characters)

    Errors are handled by the application's exception handlers.
    """
    notice = service.register(request_data.username, request_data.email, request_data.password)
    background_tasks.add_task(service.send_activation_email, notice)
    return RegisterResponse(message=ACTIVATION_SENT)
