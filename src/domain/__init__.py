"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account registration.
It defines its own port interfaces for infrastructure abstraction,
ensuring true hexagonal architecture decoupling.
"""

from .exceptions import (
    ConflictError,
    EmailAlreadyRegistered,
    RegistrationError,
    UsernameAlreadyRegistered,
    ValidationError,
)
from .ports import Account, AccountRepository, EmailSender, Role, TokenIssuer
from .registration import ActivationNotice, RegistrationService

__all__ = [
    "Account",
    "AccountRepository",
    "ActivationNotice",
    "ConflictError",
    "EmailAlreadyRegistered",
    "EmailSender",
    "RegistrationError",
    "RegistrationService",
    "Role",
    "TokenIssuer",
    "UsernameAlreadyRegistered",
    "ValidationError",
]
