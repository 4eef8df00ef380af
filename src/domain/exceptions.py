"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
Anything that is not a RegistrationError is treated as unexpected.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class ValidationError(RegistrationError):
    """Registration input failed the field rules (client fault)."""

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class ConflictError(RegistrationError):
    """Registration would violate a uniqueness invariant."""

    message = "Conflict"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmailAlreadyRegistered(ConflictError):
    """An account with the same email exists."""

    message = "Email already registered"


class UsernameAlreadyRegistered(ConflictError):
    """An account with the same username exists."""

    message = "Username already registered"
