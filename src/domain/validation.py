"""
Registration input rules.

The HTTP boundary validates the same rules through pydantic; this module is
the authoritative server-side copy used by the domain service.
"""

from email_validator import EmailNotValidError, validate_email

from .exceptions import ValidationError

USERNAME_MIN_LENGTH = 1
PASSWORD_MIN_LENGTH = 8


def validate_registration(username: str, email: str, password: str) -> None:
    """
    Check registration fields, collecting every failure.

    Raises:
        ValidationError: If any field breaks its rule
    """
    errors: list[dict[str, str]] = []

    if len(username.strip()) < USERNAME_MIN_LENGTH:
        errors.append({"field": "username", "message": "Username is Required"})

    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as e:
        errors.append({"field": "email", "message": str(e)})

    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(
            {
                "field": "password",
                "message": f"Password should have at least {PASSWORD_MIN_LENGTH} characters",
            }
        )

    if errors:
        raise ValidationError(errors)
