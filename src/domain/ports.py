"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol


class Role(str, Enum):
    """
    Account roles.

    SUPERADMIN is assigned exactly once, to the first account created
    in an empty system. Every later account is a USER.
    """

    USER = "user"
    SUPERADMIN = "superadmin"


@dataclass(frozen=True)
class Account:
    """Persisted account as returned by the account store."""

    id: int
    username: str
    email: str
    password_hash: str
    role: Role
    is_verified: bool = False
    created_at: datetime | None = None


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def find_by_email(self, email: str) -> Account | None:
        """Return the account registered under a normalized email, if any."""
        ...

    def find_by_username(self, username: str) -> Account | None:
        """Return the account registered under a username, if any."""
        ...

    def count_by_role(self, role: Role) -> int:
        """Count accounts holding the given role."""
        ...

    def create(self, username: str, email: str, password_hash: str, role: Role) -> Account:
        """
        Durably store a new account.

        Implementations must enforce email/username uniqueness at the
        storage layer and serialize SUPERADMIN bootstrap inserts. When a
        SUPERADMIN insert loses the bootstrap race, the account is stored
        as USER and the returned Account reflects the stored role.

        Raises:
            EmailAlreadyRegistered: Email unique constraint violated
            UsernameAlreadyRegistered: Username unique constraint violated
        """
        ...


class TokenIssuer(Protocol):
    """Port interface for verification token generation."""

    def issue_verification_token(self, email: str) -> str:
        """
        Generate and record a single-use verification token for an email.

        Returns:
            The plaintext token, suitable for embedding in an activation link
        """
        ...


class EmailSender(Protocol):
    """Port interface for templated email delivery."""

    def send_email(
        self, recipient: str, subject: str, template: str, data: Mapping[str, str]
    ) -> None:
        """
        Render a template with data and deliver it to the recipient.

        Args:
            recipient: Recipient email address
            subject: Message subject line
            template: Template name (without extension)
            data: Placeholder values for the template
        """
        ...
