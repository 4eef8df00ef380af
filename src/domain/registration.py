"""
Registration domain service - Account creation decision flow.

This module contains the core business logic for user registration.

Decision Flow (fails fast, first failure wins)
==============================================

1. validate     - username non-empty, email well-formed, password >= 8 chars
2. email        - an existing account with the email -> EmailAlreadyRegistered
3. username     - an existing account with the username -> UsernameAlreadyRegistered
4. role         - no SUPERADMIN yet -> SUPERADMIN, otherwise USER
5. hash         - bcrypt with the configured cost factor
6. persist      - repository.create()
7. token        - single-use verification token bound to the email
8. notify       - activation email, dispatched after the response

Steps 2-4 read aggregate store state and are not atomic with step 6.
The repository closes both races at the storage layer
(unique constraints, serialized bootstrap insert).
"""

import logging
from dataclasses import dataclass

import bcrypt

from .exceptions import EmailAlreadyRegistered, UsernameAlreadyRegistered
from .ports import AccountRepository, EmailSender, Role, TokenIssuer
from .validation import validate_registration

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Activate Your Account"
ACTIVATION_TEMPLATE = "activation_mail"


@dataclass(frozen=True)
class ActivationNotice:
    """Everything needed to send the activation email for a new account."""

    email: str
    token: str


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    Orchestrates the registration flow: validation, uniqueness checks,
    role assignment, password hashing, persistence and token issue.
    Email dispatch is split into send_activation_email() so callers can
    run it after replying to the client.
    """

    repository: AccountRepository
    token_issuer: TokenIssuer
    email_sender: EmailSender
    activation_url_base: str = "http://localhost:3000/activate"
    bcrypt_cost: int = 10

    def register(self, username: str, email: str, password: str) -> ActivationNotice:
        """
        Register a new account.

        Args:
            username: Requested username (surrounding whitespace removed)
            email: User's email address (will be normalized)
            password: User's password (will be hashed)

        Returns:
            ActivationNotice for the created account

        Raises:
            ValidationError: If any field breaks its rule
            EmailAlreadyRegistered: If the email is taken
            UsernameAlreadyRegistered: If the username is taken
        """
        validate_registration(username, email, password)

        username = username.strip()
        normalized_email = self._normalize_email(email)

        if self.repository.find_by_email(normalized_email) is not None:
            logger.info("Registration rejected: email already registered")
            raise EmailAlreadyRegistered()

        if self.repository.find_by_username(username) is not None:
            logger.info("Registration rejected: username %r already registered", username)
            raise UsernameAlreadyRegistered()

        role = self._assign_role()
        password_hash = self._hash_password(password)

        account = self.repository.create(username, normalized_email, password_hash, role)
        logger.info("Account %s created with role %s", account.id, account.role.value)

        token = self.token_issuer.issue_verification_token(account.email)
        return ActivationNotice(email=account.email, token=token)

    def send_activation_email(self, notice: ActivationNotice) -> None:
        """
        Send the activation email for a registered account.

        Failures are logged and re-raised; the account stays persisted.
        """
        data = {
            "activation_token": notice.token,
            "email": notice.email,
            "activation_url": f"{self.activation_url_base}?token={notice.token}",
        }
        try:
            self.email_sender.send_email(
                notice.email, ACTIVATION_SUBJECT, ACTIVATION_TEMPLATE, data
            )
        except Exception:
            logger.exception("Activation email to %s could not be sent", notice.email)
            raise

    def _assign_role(self) -> Role:
        """First account in an empty system becomes SUPERADMIN."""
        if self.repository.count_by_role(Role.SUPERADMIN) == 0:
            return Role.SUPERADMIN
        return Role.USER

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _hash_password(self, password: str) -> str:
        """Hash password using bcrypt with the configured cost factor."""
        # bcrypt only reads the first 72 bytes and newer releases reject longer input
        return bcrypt.hashpw(password.encode()[:72], bcrypt.gensalt(rounds=self.bcrypt_cost)).decode()
