"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory fakes of the domain ports (no database required)
- A RegistrationService wired to those fakes
"""

from collections.abc import Mapping
from datetime import datetime, timezone
from itertools import count

import pytest

from src.domain.exceptions import EmailAlreadyRegistered, UsernameAlreadyRegistered
from src.domain.ports import Account, Role
from src.domain.registration import RegistrationService


class InMemoryAccountRepository:
    """AccountRepository fake backed by a list, enforcing uniqueness like the database."""

    def __init__(self) -> None:
        self.accounts: list[Account] = []
        self._ids = count(1)

    def find_by_email(self, email: str) -> Account | None:
        return next((a for a in self.accounts if a.email == email), None)

    def find_by_username(self, username: str) -> Account | None:
        return next((a for a in self.accounts if a.username == username), None)

    def count_by_role(self, role: Role) -> int:
        return sum(1 for a in self.accounts if a.role == role)

    def create(self, username: str, email: str, password_hash: str, role: Role) -> Account:
        if self.find_by_email(email) is not None:
            raise EmailAlreadyRegistered()
        if self.find_by_username(username) is not None:
            raise UsernameAlreadyRegistered()
        account = Account(
            id=next(self._ids),
            username=username,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=datetime.now(timezone.utc),
        )
        self.accounts.append(account)
        return account


class RecordingTokenIssuer:
    """TokenIssuer fake returning predictable tokens."""

    def __init__(self) -> None:
        self.issued: list[tuple[str, str]] = []

    def issue_verification_token(self, email: str) -> str:
        token = f"token-{len(self.issued) + 1}"
        self.issued.append((email, token))
        return token


class RecordingEmailSender:
    """EmailSender fake that keeps every message instead of sending it."""

    def __init__(self) -> None:
        self.sent: list[dict] = []

    def send_email(
        self, recipient: str, subject: str, template: str, data: Mapping[str, str]
    ) -> None:
        self.sent.append(
            {"recipient": recipient, "subject": subject, "template": template, "data": dict(data)}
        )


@pytest.fixture
def account_repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository()


@pytest.fixture
def token_issuer() -> RecordingTokenIssuer:
    return RecordingTokenIssuer()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def registration_service(
    account_repository: InMemoryAccountRepository,
    token_issuer: RecordingTokenIssuer,
    email_sender: RecordingEmailSender,
) -> RegistrationService:
    """RegistrationService wired to in-memory fakes (low bcrypt cost for speed)."""
    return RegistrationService(
        repository=account_repository,
        token_issuer=token_issuer,
        email_sender=email_sender,
        activation_url_base="https://app.example.com/activate",
        bcrypt_cost=4,
    )
