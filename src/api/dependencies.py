"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from functools import lru_cache

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository, PostgresTokenIssuer
from src.adapters.smtp import ConsoleEmailSender, SmtpEmailSender
from src.config.settings import get_settings
from src.domain.ports import EmailSender
from src.domain.registration import RegistrationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    return PostgresAccountRepository(get_pool(request))


def get_token_issuer(request: Request) -> PostgresTokenIssuer:
    """Create token issuer with connection pool and configured TTL."""
    settings = get_settings()
    return PostgresTokenIssuer(get_pool(request), settings.verification_token_ttl_seconds)


@lru_cache
def get_email_sender() -> EmailSender:
    """
    Get the configured email sender (singleton).

    Both senders are stateless; SMTP connections are opened per message.
    """
    settings = get_settings()
    if settings.mail_backend == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=settings.smtp_password.get_secret_value(),
            sender=settings.mail_from,
            timeout=settings.smtp_timeout_seconds,
        )
    return ConsoleEmailSender()


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, token issuer and email sender.
    """
    settings = get_settings()
    return RegistrationService(
        repository=get_repository(request),
        token_issuer=get_token_issuer(request),
        email_sender=get_email_sender(),
        activation_url_base=settings.activation_url_base,
        bcrypt_cost=settings.bcrypt_cost,
    )
