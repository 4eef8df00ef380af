"""Email adapters - Template rendering and delivery implementations."""

from .console import ConsoleEmailSender
from .sender import SmtpEmailSender

__all__ = ["ConsoleEmailSender", "SmtpEmailSender"]
