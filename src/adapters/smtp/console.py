"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging rendered emails for local development.
"""

import logging
from collections.abc import Mapping

from .rendering import render_template

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - the rendered body goes to the log.
    """

    def send_email(
        self, recipient: str, subject: str, template: str, data: Mapping[str, str]
    ) -> None:
        """
        Log the rendered email (simulates delivery).

        The message is logged at INFO level to be visible in container logs.

        Args:
            recipient: Recipient email address (normalized by domain layer)
            subject: Message subject line
            template: Template name
            data: Template placeholder values
        """
        body = render_template(template, data)
        logger.info("[EMAIL] To: %s Subject: %s\n%s", recipient, subject, body)
