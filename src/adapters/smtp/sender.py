"""
SMTP email sender adapter - Implements EmailSender protocol over STARTTLS.
"""

import logging
import smtplib
from collections.abc import Mapping
from email.message import EmailMessage

from .rendering import render_template

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Delivers rendered templates through an SMTP relay."""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        timeout: float = 15.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._timeout = timeout

    def send_email(
        self, recipient: str, subject: str, template: str, data: Mapping[str, str]
    ) -> None:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self._sender
        msg["To"] = recipient
        msg.set_content(render_template(template, data))

        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as smtp:
            smtp.ehlo()
            smtp.starttls()
            smtp.ehlo()
            if self._username:
                smtp.login(self._username, self._password)
            smtp.send_message(msg)

        logger.info("Sent %r to %s via %s:%s", subject, recipient, self._host, self._port)
