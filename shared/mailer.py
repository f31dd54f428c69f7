"""
Outbound email over SMTP.

Used by the auth module to deliver password-reset and account-activation
links. Supports implicit TLS (port 465) and STARTTLS (port 587).
"""

import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from .config import Settings
from .exceptions import DeliveryError

logger = logging.getLogger(__name__)


class Mailer:
    """SMTP mail sender configured from Settings."""

    def __init__(self, settings: Settings):
        self._settings = settings

    def _create_message(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: Optional[str] = None,
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        msg["To"] = to_email

        if text_body:
            msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))
        return msg

    def send(
        self,
        to: str,
        subject: str,
        html: str,
        text: Optional[str] = None,
    ) -> None:
        """
        Send an email.

        Does nothing (beyond a warning) when SMTP is disabled.

        Raises:
            DeliveryError: If the SMTP server rejected or dropped the message
        """
        settings = self._settings
        if not settings.smtp_enabled:
            logger.warning("SMTP disabled, email '%s' not sent to %s", subject, to)
            return

        if not settings.smtp_host:
            logger.error("SMTP host not configured")
            raise DeliveryError(to, "SMTP host not configured")

        message = self._create_message(to, subject, html, text)
        password = settings.smtp_password.get_secret_value() if settings.smtp_password else ""

        try:
            if settings.smtp_use_tls and not settings.smtp_starttls:
                context = ssl.create_default_context()
                with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, context=context) as server:
                    if settings.smtp_user:
                        server.login(settings.smtp_user, password)
                    server.send_message(message)
            else:
                with smtplib.SMTP(settings.smtp_host, settings.smtp_port) as server:
                    if settings.smtp_starttls:
                        server.starttls(context=ssl.create_default_context())
                    if settings.smtp_user:
                        server.login(settings.smtp_user, password)
                    server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to, e)
            raise DeliveryError(to, str(e)) from e

        logger.info("Email '%s' sent to %s", subject, to)
