"""Tests for shared/mailer.py."""

import smtplib
from unittest.mock import MagicMock, patch

import pytest
from pydantic import SecretStr

from shared.config import Settings
from shared.exceptions import DeliveryError
from shared.mailer import Mailer


def smtp_settings(**overrides) -> Settings:
    values = {
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_password": SecretStr("pw"),
        "smtp_use_tls": True,
        "smtp_starttls": True,
    }
    values.update(overrides)
    return Settings(**values)


class TestMailer:

    @patch("shared.mailer.smtplib.SMTP")
    def test_disabled_sends_nothing(self, mock_smtp):
        Mailer(Settings(smtp_enabled=False)).send("a@example.com", "Hi", "<p>Hi</p>")
        mock_smtp.assert_not_called()

    def test_missing_host(self):
        with pytest.raises(DeliveryError):
            Mailer(smtp_settings(smtp_host="")).send("a@example.com", "Hi", "<p>Hi</p>")

    @patch("shared.mailer.smtplib.SMTP")
    def test_starttls(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value

        Mailer(smtp_settings()).send("a@example.com", "Reset", "<p>link</p>", text="link")

        mock_smtp.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "pw")
        message = server.send_message.call_args[0][0]
        assert message["To"] == "a@example.com"
        assert message["Subject"] == "Reset"
        assert message["From"] == "Firstmakers <noreply@firstmakers.com>"

    @patch("shared.mailer.smtplib.SMTP_SSL")
    def test_implicit_tls(self, mock_smtp_ssl):
        server = mock_smtp_ssl.return_value.__enter__.return_value

        Mailer(smtp_settings(smtp_port=465, smtp_starttls=False)).send("a@example.com", "Hi", "<p>Hi</p>")

        assert mock_smtp_ssl.call_args[0] == ("smtp.example.com", 465)
        server.send_message.assert_called_once()

    @patch("shared.mailer.smtplib.SMTP")
    def test_no_login_without_user(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value
        Mailer(smtp_settings(smtp_user="")).send("a@example.com", "Hi", "<p>Hi</p>")
        server.login.assert_not_called()

    @patch("shared.mailer.smtplib.SMTP")
    def test_smtp_failure_is_delivery_error(self, mock_smtp):
        server = mock_smtp.return_value.__enter__.return_value
        server.send_message.side_effect = smtplib.SMTPRecipientsRefused({})

        with pytest.raises(DeliveryError) as exc_info:
            Mailer(smtp_settings()).send("a@example.com", "Hi", "<p>Hi</p>")
        assert exc_info.value.recipient == "a@example.com"

    @patch("shared.mailer.smtplib.SMTP")
    def test_connection_refused_is_delivery_error(self, mock_smtp):
        mock_smtp.side_effect = ConnectionRefusedError()
        with pytest.raises(DeliveryError):
            Mailer(smtp_settings()).send("a@example.com", "Hi", "<p>Hi</p>")
