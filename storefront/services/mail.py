"""
Delivery of activation and password-reset codes.

`SmtpMailer` sends through aiosmtplib; `LogMailer` only logs the message and is
used when no SMTP host is configured. Both are awaited from FastAPI background
tasks, so a delivery failure never fails the request that queued it.
"""

from __future__ import annotations

import logging
from email.message import EmailMessage

import aiosmtplib

logger = logging.getLogger(__name__)

ACTIVATION_SUBJECT = "Activate your account at E-commerce shop"
PASSWORD_SUBJECT = "Change your password account at E-commerce shop"


def build_code_message(sender: str, to: str, subject: str, name: str, code: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = sender
    message["To"] = to
    message["Subject"] = subject
    message.set_content(
        f"Hello {name},\n\n"
        f"Please use the code below to continue:\n\n    {code}\n\n"
        "The code expires in a few minutes.\n"
    )
    return message


class LogMailer:
    def __init__(self, sender: str):
        self.sender = sender
        self.sent = []

    async def send_code(self, to: str, subject: str, name: str, code: str) -> None:
        message = build_code_message(self.sender, to, subject, name, code)
        self.sent.append(message)
        logger.info("Mail to %s (%s) not sent, no SMTP host configured", to, subject)


class SmtpMailer:
    def __init__(self, host: str, port: int, username: str, password: str, sender: str, timeout: float = 30.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.timeout = timeout

    async def send_code(self, to: str, subject: str, name: str, code: str) -> None:
        message = build_code_message(self.sender, to, subject, name, code)
        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username or None,
                password=self.password or None,
                use_tls=self.port == 465,
                start_tls=self.port == 587,
                timeout=self.timeout,
            )
        except aiosmtplib.SMTPException as exc:
            logger.error("Sending mail to %s failed: %s", to, exc)
            return
        logger.info("Mail sent to %s (%s)", to, subject)


def mailer_from_settings(settings):
    if not settings.mail_host:
        return LogMailer(settings.mail_from)
    return SmtpMailer(
        host=settings.mail_host,
        port=settings.mail_port,
        username=settings.mail_user,
        password=settings.mail_password,
        sender=settings.mail_from,
    )
