"""
Email rendering and delivery
"""

import logging
import os
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from fastapi.concurrency import run_in_threadpool
from jinja2 import Environment, FileSystemLoader, select_autoescape

from placement_attendance.core.config import settings

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(["html"]),
)


# -------- Templates --------

def registration_template(name: str, roll_number: str, event_name: str, qr_image_url: str) -> str:
    return _env.get_template("email/registration.html").render(
        name=name, roll_number=roll_number, event_name=event_name, qr_image_url=qr_image_url
    )


def attendance_template(name: str, roll_number: str, event_name: str) -> str:
    return _env.get_template("email/attendance.html").render(
        name=name, roll_number=roll_number, event_name=event_name
    )


def reminder_template(name: str, event_name: str, venue: str, when: str) -> str:
    return _env.get_template("email/reminder.html").render(
        name=name, event_name=event_name, venue=venue, when=when
    )


# -------- Delivery --------

class MailError(Exception):
    """Raised when a message could not be handed to the SMTP server"""


class Mailer:
    """SMTP mailer with a blocking ``send_mail`` and an async wrapper"""

    def __init__(self, server: str = None, port: int = None, username: str = None,
                 password: str = None, use_tls: bool = None, sender: str = None,
                 enabled: bool = None):
        self.server = server or settings.MAIL_SERVER
        self.port = port or settings.MAIL_PORT
        self.username = username if username is not None else settings.MAIL_USERNAME
        self.password = password if password is not None else settings.MAIL_PASSWORD
        self.use_tls = settings.MAIL_USE_TLS if use_tls is None else use_tls
        self.sender = sender or settings.MAIL_SENDER
        self.enabled = settings.MAIL_ENABLED if enabled is None else enabled

    def build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg["Message-ID"] = make_msgid()
        msg.set_content("This message requires an HTML-capable email client.")
        msg.add_alternative(html, subtype="html")
        return msg

    def send_mail(self, to: str, subject: str, html: str) -> None:
        if not to:
            raise MailError("No recipient specified")

        msg = self.build_message(to, subject, html)
        if not self.enabled:
            logger.info(f"Mail disabled, not sending '{subject}' to {to}")
            return

        try:
            with smtplib.SMTP(self.server, self.port, timeout=settings.MAIL_TIMEOUT) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to}: {e}")
            raise MailError(str(e)) from e

        logger.info(f"Email '{subject}' sent to {to}")

    async def send(self, to: str, subject: str, html: str) -> None:
        await run_in_threadpool(self.send_mail, to, subject, html)


mailer = Mailer()
