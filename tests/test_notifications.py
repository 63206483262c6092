"""
Tests for email templates and the SMTP mailer
"""

import smtplib

import pytest

from placement_attendance.services import notification_service
from placement_attendance.services.notification_service import (
    MailError,
    Mailer,
    attendance_template,
    registration_template,
    reminder_template,
)

def test_attendance_template_mentions_student_and_event():
    html = attendance_template("Asha", "21CS101", "Campus Drive")

    assert "Hi Asha" in html
    assert "21CS101" in html
    assert "Campus Drive" in html

def test_templates_escape_user_input():
    html = registration_template("<script>x</script>", "R1", "Drive", "https://example.com/qr.png")

    assert "<script>x</script>" not in html
    assert "&lt;script&gt;" in html
    assert 'src="https://example.com/qr.png"' in html

def test_reminder_template_includes_venue_and_time():
    html = reminder_template("Ravi", "Campus Drive", "RTU Campus, Kota", "Saturday, 1 March 2025 at 3:00 PM")

    assert "RTU Campus, Kota" in html
    assert "Saturday, 1 March 2025 at 3:00 PM" in html

def test_build_message_has_html_part():
    mailer = Mailer(sender="Placement Team <team@example.com>", enabled=False)

    msg = mailer.build_message("asha@example.com", "Hello", "<p>Hi</p>")

    assert msg["To"] == "asha@example.com"
    assert msg["From"] == "Placement Team <team@example.com>"
    html_part = msg.get_body(preferencelist=("html",))
    assert "<p>Hi</p>" in html_part.get_content()

def test_disabled_mailer_does_not_connect(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("SMTP should not be used")

    monkeypatch.setattr(notification_service.smtplib, "SMTP", fail)

    Mailer(enabled=False).send_mail("asha@example.com", "Hello", "<p>Hi</p>")

def test_missing_recipient_raises():
    with pytest.raises(MailError):
        Mailer(enabled=False).send_mail("", "Hello", "<p>Hi</p>")

def test_smtp_failure_raises_mail_error(monkeypatch):
    class RefusingSMTP:
        def __init__(self, *args, **kwargs):
            raise smtplib.SMTPConnectError(421, "service not available")

    monkeypatch.setattr(notification_service.smtplib, "SMTP", RefusingSMTP)

    with pytest.raises(MailError):
        Mailer(enabled=True).send_mail("asha@example.com", "Hello", "<p>Hi</p>")

def test_enabled_mailer_sends_over_smtp(monkeypatch):
    calls = []

    class RecordingSMTP:
        def __init__(self, host, port, timeout=None):
            calls.append(("connect", host, port))

        def __enter__(self):
            return self

        def __exit__(self, *exc):
            return False

        def starttls(self):
            calls.append(("starttls",))

        def login(self, username, password):
            calls.append(("login", username))

        def send_message(self, msg):
            calls.append(("send", msg["To"]))

    monkeypatch.setattr(notification_service.smtplib, "SMTP", RecordingSMTP)

    mailer = Mailer(server="smtp.example.com", port=2525, username="bot", password="secret",
                    use_tls=True, enabled=True)
    mailer.send_mail("asha@example.com", "Hello", "<p>Hi</p>")

    assert calls == [
        ("connect", "smtp.example.com", 2525),
        ("starttls",),
        ("login", "bot"),
        ("send", "asha@example.com"),
    ]
