"""
Shared test doubles for the mailer and websocket manager
"""

import pytest

from placement_attendance.services.notification_service import MailError


class FakeMailer:
    """Records messages instead of talking to SMTP"""

    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def send(self, to, subject, html):
        if to in self.fail_for:
            raise MailError(f"Recipient rejected: {to}")
        self.sent.append({"to": to, "subject": subject, "html": html})


class FakeWebSocketManager:
    """Records which views were revalidated"""

    def __init__(self):
        self.revalidated = []

    async def revalidate(self, view):
        self.revalidated.append(view)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def ws_manager():
    return FakeWebSocketManager()
