"""
Event administration: create, list, delete, attendance export rows and reminders
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from placement_attendance.api.ws import ADMIN_SCANNER_VIEW, WebSocketManager
from placement_attendance.core.config import settings
from placement_attendance.services.notification_service import Mailer, reminder_template
from placement_attendance.services.repositories import EventRepo, StudentRepo, use_firestore
from placement_attendance.services.serializers import (
    attendance_row,
    event_date_of,
    event_name_of,
    serialize_event,
)
from placement_attendance.utils.timezone import format_display_date

logger = logging.getLogger(__name__)

class EventService:
    """Admin-facing event operations.

    Every method catches and logs persistence errors and returns a structured
    result instead of raising.
    """

    def __init__(self, websocket_manager: WebSocketManager, mailer: Mailer):
        self.websocket_manager = websocket_manager
        self.mailer = mailer

    async def create_event(self, event_name: str, event_date: date, db: Optional[Session]) -> Dict[str, Any]:
        try:
            if not use_firestore():
                event = EventRepo.create_sql(db, event_name, event_date)
            else:
                event = EventRepo.create_fs(event_name, event_date)
            serialized = serialize_event(event)
        except Exception as e:
            logger.error(f"Error creating event: {e}")
            if db is not None:
                db.rollback()
            return {"ok": False, "error": "Failed to create event"}

        logger.info(f"Event created: {serialized['_id']} ({event_name})")
        await self.websocket_manager.revalidate(ADMIN_SCANNER_VIEW)
        return {"ok": True, "event": serialized}

    def get_events(self, db: Optional[Session]) -> List[Dict[str, Any]]:
        try:
            events = EventRepo.list_sql(db) if not use_firestore() else EventRepo.list_fs()
            return [serialize_event(e) for e in events]
        except Exception as e:
            logger.error(f"Error fetching events: {e}")
            return []

    async def delete_event(self, event_id: str, db: Optional[Session]) -> Dict[str, Any]:
        try:
            if not use_firestore():
                deleted = EventRepo.delete_sql(db, event_id)
            else:
                deleted = EventRepo.delete_fs(event_id)
        except Exception as e:
            logger.error(f"Error deleting event: {e}")
            if db is not None:
                db.rollback()
            return {"ok": False, "error": "Failed to delete event"}

        if not deleted:
            logger.error(f"Event not found: {event_id}")
            return {"ok": False, "error": "Event not found"}

        logger.info(f"Event deleted: {event_id}")
        await self.websocket_manager.revalidate(ADMIN_SCANNER_VIEW)
        return {"ok": True}

    def _load_event_and_students(self, event_id: str, db: Optional[Session]):
        if not use_firestore():
            event = EventRepo.get_by_id_sql(db, event_id)
            students = StudentRepo.list_for_event_sql(db, event.id) if event else []
        else:
            event = EventRepo.get_by_id_fs(event_id)
            students = StudentRepo.list_for_event_fs(event["id"]) if event else []
        return event, students

    def get_event_attendance(self, event_id: str, db: Optional[Session]) -> Dict[str, Any]:
        try:
            event, students = self._load_event_and_students(event_id, db)
            if not event:
                return {"ok": False, "error": "Event not found"}
            rows = [attendance_row(s) for s in students]
        except Exception as e:
            logger.error(f"Error fetching event attendance: {e}")
            return {"ok": False, "error": "Failed to fetch event attendance"}

        return {"ok": True, "eventName": event_name_of(event), "rows": rows}

    async def remind_students(self, event_id: str, db: Optional[Session]) -> Dict[str, Any]:
        """Email every registered student a reminder, reporting each outcome"""
        try:
            event, students = self._load_event_and_students(event_id, db)
        except Exception as e:
            logger.error(f"Error loading reminder recipients: {e}")
            return {"success": False, "message": "Failed to send reminder emails"}

        if not event:
            return {"success": False, "message": "Event not found", "error_code": "EVENT_NOT_FOUND"}
        if not students:
            return {"success": False, "message": "No students found for this event", "error_code": "NO_STUDENTS"}

        event_name = event_name_of(event)
        formatted_date = format_display_date(event_date_of(event))
        subject = f"📅 Event Reminder: {event_name} - {formatted_date}"
        when = f"{formatted_date} at {settings.EVENT_TIME}"

        recipients = [attendance_row(s) for s in students]
        outcomes = await asyncio.gather(
            *[
                self.mailer.send(
                    to=r["email"],
                    subject=subject,
                    html=reminder_template(r["name"], event_name, settings.EVENT_VENUE, when),
                )
                for r in recipients
            ],
            return_exceptions=True,
        )

        results = []
        for recipient, outcome in zip(recipients, outcomes):
            if isinstance(outcome, BaseException):
                logger.error(f"Reminder to {recipient['email']} failed: {outcome}")
                results.append({"email": recipient["email"], "sent": False, "error": str(outcome)})
            else:
                results.append({"email": recipient["email"], "sent": True, "error": None})

        sent = sum(1 for r in results if r["sent"])
        failed = len(results) - sent
        logger.info(f"Reminder emails for {event_name}: {sent} sent, {failed} failed")

        if failed == 0:
            message = f"Reminder emails sent successfully to {sent} students"
        else:
            message = f"Reminder emails sent to {sent} of {len(results)} students; {failed} failed"

        return {
            "success": sent > 0,
            "message": message,
            "sent": sent,
            "failed": failed,
            "results": results,
        }
