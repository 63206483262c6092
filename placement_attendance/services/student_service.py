"""
Student registration and dashboard lookups
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from placement_attendance.core.config import settings
from placement_attendance.schemas.student import StudentCreate
from placement_attendance.services.notification_service import Mailer, registration_template
from placement_attendance.services.repositories import EventRepo, StudentRepo, use_firestore
from placement_attendance.services.serializers import serialize_student

logger = logging.getLogger(__name__)

class StudentService:
    """Registers students against an event and serves their attendance history"""

    def __init__(self, mailer: Mailer):
        self.mailer = mailer

    async def register_student(self, data: StudentCreate, db: Optional[Session]) -> Dict[str, Any]:
        try:
            # The event is resolved by name once, here; later lookups use the id
            if not use_firestore():
                event = EventRepo.get_by_name_sql(db, data.event_name)
                if not event:
                    return {"success": False, "error": "Event not found"}
                student = StudentRepo.create_sql(db, data, event.id)
            else:
                event = EventRepo.get_by_name_fs(data.event_name)
                if not event:
                    return {"success": False, "error": "Event not found"}
                student = StudentRepo.create_fs(data, event["id"])
            serialized = serialize_student(student)
        except Exception as e:
            logger.error(f"Error registering student: {e}")
            if db is not None:
                db.rollback()
            return {"success": False, "error": "Failed to register student"}

        logger.info(f"Student {serialized['_id']} registered for {data.event_name}")

        qr_image_url = f"{settings.BASE_URL}/students/{serialized['_id']}/qr.png"
        try:
            await self.mailer.send(
                to=serialized["email"],
                subject=f"Registration Confirmed: {data.event_name}",
                html=registration_template(
                    serialized["name"], serialized["rollNumber"], data.event_name, qr_image_url
                ),
            )
            email_sent = True
        except Exception as e:
            logger.error(f"Registration email to {serialized['email']} failed: {e}")
            email_sent = False

        return {"success": True, "student": serialized, "emailSent": email_sent}

    def get_student(self, student_id: str, db: Optional[Session]) -> Dict[str, Any]:
        try:
            if not use_firestore():
                student = StudentRepo.get_by_id_sql(db, student_id)
            else:
                student = StudentRepo.get_by_id_fs(student_id)
        except Exception as e:
            logger.error(f"Error fetching student: {e}")
            return {"success": False, "error": "Failed to fetch student"}

        if not student:
            return {"success": False, "error": "Student not found"}
        return {"success": True, "student": serialize_student(student)}
