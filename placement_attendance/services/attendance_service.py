"""
QR scan attendance marking with email confirmation and dashboard refresh
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from placement_attendance.api.ws import STUDENT_ATTENDANCE_VIEW, WebSocketManager
from placement_attendance.services.notification_service import Mailer, attendance_template
from placement_attendance.services.qr_service import QRService
from placement_attendance.services.repositories import StudentRepo, use_firestore
from placement_attendance.services.serializers import attendance_of, student_identity
from placement_attendance.utils.timezone import local_day, utcnow

logger = logging.getLogger(__name__)

ATTENDANCE_SUBJECT = "Thanks For Attending the Event"

class AttendanceService:
    """Marks a student present at most once per local calendar day"""

    def __init__(self, websocket_manager: WebSocketManager, mailer: Mailer):
        self.websocket_manager = websocket_manager
        self.mailer = mailer

    def _find_student(self, payload: str, db: Optional[Session]):
        student_id = QRService.extract_student_id(payload)
        if not student_id:
            return None
        qr_code = QRService.get_scan_url(student_id)
        if not use_firestore():
            return StudentRepo.get_by_qr_code_sql(db, qr_code)
        return StudentRepo.get_by_qr_code_fs(qr_code)

    @staticmethod
    def _already_marked(student, today) -> bool:
        return any(local_day(entry["date"]) == today for entry in attendance_of(student))

    async def mark_attendance(self, payload: str, db: Optional[Session]) -> Dict[str, Any]:
        try:
            student = self._find_student(payload, db)
            if not student:
                return {"success": False, "error": "User not found"}

            identity = student_identity(student)
            now = utcnow()
            today = local_day(now)

            already = {
                "success": True,
                "message": "Attendance already marked for today",
                "user": identity,
            }
            if self._already_marked(student, today):
                return already

            if not use_firestore():
                appended = StudentRepo.append_attendance_sql(db, student, now, today)
            else:
                appended = StudentRepo.append_attendance_fs(student["id"], now, today)
            if not appended:
                # Lost a race with a concurrent scan for the same day
                return already
        except Exception as e:
            logger.error(f"Error marking attendance: {e}")
            if db is not None:
                db.rollback()
            return {"success": False, "error": "Failed to mark attendance"}

        logger.info(f"Attendance marked for student {identity['id']} on {today.isoformat()}")

        email_sent = await self._send_confirmation(student)
        await self.websocket_manager.revalidate(STUDENT_ATTENDANCE_VIEW)

        return {
            "success": True,
            "message": "Attendance marked successfully",
            "user": identity,
            "emailSent": email_sent,
        }

    async def _send_confirmation(self, student) -> bool:
        if isinstance(student, dict):
            name, email = student.get("name"), student.get("email")
            roll_number, event_name = student.get("rollNumber"), student.get("eventName")
        else:
            name, email = student.name, student.email
            roll_number, event_name = student.roll_number, student.event_name

        try:
            await self.mailer.send(
                to=email,
                subject=ATTENDANCE_SUBJECT,
                html=attendance_template(name, roll_number, event_name),
            )
        except Exception as e:
            logger.error(f"Attendance confirmation to {email} failed: {e}")
            return False
        return True
