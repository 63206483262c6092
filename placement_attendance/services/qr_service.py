"""
QR code generation for student scan links
"""

import io
from typing import Any, Optional

import qrcode

from placement_attendance.core.config import settings

SCAN_PATH = "/scan/"

class QRService:
    """Builds the scan URL stored on each student and renders it as a QR image"""

    @staticmethod
    def get_scan_url(student_id: Any) -> str:
        """The exact string stored as a student's qrCode and matched at scan time"""
        return f"{settings.BASE_URL}{SCAN_PATH}{student_id}"

    @staticmethod
    def extract_student_id(payload: str) -> Optional[str]:
        """Accept either a bare student id or a full scan URL"""
        payload = (payload or "").strip()
        if SCAN_PATH in payload:
            payload = payload.rsplit(SCAN_PATH, 1)[1].split("?", 1)[0]
        return payload or None

    @staticmethod
    def generate_student_qr(student_id: Any, format: str = 'PNG') -> bytes:
        """Render the student's scan URL as an image"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.get_scan_url(student_id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)
        return buffer.getvalue()
