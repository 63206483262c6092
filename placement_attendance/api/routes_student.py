"""
Student-facing API routes
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from placement_attendance.core.db import get_db
from placement_attendance.schemas.student import StudentCreate
from placement_attendance.services.notification_service import mailer
from placement_attendance.services.qr_service import QRService
from placement_attendance.services.student_service import StudentService
from placement_attendance.utils.responses import error_response, failure_status, success_response
from placement_attendance.utils.security import enforce_rate_limit

router = APIRouter()

student_service = StudentService(mailer)

@router.post("/register", dependencies=[Depends(enforce_rate_limit)])
async def register_student(
    student_data: StudentCreate,
    db: Session = Depends(get_db)
):
    """Register a student for an event and email their QR code"""
    result = await student_service.register_student(student_data, db)
    if not result["success"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return success_response(
        message="Registration successful",
        data={"student": result["student"], "emailSent": result["emailSent"]},
        status_code=201
    )

@router.get("/{student_id}")
async def student_dashboard(
    student_id: str,
    db: Session = Depends(get_db)
):
    """Student profile with attendance history"""
    result = student_service.get_student(student_id, db)
    if not result["success"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return success_response(message="Student retrieved", data=result["student"])

@router.get("/{student_id}/qr.png")
async def student_qr_code(
    student_id: str,
    db: Session = Depends(get_db)
):
    """QR code image encoding the student's scan URL"""
    result = student_service.get_student(student_id, db)
    if not result["success"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return Response(
        content=QRService.generate_student_qr(result["student"]["_id"]),
        media_type="image/png",
        headers={"Content-Disposition": f"inline; filename=qr_{student_id}.png"}
    )
