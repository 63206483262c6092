"""
Public API routes - no authentication required
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from placement_attendance.api.routes_student import student_service
from placement_attendance.core.db import get_db
from placement_attendance.utils.responses import error_response, failure_status, success_response
from placement_attendance.utils.security import enforce_rate_limit

router = APIRouter()

@router.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}

@router.get("/scan/{student_id}", dependencies=[Depends(enforce_rate_limit)])
async def scan_landing(
    student_id: str,
    db: Session = Depends(get_db)
):
    """Landing target of a student QR code; identifies the student without marking attendance"""
    result = student_service.get_student(student_id, db)
    if not result["success"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    student = result["student"]
    return success_response(
        message="Show this code to the event team to mark attendance",
        data={
            "id": student["_id"],
            "name": student["name"],
            "rollNumber": student["rollNumber"],
            "eventName": student["eventName"],
            "attendanceCount": len(student["attendance"]),
        }
    )
