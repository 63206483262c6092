"""
Admin API routes - requires authentication
"""

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from placement_attendance.api.ws import websocket_manager
from placement_attendance.core.db import get_db
from placement_attendance.schemas.event import EventCreate
from placement_attendance.schemas.student import ScanRequest
from placement_attendance.services.attendance_service import AttendanceService
from placement_attendance.services.event_service import EventService
from placement_attendance.services.export_service import ExportService
from placement_attendance.services.notification_service import mailer
from placement_attendance.utils.responses import error_response, failure_status, success_response
from placement_attendance.utils.security import verify_admin_token

router = APIRouter()

event_service = EventService(websocket_manager, mailer)
attendance_service = AttendanceService(websocket_manager, mailer)

@router.post("/events")
async def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Create a new event"""
    result = await event_service.create_event(event_data.event_name, event_data.event_date, db)
    if not result["ok"]:
        return error_response(message=result["error"], status_code=500)

    return success_response(
        message="Event created successfully",
        data=result["event"],
        status_code=201
    )

@router.get("/events")
async def list_events(
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """List events, newest first"""
    events = event_service.get_events(db)
    return success_response(message="Events retrieved", data=events)

@router.delete("/events/{event_id}")
async def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Delete an event; registered students are left untouched"""
    result = await event_service.delete_event(event_id, db)
    if not result["ok"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

@router.get("/events/{event_id}/attendance")
async def get_event_attendance(
    event_id: str,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Attendance rows for every student registered to the event"""
    result = event_service.get_event_attendance(event_id, db)
    if not result["ok"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return success_response(
        message="Event attendance retrieved",
        data={"eventName": result["eventName"], "rows": result["rows"]}
    )

@router.get("/events/{event_id}/attendance.csv")
async def export_attendance_csv(
    event_id: str,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Download attendance as CSV"""
    result = event_service.get_event_attendance(event_id, db)
    if not result["ok"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    filename = ExportService.filename_for(result["eventName"], "csv")
    return Response(
        content=ExportService.to_csv(result["rows"]),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

@router.get("/events/{event_id}/attendance.xlsx")
async def export_attendance_excel(
    event_id: str,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Download attendance as an Excel workbook"""
    result = event_service.get_event_attendance(event_id, db)
    if not result["ok"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    filename = ExportService.filename_for(result["eventName"], "xlsx")
    return Response(
        content=ExportService.to_excel(result["rows"]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"}
    )

@router.post("/events/{event_id}/remind")
async def remind_students(
    event_id: str,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Send a reminder email to every student registered for the event"""
    result = await event_service.remind_students(event_id, db)
    details = {key: result[key] for key in ("sent", "failed", "results") if key in result}
    if not result["success"]:
        return error_response(
            message=result["message"],
            error_code=result.get("error_code"),
            details=details or None,
            status_code=failure_status(result["message"], result.get("error_code"))
        )

    return success_response(message=result["message"], data=details)

@router.post("/scan")
async def scan_student(
    scan: ScanRequest,
    db: Session = Depends(get_db),
    token: str = Depends(verify_admin_token)
):
    """Mark attendance for a scanned student QR code"""
    result = await attendance_service.mark_attendance(scan.payload, db)
    if not result["success"]:
        return error_response(message=result["error"], status_code=failure_status(result["error"]))

    return success_response(
        message=result["message"],
        data={"user": result["user"], "emailSent": result.get("emailSent")}
    )
