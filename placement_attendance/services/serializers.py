"""
Convert ORM rows and Firestore documents into the plain dicts the API returns.

Both backends produce the same camelCase shape so the dashboard and the CSV
export do not care which store is active.
"""

from typing import Any, Dict, List, Union

from placement_attendance.models import Event, Student
from placement_attendance.schemas.event import AttendanceRow, EventResponse
from placement_attendance.schemas.student import StudentIdentity
from placement_attendance.utils.timezone import to_iso

EventRecord = Union[Event, Dict[str, Any]]
StudentRecord = Union[Student, Dict[str, Any]]


def _date_str(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.isoformat()[:10]


def serialize_event(event: EventRecord) -> Dict[str, Any]:
    if isinstance(event, Event):
        response = EventResponse(
            id=str(event.id),
            event_name=event.event_name,
            event_date=_date_str(event.event_date),
            created_at=to_iso(event.created_at),
            updated_at=to_iso(event.updated_at),
        )
    else:
        response = EventResponse(
            id=str(event["id"]),
            event_name=event.get("eventName", ""),
            event_date=_date_str(event.get("eventDate")),
            created_at=to_iso(event.get("createdAt")),
            updated_at=to_iso(event.get("updatedAt")),
        )
    return response.model_dump(by_alias=True)


def event_name_of(event: EventRecord) -> str:
    return event.event_name if isinstance(event, Event) else event.get("eventName", "")


def event_date_of(event: EventRecord):
    return event.event_date if isinstance(event, Event) else event.get("eventDate")


def attendance_of(student: StudentRecord) -> List[Dict[str, Any]]:
    """Attendance entries as ``{date, present}`` dicts in append order"""
    if isinstance(student, Student):
        return [{"date": a.date, "present": a.present} for a in student.attendance]
    return list(student.get("attendance") or [])


def serialize_student(student: StudentRecord) -> Dict[str, Any]:
    if isinstance(student, Student):
        data = {
            "_id": str(student.id),
            "name": student.name,
            "email": student.email,
            "rollNumber": student.roll_number,
            "universityRollNo": student.university_roll_no,
            "branch": student.branch,
            "year": student.year,
            "phoneNumber": student.phone_number,
            "eventName": student.event_name,
            "eventId": str(student.event_id) if student.event_id is not None else None,
            "qrCode": student.qr_code,
        }
    else:
        data = {
            "_id": str(student["id"]),
            **{key: student.get(key) for key in (
                "name", "email", "rollNumber", "universityRollNo", "branch",
                "year", "phoneNumber", "eventName", "eventId", "qrCode",
            )},
        }
    data["attendance"] = [
        {"date": to_iso(entry["date"]), "present": bool(entry.get("present", True))}
        for entry in attendance_of(student)
    ]
    return data


def student_identity(student: StudentRecord) -> Dict[str, Any]:
    if isinstance(student, Student):
        identity = StudentIdentity(id=str(student.id), name=student.name, rollNumber=student.roll_number)
    else:
        identity = StudentIdentity(id=str(student["id"]), name=student.get("name", ""), rollNumber=student.get("rollNumber", ""))
    return identity.model_dump()


def attendance_row(student: StudentRecord) -> Dict[str, Any]:
    """Flatten a student into one export row"""
    info = serialize_student(student)
    entries = info["attendance"]
    row = AttendanceRow(
        name=info["name"] or "",
        email=info["email"] or "",
        roll_number=info["rollNumber"] or "",
        university_roll_no=info["universityRollNo"] or "",
        branch=info["branch"] or "",
        year=str(info["year"] or ""),
        phone_number=info["phoneNumber"] or "",
        attendance_count=len(entries),
        last_attendance_at=entries[-1]["date"] if entries else "",
    )
    return row.model_dump(by_alias=True)
