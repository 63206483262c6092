"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from firebase_admin import firestore
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from placement_attendance.core.config import settings
from placement_attendance.models import AttendanceEntry, Event, Student
from placement_attendance.schemas.student import StudentCreate
from placement_attendance.services.firebase_client import get_firestore_client
from placement_attendance.services.qr_service import QRService
from placement_attendance.utils.timezone import utcnow


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


def _sql_id(value: Any) -> Optional[int]:
    """Ids arrive as strings from the API; anything non-numeric matches nothing."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _doc_to_dict(doc) -> Dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def create_sql(db: Session, event_name: str, event_date: date) -> Event:
        event = Event(event_name=event_name, event_date=event_date)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def list_sql(db: Session) -> List[Event]:
        return db.query(Event).order_by(Event.created_at.desc(), Event.id.desc()).all()

    @staticmethod
    def get_by_id_sql(db: Session, event_id: Any) -> Optional[Event]:
        pk = _sql_id(event_id)
        if pk is None:
            return None
        return db.query(Event).filter(Event.id == pk).first()

    @staticmethod
    def get_by_name_sql(db: Session, event_name: str) -> Optional[Event]:
        return db.query(Event).filter(Event.event_name == event_name).order_by(Event.created_at.desc()).first()

    @staticmethod
    def delete_sql(db: Session, event_id: Any) -> Optional[Event]:
        event = EventRepo.get_by_id_sql(db, event_id)
        if not event:
            return None
        db.delete(event)
        db.commit()
        return event

    # Firestore shape: collection "events/{auto_id}"
    @staticmethod
    def create_fs(event_name: str, event_date: date) -> Dict[str, Any]:
        fs = get_firestore_client()
        now = utcnow()
        data = {
            "eventName": event_name,
            "eventDate": event_date.isoformat(),
            "createdAt": now,
            "updatedAt": now,
        }
        doc_ref = fs.collection("events").document()
        doc_ref.set(data)
        return {**data, "id": doc_ref.id}

    @staticmethod
    def list_fs() -> List[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("events").order_by("createdAt", direction=firestore.Query.DESCENDING).get()
        return [_doc_to_dict(d) for d in docs]

    @staticmethod
    def get_by_id_fs(event_id: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        doc = fs.collection("events").document(event_id).get()
        return _doc_to_dict(doc) if doc.exists else None

    @staticmethod
    def get_by_name_fs(event_name: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = (
            fs.collection("events")
            .where("eventName", "==", event_name)
            .order_by("createdAt", direction=firestore.Query.DESCENDING)
            .limit(1)
            .get()
        )
        return _doc_to_dict(docs[0]) if docs else None

    @staticmethod
    def delete_fs(event_id: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        doc_ref = fs.collection("events").document(event_id)
        doc = doc_ref.get()
        if not doc.exists:
            return None
        doc_ref.delete()
        return _doc_to_dict(doc)


# -------- Student repository --------

class StudentRepo:
    @staticmethod
    def create_sql(db: Session, data: StudentCreate, event_id: int) -> Student:
        student = Student(
            name=data.name,
            email=data.email,
            roll_number=data.roll_number,
            university_roll_no=data.university_roll_no,
            branch=data.branch,
            year=data.year,
            phone_number=data.phone_number,
            event_name=data.event_name,
            event_id=event_id,
        )
        db.add(student)
        db.flush()
        student.qr_code = QRService.get_scan_url(student.id)
        db.commit()
        db.refresh(student)
        return student

    @staticmethod
    def get_by_id_sql(db: Session, student_id: Any) -> Optional[Student]:
        pk = _sql_id(student_id)
        if pk is None:
            return None
        return db.query(Student).filter(Student.id == pk).first()

    @staticmethod
    def get_by_qr_code_sql(db: Session, qr_code: str) -> Optional[Student]:
        return db.query(Student).filter(Student.qr_code == qr_code).first()

    @staticmethod
    def list_for_event_sql(db: Session, event_id: int) -> List[Student]:
        return db.query(Student).filter(Student.event_id == event_id).order_by(Student.id).all()

    @staticmethod
    def append_attendance_sql(db: Session, student: Student, at: datetime, day: date) -> bool:
        """Insert an entry unless one exists for ``day``.

        The unique (student_id, attendance_day) constraint makes this atomic;
        returns False when the entry was already there.
        """
        entry = AttendanceEntry(
            student_id=student.id,
            date=at.replace(tzinfo=None),
            present=True,
            attendance_day=day,
        )
        db.add(entry)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            return False
        db.refresh(student)
        return True

    # Firestore student docs under collection "students/{auto_id}"
    @staticmethod
    def create_fs(data: StudentCreate, event_id: str) -> Dict[str, Any]:
        fs = get_firestore_client()
        doc_ref = fs.collection("students").document()
        doc = {
            "name": data.name,
            "email": data.email,
            "rollNumber": data.roll_number,
            "universityRollNo": data.university_roll_no,
            "branch": data.branch,
            "year": data.year,
            "phoneNumber": data.phone_number,
            "eventName": data.event_name,
            "eventId": event_id,
            "qrCode": QRService.get_scan_url(doc_ref.id),
            "attendance": [],
            "attendanceDays": [],
            "createdAt": utcnow(),
        }
        doc_ref.set(doc)
        return {**doc, "id": doc_ref.id}

    @staticmethod
    def get_by_id_fs(student_id: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        doc = fs.collection("students").document(student_id).get()
        return _doc_to_dict(doc) if doc.exists else None

    @staticmethod
    def get_by_qr_code_fs(qr_code: str) -> Optional[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("students").where("qrCode", "==", qr_code).limit(1).get()
        return _doc_to_dict(docs[0]) if docs else None

    @staticmethod
    def list_for_event_fs(event_id: str) -> List[Dict[str, Any]]:
        fs = get_firestore_client()
        docs = fs.collection("students").where("eventId", "==", event_id).get()
        return [_doc_to_dict(d) for d in docs]

    @staticmethod
    def append_attendance_fs(student_id: str, at: datetime, day: date) -> bool:
        """Transactionally append an entry unless ``attendanceDays`` has ``day``."""
        fs = get_firestore_client()
        doc_ref = fs.collection("students").document(student_id)
        day_key = day.isoformat()

        @firestore.transactional
        def _append(transaction) -> bool:
            snapshot = doc_ref.get(transaction=transaction)
            data = snapshot.to_dict() or {}
            if day_key in (data.get("attendanceDays") or []):
                return False
            transaction.update(doc_ref, {
                "attendance": firestore.ArrayUnion([{"date": at, "present": True}]),
                "attendanceDays": firestore.ArrayUnion([day_key]),
            })
            return True

        return _append(fs.transaction())
