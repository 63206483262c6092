"""
Student model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from placement_attendance.core.db import Base
from placement_attendance.models.attendance import AttendanceEntry

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    roll_number = Column(String(100), nullable=False)
    university_roll_no = Column(String(100), nullable=False)
    branch = Column(String(100), nullable=False)
    year = Column(String(20), nullable=False)
    phone_number = Column(String(30), nullable=False)
    event_name = Column(String(255), nullable=False)
    # Resolved once at registration; not a foreign key so deleting an event
    # leaves its students untouched.
    event_id = Column(Integer, index=True)
    qr_code = Column(String(512), unique=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    attendance = relationship(
        "AttendanceEntry",
        back_populates="student",
        order_by=AttendanceEntry.date,
        cascade="all, delete-orphan",
    )
