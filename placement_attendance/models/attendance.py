"""
Attendance entry model
"""

from sqlalchemy import Column, Integer, Boolean, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from placement_attendance.core.db import Base

class AttendanceEntry(Base):
    __tablename__ = "attendance"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)
    date = Column(DateTime, nullable=False)  # UTC
    present = Column(Boolean, default=True, nullable=False)
    attendance_day = Column(Date, nullable=False)  # calendar day in the configured timezone

    student = relationship("Student", back_populates="attendance")

    __table_args__ = (
        UniqueConstraint("student_id", "attendance_day", name="uq_attendance_student_day"),
    )
