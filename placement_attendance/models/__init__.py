"""
Database models package
"""

from .event import Event
from .attendance import AttendanceEntry
from .student import Student

__all__ = ["Event", "Student", "AttendanceEntry"]
