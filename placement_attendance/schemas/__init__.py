"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .student import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventResponse",
    "AttendanceRow",
    "StudentCreate",
    "StudentIdentity",
    "ScanRequest",
]
