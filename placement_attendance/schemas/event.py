"""
Event-related Pydantic schemas
"""

from datetime import date
from pydantic import BaseModel, ConfigDict, Field

class EventCreate(BaseModel):
    """Schema for creating an event"""
    model_config = ConfigDict(populate_by_name=True)

    event_name: str = Field(..., alias="eventName", min_length=1, max_length=255)
    event_date: date = Field(..., alias="eventDate")

class EventResponse(BaseModel):
    """Serialized event as returned to the dashboard"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    event_name: str = Field(..., alias="eventName")
    event_date: str = Field(..., alias="eventDate")
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

class AttendanceRow(BaseModel):
    """One row of the attendance export"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    email: str
    roll_number: str = Field(..., alias="rollNumber")
    university_roll_no: str = Field(..., alias="universityRollNo")
    branch: str
    year: str
    phone_number: str = Field(..., alias="phoneNumber")
    attendance_count: int = Field(..., alias="attendanceCount")
    last_attendance_at: str = Field(..., alias="lastAttendanceAt")
