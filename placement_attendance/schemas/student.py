"""
Student-related Pydantic schemas
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

class StudentCreate(BaseModel):
    """Schema for registering a student against an event"""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    roll_number: str = Field(..., alias="rollNumber", min_length=1)
    university_roll_no: str = Field(..., alias="universityRollNo", min_length=1)
    branch: str = Field(..., min_length=1)
    year: str = Field(..., min_length=1)
    phone_number: str = Field(..., alias="phoneNumber", min_length=1)
    event_name: str = Field(..., alias="eventName", min_length=1)

class StudentIdentity(BaseModel):
    """Reduced identity returned after a scan"""
    id: str
    name: str
    rollNumber: str

class ScanRequest(BaseModel):
    """Scanned QR payload: the student id or the full scan URL"""
    payload: str = Field(..., min_length=1)
