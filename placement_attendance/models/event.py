"""
Event model
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime

from placement_attendance.core.db import Base

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    event_name = Column(String(255), nullable=False, index=True)
    event_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # No relationship to students: deleting an event leaves them in place.
