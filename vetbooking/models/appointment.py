"""Appointment model definitions."""

from datetime import datetime

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String

from vetbooking.database import Base


class Appointment(Base):
    """Represents a consultation requested by a tutor."""
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True)
    tutor_name = Column(String, nullable=False)
    pet_name = Column(String, nullable=False)
    vet_work_id = Column(Integer, ForeignKey("work_locations.id"), nullable=False)
    consultation_date = Column(Date, nullable=False)
    time = Column(String, nullable=False)  # HH:MM:SS slot start
    reason = Column(String, nullable=True)
    status = Column(String, default="PENDING")
    created_at = Column(DateTime, default=datetime.now)
