"""Weekly schedule model definitions."""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Time
from sqlalchemy.orm import relationship

from vetbooking.database import Base


class WorkSchedule(Base):
    """Weekly recurring open-hours rule for one location and weekday."""
    __tablename__ = "work_schedules"

    id = Column(Integer, primary_key=True, index=True)
    work_location_id = Column(Integer, ForeignKey("work_locations.id"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Sunday
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.now)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now)

    work_location = relationship("WorkLocation", back_populates="schedules")
