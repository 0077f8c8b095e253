import os
from datetime import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

os.environ.setdefault('DATABASE_URL', 'sqlite:///./test.db')

from vetbooking.database import Base  # noqa: E402
from vetbooking.models.appointment import Appointment  # noqa: E402
from vetbooking.models.work_location import WorkLocation  # noqa: E402
from vetbooking.models.work_schedule import WorkSchedule  # noqa: E402

TABLES = [WorkLocation.__table__, WorkSchedule.__table__, Appointment.__table__]


@pytest.fixture
def schedule_db(monkeypatch: pytest.MonkeyPatch):
    for module in ('location_routes', 'schedule_routes', 'availability_routes', 'booking_routes'):
        monkeypatch.setattr(f'vetbooking.routes.{module}.ensure_database_ready', lambda: None)

    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=TABLES)

    db = testing_session_local()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine, tables=list(reversed(TABLES)))


@pytest.fixture
def location(schedule_db):
    work_location = WorkLocation(
        name='Clínica Centro',
        address='Rua das Flores',
        number='100',
        neighborhood='Centro',
        zip_code='01000-000',
        is_active=True,
    )
    schedule_db.add(work_location)
    schedule_db.commit()
    schedule_db.refresh(work_location)
    return work_location


@pytest.fixture
def add_schedule(schedule_db, location):
    def _add(day_of_week: int, start: time, end: time, is_active: bool = True) -> WorkSchedule:
        schedule = WorkSchedule(
            work_location_id=location.id,
            day_of_week=day_of_week,
            start_time=start,
            end_time=end,
            is_active=is_active,
        )
        schedule_db.add(schedule)
        schedule_db.commit()
        schedule_db.refresh(schedule)
        return schedule

    return _add
