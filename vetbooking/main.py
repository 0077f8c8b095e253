import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from vetbooking.core import config
from vetbooking.database import Base, engine, ensure_appointment_schema, ensure_schedule_schema
from vetbooking.models import appointment, work_location, work_schedule  # noqa: F401
from vetbooking.routes import availability_routes, booking_routes, location_routes, schedule_routes

app = FastAPI(title='Vet Booking API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    config.validate_runtime_config()
    try:
        Base.metadata.create_all(bind=engine)
        ensure_schedule_schema()
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'Vet Booking API Running'}


app.include_router(location_routes.router, prefix='/vet-work-locations')
app.include_router(schedule_routes.router, prefix='/vet-work-locations')
app.include_router(availability_routes.router, prefix='/vet-work-locations')
app.include_router(booking_routes.router, prefix='/dashboard')
