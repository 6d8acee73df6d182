import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from booking.core import config
from booking.core.errors import AppointmentError, ValidationFailed
from booking.database import Base, engine, ensure_appointment_schema
from booking.dispatch import get_dispatcher
from booking.models import appointment, file, notification, user  # noqa: F401
from booking.routes import appointment_routes

logging.basicConfig(
    level=config.LOG_LEVEL.upper(),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

app = FastAPI()

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
        ensure_appointment_schema()
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and Postgres credentials.')


@app.on_event('shutdown')
async def close_dispatcher() -> None:
    await get_dispatcher().close()


@app.exception_handler(AppointmentError)
async def appointment_error_handler(_request: Request, exc: AppointmentError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, _exc: RequestValidationError) -> JSONResponse:
    return await appointment_error_handler(request, ValidationFailed())


@app.get('/')
def root():
    return {'status': 'Appointment API Running'}


app.include_router(appointment_routes.router, prefix='/appointments')
