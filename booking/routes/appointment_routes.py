import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from booking.auth.dependencies import get_current_user_id
from booking.core.config import APPOINTMENTS_PAGE_SIZE
from booking.database import SessionLocal, ensure_appointment_schema
from booking.dispatch import JobDispatcher, get_dispatcher
from booking.schemas import AppointmentResponse, AppointmentSummaryResponse, CanceledAppointmentResponse
from booking.services.appointment_workflow import AppointmentWorkflow
from booking.stores import AppointmentStore, NotificationSink, ProviderDirectory

router = APIRouter(tags=['appointments'])

DATABASE_UNAVAILABLE_DETAIL = 'Database unavailable. Verify DATABASE_URL and Postgres credentials.'
# Keeps the OFFSET within a 32-bit integer.
MAX_PAGE = 2**31 // APPOINTMENTS_PAGE_SIZE


def ensure_database_ready() -> None:
    try:
        ensure_appointment_schema()
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def build_workflow(db: Session, dispatcher: JobDispatcher) -> AppointmentWorkflow:
    return AppointmentWorkflow(
        appointments=AppointmentStore(db),
        providers=ProviderDirectory(db),
        notifications=NotificationSink(db),
        dispatcher=dispatcher,
    )


@router.get('', response_model=list[AppointmentSummaryResponse])
def list_appointments(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    dispatcher: JobDispatcher = Depends(get_dispatcher),
):
    ensure_database_ready()

    try:
        appointments = build_workflow(db, dispatcher).list_appointments(user_id, page=page)

        return [AppointmentSummaryResponse.model_validate(appointment) for appointment in appointments]
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc


@router.post('', response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
    payload: dict[str, Any] = Body(...),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    dispatcher: JobDispatcher = Depends(get_dispatcher),
):
    ensure_database_ready()

    try:
        appointment = build_workflow(db, dispatcher).create_appointment(user_id, payload)

        return AppointmentResponse.model_validate(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc


@router.delete('/{appointment_id}', response_model=CanceledAppointmentResponse)
async def cancel_appointment(
    appointment_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    dispatcher: JobDispatcher = Depends(get_dispatcher),
):
    await asyncio.to_thread(ensure_database_ready)

    try:
        appointment = await build_workflow(db, dispatcher).cancel_appointment(user_id, appointment_id)

        return CanceledAppointmentResponse.model_validate(appointment)
    except SQLAlchemyError as exc:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=DATABASE_UNAVAILABLE_DETAIL,
        ) from exc
