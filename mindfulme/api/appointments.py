"""Therapy appointments. Each user sees and edits only their own bookings."""

import logging

from fastapi import APIRouter, status

from mindfulme.api.auth import CurrentUser
from mindfulme.api.deps import StorageDep
from mindfulme.core.errors import NotFoundError, ValidationError
from mindfulme.models import Appointment
from mindfulme.schemas.care import AppointmentCreate, AppointmentResponse, AppointmentUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=list[AppointmentResponse])
def list_appointments(user: CurrentUser, storage: StorageDep) -> list[Appointment]:
    return storage.list_appointments(user.id)


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def book_appointment(body: AppointmentCreate, user: CurrentUser, storage: StorageDep) -> Appointment:
    """Book with an existing therapist; new bookings start as pending."""
    appointment = storage.create_appointment(
        user_id=user.id,
        therapist_id=body.therapist_id,
        start_time=body.start_time,
        end_time=body.end_time,
        notes=body.notes,
    )
    logger.info(
        "Appointment booked",
        extra={"appointment_id": appointment.id, "therapist_id": body.therapist_id},
    )
    return appointment


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(appointment_id: str, user: CurrentUser, storage: StorageDep) -> Appointment:
    appointment = storage.get_appointment(appointment_id)
    if appointment.user_id != user.id:
        raise NotFoundError("Appointment not found")
    return appointment


@router.put("/{appointment_id}", response_model=AppointmentResponse)
def update_appointment(
    appointment_id: str,
    body: AppointmentUpdate,
    user: CurrentUser,
    storage: StorageDep,
) -> Appointment:
    """Change status, time window or notes."""
    appointment = get_appointment(appointment_id, user, storage)
    changes = body.model_dump(exclude_unset=True)
    if changes.get("status") is None:
        changes.pop("status", None)
    start = changes.get("start_time", appointment.start_time)
    end = changes.get("end_time", appointment.end_time)
    if start and end and end <= start:
        raise ValidationError("endTime must be after startTime")
    if not changes:
        return appointment
    return storage.update_appointment(appointment_id, **changes)
