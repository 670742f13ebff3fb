from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError
from pydantic import TypeAdapter, ValidationError
from sqlalchemy.orm import Session
from datetime import date
from typing import List, Optional

from ..core.database import get_db
from ..services.appointment_service import AppointmentService
from ..schemas.appointment import (
    AppointmentCreate, AppointmentUpdate, BookingResponse, MessageResponse,
    DoctorAppointmentResponse, PatientAppointmentResponse, blank_to_none
)

router = APIRouter(tags=["Appointments"])

def get_appointment_service(db: Session = Depends(get_db)) -> AppointmentService:
    return AppointmentService(db)

def _parse_query(name: str, value: Optional[str], adapter: TypeAdapter):
    """Parse a query value; blank counts as absent."""
    value = blank_to_none(value)
    if value is None:
        return None
    try:
        return adapter.validate_python(value)
    except ValidationError as e:
        raise RequestValidationError(
            [{**error, "loc": ("query", name)} for error in e.errors()]
        )

def appointment_date_query(value: Optional[str] = Query(None, alias="date")) -> Optional[date]:
    return _parse_query("date", value, TypeAdapter(date))

def patient_id_query(value: Optional[str] = Query(None, alias="patient_id")) -> Optional[int]:
    return _parse_query("patient_id", value, TypeAdapter(int))

@router.get(
    "/appointments/doctor/{doctor_id}",
    response_model=List[DoctorAppointmentResponse]
)
def list_doctor_appointments(
    doctor_id: int,
    appointment_date: Optional[date] = Depends(appointment_date_query),
    service: AppointmentService = Depends(get_appointment_service)
):
    """List a doctor's appointments for one day."""
    return service.list_for_doctor(doctor_id, appointment_date)

@router.get(
    "/appointments/patient",
    response_model=List[PatientAppointmentResponse]
)
def list_patient_appointments(
    patient_id: Optional[int] = Depends(patient_id_query),
    service: AppointmentService = Depends(get_appointment_service)
):
    """List every appointment of a patient."""
    return service.list_for_patient(patient_id)

@router.post(
    "/book-appointment",
    response_model=BookingResponse,
    status_code=status.HTTP_201_CREATED
)
def book_appointment(
    appointment_data: Optional[AppointmentCreate] = None,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Book an appointment if the doctor is free at that time."""
    # No body at all is reported like any other missing field
    appointment = service.book_appointment(appointment_data or AppointmentCreate())
    return BookingResponse(
        message="Appointment booked successfully!",
        appointment_id=appointment.appointment_id
    )

@router.put("/appointments/{appointment_id}", response_model=MessageResponse)
def update_appointment(
    appointment_id: int,
    appointment_data: Optional[AppointmentUpdate] = None,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Reschedule an appointment and/or change its status."""
    service.update_appointment(appointment_id, appointment_data or AppointmentUpdate())
    return MessageResponse(message="Appointment updated successfully")

@router.delete("/appointments/{appointment_id}", response_model=MessageResponse)
def delete_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service)
):
    """Delete an appointment."""
    service.delete_appointment(appointment_id)
    return MessageResponse(message="Appointment deleted successfully")
