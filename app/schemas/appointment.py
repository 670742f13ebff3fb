from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, time

from ..models.appointment import AppointmentStatus

# Request bodies keep every field optional so that absent or blank values are
# reported as MissingParameter (400) instead of a validation error.

def blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value

class AppointmentCreate(BaseModel):
    patient_id: Optional[int] = None
    doctor_id: Optional[int] = None
    appointment_date: Optional[date] = None
    appointment_time: Optional[time] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        return blank_to_none(value)

class AppointmentUpdate(BaseModel):
    appointment_date: Optional[date] = None
    appointment_time: Optional[time] = None
    status: Optional[AppointmentStatus] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_missing(cls, value):
        return blank_to_none(value)

class AppointmentResponse(BaseModel):
    appointment_id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    appointment_time: time
    status: Optional[str] = None

class DoctorAppointmentResponse(AppointmentResponse):
    patient_name: Optional[str] = None

class PatientAppointmentResponse(AppointmentResponse):
    doctor_name: Optional[str] = None

class MessageResponse(BaseModel):
    message: str

class BookingResponse(MessageResponse):
    appointment_id: int
