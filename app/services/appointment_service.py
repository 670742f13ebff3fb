from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import date, time
from typing import List, Optional
import logging

from ..core.errors import InternalError, InvalidTimeSlot, MissingParameter, NotFound, SlotTaken
from ..models.appointment import Appointment, AppointmentStatus
from ..models.doctor import Doctor
from ..models.patient import Patient
from ..schemas.appointment import (
    AppointmentCreate, AppointmentUpdate,
    DoctorAppointmentResponse, PatientAppointmentResponse
)

logger = logging.getLogger(__name__)

SLOT_MINUTES = (0, 30)

def is_valid_time_slot(value: time) -> bool:
    """Slots start on the hour or the half hour."""
    return value.minute in SLOT_MINUTES and value.second == 0 and value.microsecond == 0

def _appointment_fields(appointment: Appointment) -> dict:
    return {
        "appointment_id": appointment.appointment_id,
        "patient_id": appointment.patient_id,
        "doctor_id": appointment.doctor_id,
        "appointment_date": appointment.appointment_date,
        "appointment_time": appointment.appointment_time,
        "status": appointment.status,
    }

class AppointmentService:
    def __init__(self, db: Session):
        self.db = db

    def list_for_doctor(
        self, doctor_id: int, appointment_date: Optional[date]
    ) -> List[DoctorAppointmentResponse]:
        """Appointments of one doctor on one day, earliest first."""
        if appointment_date is None:
            raise MissingParameter("Missing appointment date")

        try:
            rows = self.db.query(Appointment, Patient.name).join(
                Patient, Appointment.patient_id == Patient.patient_id
            ).filter(
                Appointment.doctor_id == doctor_id,
                Appointment.appointment_date == appointment_date
            ).order_by(Appointment.appointment_time.asc()).all()
        except SQLAlchemyError as e:
            raise self._internal_error(
                "Error fetching appointments", e, "Failed to fetch appointments"
            ) from e

        return [
            DoctorAppointmentResponse(**_appointment_fields(appointment), patient_name=name)
            for appointment, name in rows
        ]

    def list_for_patient(self, patient_id: Optional[int]) -> List[PatientAppointmentResponse]:
        """All appointments of one patient, ordered by date then time."""
        if patient_id is None:
            raise MissingParameter("Missing patient id")

        try:
            rows = self.db.query(Appointment, Doctor.name).join(
                Doctor, Appointment.doctor_id == Doctor.doctor_id
            ).filter(
                Appointment.patient_id == patient_id
            ).order_by(
                Appointment.appointment_date.asc(),
                Appointment.appointment_time.asc()
            ).all()
        except SQLAlchemyError as e:
            raise self._internal_error(
                "Error fetching patient appointments", e, "Failed to fetch appointments"
            ) from e

        return [
            PatientAppointmentResponse(**_appointment_fields(appointment), doctor_name=name)
            for appointment, name in rows
        ]

    def book_appointment(self, data: AppointmentCreate) -> Appointment:
        """Book a free slot; the new appointment starts as Scheduled."""
        required = (data.patient_id, data.doctor_id, data.appointment_date, data.appointment_time)
        if any(value is None for value in required):
            raise MissingParameter("All fields are required")
        self._ensure_time_slot(data.appointment_time)

        try:
            if self._slot_taken(data.doctor_id, data.appointment_date, data.appointment_time):
                raise SlotTaken()

            appointment = Appointment(
                patient_id=data.patient_id,
                doctor_id=data.doctor_id,
                appointment_date=data.appointment_date,
                appointment_time=data.appointment_time,
                status=AppointmentStatus.SCHEDULED.value
            )
            self.db.add(appointment)
            self.db.commit()
            self.db.refresh(appointment)
        except IntegrityError as e:
            # Lost a race for the slot, or the insert broke another constraint
            self.db.rollback()
            try:
                slot_taken = self._slot_taken(
                    data.doctor_id, data.appointment_date, data.appointment_time
                )
            except SQLAlchemyError as check_error:
                raise self._internal_error(
                    "Error booking appointment", check_error, "Failed to book appointment"
                ) from check_error
            if slot_taken:
                raise SlotTaken() from e
            raise self._internal_error(
                "Error booking appointment", e, "Failed to book appointment"
            ) from e
        except SQLAlchemyError as e:
            raise self._internal_error(
                "Error booking appointment", e, "Failed to book appointment"
            ) from e

        logger.info(
            f"Booked appointment {appointment.appointment_id} for doctor {appointment.doctor_id} "
            f"at {appointment.appointment_date} {appointment.appointment_time}"
        )
        return appointment

    def update_appointment(self, appointment_id: int, data: AppointmentUpdate) -> Appointment:
        """Move an appointment to a new slot and set its status."""
        if data.appointment_date is None or data.appointment_time is None:
            raise MissingParameter("Appointment date and time are required")
        self._ensure_time_slot(data.appointment_time)
        new_status = (data.status or AppointmentStatus.SCHEDULED).value

        try:
            appointment = self.db.query(Appointment).filter(
                Appointment.appointment_id == appointment_id
            ).first()
            if appointment is None:
                raise NotFound()

            # The doctor stays the same; only another appointment can clash
            if self._slot_taken(
                appointment.doctor_id, data.appointment_date, data.appointment_time,
                exclude_id=appointment_id
            ):
                raise SlotTaken()

            appointment.appointment_date = data.appointment_date
            appointment.appointment_time = data.appointment_time
            appointment.status = new_status
            self.db.commit()
            self.db.refresh(appointment)
        except IntegrityError as e:
            self.db.rollback()
            raise SlotTaken() from e
        except SQLAlchemyError as e:
            raise self._internal_error(
                f"Error updating appointment {appointment_id}", e, "Failed to update appointment"
            ) from e

        logger.info(f"Updated appointment {appointment_id} (status: {new_status})")
        return appointment

    def delete_appointment(self, appointment_id: int) -> None:
        try:
            deleted = self.db.query(Appointment).filter(
                Appointment.appointment_id == appointment_id
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._internal_error(
                f"Error deleting appointment {appointment_id}", e, "Failed to delete appointment"
            ) from e

        if not deleted:
            raise NotFound()
        logger.info(f"Deleted appointment {appointment_id}")

    def _slot_taken(
        self,
        doctor_id: int,
        appointment_date: date,
        appointment_time: time,
        exclude_id: Optional[int] = None
    ) -> bool:
        query = self.db.query(Appointment.appointment_id).filter(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_date == appointment_date,
            Appointment.appointment_time == appointment_time
        )
        if exclude_id is not None:
            query = query.filter(Appointment.appointment_id != exclude_id)
        return query.first() is not None

    def _ensure_time_slot(self, appointment_time: time):
        if not is_valid_time_slot(appointment_time):
            raise InvalidTimeSlot()

    def _internal_error(self, context: str, exc: Exception, detail: str) -> InternalError:
        """Log a store failure and turn it into a 500 for the caller."""
        logger.error(f"{context}: {exc}")
        self.db.rollback()
        return InternalError(detail)
