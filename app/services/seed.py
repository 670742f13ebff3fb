"""Baseline appointments inserted at startup."""
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import date, time
from typing import Dict, Iterable
import logging

from ..models.appointment import Appointment, AppointmentStatus

logger = logging.getLogger(__name__)

DEFAULT_APPOINTMENTS = [
    {"patient_id": 1, "doctor_id": 1, "appointment_date": date(2025, 4, 11), "appointment_time": time(9, 0)},
    {"patient_id": 2, "doctor_id": 1, "appointment_date": date(2025, 4, 11), "appointment_time": time(9, 30)},
    {"patient_id": 3, "doctor_id": 1, "appointment_date": date(2025, 4, 11), "appointment_time": time(10, 0)},
    {"patient_id": 4, "doctor_id": 1, "appointment_date": date(2025, 4, 11), "appointment_time": time(10, 30)},
    {"patient_id": 5, "doctor_id": 1, "appointment_date": date(2025, 4, 11), "appointment_time": time(11, 0)},
]

def seed_default_appointments(
    db: Session, appointments: Iterable[Dict] = DEFAULT_APPOINTMENTS
) -> int:
    """Insert each appointment that is not stored yet.

    Every row is checked and committed on its own, so a failing row is logged
    and skipped without affecting the others. Returns the number inserted.
    """
    inserted = 0
    for appt in appointments:
        try:
            existing = db.query(Appointment.appointment_id).filter_by(**appt).first()
            if existing:
                continue

            db.add(Appointment(status=AppointmentStatus.SCHEDULED.value, **appt))
            db.commit()
            inserted += 1
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error inserting default appointment {appt}: {e}")

    return inserted
