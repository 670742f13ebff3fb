from datetime import date, time

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import InternalError, NotFound, SlotTaken
from app.models.appointment import Appointment
from app.schemas.appointment import AppointmentCreate, AppointmentUpdate
from app.services.appointment_service import AppointmentService, is_valid_time_slot

@pytest.mark.parametrize("value, expected", [
    (time(9, 0), True),
    (time(9, 30), True),
    (time(0, 0), True),
    (time(23, 30), True),
    (time(9, 15), False),
    (time(9, 59), False),
    (time(9, 0, 1), False),
    (time(9, 30, 0, 500), False),
])
def test_is_valid_time_slot(value, expected):
    assert is_valid_time_slot(value) is expected

def make_booking(**overrides):
    data = {
        "patient_id": 2,
        "doctor_id": 1,
        "appointment_date": date(2025, 7, 1),
        "appointment_time": time(13, 30),
    }
    data.update(overrides)
    return AppointmentCreate(**data)

class TestAppointmentService:

    def test_book_stores_scheduled_row(self, db_session):
        service = AppointmentService(db_session)
        appointment = service.book_appointment(make_booking())

        stored = db_session.query(Appointment).filter(
            Appointment.appointment_id == appointment.appointment_id
        ).one()
        assert stored.status == "Scheduled"
        assert stored.appointment_time == time(13, 30)

    def test_store_constraint_catches_a_lost_race(self, db_session, monkeypatch):
        service = AppointmentService(db_session)
        service.book_appointment(make_booking())

        # The availability check misses the competing row, as it would when two
        # requests check before either inserts; the unique constraint still holds.
        answers = iter([False, True])
        monkeypatch.setattr(service, "_slot_taken", lambda *args, **kwargs: next(answers))

        with pytest.raises(SlotTaken):
            service.book_appointment(make_booking(patient_id=3))

        assert db_session.query(Appointment).count() == 1

    def test_unexplained_integrity_error_is_internal(self, db_session, monkeypatch):
        service = AppointmentService(db_session)
        service.book_appointment(make_booking())

        # Neither check sees the clash, so it is not reported as a taken slot
        monkeypatch.setattr(service, "_slot_taken", lambda *args, **kwargs: False)

        with pytest.raises(InternalError) as exc_info:
            service.book_appointment(make_booking(patient_id=3))
        assert exc_info.value.detail == "Failed to book appointment"

    def test_store_failure_during_recheck_is_internal(self, db_session, monkeypatch):
        service = AppointmentService(db_session)
        service.book_appointment(make_booking())

        calls = []

        def slot_taken(*args, **kwargs):
            calls.append(args)
            if len(calls) > 1:
                raise OperationalError("SELECT", {}, Exception("connection lost"))
            return False

        monkeypatch.setattr(service, "_slot_taken", slot_taken)

        with pytest.raises(InternalError) as exc_info:
            service.book_appointment(make_booking(patient_id=3))
        assert exc_info.value.detail == "Failed to book appointment"
        assert len(calls) == 2

    def test_update_excludes_itself_from_the_clash_check(self, db_session):
        service = AppointmentService(db_session)
        appointment = service.book_appointment(make_booking())

        updated = service.update_appointment(
            appointment.appointment_id,
            AppointmentUpdate(appointment_date=date(2025, 7, 1), appointment_time=time(13, 30))
        )
        assert updated.appointment_id == appointment.appointment_id

    def test_update_missing_appointment(self, db_session):
        service = AppointmentService(db_session)

        with pytest.raises(NotFound):
            service.update_appointment(
                404,
                AppointmentUpdate(appointment_date=date(2025, 7, 1), appointment_time=time(13, 30))
            )

    def test_delete(self, db_session):
        service = AppointmentService(db_session)
        appointment_id = service.book_appointment(make_booking()).appointment_id

        service.delete_appointment(appointment_id)
        assert db_session.query(Appointment).count() == 0

        with pytest.raises(NotFound):
            service.delete_appointment(appointment_id)
