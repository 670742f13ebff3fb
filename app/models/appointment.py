from sqlalchemy import Column, Integer, String, ForeignKey, Date, Time, UniqueConstraint
from sqlalchemy.orm import relationship
import enum

from ..core.database import Base

class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

class Appointment(Base):
    __tablename__ = "Appointment"
    __table_args__ = (
        # A doctor holds at most one appointment per slot
        UniqueConstraint(
            "doctor_id", "appointment_date", "appointment_time",
            name="uq_appointment_doctor_slot"
        ),
    )

    appointment_id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Relationships
    patient_id = Column(Integer, ForeignKey("Patient.patient_id"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("Doctor.doctor_id"), nullable=False)

    # Appointment details
    appointment_date = Column(Date, nullable=False, index=True)
    appointment_time = Column(Time, nullable=False)
    status = Column(String(50), nullable=False, default=AppointmentStatus.SCHEDULED.value)

    # Relationships
    patient = relationship("Patient", back_populates="appointments")
    doctor = relationship("Doctor", back_populates="appointments")

    def __repr__(self):
        return (
            f"<Appointment(id={self.appointment_id}, patient_id={self.patient_id}, "
            f"doctor_id={self.doctor_id}, slot='{self.appointment_date} {self.appointment_time}')>"
        )
