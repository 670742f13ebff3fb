from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ..core.database import Base

class Patient(Base):
    __tablename__ = "Patient"

    patient_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    appointments = relationship("Appointment", back_populates="patient")

    def __repr__(self):
        return f"<Patient(id={self.patient_id}, name='{self.name}')>"
