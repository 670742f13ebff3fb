from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from ..core.database import Base

class Doctor(Base):
    __tablename__ = "Doctor"

    doctor_id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)

    appointments = relationship("Appointment", back_populates="doctor")

    def __repr__(self):
        return f"<Doctor(id={self.doctor_id}, name='{self.name}')>"
