"""
Clinic Appointment Scheduler

A FastAPI service for listing, booking, rescheduling and deleting clinic
appointments, with a doctor double-booking check and startup seeding.
"""

__version__ = "1.0.0"
