"""
Test suite for the Clinic Appointment Scheduler.

Contains unit and API tests for booking, listing, rescheduling, deleting
and seeding appointments.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
