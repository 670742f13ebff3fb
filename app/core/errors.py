from fastapi import HTTPException, status

class AppointmentError(HTTPException):
    """Base for errors rendered as ``{"error": ..., "message": ...}``."""

    error = "Error"

    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)

class MissingParameter(AppointmentError):
    error = "MissingParameter"

    def __init__(self, detail: str = "All fields are required"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class InvalidTimeSlot(AppointmentError):
    error = "InvalidTimeSlot"

    def __init__(self, detail: str = "Appointment time must be on the hour or half hour"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class SlotTaken(AppointmentError):
    error = "SlotTaken"

    def __init__(self, detail: str = "Doctor is already booked at this time"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)

class NotFound(AppointmentError):
    error = "NotFound"

    def __init__(self, detail: str = "Appointment not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)

class InternalError(AppointmentError):
    error = "InternalError"

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, detail)
