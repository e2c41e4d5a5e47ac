"""
Domain Errors Module

Exceptions raised by the attendance core. The UI layer catches
AttendanceError around each user action and reports it.
"""

from typing import Optional


class AttendanceError(Exception):
    """Base exception for attendance-related errors."""
    pass


class ValidationError(AttendanceError):
    """
    Raised when input is missing or malformed.

    Raised before any state is changed, so the record set is untouched.
    """
    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        self.message = message or f"Invalid value for '{field}'"
        super().__init__(self.message)


class NotFoundError(AttendanceError):
    """Raised when a record id does not match any known record."""
    def __init__(self, record_id: str, message: Optional[str] = None):
        self.record_id = record_id
        self.message = message or f"No attendance record with id '{record_id}'"
        super().__init__(self.message)


class ShiftAlreadyClosedError(AttendanceError):
    """Raised when marking out a record that already has an end time."""
    def __init__(self, record_id: str, end_time: str):
        self.record_id = record_id
        self.end_time = end_time
        self.message = f"Record '{record_id}' was already marked out at {end_time}"
        super().__init__(self.message)
