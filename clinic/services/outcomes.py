from enum import Enum

from fastapi import status


class AppointmentOutcome(str, Enum):
    """Result tags returned by the appointment lifecycle operations."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    DOCTOR_NOT_FOUND = "doctor_not_found"
    UNAUTHORIZED = "unauthorized"
    UNAVAILABLE = "unavailable"
    PAST_TIME = "past_time"
    INVALID_TRANSITION = "invalid_transition"
    PERSISTENCE_FAILURE = "persistence_failure"

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def ok(self) -> bool:
        return self is AppointmentOutcome.SUCCESS


_MESSAGES = {
    AppointmentOutcome.SUCCESS: "Operation completed successfully.",
    AppointmentOutcome.NOT_FOUND: "Appointment not found.",
    AppointmentOutcome.DOCTOR_NOT_FOUND: "Doctor not found.",
    AppointmentOutcome.UNAUTHORIZED: "Unauthorized: patient does not own this appointment.",
    AppointmentOutcome.UNAVAILABLE: "Doctor is not available at the selected time.",
    AppointmentOutcome.PAST_TIME: "Appointment time must be in the future.",
    AppointmentOutcome.INVALID_TRANSITION: "Only scheduled appointments can be changed.",
    AppointmentOutcome.PERSISTENCE_FAILURE: "Failed to store the appointment.",
}

_HTTP_STATUS = {
    AppointmentOutcome.SUCCESS: status.HTTP_200_OK,
    AppointmentOutcome.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AppointmentOutcome.DOCTOR_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    AppointmentOutcome.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    AppointmentOutcome.UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    AppointmentOutcome.PAST_TIME: status.HTTP_400_BAD_REQUEST,
    AppointmentOutcome.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    AppointmentOutcome.PERSISTENCE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class PersistenceFailure(Exception):
    """A storage call failed inside a read-only service query."""
