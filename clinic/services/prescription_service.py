from dataclasses import dataclass
from typing import List, Optional
import logging

from sqlalchemy.exc import SQLAlchemyError

from .appointment_service import AppointmentService
from .outcomes import AppointmentOutcome, PersistenceFailure
from ..models.appointment import AppointmentStatus
from ..models.prescription import Prescription
from ..repositories.prescription import PrescriptionRepository
from ..schemas.prescription import PrescriptionCreate

logger = logging.getLogger(__name__)


@dataclass
class PrescriptionResult:
    prescription: Optional[Prescription]
    status_outcome: Optional[AppointmentOutcome] = None

    @property
    def saved(self) -> bool:
        return self.prescription is not None

    @property
    def appointment_completed(self) -> bool:
        return self.status_outcome is AppointmentOutcome.SUCCESS


class PrescriptionService:
    """Records prescriptions and marks their appointment completed.

    Saving runs in two steps. The prescription is committed first; only then
    is the appointment's status set to completed, exactly one attempt per
    save. A failed second step is logged and reported but the prescription
    stays stored, so an appointment may remain scheduled although it has a
    prescription.
    """

    def __init__(self, prescriptions: PrescriptionRepository, appointment_service: AppointmentService):
        self.prescriptions = prescriptions
        self.appointment_service = appointment_service

    def save_prescription(self, data: PrescriptionCreate) -> PrescriptionResult:
        prescription = Prescription(
            appointment_id=data.appointment_id,
            patient_name=data.patient_name,
            medication=data.medication,
            dosage=data.dosage,
            doctor_notes=data.doctor_notes,
        )
        try:
            self.prescriptions.add(prescription)
        except SQLAlchemyError:
            self.prescriptions.rollback()
            logger.exception(f"Failed to save prescription for appointment {data.appointment_id}")
            return PrescriptionResult(prescription=None)

        outcome = self.appointment_service.change_status(
            data.appointment_id, AppointmentStatus.COMPLETED.value
        )
        if not outcome.ok:
            logger.warning(
                f"Prescription {prescription.id} saved but appointment {data.appointment_id} "
                f"was not marked completed: {outcome.value}"
            )
        return PrescriptionResult(prescription=prescription, status_outcome=outcome)

    def get_prescriptions(self, appointment_id: int) -> List[Prescription]:
        try:
            return self.prescriptions.find_by_appointment(appointment_id)
        except SQLAlchemyError as exc:
            self.prescriptions.rollback()
            logger.exception(f"Failed to load prescriptions for appointment {appointment_id}")
            raise PersistenceFailure("Could not load prescriptions") from exc
