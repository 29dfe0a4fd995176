from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ...api.deps import get_current_doctor, get_prescription_service
from ...models.doctor import Doctor
from ...schemas.prescription import (
    PrescriptionCreate, PrescriptionListResponse, PrescriptionResponse, PrescriptionSaveResponse
)
from ...services.prescription_service import PrescriptionService

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])

@router.post("", response_model=PrescriptionSaveResponse, status_code=status.HTTP_201_CREATED)
async def save_prescription(
    prescription_data: PrescriptionCreate,
    _: Doctor = Depends(get_current_doctor),
    prescription_service: PrescriptionService = Depends(get_prescription_service)
):
    """Record a prescription and mark its appointment completed."""
    result = prescription_service.save_prescription(prescription_data)
    if not result.saved:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "message": "An error occurred while saving the prescription."
            }
        )

    return PrescriptionSaveResponse(
        status="success",
        message="Prescription saved successfully.",
        prescription=PrescriptionResponse.model_validate(result.prescription),
        appointment_completed=result.appointment_completed
    )

@router.get("/{appointment_id}", response_model=PrescriptionListResponse)
async def get_prescriptions(
    appointment_id: int,
    _: Doctor = Depends(get_current_doctor),
    prescription_service: PrescriptionService = Depends(get_prescription_service)
):
    """All prescriptions written for an appointment."""
    prescriptions = prescription_service.get_prescriptions(appointment_id)
    if not prescriptions:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"message": "No prescriptions found for the given appointment."}
        )
    return PrescriptionListResponse(
        prescriptions=[PrescriptionResponse.model_validate(prescription) for prescription in prescriptions]
    )
