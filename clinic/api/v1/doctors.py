from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from ...api.deps import (
    get_availability_service, get_current_admin, get_current_doctor,
    get_current_user_token, get_doctor_filter, get_doctor_service
)
from ...models.admin import Admin
from ...models.doctor import Doctor
from ...schemas.doctor import (
    DoctorAvailabilityResponse, DoctorCreate, DoctorResponse, DoctorUpdate
)
from ...services.availability_service import AvailabilityService
from ...services.doctor_service import DoctorFilter, DoctorService

router = APIRouter(prefix="/doctors", tags=["Doctors"])

@router.get("", response_model=List[DoctorResponse])
async def list_doctors(doctor_filter: DoctorFilter = Depends(get_doctor_filter)):
    """List all doctors."""
    return doctor_filter.filter_doctors()

@router.get("/filter", response_model=List[DoctorResponse])
async def filter_doctors(
    name: Optional[str] = Query(default=None),
    specialty: Optional[str] = Query(default=None),
    period: Optional[str] = Query(default=None, description="AM or PM"),
    doctor_filter: DoctorFilter = Depends(get_doctor_filter)
):
    """Filter doctors by any combination of name, specialty and AM/PM period."""
    return doctor_filter.filter_doctors(name=name, specialty=specialty, period=period)

@router.get("/me", response_model=DoctorResponse)
async def get_current_doctor_info(current_doctor: Doctor = Depends(get_current_doctor)):
    """Get the logged-in doctor's profile."""
    return current_doctor

@router.get("/{doctor_id}/availability", response_model=DoctorAvailabilityResponse)
async def get_doctor_availability(
    doctor_id: int,
    day: date = Query(..., alias="date"),
    _=Depends(get_current_user_token),
    availability_service: AvailabilityService = Depends(get_availability_service)
):
    """Free one-hour slots of a doctor on a date."""
    slots = availability_service.get_doctor_availability(doctor_id, day)
    if not slots:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "status": "info",
                "message": "Doctor not found or no available times for this date."
            }
        )
    return DoctorAvailabilityResponse(
        doctor_id=doctor_id,
        date=day.isoformat(),
        available_times=slots
    )

# Admin routes
@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def create_doctor(
    doctor_data: DoctorCreate,
    _: Admin = Depends(get_current_admin),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Add a doctor (admin only)."""
    return doctor_service.create_doctor(doctor_data)

@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: int,
    doctor_data: DoctorUpdate,
    _: Admin = Depends(get_current_admin),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Update a doctor's profile and availability windows (admin only)."""
    return doctor_service.update_doctor(doctor_id, doctor_data)

@router.delete("/{doctor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_doctor(
    doctor_id: int,
    _: Admin = Depends(get_current_admin),
    doctor_service: DoctorService = Depends(get_doctor_service)
):
    """Delete a doctor and their appointments (admin only)."""
    doctor_service.delete_doctor(doctor_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
