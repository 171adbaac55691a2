"""
Location API Routes
QR placements, their rewards and QR codes
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.schemas.location import (
    LocationCreate,
    LocationList,
    LocationResponse,
    LocationUpdate,
    LocationWithStats,
    QRCodeInfo,
)
from golfcapture.services.location_service import LocationService

router = APIRouter(prefix="/locations", tags=["Locations"])


@router.get("", response_model=LocationList)
async def list_locations(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Locations with capture counts"""
    rows = LocationService.list_locations(db, course.id)
    return LocationList(
        locations=[
            LocationWithStats.model_validate(location).model_copy(
                update={"total_captures": total, "captures_last_7_days": recent}
            )
            for location, total, recent in rows
        ]
    )


@router.post("", response_model=LocationResponse, status_code=status.HTTP_201_CREATED)
async def create_location(
    location_data: LocationCreate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Create a QR placement"""
    return LocationService.create_location(db, course.id, location_data.model_dump(mode="json"))


@router.patch("/{location_id}", response_model=LocationResponse)
async def update_location(
    location_id: UUID,
    location_update: LocationUpdate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Update a location (including its default reward)"""
    updates = location_update.model_dump(mode="json", exclude_unset=True)
    return LocationService.update_location(db, course.id, location_id, updates)


@router.get("/{location_id}/qr", response_model=QRCodeInfo)
async def get_qr_code(
    location_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Capture URL and QR image URL for a location"""
    location = LocationService.get_location(db, course.id, location_id)
    return LocationService.qr_info(course, location)
