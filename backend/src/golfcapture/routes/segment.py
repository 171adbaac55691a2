"""
Segment API Routes
Saved customer filters
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_current_staff, get_staff_course
from golfcapture.models.course import Course
from golfcapture.models.staff_user import StaffUser
from golfcapture.routes.export import csv_response
from golfcapture.schemas.segment import (
    SegmentCreate,
    SegmentFilters,
    SegmentList,
    SegmentMembers,
    SegmentPreview,
    SegmentResponse,
    SegmentUpdate,
    SegmentWithCount,
)
from golfcapture.services.export_service import customers_to_csv, export_filename
from golfcapture.services.segment_service import SegmentService

router = APIRouter(prefix="/segments", tags=["Segments"])


@router.get("", response_model=SegmentList)
async def list_segments(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Saved segments with live member counts"""
    rows = SegmentService.list_segments(db, course.id)
    return SegmentList(
        segments=[
            SegmentWithCount.model_validate(segment).model_copy(update={"customer_count": count})
            for segment, count in rows
        ]
    )


@router.post("", response_model=SegmentResponse, status_code=status.HTTP_201_CREATED)
async def create_segment(
    segment_data: SegmentCreate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
    current_staff: StaffUser = Depends(get_current_staff),
):
    return SegmentService.create_segment(
        db,
        course.id,
        name=segment_data.name,
        description=segment_data.description,
        filters=segment_data.filters.model_dump(mode="json", exclude_none=True),
        created_by=current_staff.id,
    )


@router.post("/preview", response_model=SegmentPreview)
async def preview_segment(
    filters: SegmentFilters,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Count customers matching ad-hoc filters without saving them"""
    count = SegmentService.preview(db, course.id, filters.model_dump(mode="json", exclude_none=True))
    return SegmentPreview(customer_count=count)


@router.get("/{segment_id}", response_model=SegmentResponse)
async def get_segment(
    segment_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    return SegmentService.get_segment(db, course.id, segment_id)


@router.patch("/{segment_id}", response_model=SegmentResponse)
async def update_segment(
    segment_id: UUID,
    segment_update: SegmentUpdate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    updates = segment_update.model_dump(exclude_unset=True)
    if segment_update.filters is not None:
        updates["filters"] = segment_update.filters.model_dump(mode="json", exclude_none=True)
    return SegmentService.update_segment(db, course.id, segment_id, updates)


@router.delete("/{segment_id}")
async def delete_segment(
    segment_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    SegmentService.delete_segment(db, course.id, segment_id)
    return {"success": True}


@router.get("/{segment_id}/customers", response_model=SegmentMembers)
async def list_segment_customers(
    segment_id: UUID,
    limit: Optional[int] = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    customers, total = SegmentService.members(db, course.id, segment_id, limit=limit, offset=offset)
    return SegmentMembers(customers=customers, total=total)


@router.get("/{segment_id}/export")
async def export_segment(
    segment_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Download a segment's members as CSV"""
    customers, _ = SegmentService.members(db, course.id, segment_id)
    return csv_response(customers_to_csv(customers), export_filename("segment"))
