"""
Pipeline API Routes
Membership sales pipeline for prospects
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.models.pipeline import PipelineStatus
from golfcapture.schemas.pipeline import (
    PipelineEntryCreate,
    PipelineEntryResponse,
    PipelineEntryUpdate,
    PipelineList,
)
from golfcapture.services.pipeline_service import PipelineService

router = APIRouter(prefix="/pipeline", tags=["Pipeline"])


@router.get("", response_model=PipelineList)
async def list_pipeline(
    status: Optional[PipelineStatus] = None,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Pipeline entries, most recently active first"""
    entries = PipelineService.list_entries(db, course.id, status=status)
    return PipelineList(entries=entries, total=len(entries))


@router.post("", response_model=PipelineEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_to_pipeline(
    entry_data: PipelineEntryCreate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Manually add a customer to the pipeline"""
    return PipelineService.add_customer(
        db,
        course.id,
        entry_data.customer_id,
        assigned_to=entry_data.assigned_to,
        notes=entry_data.notes,
    )


@router.patch("/{entry_id}", response_model=PipelineEntryResponse)
async def update_pipeline_entry(
    entry_id: UUID,
    entry_update: PipelineEntryUpdate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Move an entry through the funnel or update its notes / assignee"""
    return PipelineService.update_entry(db, course.id, entry_id, entry_update.model_dump(exclude_unset=True))


@router.delete("/{entry_id}")
async def remove_pipeline_entry(
    entry_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Remove a customer from the pipeline"""
    PipelineService.remove_entry(db, course.id, entry_id)
    return {"success": True}
