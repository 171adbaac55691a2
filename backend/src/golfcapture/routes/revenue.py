"""
Revenue API Routes
Record revenue and attribute it back to QR locations
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_current_staff, get_staff_course
from golfcapture.models.course import Course
from golfcapture.models.revenue import RevenueEventType
from golfcapture.models.staff_user import StaffUser
from golfcapture.schemas.revenue import RevenueEventCreate, RevenueEventResponse, RevenueList, RevenueSummary
from golfcapture.services.revenue_service import RevenueService

router = APIRouter(prefix="/revenue", tags=["Revenue"])


@router.post("", response_model=RevenueEventResponse, status_code=status.HTTP_201_CREATED)
async def record_revenue(
    event_data: RevenueEventCreate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
    current_staff: StaffUser = Depends(get_current_staff),
):
    return RevenueService.record_event(db, course.id, event_data.model_dump(), recorded_by=current_staff.id)


@router.get("", response_model=RevenueList)
async def list_revenue(
    event_type: Optional[RevenueEventType] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    events = RevenueService.list_events(
        db, course.id, event_type=event_type, start_date=start_date, end_date=end_date, limit=limit
    )
    return RevenueList(events=events)


@router.get("/summary", response_model=RevenueSummary)
async def revenue_summary(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Totals by event type and attributed location"""
    return RevenueService.summary(db, course.id)
