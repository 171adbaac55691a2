"""
Analytics API Routes
Dashboard statistics
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.schemas.analytics import AnalyticsSnapshot
from golfcapture.services.analytics_service import compute_analytics_snapshot

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=AnalyticsSnapshot)
async def get_analytics(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """
    Get dashboard statistics

    Returns:
    - Customer, capture and prospect counts
    - Redemption rate
    - Booking source, locality and play frequency breakdowns
    - Captures per location over the last 7 days
    - Pipeline status counts and pending emails
    """
    return compute_analytics_snapshot(db, course.id)
