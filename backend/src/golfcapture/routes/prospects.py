"""
Prospect API Routes
Browse likely membership prospects
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.schemas.customer import ProspectList
from golfcapture.services.customer_service import list_prospects
from golfcapture.services.scoring import BROWSE_PROSPECT_MIN_SCORE

router = APIRouter(prefix="/prospects", tags=["Prospects"])


@router.get("", response_model=ProspectList)
async def get_prospects(
    min_score: int = Query(BROWSE_PROSPECT_MIN_SCORE, ge=0, le=100),
    require_local: bool = True,
    limit: int = Query(50, ge=1, le=500),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Customers by membership score (highest first, then most visits)"""
    prospects = list_prospects(db, course.id, min_score=min_score, require_local=require_local, limit=limit)
    return ProspectList(prospects=prospects, min_score=min_score, require_local=require_local)
