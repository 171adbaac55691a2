"""
Tag API Routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.schemas.tag import TagCreate, TagList, TagResponse, TagWithCount
from golfcapture.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["Tags"])


@router.get("", response_model=TagList)
async def list_tags(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Tags with customer counts"""
    rows = TagService.list_tags(db, course.id)
    return TagList(
        tags=[TagWithCount.model_validate(tag).model_copy(update={"customer_count": count}) for tag, count in rows]
    )


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(tag_data: TagCreate, db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    return TagService.create_tag(db, course.id, tag_data.name, color=tag_data.color, description=tag_data.description)
