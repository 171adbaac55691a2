"""
Import API Routes
CSV uploads from GolfNow, ClubEssential or a generic layout
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.schemas.import_batch import ImportBatchDetail, ImportList, ImportResult
from golfcapture.services import import_service

router = APIRouter(prefix="/imports", tags=["Imports"])


@router.post("", response_model=ImportResult, status_code=status.HTTP_201_CREATED)
async def upload_import(
    source: str = Form(...),
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """
    Import a CSV file

    - **source**: golfnow, clubessential or generic
    - **file**: CSV with a header row
    """
    content = await file.read()
    return import_service.import_csv(db, course.id, source, content, filename=file.filename)


@router.get("", response_model=ImportList)
async def list_imports(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Import history, newest first"""
    return ImportList(imports=import_service.list_imports(db, course.id))


@router.get("/{import_id}", response_model=ImportBatchDetail)
async def get_import(
    import_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Import batch with its per-row audit trail"""
    return import_service.get_import(db, course.id, import_id)
