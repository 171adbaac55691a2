"""
Export API Routes
CSV downloads
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.services.export_service import export_customers_csv, export_filename

router = APIRouter(prefix="/export", tags=["Export"])


def csv_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/customers")
async def export_customers(
    is_prospect: Optional[bool] = None,
    is_local: Optional[bool] = None,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Download customers as CSV (re-importable with source=generic)"""
    content = export_customers_csv(db, course.id, is_prospect=is_prospect, is_local=is_local)
    return csv_response(content, export_filename())
