"""
Capture API Routes
Public QR form submission
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.schemas.capture import CaptureRequest, CaptureResponse
from golfcapture.services.capture_service import submit_capture

router = APIRouter(prefix="/capture", tags=["Capture"])


@router.post("", response_model=CaptureResponse, status_code=status.HTTP_201_CREATED)
async def capture(payload: CaptureRequest, request: Request, db: Session = Depends(get_db)):
    """
    Submit the QR capture form

    - Matches the golfer to an existing customer (email, then phone) or creates one
    - Issues a single-use reward code
    - Returns masked contact info for the confirmation screen
    """
    submission = payload.model_dump(mode="json", exclude_unset=True)

    return submit_capture(
        db,
        submission,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        form_data=await request.json(),
    )
