"""
Email API Routes
Templates, queue inspection, segment campaigns and on-demand delivery
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_staff_course
from golfcapture.models.course import Course
from golfcapture.models.email import EmailStatus
from golfcapture.schemas.email import (
    EmailQueueList,
    EmailTemplateCreate,
    EmailTemplateResponse,
    EmailTemplateUpdate,
    ProcessQueueResult,
    SegmentCampaignRequest,
    SegmentCampaignResult,
)
from golfcapture.services.email_service import EmailTemplateService, process_due_emails, queue_segment_campaign

router = APIRouter(prefix="/emails", tags=["Emails"])


@router.get("/templates", response_model=List[EmailTemplateResponse])
async def list_templates(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    return EmailTemplateService.list_templates(db, course.id)


@router.post("/templates", response_model=EmailTemplateResponse, status_code=status.HTTP_201_CREATED)
async def create_template(
    template_data: EmailTemplateCreate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    return EmailTemplateService.create_template(db, course.id, template_data.model_dump(mode="json"))


@router.patch("/templates/{template_id}", response_model=EmailTemplateResponse)
async def update_template(
    template_id: UUID,
    template_update: EmailTemplateUpdate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    updates = template_update.model_dump(exclude_unset=True)
    return EmailTemplateService.update_template(db, course.id, template_id, updates)


@router.get("/queue", response_model=EmailQueueList)
async def list_queue(
    status: Optional[EmailStatus] = None,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Queued emails, latest scheduled first"""
    return EmailQueueList(emails=EmailTemplateService.list_queue(db, course.id, status=status, limit=limit))


@router.post("/campaigns", response_model=SegmentCampaignResult, status_code=status.HTTP_201_CREATED)
async def send_segment_campaign(
    campaign: SegmentCampaignRequest,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Queue a template for every emailable customer in a segment"""
    queued = queue_segment_campaign(db, course, campaign.segment_id, campaign.template_id)
    return SegmentCampaignResult(queued=queued)


@router.post("/process", response_model=ProcessQueueResult)
async def process_queue(db: Session = Depends(get_db), course: Course = Depends(get_staff_course)):
    """Deliver due emails now instead of waiting for the worker"""
    return await process_due_emails(db)
