"""
Email Pydantic Schemas
Templates, queue entries and campaign requests
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.email import EmailStatus, EmailTemplateType


class EmailTemplateCreate(BaseModel):
    type: EmailTemplateType
    name: str = Field(..., min_length=1, max_length=255)
    subject: str = Field(..., min_length=1, max_length=500)
    body_html: str = Field(..., min_length=1)
    body_text: Optional[str] = None
    delay_hours: int = Field(0, ge=0)
    is_active: bool = True


class EmailTemplateUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    subject: Optional[str] = Field(None, min_length=1, max_length=500)
    body_html: Optional[str] = Field(None, min_length=1)
    body_text: Optional[str] = None
    delay_hours: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class EmailTemplateResponse(BaseModel):
    id: UUID
    type: str
    name: str
    subject: str
    body_html: str
    body_text: Optional[str]
    delay_hours: int
    is_active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class EmailQueueResponse(BaseModel):
    id: UUID
    customer_id: UUID
    template_id: Optional[UUID]
    to_email: str
    subject: str
    scheduled_for: datetime
    status: EmailStatus
    sent_at: Optional[datetime]
    provider_message_id: Optional[str]
    error_message: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class EmailQueueList(BaseModel):
    emails: List[EmailQueueResponse]


class SegmentCampaignRequest(BaseModel):
    segment_id: UUID
    template_id: UUID


class SegmentCampaignResult(BaseModel):
    queued: int


class ProcessQueueResult(BaseModel):
    processed: int
    sent: int
    failed: int
    cancelled: int
