"""
Pipeline Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.pipeline import PipelineStatus


class PipelineCustomer(BaseModel):
    id: UUID
    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    membership_score: int
    visit_count: int

    class Config:
        from_attributes = True


class PipelineEntryCreate(BaseModel):
    customer_id: UUID
    assigned_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class PipelineEntryUpdate(BaseModel):
    status: Optional[PipelineStatus] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None


class PipelineEntryResponse(BaseModel):
    id: UUID
    customer_id: UUID
    status: PipelineStatus
    assigned_to: Optional[str]
    notes: Optional[str]
    last_activity_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class PipelineEntryWithCustomer(PipelineEntryResponse):
    customer: Optional[PipelineCustomer] = None


class PipelineList(BaseModel):
    entries: List[PipelineEntryWithCustomer]
    total: int
