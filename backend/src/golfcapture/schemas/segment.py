"""
Segment Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.customer import BookingSource, CustomerSource, PlayFrequency
from golfcapture.schemas.customer import CustomerResponse


class SegmentFilters(BaseModel):
    """Filter keys stored on a segment; unset keys don't filter"""

    booking_source: Optional[List[BookingSource]] = None
    is_local: Optional[bool] = None
    play_frequency: Optional[List[PlayFrequency]] = None
    min_score: Optional[int] = Field(None, ge=0, le=100)
    max_days_since_visit: Optional[int] = Field(None, ge=0)
    member_elsewhere: Optional[bool] = None
    min_visits: Optional[int] = Field(None, ge=0)
    source: Optional[List[CustomerSource]] = None
    exclude_opted_out: bool = True


class SegmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    filters: SegmentFilters = SegmentFilters()


class SegmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    filters: Optional[SegmentFilters] = None


class SegmentResponse(BaseModel):
    id: UUID
    name: str
    description: Optional[str]
    filters: dict
    created_by: Optional[UUID]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SegmentWithCount(SegmentResponse):
    customer_count: int = 0


class SegmentList(BaseModel):
    segments: List[SegmentWithCount]


class SegmentPreview(BaseModel):
    customer_count: int


class SegmentMembers(BaseModel):
    customers: List[CustomerResponse]
    total: int
