"""
Customer Pydantic Schemas
Request and response models for Customer endpoints
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.customer import BookingSource, PlayFrequency
from golfcapture.schemas.capture import CaptureSummary
from golfcapture.schemas.pipeline import PipelineEntryResponse
from golfcapture.schemas.tag import TagResponse


# Response Customer schema
class CustomerResponse(BaseModel):
    """Schema for Customer responses"""

    id: UUID
    course_id: UUID

    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    zip: Optional[str]

    booking_source: Optional[str]
    is_local: Optional[bool]
    play_frequency: Optional[str]
    member_elsewhere: Optional[bool]
    first_time_visitor: Optional[bool]
    opted_out_of_email: bool

    visit_count: int
    last_visit_at: Optional[datetime]
    membership_score: int
    is_membership_prospect: bool

    source: str
    source_id: Optional[str]

    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CustomerListItem(CustomerResponse):
    capture_count: int = 0


class CustomerList(BaseModel):
    """Schema for list of customers"""

    customers: List[CustomerListItem]
    total: int
    limit: int
    offset: int


class CustomerDetail(CustomerResponse):
    """Customer with captures, tags and pipeline entry"""

    captures: List[CaptureSummary] = []
    tags: List[TagResponse] = []
    pipeline_entry: Optional[PipelineEntryResponse] = None


# Update Customer schema
class CustomerUpdate(BaseModel):
    """Schema for staff edits; omitted fields are left alone"""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = None
    phone: Optional[str] = None
    zip: Optional[str] = Field(None, max_length=10)

    booking_source: Optional[BookingSource] = None
    is_local: Optional[bool] = None
    play_frequency: Optional[PlayFrequency] = None
    member_elsewhere: Optional[bool] = None
    first_time_visitor: Optional[bool] = None


class EmailPreference(BaseModel):
    opted_out: bool = True


class EmailPreferenceResult(BaseModel):
    customer_id: UUID
    opted_out_of_email: bool
    cancelled_emails: int


class RecaptureRequest(CustomerUpdate):
    """Staff-entered capture for a known customer; values overwrite"""

    location_id: Optional[str] = None
    reward_type: Optional[str] = None


class ProspectResponse(BaseModel):
    """Prospect browse row"""

    id: UUID
    first_name: Optional[str]
    last_name: Optional[str]
    email: Optional[str]
    phone: Optional[str]
    is_local: Optional[bool]
    play_frequency: Optional[str]
    visit_count: int
    last_visit_at: Optional[datetime]
    membership_score: int
    is_membership_prospect: bool

    class Config:
        from_attributes = True


class ProspectList(BaseModel):
    prospects: List[ProspectResponse]
    min_score: int
    require_local: bool
