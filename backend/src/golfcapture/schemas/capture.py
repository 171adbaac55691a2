"""
Capture Pydantic Schemas
Request and response models for the public QR form and reward endpoints
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class CaptureRequest(BaseModel):
    """
    QR form submission

    Required-ness is enforced by the capture service so every offending
    field is reported at once. camelCase keys from the web form are accepted.
    """

    course_slug: Optional[str] = Field(None, alias="courseSlug")
    location_id: Optional[str] = Field(None, alias="locationId")

    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    zip: Optional[str] = Field(None, max_length=10)

    booking_source: Optional[str] = Field(None, alias="bookingSource")
    is_local: Optional[bool] = Field(None, alias="isLocal")
    play_frequency: Optional[str] = Field(None, alias="playFrequency")
    member_elsewhere: Optional[bool] = Field(None, alias="memberElsewhere")
    first_time_visitor: Optional[bool] = Field(None, alias="firstTime")

    reward_type: Optional[str] = Field(None, alias="rewardType")

    class Config:
        populate_by_name = True


class CaptureResponse(BaseModel):
    """Confirmation shown to the golfer"""

    success: bool = True
    customer_id: UUID
    is_new_customer: bool
    reward_code: str
    reward_type: str
    reward_description: str
    reward_emoji: str
    masked_email: Optional[str]
    masked_phone: Optional[str]
    visit_count: int


class RedeemRequest(BaseModel):
    """Staff redemption"""

    redeemed_by: Optional[str] = Field(None, alias="redeemedBy", max_length=100)

    class Config:
        populate_by_name = True


class RewardStatus(BaseModel):
    """Reward lookup / redemption result"""

    reward_code: str
    reward_type: Optional[str]
    reward_description: Optional[str]
    reward_redeemed: bool
    reward_redeemed_at: Optional[datetime]
    reward_redeemed_by: Optional[str]
    customer_id: Optional[UUID]
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    location_id: Optional[UUID]
    ab_variant: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class CaptureSummary(BaseModel):
    """Capture row as shown on the customer detail page"""

    id: UUID
    reward_code: str
    reward_type: Optional[str]
    reward_redeemed: bool
    reward_redeemed_at: Optional[datetime]
    location_id: Optional[UUID]
    location_name: Optional[str] = None
    ab_variant: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
