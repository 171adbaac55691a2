"""
Location Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.location import PlacementType


class LocationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    placement_type: Optional[PlacementType] = PlacementType.OTHER
    reward_type: Optional[str] = Field(None, max_length=100)
    reward_description: Optional[str] = Field(None, max_length=255)
    reward_emoji: Optional[str] = Field(None, max_length=10)


class LocationCreate(LocationBase):
    pass


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=255)
    placement_type: Optional[PlacementType] = None
    is_active: Optional[bool] = None
    reward_type: Optional[str] = Field(None, max_length=100)
    reward_description: Optional[str] = Field(None, max_length=255)
    reward_emoji: Optional[str] = Field(None, max_length=10)


class LocationResponse(BaseModel):
    id: UUID
    course_id: UUID
    name: str
    description: Optional[str]
    placement_type: Optional[str]
    is_active: bool
    reward_type: Optional[str]
    reward_description: Optional[str]
    reward_emoji: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class LocationWithStats(LocationResponse):
    total_captures: int = 0
    captures_last_7_days: int = 0


class LocationList(BaseModel):
    locations: List[LocationWithStats]


class QRCodeInfo(BaseModel):
    location_id: UUID
    location_name: str
    capture_url: str
    qr_image_url: str
