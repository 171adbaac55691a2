"""
Revenue Pydantic Schemas
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from golfcapture.models.revenue import RevenueEventType


class RevenueEventCreate(BaseModel):
    event_type: RevenueEventType
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    customer_id: Optional[UUID] = None
    source: Optional[str] = Field(None, max_length=100)
    attributed_location_id: Optional[UUID] = None
    notes: Optional[str] = None
    event_date: Optional[date] = None


class RevenueEventResponse(BaseModel):
    id: UUID
    event_type: RevenueEventType
    amount: Decimal
    customer_id: Optional[UUID]
    source: Optional[str]
    attributed_location_id: Optional[UUID]
    notes: Optional[str]
    recorded_by: Optional[UUID]
    event_date: date
    created_at: datetime

    class Config:
        from_attributes = True


class RevenueList(BaseModel):
    events: List[RevenueEventResponse]


class RevenueTotal(BaseModel):
    total: Decimal
    count: int


class LocationRevenue(RevenueTotal):
    location: str


class RevenueSummary(BaseModel):
    total: Decimal
    by_type: Dict[str, RevenueTotal]
    by_location: List[LocationRevenue]
