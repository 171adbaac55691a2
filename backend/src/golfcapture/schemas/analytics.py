"""
Analytics Pydantic Schemas
"""

from typing import Dict, List

from pydantic import BaseModel


class LocationCaptures(BaseModel):
    name: str
    count: int


class AnalyticsSnapshot(BaseModel):
    """Dashboard aggregates for one course"""

    total_customers: int
    total_captures: int
    captures_today: int
    captures_this_week: int
    redemption_rate: int
    prospects_count: int
    booking_sources: Dict[str, int]
    local_vs_visitor: Dict[str, int]
    captures_by_location: List[LocationCaptures]
    play_frequency: Dict[str, int]
    pipeline: Dict[str, int]
    pending_emails: int
