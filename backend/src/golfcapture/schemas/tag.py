"""
Tag Pydantic Schemas
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    description: Optional[str] = Field(None, max_length=255)


class TagResponse(BaseModel):
    id: UUID
    name: str
    color: Optional[str]
    description: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class TagWithCount(TagResponse):
    customer_count: int = 0


class TagList(BaseModel):
    tags: List[TagWithCount]


class TagAssignment(BaseModel):
    tag_id: UUID
