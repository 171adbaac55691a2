"""
Staff and Authentication Schemas
Pydantic models for request/response validation
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from golfcapture.models.staff_user import StaffRole


# Authentication Schemas
class Token(BaseModel):
    """Response schema for login"""

    access_token: str
    token_type: str = "bearer"
    user: "StaffResponse"


class LoginRequest(BaseModel):
    """Request schema for login"""

    email: EmailStr
    password: str = Field(..., min_length=6)


# Staff Schemas
class StaffCreate(BaseModel):
    """Schema for creating a staff account (admin only)"""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8)
    role: StaffRole = StaffRole.STAFF

    @field_validator("password")
    @classmethod
    def validate_password(cls, v):
        """Ensure password meets requirements"""
        if not any(char.isdigit() for char in v):
            raise ValueError("Password must contain at least one digit")
        if not any(char.isalpha() for char in v):
            raise ValueError("Password must contain at least one letter")
        return v


class StaffResponse(BaseModel):
    """Schema for staff response (without sensitive data)"""

    id: UUID
    course_id: Optional[UUID]
    email: str
    name: str
    role: StaffRole
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


# Update forward references
Token.model_rebuild()
