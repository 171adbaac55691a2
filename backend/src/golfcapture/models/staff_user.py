"""
Staff User Model
Course staff who can use the admin dashboard and redeem rewards
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID

from golfcapture.database import Base


class StaffRole(str, enum.Enum):
    """Staff roles"""

    ADMIN = "admin"  # Manages staff accounts and settings
    STAFF = "staff"  # Dashboard and redemption


class StaffUser(Base):
    """
    Staff User Model
    Authenticated dashboard user
    """

    __tablename__ = "staff_users"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=True, index=True)

    # Authentication
    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(100), nullable=False)

    role = Column(
        SQLEnum(StaffRole, values_callable=lambda x: [e.value for e in x]),
        default=StaffRole.STAFF,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, nullable=False)

    # Security
    last_login = Column(DateTime, nullable=True)
    failed_login_attempts = Column(Integer, default=0)
    locked_until = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def __repr__(self):
        return f"<StaffUser(email='{self.email}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        """Check if staff user is an admin"""
        return self.role == StaffRole.ADMIN
