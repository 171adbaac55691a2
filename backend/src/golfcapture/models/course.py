"""
Course Model
Represents a golf course running QR capture campaigns
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class Course(Base):
    """
    Golf Course Model
    Every other table is scoped to a course
    """

    __tablename__ = "courses"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Basic Information
    name = Column(String(255), nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)  # URL-friendly name

    # Location
    address = Column(String(500))
    city = Column(String(100))
    state = Column(String(50))
    zip = Column(String(10))
    timezone = Column(String(50), default="America/New_York")

    # Reward codes are issued as <prefix><6 symbols>
    reward_code_prefix = Column(String(2), nullable=False, default="CP")

    # Manager Contact (for prospect alerts)
    manager_name = Column(String(255))
    manager_phone = Column(String(20))

    settings = Column(JSON, default=dict)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    locations = relationship("Location", back_populates="course", cascade="all, delete-orphan")
    customers = relationship("Customer", back_populates="course", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Course(name='{self.name}', slug='{self.slug}')>"
