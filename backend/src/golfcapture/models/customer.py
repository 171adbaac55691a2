"""
Customer Model
One golfer at one course, merged from QR captures and CSV imports
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class BookingSource(str, enum.Enum):
    """How the golfer booked their round"""

    GOLFNOW = "golfnow"
    WEBSITE = "website"
    PHONE = "phone"
    WALKIN = "walkin"


class PlayFrequency(str, enum.Enum):
    """Self-reported play frequency (NULL means unknown)"""

    RARELY = "rarely"
    MONTHLY = "monthly"
    WEEKLY = "weekly"


class CustomerSource(str, enum.Enum):
    """Where the customer record came from"""

    CAPTURE = "capture"
    GOLFNOW_IMPORT = "golfnow_import"
    CLUBESSENTIAL_IMPORT = "clubessential_import"
    GENERIC_IMPORT = "generic_import"
    MANUAL = "manual"


class Customer(Base):
    """
    Customer Model
    Email and phone are the natural keys, unique per course
    """

    __tablename__ = "customers"
    __table_args__ = (
        UniqueConstraint("course_id", "email", name="unique_email_per_course"),
        UniqueConstraint("course_id", "phone", name="unique_phone_per_course"),
    )

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Course Association
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    # Contact Information (normalized)
    first_name = Column(String(100))
    last_name = Column(String(100))
    email = Column(String(255), index=True)  # lowercased, trimmed
    phone = Column(String(20), index=True)  # 10 digits
    zip = Column(String(10))

    # Profile (nullable booleans are tri-state: NULL means unknown)
    booking_source = Column(String(50))
    is_local = Column(Boolean)
    play_frequency = Column(String(50))
    member_elsewhere = Column(Boolean)
    first_time_visitor = Column(Boolean)
    opted_out_of_email = Column(Boolean, default=False, nullable=False)

    # Visits
    visit_count = Column(Integer, default=0, nullable=False)
    last_visit_at = Column(DateTime)

    # Membership scoring
    membership_score = Column(Integer, default=0, nullable=False, index=True)
    is_membership_prospect = Column(Boolean, default=False, nullable=False, index=True)

    # Source tracking
    source = Column(String(50), nullable=False, default=CustomerSource.CAPTURE.value)
    source_id = Column(String(255))  # external ID from import source

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    course = relationship("Course", back_populates="customers")
    captures = relationship("Capture", back_populates="customer", order_by="Capture.created_at.desc()")
    tags = relationship("Tag", secondary="customer_tags", back_populates="customers")
    pipeline_entry = relationship("ProspectPipelineEntry", back_populates="customer", uselist=False)

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def __repr__(self):
        return f"<Customer(email='{self.email}', phone='{self.phone}', score={self.membership_score})>"
