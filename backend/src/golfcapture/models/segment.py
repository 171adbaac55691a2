"""
Customer Segment Model
A saved, reusable filter over the customer table
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID

from golfcapture.database import Base


class CustomerSegment(Base):
    """Saved segment; filters keys are documented on SegmentFilters"""

    __tablename__ = "customer_segments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    filters = Column(JSON, nullable=False, default=dict)

    created_by = Column(UUID(as_uuid=True), ForeignKey("staff_users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<CustomerSegment(name='{self.name}')>"
