"""
Prospect Pipeline Model
Staff-facing membership sales tracking, one entry per customer
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class PipelineStatus(str, enum.Enum):
    """Status in the membership sales funnel"""

    NEW = "new"
    CONTACTED = "contacted"
    TOUR_SCHEDULED = "tour_scheduled"
    JOINED = "joined"
    PASSED = "passed"


class ProspectPipelineEntry(Base):
    """Pipeline entry (UNIQUE per customer)"""

    __tablename__ = "prospect_pipeline"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(
        UUID(as_uuid=True), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, unique=True
    )

    status = Column(
        SQLEnum(PipelineStatus, values_callable=lambda x: [e.value for e in x]),
        default=PipelineStatus.NEW,
        nullable=False,
        index=True,
    )
    assigned_to = Column(String(255))
    notes = Column(Text)

    last_activity_at = Column(DateTime, default=datetime.utcnow)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    customer = relationship("Customer", back_populates="pipeline_entry")

    def __repr__(self):
        return f"<ProspectPipelineEntry(customer_id='{self.customer_id}', status='{self.status}')>"
