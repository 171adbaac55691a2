"""
Email Models
Templates and the outbound queue drained by the delivery worker
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class EmailTemplateType(str, enum.Enum):
    """Automation hooks a template can be attached to"""

    SAME_DAY_THANKS = "same_day_thanks"  # every new customer
    FOLLOWUP_LOCAL = "followup_local"  # new local customer
    FOLLOWUP_VISITOR = "followup_visitor"  # new non-local customer
    REPEAT_VISITOR_3 = "repeat_visitor_3"  # third visit
    CUSTOM = "custom"  # segment campaigns only


class EmailStatus(str, enum.Enum):
    PENDING = "pending"
    SENDING = "sending"
    SENT = "sent"
    FAILED = "failed"
    CANCELLED = "cancelled"


class EmailTemplate(Base):
    """Email template with {{placeholder}} variables"""

    __tablename__ = "email_templates"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    type = Column(String(50), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    body_html = Column(Text, nullable=False)
    body_text = Column(Text)
    delay_hours = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<EmailTemplate(type='{self.type}', active={self.is_active})>"


class EmailQueueEntry(Base):
    """
    Email Queue Model
    pending -> sent | failed (worker) or cancelled (opt-out)
    """

    __tablename__ = "email_queue"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    template_id = Column(UUID(as_uuid=True), ForeignKey("email_templates.id", ondelete="SET NULL"))

    to_email = Column(String(255), nullable=False)
    subject = Column(String(500), nullable=False)
    body_html = Column(Text, nullable=False)
    body_text = Column(Text)

    scheduled_for = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    status = Column(
        SQLEnum(EmailStatus, values_callable=lambda x: [e.value for e in x]),
        default=EmailStatus.PENDING,
        nullable=False,
        index=True,
    )
    sent_at = Column(DateTime)
    provider_message_id = Column(String(255))
    error_message = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer")
    template = relationship("EmailTemplate")

    def __repr__(self):
        return f"<EmailQueueEntry(to='{self.to_email}', status='{self.status}')>"
