"""
Tag Models
Manual customer categorization (VIP, Do Not Contact, ...)
"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base

customer_tags = Table(
    "customer_tags",
    Base.metadata,
    Column("customer_id", UUID(as_uuid=True), ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", UUID(as_uuid=True), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
    Column("created_at", DateTime, default=datetime.utcnow),
    Column("created_by", String(100)),
)


class Tag(Base):
    """Course-scoped tag"""

    __tablename__ = "tags"
    __table_args__ = (UniqueConstraint("course_id", "name", name="unique_tag_name_per_course"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    color = Column(String(7), default="#6B7280")  # hex color
    description = Column(String(255))

    created_at = Column(DateTime, default=datetime.utcnow)

    customers = relationship("Customer", secondary=customer_tags, back_populates="tags")

    def __repr__(self):
        return f"<Tag(name='{self.name}')>"
