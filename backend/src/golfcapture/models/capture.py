"""
Capture Model
One immutable QR form submission and the reward it issued
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class Capture(Base):
    """
    Capture Model
    Only the redemption fields ever change after insert
    """

    __tablename__ = "captures"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Associations
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), index=True)
    location_id = Column(UUID(as_uuid=True), ForeignKey("locations.id", ondelete="SET NULL"), index=True)

    # Raw form data, kept verbatim for audit
    form_data = Column(JSON, nullable=False)

    # Reward
    reward_code = Column(String(20), unique=True, nullable=False, index=True)
    reward_type = Column(String(100), default="free_beer")
    reward_description = Column(String(255))
    reward_redeemed = Column(Boolean, default=False, nullable=False)
    reward_redeemed_at = Column(DateTime)
    reward_redeemed_by = Column(String(100))  # staff member name

    # A/B test assignment
    ab_test_id = Column(UUID(as_uuid=True), ForeignKey("ab_tests.id", ondelete="SET NULL"), index=True)
    ab_variant = Column(String(1))  # 'A' or 'B'

    # Request metadata
    ip_address = Column(String(45))
    user_agent = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    # Relationships
    customer = relationship("Customer", back_populates="captures")
    location = relationship("Location", back_populates="captures")
    ab_test = relationship("ABTest")

    @property
    def location_name(self):
        return self.location.name if self.location else None

    def __repr__(self):
        return f"<Capture(reward_code='{self.reward_code}', redeemed={self.reward_redeemed})>"
