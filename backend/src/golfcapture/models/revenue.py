"""
Revenue Event Model
Revenue recorded by staff and attributed to customers and QR locations
"""

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import Column, Date, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class RevenueEventType(str, enum.Enum):
    MEMBERSHIP = "membership"
    GREEN_FEE = "green_fee"
    PRO_SHOP = "pro_shop"
    FOOD_BEV = "food_bev"


class RevenueEvent(Base):
    """Revenue Event"""

    __tablename__ = "revenue_events"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), index=True)

    event_type = Column(
        SQLEnum(RevenueEventType, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
        index=True,
    )
    amount = Column(Numeric(10, 2), nullable=False)
    source = Column(String(100))
    attributed_location_id = Column(UUID(as_uuid=True), ForeignKey("locations.id", ondelete="SET NULL"))
    notes = Column(Text)
    recorded_by = Column(UUID(as_uuid=True), ForeignKey("staff_users.id", ondelete="SET NULL"))
    event_date = Column(Date, nullable=False, default=date.today, index=True)

    created_at = Column(DateTime, default=datetime.utcnow)

    customer = relationship("Customer")
    attributed_location = relationship("Location")

    def __repr__(self):
        return f"<RevenueEvent(type='{self.event_type}', amount={self.amount})>"
