"""
Location Model
A physical QR code placement (cart, bar coaster, table tent, ...)
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class PlacementType(str, enum.Enum):
    """Where the QR code is placed"""

    CART = "cart"
    COASTER = "coaster"
    TABLE_TENT = "table_tent"
    CHECK_IN = "check_in"
    TURN = "turn"
    PRO_SHOP = "pro_shop"
    OTHER = "other"


class Location(Base):
    """
    Capture Location Model
    Carries the default reward offered by QR codes at this placement
    """

    __tablename__ = "locations"

    # Primary Key
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Course Association
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    description = Column(String(255))
    placement_type = Column(String(50))  # see PlacementType
    is_active = Column(Boolean, default=True)

    # Default reward for captures at this location
    reward_type = Column(String(100), default="free_beer")
    reward_description = Column(String(255), default="Free beer after your round")
    reward_emoji = Column(String(10), default="🍺")

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    course = relationship("Course", back_populates="locations")
    captures = relationship("Capture", back_populates="location")

    def __repr__(self):
        return f"<Location(name='{self.name}', placement_type='{self.placement_type}')>"
