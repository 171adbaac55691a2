"""
Import Models
Append-only audit trail of CSV merges (one batch, one row per input line)
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Column, DateTime
from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from golfcapture.database import Base


class ImportSource(str, enum.Enum):
    """Known CSV layouts"""

    GOLFNOW = "golfnow"
    CLUBESSENTIAL = "clubessential"
    GENERIC = "generic"


class ImportStatus(str, enum.Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class ImportRowAction(str, enum.Enum):
    CREATED = "created"
    MATCHED = "matched"
    SKIPPED = "skipped"
    ERROR = "error"


class ImportBatch(Base):
    """
    Import Batch Model
    Aggregate counters are written once, after the full pass
    """

    __tablename__ = "imports"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    course_id = Column(UUID(as_uuid=True), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    source = Column(String(50), nullable=False)
    filename = Column(String(255))
    file_size = Column(Integer)

    # Stats
    total_rows = Column(Integer, default=0)
    processed_rows = Column(Integer, default=0)
    new_customers = Column(Integer, default=0)
    matched_customers = Column(Integer, default=0)
    skipped_rows = Column(Integer, default=0)
    error_rows = Column(Integer, default=0)
    errors = Column(JSON, default=list)  # [{"row": 3, "error": "..."}]

    status = Column(
        SQLEnum(ImportStatus, values_callable=lambda x: [e.value for e in x]),
        default=ImportStatus.PENDING,
        nullable=False,
    )
    started_at = Column(DateTime)
    completed_at = Column(DateTime)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)

    rows = relationship("ImportRow", back_populates="batch", order_by="ImportRow.row_number")

    def __repr__(self):
        return f"<ImportBatch(source='{self.source}', status='{self.status}', total={self.total_rows})>"


class ImportRow(Base):
    """Outcome of one input row"""

    __tablename__ = "import_rows"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    import_id = Column(UUID(as_uuid=True), ForeignKey("imports.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"))

    row_number = Column(Integer, nullable=False)
    raw_data = Column(JSON, nullable=False)

    action = Column(
        SQLEnum(ImportRowAction, values_callable=lambda x: [e.value for e in x]),
        nullable=False,
    )
    match_type = Column(String(50))  # 'email', 'phone' or NULL
    error_message = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)

    batch = relationship("ImportBatch", back_populates="rows")
