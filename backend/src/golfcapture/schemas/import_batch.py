"""
Import Pydantic Schemas
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel

from golfcapture.models.import_batch import ImportRowAction, ImportStatus


class ImportResult(BaseModel):
    """Outcome of one upload"""

    success: bool = True
    import_id: UUID
    total_rows: int
    created: int
    matched: int
    skipped: int
    error_count: int


class ImportBatchResponse(BaseModel):
    id: UUID
    source: str
    filename: Optional[str]
    file_size: Optional[int]
    total_rows: int
    processed_rows: int
    new_customers: int
    matched_customers: int
    skipped_rows: int
    error_rows: int
    errors: List[Dict[str, Any]] = []
    status: ImportStatus
    started_at: Optional[datetime]
    completed_at: Optional[datetime]
    created_at: datetime

    class Config:
        from_attributes = True


class ImportRowResponse(BaseModel):
    row_number: int
    raw_data: Dict[str, Any]
    action: ImportRowAction
    match_type: Optional[str]
    customer_id: Optional[UUID]
    error_message: Optional[str]

    class Config:
        from_attributes = True


class ImportBatchDetail(ImportBatchResponse):
    rows: List[ImportRowResponse] = []


class ImportList(BaseModel):
    imports: List[ImportBatchResponse]
