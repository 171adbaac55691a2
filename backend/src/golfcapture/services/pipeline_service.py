"""
Prospect Pipeline Service
Auto-enrolment of flagged prospects and staff pipeline management
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from golfcapture.exceptions import ConflictError, NotFoundError
from golfcapture.models.customer import Customer
from golfcapture.models.pipeline import PipelineStatus, ProspectPipelineEntry

logger = logging.getLogger(__name__)


class PipelineService:
    """Membership sales pipeline (one entry per customer)"""

    @staticmethod
    def enroll_prospect(
        db: Session,
        customer: Customer,
        assigned_to: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[ProspectPipelineEntry]:
        """
        Insert-or-skip a pipeline entry for a customer

        Returns:
            The new entry, or None if the customer was already enrolled
        """
        existing = (
            db.query(ProspectPipelineEntry.id).filter(ProspectPipelineEntry.customer_id == customer.id).first()
        )
        if existing is not None:
            return None

        entry = ProspectPipelineEntry(
            course_id=customer.course_id,
            customer_id=customer.id,
            status=PipelineStatus.NEW,
            assigned_to=assigned_to,
            notes=notes,
            last_activity_at=datetime.utcnow(),
        )
        db.add(entry)
        db.flush()

        logger.info(f"Enrolled customer {customer.id} in prospect pipeline (score={customer.membership_score})")
        return entry

    @staticmethod
    def add_customer(
        db: Session,
        course_id: UUID,
        customer_id: UUID,
        assigned_to: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ProspectPipelineEntry:
        """Manual enrolment by staff"""
        customer = db.query(Customer).filter(Customer.id == customer_id, Customer.course_id == course_id).first()
        if not customer:
            raise NotFoundError("Customer", customer_id)

        entry = PipelineService.enroll_prospect(db, customer, assigned_to=assigned_to, notes=notes)
        if entry is None:
            raise ConflictError("Customer is already in the pipeline", reason="already_enrolled")

        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def list_entries(
        db: Session,
        course_id: UUID,
        status: Optional[PipelineStatus] = None,
    ) -> List[ProspectPipelineEntry]:
        query = (
            db.query(ProspectPipelineEntry)
            .options(joinedload(ProspectPipelineEntry.customer))
            .filter(ProspectPipelineEntry.course_id == course_id)
        )
        if status is not None:
            query = query.filter(ProspectPipelineEntry.status == status)
        return query.order_by(ProspectPipelineEntry.last_activity_at.desc()).all()

    @staticmethod
    def get_entry(db: Session, course_id: UUID, entry_id: UUID) -> ProspectPipelineEntry:
        entry = (
            db.query(ProspectPipelineEntry)
            .filter(ProspectPipelineEntry.id == entry_id, ProspectPipelineEntry.course_id == course_id)
            .first()
        )
        if not entry:
            raise NotFoundError("Pipeline entry", entry_id)
        return entry

    @staticmethod
    def update_entry(db: Session, course_id: UUID, entry_id: UUID, updates: Dict[str, Any]) -> ProspectPipelineEntry:
        """Apply status / notes / assignee changes; any change is activity"""
        entry = PipelineService.get_entry(db, course_id, entry_id)

        for field, value in updates.items():
            setattr(entry, field, value)
        entry.last_activity_at = datetime.utcnow()

        db.commit()
        db.refresh(entry)

        logger.info(f"Pipeline entry {entry.id} updated: {sorted(updates)}")
        return entry

    @staticmethod
    def remove_entry(db: Session, course_id: UUID, entry_id: UUID) -> None:
        entry = PipelineService.get_entry(db, course_id, entry_id)
        db.delete(entry)
        db.commit()

    @staticmethod
    def status_counts(db: Session, course_id: UUID) -> Dict[str, int]:
        counts = {status.value: 0 for status in PipelineStatus}
        rows = (
            db.query(ProspectPipelineEntry.status, func.count(ProspectPipelineEntry.id))
            .filter(ProspectPipelineEntry.course_id == course_id)
            .group_by(ProspectPipelineEntry.status)
            .all()
        )
        for status, count in rows:
            counts[PipelineStatus(status).value] = count
        return counts
