"""
Segment Service
Saved customer filters used for targeting and bulk email
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Query, Session

from golfcapture.exceptions import NotFoundError
from golfcapture.models.customer import Customer
from golfcapture.models.segment import CustomerSegment

logger = logging.getLogger(__name__)


def apply_segment_filters(query: Query, filters: Dict[str, Any]) -> Query:
    """
    Narrow a Customer query by segment filter keys

    Keys: booking_source, play_frequency, source (lists); is_local,
    member_elsewhere (bools); min_score, min_visits, max_days_since_visit
    (ints); exclude_opted_out (bool, default True). Missing keys don't filter.
    """
    filters = filters or {}

    if filters.get("booking_source"):
        query = query.filter(Customer.booking_source.in_(filters["booking_source"]))

    if filters.get("play_frequency"):
        query = query.filter(Customer.play_frequency.in_(filters["play_frequency"]))

    if filters.get("source"):
        query = query.filter(Customer.source.in_(filters["source"]))

    if filters.get("is_local") is not None:
        query = query.filter(Customer.is_local.is_(bool(filters["is_local"])))

    if filters.get("member_elsewhere") is not None:
        query = query.filter(Customer.member_elsewhere.is_(bool(filters["member_elsewhere"])))

    if filters.get("min_score") is not None:
        query = query.filter(Customer.membership_score >= filters["min_score"])

    if filters.get("min_visits") is not None:
        query = query.filter(Customer.visit_count >= filters["min_visits"])

    if filters.get("max_days_since_visit") is not None:
        cutoff = datetime.utcnow() - timedelta(days=filters["max_days_since_visit"])
        query = query.filter(Customer.last_visit_at >= cutoff)

    if filters.get("exclude_opted_out", True):
        query = query.filter(Customer.opted_out_of_email.is_(False))

    return query


def segment_query(db: Session, course_id: UUID, filters: Dict[str, Any]) -> Query:
    return apply_segment_filters(db.query(Customer).filter(Customer.course_id == course_id), filters)


class SegmentService:
    """CRUD and evaluation of saved segments"""

    @staticmethod
    def list_segments(db: Session, course_id: UUID) -> List[Tuple[CustomerSegment, int]]:
        """Segments with their current member counts"""
        segments = (
            db.query(CustomerSegment)
            .filter(CustomerSegment.course_id == course_id)
            .order_by(CustomerSegment.created_at.desc())
            .all()
        )
        return [(segment, segment_query(db, course_id, segment.filters).count()) for segment in segments]

    @staticmethod
    def get_segment(db: Session, course_id: UUID, segment_id: UUID) -> CustomerSegment:
        segment = (
            db.query(CustomerSegment)
            .filter(CustomerSegment.id == segment_id, CustomerSegment.course_id == course_id)
            .first()
        )
        if not segment:
            raise NotFoundError("Segment", segment_id)
        return segment

    @staticmethod
    def create_segment(
        db: Session,
        course_id: UUID,
        name: str,
        filters: Dict[str, Any],
        description: Optional[str] = None,
        created_by: Optional[UUID] = None,
    ) -> CustomerSegment:
        segment = CustomerSegment(
            course_id=course_id,
            name=name,
            description=description,
            filters=filters,
            created_by=created_by,
        )
        db.add(segment)
        db.commit()
        db.refresh(segment)

        logger.info(f"Created segment '{name}' ({segment.id})")
        return segment

    @staticmethod
    def update_segment(db: Session, course_id: UUID, segment_id: UUID, updates: Dict[str, Any]) -> CustomerSegment:
        segment = SegmentService.get_segment(db, course_id, segment_id)
        for field, value in updates.items():
            setattr(segment, field, value)
        db.commit()
        db.refresh(segment)
        return segment

    @staticmethod
    def delete_segment(db: Session, course_id: UUID, segment_id: UUID) -> None:
        segment = SegmentService.get_segment(db, course_id, segment_id)
        db.delete(segment)
        db.commit()

    @staticmethod
    def preview(db: Session, course_id: UUID, filters: Dict[str, Any]) -> int:
        """Member count for ad-hoc filters, nothing saved"""
        return segment_query(db, course_id, filters).count()

    @staticmethod
    def members(
        db: Session, course_id: UUID, segment_id: UUID, limit: Optional[int] = None, offset: int = 0
    ) -> Tuple[List[Customer], int]:
        segment = SegmentService.get_segment(db, course_id, segment_id)
        query = segment_query(db, course_id, segment.filters)
        total = query.count()

        query = query.order_by(Customer.membership_score.desc(), Customer.created_at.desc()).offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query.all(), total
