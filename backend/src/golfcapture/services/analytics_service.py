"""
Analytics Service
Dashboard snapshot of capture, redemption and prospect activity
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from golfcapture.models.capture import Capture
from golfcapture.models.customer import Customer
from golfcapture.models.email import EmailQueueEntry, EmailStatus
from golfcapture.models.location import Location
from golfcapture.services.pipeline_service import PipelineService


def _grouped_counts(db: Session, course_id: UUID, column) -> Dict[str, int]:
    rows = (
        db.query(column, func.count(Customer.id))
        .filter(Customer.course_id == course_id, column.isnot(None))
        .group_by(column)
        .all()
    )
    return {value: count for value, count in rows}


def compute_analytics_snapshot(db: Session, course_id: UUID, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Read-only dashboard aggregates for one course

    Args:
        db: Database session
        course_id: Course UUID
        now: Reference time (UTC), defaults to now

    Returns:
        Snapshot dict
    """
    now = now or datetime.utcnow()
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_ago = now - timedelta(days=7)

    total_customers = db.query(func.count(Customer.id)).filter(Customer.course_id == course_id).scalar()

    captures = db.query(func.count(Capture.id)).filter(Capture.course_id == course_id)
    total_captures = captures.scalar()
    captures_today = captures.filter(Capture.created_at >= start_of_day).scalar()
    captures_this_week = captures.filter(Capture.created_at >= week_ago).scalar()
    redeemed = captures.filter(Capture.reward_redeemed.is_(True)).scalar()
    redemption_rate = round(redeemed / total_captures * 100) if total_captures else 0

    prospects_count = (
        db.query(func.count(Customer.id))
        .filter(Customer.course_id == course_id, Customer.is_membership_prospect.is_(True))
        .scalar()
    )

    local_count = (
        db.query(func.count(Customer.id))
        .filter(Customer.course_id == course_id, Customer.is_local.is_(True))
        .scalar()
    )
    visitor_count = (
        db.query(func.count(Customer.id))
        .filter(Customer.course_id == course_id, Customer.is_local.is_(False))
        .scalar()
    )

    by_location = (
        db.query(Location.name, func.count(Capture.id))
        .outerjoin(Capture, and_(Capture.location_id == Location.id, Capture.created_at >= week_ago))
        .filter(Location.course_id == course_id)
        .group_by(Location.id, Location.name)
        .order_by(func.count(Capture.id).desc())
        .all()
    )

    pending_emails = (
        db.query(func.count(EmailQueueEntry.id))
        .filter(EmailQueueEntry.course_id == course_id, EmailQueueEntry.status == EmailStatus.PENDING)
        .scalar()
    )

    return {
        "total_customers": total_customers,
        "total_captures": total_captures,
        "captures_today": captures_today,
        "captures_this_week": captures_this_week,
        "redemption_rate": redemption_rate,
        "prospects_count": prospects_count,
        "booking_sources": _grouped_counts(db, course_id, Customer.booking_source),
        "local_vs_visitor": {"local": local_count, "visitor": visitor_count},
        "captures_by_location": [{"name": name, "count": count} for name, count in by_location],
        "play_frequency": _grouped_counts(db, course_id, Customer.play_frequency),
        "pipeline": PipelineService.status_counts(db, course_id),
        "pending_emails": pending_emails,
    }
