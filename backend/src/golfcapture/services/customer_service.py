"""
Customer Service
Staff-side customer queries, edits and prospect browsing
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload, selectinload

from golfcapture.exceptions import NotFoundError
from golfcapture.models.capture import Capture
from golfcapture.models.customer import Customer
from golfcapture.models.tag import Tag
from golfcapture.services.identity import PROFILE_FIELDS, overwrite_fields
from golfcapture.services.scoring import BROWSE_PROSPECT_MIN_SCORE, apply_membership_score
from golfcapture.utils.contact import normalize_email, normalize_phone

logger = logging.getLogger(__name__)


def _capture_counts(db: Session):
    return (
        db.query(Capture.customer_id.label("customer_id"), func.count(Capture.id).label("capture_count"))
        .group_by(Capture.customer_id)
        .subquery()
    )


def list_customers(
    db: Session,
    course_id: UUID,
    search: Optional[str] = None,
    source: Optional[str] = None,
    booking_source: Optional[str] = None,
    is_local: Optional[bool] = None,
    is_prospect: Optional[bool] = None,
    min_score: Optional[int] = None,
    tag_id: Optional[UUID] = None,
    limit: int = 50,
    offset: int = 0,
) -> Tuple[List[Tuple[Customer, int]], int]:
    """
    Filtered, paginated customer list

    Returns:
        ([(customer, capture_count), ...], total matching customers)
    """
    counts = _capture_counts(db)
    query = (
        db.query(Customer, func.coalesce(counts.c.capture_count, 0))
        .outerjoin(counts, counts.c.customer_id == Customer.id)
        .filter(Customer.course_id == course_id)
    )

    if search:
        pattern = f"%{search.strip()}%"
        query = query.filter(
            or_(
                Customer.first_name.ilike(pattern),
                Customer.last_name.ilike(pattern),
                Customer.email.ilike(pattern),
                Customer.phone.ilike(pattern),
            )
        )
    if source:
        query = query.filter(Customer.source == source)
    if booking_source:
        query = query.filter(Customer.booking_source == booking_source)
    if is_local is not None:
        query = query.filter(Customer.is_local.is_(is_local))
    if is_prospect is not None:
        query = query.filter(Customer.is_membership_prospect.is_(is_prospect))
    if min_score is not None:
        query = query.filter(Customer.membership_score >= min_score)
    if tag_id is not None:
        query = query.filter(Customer.tags.any(Tag.id == tag_id))

    total = query.count()
    rows = query.order_by(Customer.created_at.desc()).offset(offset).limit(limit).all()
    return [(customer, count) for customer, count in rows], total


def get_customer(db: Session, course_id: UUID, customer_id: UUID) -> Customer:
    customer = db.query(Customer).filter(Customer.id == customer_id, Customer.course_id == course_id).first()
    if not customer:
        raise NotFoundError("Customer", customer_id)
    return customer


def get_customer_detail(db: Session, course_id: UUID, customer_id: UUID) -> Customer:
    """Customer with captures (and their locations), tags and pipeline entry loaded"""
    customer = (
        db.query(Customer)
        .options(
            selectinload(Customer.captures).joinedload(Capture.location),
            selectinload(Customer.tags),
            joinedload(Customer.pipeline_entry),
        )
        .filter(Customer.id == customer_id, Customer.course_id == course_id)
        .first()
    )
    if not customer:
        raise NotFoundError("Customer", customer_id)
    return customer


def update_customer(db: Session, course_id: UUID, customer_id: UUID, updates: Dict[str, Any]) -> Customer:
    """
    Staff edit of contact and profile fields

    Contact keys are normalized and checked for ownership; the score is
    recomputed afterwards.
    """
    customer = get_customer(db, course_id, customer_id)

    email = normalize_email(updates.get("email")) if "email" in updates else None
    phone = normalize_phone(updates.get("phone")) if "phone" in updates else None
    profile = {field: updates[field] for field in PROFILE_FIELDS if field in updates}

    try:
        overwrite_fields(db, customer, email, phone, profile)
        apply_membership_score(customer)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(customer)
    logger.info(f"Customer {customer.id} updated: {sorted(updates)}")
    return customer


def list_prospects(
    db: Session,
    course_id: UUID,
    min_score: int = BROWSE_PROSPECT_MIN_SCORE,
    require_local: bool = True,
    limit: int = 50,
) -> List[Customer]:
    """
    Browse likely membership prospects

    Filters on the stored score (and locality when required), independently
    of the persisted prospect flag.
    """
    query = db.query(Customer).filter(Customer.course_id == course_id, Customer.membership_score >= min_score)
    if require_local:
        query = query.filter(Customer.is_local.is_(True))

    return query.order_by(Customer.membership_score.desc(), Customer.visit_count.desc()).limit(limit).all()
