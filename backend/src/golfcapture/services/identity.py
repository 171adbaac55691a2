"""
Identity Matching
Resolves incoming contact info to a course-scoped customer record

Matching policy (shared by capture and import): exact match on the normalized
email first, then on the normalized phone; the first hit wins.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from golfcapture.exceptions import ConflictError
from golfcapture.models.customer import Customer, CustomerSource
from golfcapture.services.scoring import apply_membership_score

logger = logging.getLogger(__name__)

MATCH_EMAIL = "email"
MATCH_PHONE = "phone"

# Profile attributes merged on re-capture / import (contact keys handled separately)
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "zip",
    "booking_source",
    "is_local",
    "play_frequency",
    "member_elsewhere",
    "first_time_visitor",
)


def find_by_email(db: Session, course_id: UUID, email: Optional[str]) -> Optional[Customer]:
    if not email:
        return None
    return db.query(Customer).filter(Customer.course_id == course_id, Customer.email == email).first()


def find_by_phone(db: Session, course_id: UUID, phone: Optional[str]) -> Optional[Customer]:
    if not phone:
        return None
    return db.query(Customer).filter(Customer.course_id == course_id, Customer.phone == phone).first()


def match_customer(
    db: Session, course_id: UUID, email: Optional[str], phone: Optional[str]
) -> Tuple[Optional[Customer], Optional[str]]:
    """
    Find an existing customer by normalized email, then normalized phone

    Args:
        db: Database session
        course_id: Course scope
        email: Normalized email or None
        phone: Normalized 10-digit phone or None

    Returns:
        (customer, match_type) where match_type is "email", "phone" or None
    """
    customer = find_by_email(db, course_id, email)
    if customer:
        return customer, MATCH_EMAIL

    customer = find_by_phone(db, course_id, phone)
    if customer:
        return customer, MATCH_PHONE

    return None, None


def _owned_by_other(db: Session, customer: Customer, field: str, value: str) -> bool:
    column = getattr(Customer, field)
    return (
        db.query(Customer.id)
        .filter(Customer.course_id == customer.course_id, column == value, Customer.id != customer.id)
        .first()
        is not None
    )


def fill_blank_fields(
    db: Session,
    customer: Customer,
    email: Optional[str],
    phone: Optional[str],
    profile: Dict[str, Any],
) -> List[str]:
    """
    Merge new values into a customer without overwriting anything already known

    A contact key is only adopted if no other customer at the course owns it.

    Returns:
        Names of the fields that were filled
    """
    filled = []

    for field, value in (("email", email), ("phone", phone)):
        if value and getattr(customer, field) is None and not _owned_by_other(db, customer, field, value):
            setattr(customer, field, value)
            filled.append(field)

    for field in PROFILE_FIELDS:
        value = profile.get(field)
        if value is not None and getattr(customer, field) is None:
            setattr(customer, field, value)
            filled.append(field)

    return filled


def overwrite_fields(
    db: Session,
    customer: Customer,
    email: Optional[str],
    phone: Optional[str],
    profile: Dict[str, Any],
) -> List[str]:
    """
    Replace every resubmitted field with the latest value (admin re-capture)

    Raises:
        ConflictError: If the new email or phone belongs to another customer
    """
    changed = []

    for field, value in (("email", email), ("phone", phone)):
        if value and getattr(customer, field) != value:
            if _owned_by_other(db, customer, field, value):
                raise ConflictError(
                    f"Another customer at this course already uses this {field}",
                    reason=f"duplicate_{field}",
                )
            setattr(customer, field, value)
            changed.append(field)

    for field in PROFILE_FIELDS:
        value = profile.get(field)
        if value is not None and getattr(customer, field) != value:
            setattr(customer, field, value)
            changed.append(field)

    return changed


def record_visit(db: Session, customer: Customer) -> Customer:
    """
    Increment visit_count and refresh last_visit_at

    Done as a single UPDATE with an SQL expression so the database row lock
    serializes concurrent captures for the same person.
    """
    db.flush()
    db.execute(
        update(Customer)
        .where(Customer.id == customer.id)
        .values(visit_count=Customer.visit_count + 1, last_visit_at=datetime.utcnow())
        .execution_options(synchronize_session=False)
    )
    db.refresh(customer)
    return customer


def create_customer(
    db: Session,
    course_id: UUID,
    email: Optional[str],
    phone: Optional[str],
    profile: Dict[str, Any],
    source: str = CustomerSource.CAPTURE.value,
    source_id: Optional[str] = None,
    visit_count: int = 1,
) -> Customer:
    """Insert a new customer with its score computed immediately"""
    customer = Customer(
        course_id=course_id,
        email=email,
        phone=phone,
        source=source,
        source_id=source_id,
        visit_count=visit_count,
        last_visit_at=datetime.utcnow() if visit_count else None,
        opted_out_of_email=False,
        **{field: profile.get(field) for field in PROFILE_FIELDS},
    )
    apply_membership_score(customer)
    db.add(customer)
    db.flush()

    logger.info(f"Created customer {customer.id} (source={source}, score={customer.membership_score})")
    return customer


def resolve_customer(
    db: Session,
    course_id: UUID,
    email: Optional[str],
    phone: Optional[str],
    profile: Dict[str, Any],
) -> Tuple[Customer, bool]:
    """
    Capture-path identity resolution

    Creates the customer on a miss; on a hit fills blank fields and records
    a visit. The score and prospect flag are recomputed either way.

    Returns:
        (customer, is_new)
    """
    customer, match_type = match_customer(db, course_id, email, phone)

    if customer is None:
        return create_customer(db, course_id, email, phone, profile), True

    fill_blank_fields(db, customer, email, phone, profile)
    record_visit(db, customer)
    apply_membership_score(customer)
    db.flush()

    logger.info(
        f"Matched customer {customer.id} by {match_type} "
        f"(visits={customer.visit_count}, score={customer.membership_score})"
    )
    return customer, False


def recapture_customer(
    db: Session,
    customer: Customer,
    email: Optional[str],
    phone: Optional[str],
    profile: Dict[str, Any],
) -> Customer:
    """Admin re-capture: latest submitted values win, visit is always recorded"""
    changed = overwrite_fields(db, customer, email, phone, profile)
    record_visit(db, customer)
    apply_membership_score(customer)
    db.flush()

    logger.info(f"Re-captured customer {customer.id} (changed={changed}, visits={customer.visit_count})")
    return customer
