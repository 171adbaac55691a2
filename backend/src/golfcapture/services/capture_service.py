"""
Capture Service
Records QR form submissions and redeems the rewards they issue

One submission is one database transaction: customer merge, scoring, reward
code, capture row, A/B result, pipeline enrolment and follow-up emails either
all commit or none do.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from golfcapture.config import settings
from golfcapture.exceptions import ConflictError, NotFoundError, ValidationError
from golfcapture.models.ab_test import ABTestResult
from golfcapture.models.capture import Capture
from golfcapture.models.course import Course
from golfcapture.models.customer import BookingSource, Customer, PlayFrequency
from golfcapture.models.location import Location
from golfcapture.services.email_service import queue_capture_followups
from golfcapture.services.identity import recapture_customer, resolve_customer
from golfcapture.services.notification_service import notify_new_prospect
from golfcapture.services.pipeline_service import PipelineService
from golfcapture.services.rewards import (
    ResolvedReward,
    issue_unique_reward_code,
    normalize_reward_code,
    resolve_reward,
)
from golfcapture.utils.contact import is_valid_email, mask_email, mask_phone, normalize_email, normalize_phone

logger = logging.getLogger(__name__)

# A concurrent first capture for the same person can lose the unique-email race once
MAX_CAPTURE_ATTEMPTS = 2

BOOKING_SOURCES = {source.value for source in BookingSource}
PLAY_FREQUENCIES = {frequency.value for frequency in PlayFrequency}


def get_course_by_slug(db: Session, slug: Optional[str] = None) -> Course:
    slug = slug or settings.DEFAULT_COURSE_SLUG
    course = db.query(Course).filter(Course.slug == slug).first()
    if not course:
        raise NotFoundError("Course", slug)
    return course


def get_course_location(db: Session, course: Course, location_id: Any) -> Optional[Location]:
    """Optional location; must belong to the course"""
    if location_id in (None, ""):
        return None

    try:
        location_uuid = location_id if isinstance(location_id, UUID) else UUID(str(location_id))
    except ValueError:
        raise NotFoundError("Location", location_id)

    location = db.query(Location).filter(Location.id == location_uuid, Location.course_id == course.id).first()
    if not location:
        raise NotFoundError("Location", location_id)
    return location


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _enum_value(value: Any) -> Any:
    return value.value if hasattr(value, "value") else value


def extract_profile(data: Dict[str, Any]) -> Dict[str, Any]:
    """Profile attributes from a submission, blanks as None"""
    return {
        "first_name": _clean(data.get("first_name")),
        "last_name": _clean(data.get("last_name")),
        "zip": _clean(data.get("zip")),
        "booking_source": _enum_value(data.get("booking_source")) or None,
        "is_local": data.get("is_local"),
        "play_frequency": _enum_value(data.get("play_frequency")) or None,
        "member_elsewhere": data.get("member_elsewhere"),
        "first_time_visitor": data.get("first_time_visitor"),
    }


def validate_submission(data: Dict[str, Any]) -> Tuple[str, str, Dict[str, Any]]:
    """
    Public form boundary checks

    Returns:
        (normalized email, normalized phone, profile)

    Raises:
        ValidationError: With one message per offending field
    """
    errors: Dict[str, str] = {}
    profile = extract_profile(data)

    if not profile["first_name"]:
        errors["first_name"] = "First name is required"
    if not profile["last_name"]:
        errors["last_name"] = "Last name is required"

    email = normalize_email(data.get("email"))
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    phone = normalize_phone(data.get("phone"))
    if not _clean(data.get("phone")):
        errors["phone"] = "Phone is required"
    elif phone is None:
        errors["phone"] = "Please enter a valid 10-digit phone number"

    if not profile["booking_source"]:
        errors["booking_source"] = "Booking source is required"
    elif profile["booking_source"] not in BOOKING_SOURCES:
        errors["booking_source"] = f"Unknown booking source '{profile['booking_source']}'"

    if profile["is_local"] is None:
        errors["is_local"] = "Please tell us whether you are local"

    if profile["play_frequency"] and profile["play_frequency"] not in PLAY_FREQUENCIES:
        errors["play_frequency"] = f"Unknown play frequency '{profile['play_frequency']}'"

    if errors:
        raise ValidationError("Invalid capture submission", errors=errors)

    return email, phone, profile


def _record_capture(
    db: Session,
    course: Course,
    customer: Customer,
    location: Optional[Location],
    reward: ResolvedReward,
    form_data: Dict[str, Any],
    ip_address: Optional[str],
    user_agent: Optional[str],
) -> Capture:
    code = issue_unique_reward_code(db, course.reward_code_prefix)

    capture = Capture(
        course_id=course.id,
        customer_id=customer.id,
        location_id=location.id if location else None,
        form_data=form_data,
        reward_code=code,
        reward_type=reward.reward_type,
        reward_description=reward.description,
        ab_test_id=reward.ab_test.id if reward.ab_test else None,
        ab_variant=reward.variant,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.add(capture)
    db.flush()

    if reward.ab_test is not None:
        db.add(ABTestResult(ab_test_id=reward.ab_test.id, capture_id=capture.id, variant=reward.variant))
        db.flush()

    return capture


def _capture_result(customer: Customer, capture: Capture, reward: ResolvedReward, is_new: bool) -> Dict[str, Any]:
    return {
        "customer_id": customer.id,
        "is_new_customer": is_new,
        "reward_code": capture.reward_code,
        "reward_type": reward.reward_type,
        "reward_description": reward.description,
        "reward_emoji": reward.emoji,
        "masked_email": mask_email(customer.email),
        "masked_phone": mask_phone(customer.phone),
        "visit_count": customer.visit_count,
    }


def submit_capture(
    db: Session,
    submission: Dict[str, Any],
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    form_data: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Process one public QR form submission

    Args:
        db: Database session
        submission: Validated form fields
        ip_address: Client address
        user_agent: Client user agent
        form_data: Request body exactly as submitted, kept for audit (defaults to submission)

    Returns:
        Confirmation dict: customer id, reward, masked contact info, visit count

    Raises:
        NotFoundError: Unknown course or location
        ValidationError: Invalid form fields or reward choice
        ConflictError: Reward code space exhausted, or a uniqueness race lost twice
    """
    course = get_course_by_slug(db, submission.get("course_slug"))
    email, phone, profile = validate_submission(submission)
    if form_data is None:
        form_data = submission
    location = get_course_location(db, course, submission.get("location_id"))

    for attempt in range(1, MAX_CAPTURE_ATTEMPTS + 1):
        try:
            reward = resolve_reward(db, location, submission.get("reward_type"))
            customer, is_new = resolve_customer(db, course.id, email, phone, profile)
            capture = _record_capture(db, course, customer, location, reward, form_data, ip_address, user_agent)

            enrolled = None
            if customer.is_membership_prospect:
                enrolled = PipelineService.enroll_prospect(db, customer)

            queue_capture_followups(db, course, customer, is_new, capture.reward_code)

            db.commit()
            break

        except IntegrityError as e:
            db.rollback()
            if attempt == MAX_CAPTURE_ATTEMPTS:
                logger.error(f"Capture for course {course.slug} failed after {attempt} attempts: {str(e.orig)}")
                raise ConflictError(
                    "Capture could not be recorded, please try again", reason="capture_conflict"
                ) from e
            logger.warning(f"Capture for course {course.slug} hit a uniqueness race, retrying: {str(e.orig)}")

        except Exception:
            db.rollback()
            raise

    db.refresh(customer)
    logger.info(
        f"Capture {capture.reward_code} recorded for customer {customer.id} "
        f"(new={is_new}, visits={customer.visit_count}, reward={reward.reward_type})"
    )

    if enrolled is not None:
        notify_new_prospect(course, customer)

    return _capture_result(customer, capture, reward, is_new)


def admin_recapture(
    db: Session,
    course: Course,
    customer_id: UUID,
    submission: Dict[str, Any],
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Staff-entered capture for a known customer

    Submitted values overwrite stored ones; a visit and a new reward are
    recorded exactly as for the public form.
    """
    customer = db.query(Customer).filter(Customer.id == customer_id, Customer.course_id == course.id).first()
    if not customer:
        raise NotFoundError("Customer", customer_id)

    email = normalize_email(submission.get("email"))
    if email and not is_valid_email(email):
        raise ValidationError("Please enter a valid email address", field="email")
    phone = normalize_phone(submission.get("phone"))
    profile = extract_profile(submission)
    location = get_course_location(db, course, submission.get("location_id"))

    try:
        reward = resolve_reward(db, location, submission.get("reward_type"))
        recapture_customer(db, customer, email, phone, profile)
        capture = _record_capture(db, course, customer, location, reward, submission, ip_address, user_agent)

        enrolled = None
        if customer.is_membership_prospect:
            enrolled = PipelineService.enroll_prospect(db, customer)

        queue_capture_followups(db, course, customer, False, capture.reward_code)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(customer)
    if enrolled is not None:
        notify_new_prospect(course, customer)

    return _capture_result(customer, capture, reward, False)


def lookup_reward(db: Session, code: str) -> Capture:
    """Reward status by code (case-insensitive)"""
    code = normalize_reward_code(code)
    capture = db.query(Capture).options(joinedload(Capture.customer)).filter(Capture.reward_code == code).first()
    if not capture:
        raise NotFoundError("Reward code", code)
    return capture


def redeem_reward(db: Session, code: str, redeemed_by: Optional[str] = None) -> Capture:
    """
    Redeem a reward exactly once

    A single conditional UPDATE flips the flag; concurrent attempts on the
    same code see zero affected rows and get a ConflictError.

    Raises:
        NotFoundError: Unknown code
        ConflictError: Already redeemed
    """
    code = normalize_reward_code(code)

    try:
        result = db.execute(
            update(Capture)
            .where(Capture.reward_code == code, Capture.reward_redeemed.is_(False))
            .values(reward_redeemed=True, reward_redeemed_at=datetime.utcnow(), reward_redeemed_by=redeemed_by)
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            db.rollback()
            existing = db.query(Capture.id).filter(Capture.reward_code == code).first()
            if existing is None:
                raise NotFoundError("Reward code", code)
            raise ConflictError(f"Reward {code} has already been redeemed", reason="already_redeemed")

        capture = db.query(Capture).filter(Capture.reward_code == code).first()
        db.query(ABTestResult).filter(ABTestResult.capture_id == capture.id).update(
            {ABTestResult.redeemed: True}, synchronize_session=False
        )
        db.commit()

    except (NotFoundError, ConflictError):
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(capture)
    logger.info(f"Reward {code} redeemed by {redeemed_by or 'unknown'}")
    return capture
