"""
Email Follow-up Service
Template rendering, automated follow-up queuing, opt-out and queue delivery
"""

import logging
import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from golfcapture.config import settings
from golfcapture.exceptions import NotFoundError, ValidationError
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.email import EmailQueueEntry, EmailStatus, EmailTemplate, EmailTemplateType
from golfcapture.services.segment_service import SegmentService, segment_query
from golfcapture.services.sendgrid_service import SendGridService

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")

REPEAT_VISIT_MILESTONE = 3


def render_template(text: Optional[str], context: Dict[str, Any]) -> Optional[str]:
    """Replace {{name}} placeholders; unknown names render empty"""
    if text is None:
        return None

    def _sub(match):
        value = context.get(match.group(1))
        return "" if value is None else str(value)

    return PLACEHOLDER.sub(_sub, text)


def build_context(course: Course, customer: Customer, reward_code: Optional[str] = None) -> Dict[str, Any]:
    return {
        "first_name": customer.first_name or "there",
        "last_name": customer.last_name or "",
        "reward_code": reward_code or "",
        "visit_count": customer.visit_count,
        "course_name": course.name,
    }


def get_active_template(db: Session, course_id: UUID, template_type: str) -> Optional[EmailTemplate]:
    return (
        db.query(EmailTemplate)
        .filter(
            EmailTemplate.course_id == course_id,
            EmailTemplate.type == template_type,
            EmailTemplate.is_active.is_(True),
        )
        .order_by(EmailTemplate.created_at.asc())
        .first()
    )


def queue_template(
    db: Session,
    course: Course,
    template: EmailTemplate,
    customer: Customer,
    reward_code: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Optional[EmailQueueEntry]:
    """Render a template for one customer and add it to the queue (no commit)"""
    if not customer.email or customer.opted_out_of_email:
        return None

    now = now or datetime.utcnow()
    context = build_context(course, customer, reward_code)

    entry = EmailQueueEntry(
        course_id=course.id,
        customer_id=customer.id,
        template_id=template.id,
        to_email=customer.email,
        subject=render_template(template.subject, context),
        body_html=render_template(template.body_html, context),
        body_text=render_template(template.body_text, context),
        scheduled_for=now + timedelta(hours=template.delay_hours or 0),
        status=EmailStatus.PENDING,
    )
    db.add(entry)
    return entry


def followup_template_types(customer: Customer, is_new: bool) -> List[str]:
    """Automation hooks triggered by one capture"""
    types = []
    if is_new:
        types.append(EmailTemplateType.SAME_DAY_THANKS.value)
        if customer.is_local is True:
            types.append(EmailTemplateType.FOLLOWUP_LOCAL.value)
        elif customer.is_local is False:
            types.append(EmailTemplateType.FOLLOWUP_VISITOR.value)

    if customer.visit_count == REPEAT_VISIT_MILESTONE:
        types.append(EmailTemplateType.REPEAT_VISITOR_3.value)

    return types


def queue_capture_followups(
    db: Session,
    course: Course,
    customer: Customer,
    is_new: bool,
    reward_code: Optional[str] = None,
) -> List[EmailQueueEntry]:
    """Queue the automated follow-ups for a capture; runs inside the capture transaction"""
    if not customer.email or customer.opted_out_of_email:
        return []

    now = datetime.utcnow()
    queued = []
    for template_type in followup_template_types(customer, is_new):
        template = get_active_template(db, course.id, template_type)
        if template is None:
            continue
        entry = queue_template(db, course, template, customer, reward_code=reward_code, now=now)
        if entry is not None:
            queued.append(entry)

    if queued:
        db.flush()
        logger.info(f"Queued {len(queued)} follow-up email(s) for customer {customer.id}")
    return queued


def set_email_opt_out(db: Session, customer: Customer, opted_out: bool = True) -> int:
    """
    Update a customer's email preference

    Opting out cancels every pending queue entry for the customer.

    Returns:
        Number of cancelled queue entries
    """
    customer.opted_out_of_email = opted_out
    cancelled = 0

    if opted_out:
        cancelled = (
            db.query(EmailQueueEntry)
            .filter(EmailQueueEntry.customer_id == customer.id, EmailQueueEntry.status == EmailStatus.PENDING)
            .update({EmailQueueEntry.status: EmailStatus.CANCELLED}, synchronize_session=False)
        )

    db.commit()
    logger.info(f"Customer {customer.id} opted_out_of_email={opted_out} (cancelled {cancelled} pending)")
    return cancelled


def queue_segment_campaign(db: Session, course: Course, segment_id: UUID, template_id: UUID) -> int:
    """
    Queue a template for every emailable member of a segment

    Returns:
        Number of emails queued
    """
    segment = SegmentService.get_segment(db, course.id, segment_id)
    template = EmailTemplateService.get_template(db, course.id, template_id)
    if not template.is_active:
        raise ValidationError("Template is not active", field="template_id")

    filters = dict(segment.filters or {})
    filters["exclude_opted_out"] = True
    customers = segment_query(db, course.id, filters).filter(Customer.email.isnot(None)).all()

    now = datetime.utcnow()
    queued = 0
    for customer in customers:
        if queue_template(db, course, template, customer, now=now) is not None:
            queued += 1

    db.commit()
    logger.info(f"Queued campaign '{template.name}' to {queued} customer(s) in segment '{segment.name}'")
    return queued


def claim_entry(db: Session, entry_id: UUID) -> bool:
    """Move one entry from pending to sending; False when another run got it first"""
    result = db.execute(
        update(EmailQueueEntry)
        .where(EmailQueueEntry.id == entry_id, EmailQueueEntry.status == EmailStatus.PENDING)
        .values(status=EmailStatus.SENDING)
        .execution_options(synchronize_session=False)
    )
    db.commit()
    return result.rowcount == 1


async def process_due_emails(
    db: Session,
    sender: Optional[SendGridService] = None,
    batch_size: Optional[int] = None,
    now: Optional[datetime] = None,
) -> Dict[str, int]:
    """
    Deliver pending emails whose scheduled time has passed

    Oldest first, at most batch_size per run. Each entry is claimed (pending ->
    sending) before its send, so the worker and a staff-triggered run never
    deliver the same entry twice. Failures are recorded on the entry and never
    retried automatically.
    """
    sender = sender or SendGridService()
    batch_size = batch_size or settings.EMAIL_BATCH_SIZE
    now = now or datetime.utcnow()

    entries = (
        db.query(EmailQueueEntry)
        .filter(EmailQueueEntry.status == EmailStatus.PENDING, EmailQueueEntry.scheduled_for <= now)
        .order_by(EmailQueueEntry.scheduled_for.asc())
        .limit(batch_size)
        .all()
    )

    stats = {"processed": 0, "sent": 0, "failed": 0, "cancelled": 0}

    for entry in entries:
        if not claim_entry(db, entry.id):
            logger.debug(f"Email {entry.id} already claimed by another run")
            continue

        stats["processed"] += 1
        customer = entry.customer

        if customer is None or customer.opted_out_of_email:
            entry.status = EmailStatus.CANCELLED
            stats["cancelled"] += 1
            db.commit()
            continue

        result = await sender.send_email(entry.to_email, entry.subject, entry.body_html, entry.body_text)

        if result.get("success"):
            entry.status = EmailStatus.SENT
            entry.sent_at = datetime.utcnow()
            entry.provider_message_id = result.get("message_id")
            stats["sent"] += 1
        else:
            entry.status = EmailStatus.FAILED
            entry.error_message = result.get("error")
            stats["failed"] += 1
            logger.warning(f"Email {entry.id} failed: {entry.error_message}")

        db.commit()

    if stats["processed"]:
        logger.info(f"Email queue run: {stats}")
    return stats


class EmailTemplateService:
    """Staff management of email templates and the queue"""

    @staticmethod
    def list_templates(db: Session, course_id: UUID) -> List[EmailTemplate]:
        return (
            db.query(EmailTemplate)
            .filter(EmailTemplate.course_id == course_id)
            .order_by(EmailTemplate.type, EmailTemplate.created_at)
            .all()
        )

    @staticmethod
    def get_template(db: Session, course_id: UUID, template_id: UUID) -> EmailTemplate:
        template = (
            db.query(EmailTemplate)
            .filter(EmailTemplate.id == template_id, EmailTemplate.course_id == course_id)
            .first()
        )
        if not template:
            raise NotFoundError("Email template", template_id)
        return template

    @staticmethod
    def create_template(db: Session, course_id: UUID, data: Dict[str, Any]) -> EmailTemplate:
        template = EmailTemplate(course_id=course_id, **data)
        db.add(template)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def update_template(db: Session, course_id: UUID, template_id: UUID, updates: Dict[str, Any]) -> EmailTemplate:
        template = EmailTemplateService.get_template(db, course_id, template_id)
        for field, value in updates.items():
            setattr(template, field, value)
        db.commit()
        db.refresh(template)
        return template

    @staticmethod
    def list_queue(
        db: Session, course_id: UUID, status: Optional[EmailStatus] = None, limit: int = 100
    ) -> List[EmailQueueEntry]:
        query = db.query(EmailQueueEntry).filter(EmailQueueEntry.course_id == course_id)
        if status is not None:
            query = query.filter(EmailQueueEntry.status == status)
        return query.order_by(EmailQueueEntry.scheduled_for.desc()).limit(limit).all()
