"""
Revenue Service
Staff-recorded revenue events and attribution summaries
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from golfcapture.exceptions import NotFoundError
from golfcapture.models.customer import Customer
from golfcapture.models.location import Location
from golfcapture.models.revenue import RevenueEvent, RevenueEventType

logger = logging.getLogger(__name__)


class RevenueService:
    """Record and summarize revenue events"""

    @staticmethod
    def record_event(
        db: Session, course_id: UUID, data: Dict[str, Any], recorded_by: Optional[UUID] = None
    ) -> RevenueEvent:
        if data.get("customer_id") is not None:
            customer = (
                db.query(Customer.id)
                .filter(Customer.id == data["customer_id"], Customer.course_id == course_id)
                .first()
            )
            if customer is None:
                raise NotFoundError("Customer", data["customer_id"])

        if data.get("attributed_location_id") is not None:
            location = (
                db.query(Location.id)
                .filter(Location.id == data["attributed_location_id"], Location.course_id == course_id)
                .first()
            )
            if location is None:
                raise NotFoundError("Location", data["attributed_location_id"])

        if data.get("event_date") is None:
            data = {**data, "event_date": date.today()}

        event = RevenueEvent(course_id=course_id, recorded_by=recorded_by, **data)
        db.add(event)
        db.commit()
        db.refresh(event)

        logger.info(f"Recorded {event.event_type.value} revenue of {event.amount}")
        return event

    @staticmethod
    def list_events(
        db: Session,
        course_id: UUID,
        event_type: Optional[RevenueEventType] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: int = 100,
    ) -> List[RevenueEvent]:
        query = db.query(RevenueEvent).filter(RevenueEvent.course_id == course_id)
        if event_type is not None:
            query = query.filter(RevenueEvent.event_type == event_type)
        if start_date is not None:
            query = query.filter(RevenueEvent.event_date >= start_date)
        if end_date is not None:
            query = query.filter(RevenueEvent.event_date <= end_date)
        return query.order_by(RevenueEvent.event_date.desc(), RevenueEvent.created_at.desc()).limit(limit).all()

    @staticmethod
    def summary(db: Session, course_id: UUID) -> Dict[str, Any]:
        """Totals overall, by event type and by attributed QR location"""
        total = db.query(func.coalesce(func.sum(RevenueEvent.amount), 0)).filter(
            RevenueEvent.course_id == course_id
        ).scalar()

        by_type_rows = (
            db.query(RevenueEvent.event_type, func.sum(RevenueEvent.amount), func.count(RevenueEvent.id))
            .filter(RevenueEvent.course_id == course_id)
            .group_by(RevenueEvent.event_type)
            .all()
        )
        by_type = {
            RevenueEventType(event_type).value: {"total": Decimal(str(amount or 0)), "count": count}
            for event_type, amount, count in by_type_rows
        }

        by_location_rows = (
            db.query(Location.name, func.sum(RevenueEvent.amount), func.count(RevenueEvent.id))
            .join(Location, Location.id == RevenueEvent.attributed_location_id)
            .filter(RevenueEvent.course_id == course_id)
            .group_by(Location.id, Location.name)
            .order_by(func.sum(RevenueEvent.amount).desc())
            .all()
        )
        by_location = [
            {"location": name, "total": Decimal(str(amount or 0)), "count": count}
            for name, amount, count in by_location_rows
        ]

        return {"total": Decimal(str(total or 0)), "by_type": by_type, "by_location": by_location}
