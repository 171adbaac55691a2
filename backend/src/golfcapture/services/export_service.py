"""
Export Service
CSV export of customers (re-importable with the generic import source)
"""

import csv
import io
from datetime import datetime
from typing import Any, Iterable, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from golfcapture.models.customer import Customer

EXPORT_COLUMNS = [
    "first_name",
    "last_name",
    "email",
    "phone",
    "zip",
    "booking_source",
    "is_local",
    "play_frequency",
    "member_elsewhere",
    "visit_count",
    "membership_score",
    "created_at",
]


def _format(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return value.isoformat()
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def customers_to_csv(customers: Iterable[Customer]) -> str:
    """Header row always present; fields quoted only when needed"""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for customer in customers:
        writer.writerow([_format(getattr(customer, column)) for column in EXPORT_COLUMNS])
    return output.getvalue()


def export_customers_csv(
    db: Session,
    course_id: UUID,
    is_prospect: Optional[bool] = None,
    is_local: Optional[bool] = None,
) -> str:
    query = db.query(Customer).filter(Customer.course_id == course_id)
    if is_prospect is not None:
        query = query.filter(Customer.is_membership_prospect.is_(is_prospect))
    if is_local is not None:
        query = query.filter(Customer.is_local.is_(is_local))

    return customers_to_csv(query.order_by(Customer.created_at.desc()).all())


def export_filename(prefix: str = "customers") -> str:
    return f"{prefix}-{datetime.utcnow().strftime('%Y%m%d-%H%M%S')}.csv"
