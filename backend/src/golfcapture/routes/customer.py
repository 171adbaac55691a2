"""
Customer API Routes
Endpoints for browsing and managing captured customers
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_current_staff, get_staff_course
from golfcapture.models.course import Course
from golfcapture.models.staff_user import StaffUser
from golfcapture.schemas.capture import CaptureResponse
from golfcapture.schemas.customer import (
    CustomerDetail,
    CustomerList,
    CustomerListItem,
    CustomerResponse,
    CustomerUpdate,
    EmailPreference,
    EmailPreferenceResult,
    RecaptureRequest,
)
from golfcapture.schemas.tag import TagAssignment
from golfcapture.services import customer_service
from golfcapture.services.capture_service import admin_recapture
from golfcapture.services.email_service import set_email_opt_out
from golfcapture.services.tag_service import TagService

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.get("", response_model=CustomerList)
async def list_customers(
    search: Optional[str] = None,
    source: Optional[str] = None,
    booking_source: Optional[str] = None,
    is_local: Optional[bool] = None,
    is_prospect: Optional[bool] = None,
    min_score: Optional[int] = Query(None, ge=0, le=100),
    tag_id: Optional[UUID] = None,
    limit: int = Query(50, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """List customers with filters"""
    rows, total = customer_service.list_customers(
        db,
        course.id,
        search=search,
        source=source,
        booking_source=booking_source,
        is_local=is_local,
        is_prospect=is_prospect,
        min_score=min_score,
        tag_id=tag_id,
        limit=limit,
        offset=offset,
    )

    customers = [
        CustomerListItem.model_validate(customer).model_copy(update={"capture_count": count})
        for customer, count in rows
    ]
    return CustomerList(customers=customers, total=total, limit=limit, offset=offset)


@router.get("/{customer_id}", response_model=CustomerDetail)
async def get_customer(
    customer_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Customer with captures, tags and pipeline entry"""
    return customer_service.get_customer_detail(db, course.id, customer_id)


@router.patch("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: UUID,
    customer_update: CustomerUpdate,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Update customer details (score is recomputed)"""
    updates = customer_update.model_dump(mode="json", exclude_unset=True)
    return customer_service.update_customer(db, course.id, customer_id, updates)


@router.post("/{customer_id}/recapture", response_model=CaptureResponse, status_code=status.HTTP_201_CREATED)
async def recapture(
    customer_id: UUID,
    payload: RecaptureRequest,
    request: Request,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Record a visit for a known customer from the front desk; submitted values overwrite"""
    submission = payload.model_dump(mode="json", exclude_unset=True)
    return admin_recapture(
        db,
        course,
        customer_id,
        submission,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


@router.put("/{customer_id}/email-preference", response_model=EmailPreferenceResult)
async def update_email_preference(
    customer_id: UUID,
    preference: EmailPreference,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Opt a customer out of (or back into) email; opting out cancels pending emails"""
    customer = customer_service.get_customer(db, course.id, customer_id)
    cancelled = set_email_opt_out(db, customer, preference.opted_out)
    return EmailPreferenceResult(
        customer_id=customer.id,
        opted_out_of_email=customer.opted_out_of_email,
        cancelled_emails=cancelled,
    )


@router.post("/{customer_id}/tags", status_code=status.HTTP_201_CREATED)
async def add_tag(
    customer_id: UUID,
    assignment: TagAssignment,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
    current_staff: StaffUser = Depends(get_current_staff),
):
    """Tag a customer (no-op if already tagged)"""
    added = TagService.attach(db, course.id, customer_id, assignment.tag_id, created_by=current_staff.name)
    return {"success": True, "added": added}


@router.delete("/{customer_id}/tags/{tag_id}")
async def remove_tag(
    customer_id: UUID,
    tag_id: UUID,
    db: Session = Depends(get_db),
    course: Course = Depends(get_staff_course),
):
    """Remove a tag from a customer"""
    TagService.detach(db, course.id, customer_id, tag_id)
    return {"success": True}
