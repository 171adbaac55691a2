"""
Authentication Dependencies
FastAPI dependencies for protecting staff routes and resolving the staff's course
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from golfcapture.config import settings
from golfcapture.database import get_db
from golfcapture.models.course import Course
from golfcapture.models.staff_user import StaffUser
from golfcapture.utils.auth import decode_access_token

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_current_staff(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> StaffUser:
    """
    Get the current authenticated staff user from JWT token

    Args:
        credentials: Bearer token from request header
        db: Database session

    Returns:
        StaffUser: Current authenticated staff user

    Raises:
        HTTPException: If authentication fails
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        user_id = UUID(decode_access_token(credentials.credentials))
    except ValueError:
        user_id = None

    user = db.query(StaffUser).filter(StaffUser.id == user_id).first() if user_id else None

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user account",
        )

    # Check if account is locked
    if user.locked_until and user.locked_until > datetime.utcnow():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is temporarily locked due to multiple failed login attempts",
        )

    return user


async def require_admin(current_staff: StaffUser = Depends(get_current_staff)) -> StaffUser:
    """Ensure the staff user is an admin"""
    if not current_staff.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    return current_staff


async def get_staff_course(
    current_staff: StaffUser = Depends(get_current_staff),
    db: Session = Depends(get_db),
) -> Course:
    """
    Course the staff user works at

    Staff without a course association operate on the default course.
    """
    if current_staff.course_id is not None:
        course = db.query(Course).filter(Course.id == current_staff.course_id).first()
    else:
        course = db.query(Course).filter(Course.slug == settings.DEFAULT_COURSE_SLUG).first()

    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return course
