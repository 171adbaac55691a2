"""
Authentication Routes
Staff login and staff account management
"""

import logging
from datetime import datetime, timedelta
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from golfcapture.config import settings
from golfcapture.database import get_db
from golfcapture.dependencies.auth import get_current_staff, require_admin
from golfcapture.exceptions import ConflictError
from golfcapture.models.staff_user import StaffRole, StaffUser
from golfcapture.schemas.staff import LoginRequest, StaffCreate, StaffResponse, Token
from golfcapture.utils.auth import create_access_token, get_password_hash, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", response_model=Token)
async def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password

    Returns an access token. Accounts lock for 30 minutes after 5 failed attempts.
    """
    user = db.query(StaffUser).filter(StaffUser.email == login_data.email.lower()).first()

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # Check if account is locked
    if user.locked_until and user.locked_until > datetime.utcnow():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Account locked until {user.locked_until.isoformat()}",
        )

    if not verify_password(login_data.password, user.hashed_password):
        user.failed_login_attempts = (user.failed_login_attempts or 0) + 1

        if user.failed_login_attempts >= settings.MAX_LOGIN_ATTEMPTS:
            user.locked_until = datetime.utcnow() + timedelta(minutes=settings.LOCKOUT_MINUTES)
            db.commit()
            logger.warning(f"Staff account {user.email} locked after {user.failed_login_attempts} failed logins")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=(
                    "Account locked due to multiple failed login attempts. "
                    f"Try again in {settings.LOCKOUT_MINUTES} minutes."
                ),
            )

        db.commit()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is inactive")

    # Reset failed login attempts and update last login
    user.failed_login_attempts = 0
    user.locked_until = None
    user.last_login = datetime.utcnow()
    db.commit()
    db.refresh(user)

    access_token = create_access_token(data={"sub": str(user.id)})

    return {"access_token": access_token, "token_type": "bearer", "user": user}


@router.get("/me", response_model=StaffResponse)
async def get_current_staff_info(current_staff: StaffUser = Depends(get_current_staff)):
    return current_staff


# Admin Routes - Staff Management


@router.get("/staff", response_model=List[StaffResponse])
async def list_staff(current_staff: StaffUser = Depends(require_admin), db: Session = Depends(get_db)):
    """List staff accounts at the admin's course (admin only)"""
    return (
        db.query(StaffUser)
        .filter(StaffUser.course_id == current_staff.course_id)
        .order_by(StaffUser.created_at)
        .all()
    )


@router.post("/staff", response_model=StaffResponse, status_code=status.HTTP_201_CREATED)
async def create_staff(
    staff_data: StaffCreate,
    current_staff: StaffUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Create a staff account (admin only)

    - **email**: Login email (must be unique)
    - **password**: Min 8 characters with a letter and a digit
    - **role**: admin or staff (default: staff)
    """
    email = staff_data.email.lower()
    if db.query(StaffUser).filter(StaffUser.email == email).first():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")

    new_staff = StaffUser(
        course_id=current_staff.course_id,
        email=email,
        name=staff_data.name,
        hashed_password=get_password_hash(staff_data.password),
        role=staff_data.role,
        is_active=True,
    )
    db.add(new_staff)
    db.commit()
    db.refresh(new_staff)

    logger.info(f"Staff account {new_staff.email} created by {current_staff.email}")
    return new_staff


@router.post("/staff/{staff_id}/deactivate", response_model=StaffResponse)
async def deactivate_staff(
    staff_id: UUID,
    current_staff: StaffUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Deactivate a staff account (admin only)"""
    user = (
        db.query(StaffUser)
        .filter(StaffUser.id == staff_id, StaffUser.course_id == current_staff.course_id)
        .first()
    )
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Staff user not found")

    if user.id == current_staff.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot deactivate your own account")

    if user.role == StaffRole.ADMIN and user.is_active:
        active_admins = (
            db.query(StaffUser)
            .filter(
                StaffUser.course_id == user.course_id,
                StaffUser.role == StaffRole.ADMIN,
                StaffUser.is_active.is_(True),
            )
            .count()
        )
        if active_admins <= 1:
            raise ConflictError("Cannot deactivate the last active admin", reason="last_admin")

    user.is_active = False
    db.commit()
    db.refresh(user)

    logger.info(f"Staff account {user.email} deactivated by {current_staff.email}")
    return user
