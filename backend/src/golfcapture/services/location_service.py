"""
Location Service
QR placements, their default rewards and QR code links
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, List, Tuple
from urllib.parse import urlencode
from uuid import UUID

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, aliased

from golfcapture.config import settings
from golfcapture.exceptions import NotFoundError
from golfcapture.models.capture import Capture
from golfcapture.models.course import Course
from golfcapture.models.location import Location

logger = logging.getLogger(__name__)

QR_IMAGE_SIZE = "300x300"


class LocationService:
    """Location management"""

    @staticmethod
    def list_locations(db: Session, course_id: UUID) -> List[Tuple[Location, int, int]]:
        """Locations with (total captures, captures in the last 7 days)"""
        week_ago = datetime.utcnow() - timedelta(days=7)
        recent = aliased(Capture)

        rows = (
            db.query(Location, func.count(func.distinct(Capture.id)), func.count(func.distinct(recent.id)))
            .outerjoin(Capture, Capture.location_id == Location.id)
            .outerjoin(recent, and_(recent.location_id == Location.id, recent.created_at >= week_ago))
            .filter(Location.course_id == course_id)
            .group_by(Location.id)
            .order_by(Location.name)
            .all()
        )
        return [(location, total, last_7_days) for location, total, last_7_days in rows]

    @staticmethod
    def get_location(db: Session, course_id: UUID, location_id: UUID) -> Location:
        location = db.query(Location).filter(Location.id == location_id, Location.course_id == course_id).first()
        if not location:
            raise NotFoundError("Location", location_id)
        return location

    @staticmethod
    def create_location(db: Session, course_id: UUID, data: Dict[str, Any]) -> Location:
        location = Location(course_id=course_id, **{k: v for k, v in data.items() if v is not None})
        db.add(location)
        db.commit()
        db.refresh(location)

        logger.info(f"Created location '{location.name}' ({location.placement_type})")
        return location

    @staticmethod
    def update_location(db: Session, course_id: UUID, location_id: UUID, updates: Dict[str, Any]) -> Location:
        location = LocationService.get_location(db, course_id, location_id)
        for field, value in updates.items():
            setattr(location, field, value)
        db.commit()
        db.refresh(location)
        return location

    @staticmethod
    def qr_info(course: Course, location: Location) -> Dict[str, Any]:
        """Capture URL encoded by the QR code and an image URL for it"""
        capture_url = f"{settings.FRONTEND_URL.rstrip('/')}/capture?{urlencode({'location': str(location.id)})}"
        if course.slug != settings.DEFAULT_COURSE_SLUG:
            capture_url = f"{capture_url}&{urlencode({'course': course.slug})}"

        qr_image_url = f"{settings.QR_IMAGE_SERVICE_URL}?{urlencode({'size': QR_IMAGE_SIZE, 'data': capture_url})}"

        return {
            "location_id": location.id,
            "location_name": location.name,
            "capture_url": capture_url,
            "qr_image_url": qr_image_url,
        }
