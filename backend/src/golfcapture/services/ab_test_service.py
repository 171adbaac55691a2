"""
A/B Test Service
Reward experiments per location and their results
"""

import logging
from datetime import datetime
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from golfcapture.exceptions import NotFoundError
from golfcapture.models.ab_test import ABTest, ABTestResult, Variant
from golfcapture.models.location import Location

logger = logging.getLogger(__name__)


class ABTestService:
    """Create, report on and end A/B tests"""

    @staticmethod
    def create_test(db: Session, course_id: UUID, data: Dict[str, Any]) -> ABTest:
        """
        Start a test at a location

        Any other active test at that location is ended first, so a location
        never runs two tests at once.
        """
        location = (
            db.query(Location).filter(Location.id == data["location_id"], Location.course_id == course_id).first()
        )
        if not location:
            raise NotFoundError("Location", data["location_id"])

        now = datetime.utcnow()
        ended = (
            db.query(ABTest)
            .filter(ABTest.location_id == location.id, ABTest.is_active.is_(True))
            .update({ABTest.is_active: False, ABTest.ended_at: now}, synchronize_session=False)
        )
        if ended:
            logger.info(f"Ended {ended} active test(s) at location {location.id}")

        test = ABTest(course_id=course_id, is_active=True, started_at=now, **data)
        db.add(test)
        db.commit()
        db.refresh(test)

        logger.info(f"Started A/B test '{test.name}' at location {location.name}")
        return test

    @staticmethod
    def get_test(db: Session, course_id: UUID, test_id: UUID) -> ABTest:
        test = db.query(ABTest).filter(ABTest.id == test_id, ABTest.course_id == course_id).first()
        if not test:
            raise NotFoundError("A/B test", test_id)
        return test

    @staticmethod
    def end_test(db: Session, course_id: UUID, test_id: UUID) -> ABTest:
        test = ABTestService.get_test(db, course_id, test_id)
        if test.is_active:
            test.is_active = False
            test.ended_at = datetime.utcnow()
            db.commit()
            db.refresh(test)
        return test

    @staticmethod
    def variant_stats(db: Session, test_id: UUID) -> Dict[str, Dict[str, Any]]:
        """Per-variant captures, redemptions and redemption rate (%)"""
        rows = (
            db.query(
                ABTestResult.variant,
                func.count(ABTestResult.id),
                func.sum(case((ABTestResult.redeemed.is_(True), 1), else_=0)),
            )
            .filter(ABTestResult.ab_test_id == test_id)
            .group_by(ABTestResult.variant)
            .all()
        )
        stats = {variant.value: {"captures": 0, "redemptions": 0, "redemption_rate": 0.0} for variant in Variant}
        for variant, captures, redemptions in rows:
            redemptions = int(redemptions or 0)
            stats[Variant(variant).value] = {
                "captures": captures,
                "redemptions": redemptions,
                "redemption_rate": round(redemptions / captures * 100, 1) if captures else 0.0,
            }
        return stats

    @staticmethod
    def list_tests(db: Session, course_id: UUID) -> List[Dict[str, Any]]:
        tests = db.query(ABTest).filter(ABTest.course_id == course_id).order_by(ABTest.started_at.desc()).all()
        return [{"test": test, "results": ABTestService.variant_stats(db, test.id)} for test in tests]
