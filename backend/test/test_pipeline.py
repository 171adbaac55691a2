"""
Tests for the Prospect Pipeline
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from golfcapture.exceptions import ConflictError, NotFoundError
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.pipeline import PipelineStatus, ProspectPipelineEntry
from golfcapture.services.pipeline_service import PipelineService


class TestPipelineService:
    def test_add_customer(self, db: Session, test_course: Course, test_customer: Customer):
        entry = PipelineService.add_customer(
            db, test_course.id, test_customer.id, assigned_to="GM", notes="Asked about rates"
        )

        assert entry.status == PipelineStatus.NEW
        assert entry.assigned_to == "GM"
        assert entry.last_activity_at is not None

    def test_one_entry_per_customer(self, db: Session, test_course: Course, test_customer: Customer):
        PipelineService.add_customer(db, test_course.id, test_customer.id)

        with pytest.raises(ConflictError) as exc_info:
            PipelineService.add_customer(db, test_course.id, test_customer.id)

        assert exc_info.value.reason == "already_enrolled"
        assert db.query(ProspectPipelineEntry).count() == 1

    def test_enroll_prospect_is_insert_or_skip(self, db: Session, test_customer: Customer):
        assert PipelineService.enroll_prospect(db, test_customer) is not None
        assert PipelineService.enroll_prospect(db, test_customer) is None

    def test_customer_from_other_course(self, db: Session, other_course: Course, test_customer: Customer):
        with pytest.raises(NotFoundError):
            PipelineService.add_customer(db, other_course.id, test_customer.id)

    def test_update_touches_activity(self, db: Session, test_course: Course, test_customer: Customer):
        entry = PipelineService.add_customer(db, test_course.id, test_customer.id)
        before = entry.last_activity_at

        updated = PipelineService.update_entry(
            db, test_course.id, entry.id, {"status": PipelineStatus.TOUR_SCHEDULED, "notes": "Saturday 9am"}
        )

        assert updated.status == PipelineStatus.TOUR_SCHEDULED
        assert updated.notes == "Saturday 9am"
        assert updated.last_activity_at >= before

    def test_remove(self, db: Session, test_course: Course, test_customer: Customer):
        entry = PipelineService.add_customer(db, test_course.id, test_customer.id)
        PipelineService.remove_entry(db, test_course.id, entry.id)

        assert db.query(ProspectPipelineEntry).count() == 0
        with pytest.raises(NotFoundError):
            PipelineService.get_entry(db, test_course.id, entry.id)

    def test_status_counts(self, db: Session, test_course: Course, test_customer: Customer):
        other = Customer(course_id=test_course.id, email="jane@example.com")
        db.add(other)
        db.commit()
        first = PipelineService.add_customer(db, test_course.id, test_customer.id)
        PipelineService.add_customer(db, test_course.id, other.id)
        PipelineService.update_entry(db, test_course.id, first.id, {"status": PipelineStatus.JOINED})

        counts = PipelineService.status_counts(db, test_course.id)

        assert counts == {"new": 1, "contacted": 0, "tour_scheduled": 0, "joined": 1, "passed": 0}


class TestPipelineRoutes:
    def test_add_list_update_remove(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        response = client.post("/pipeline", json={"customer_id": str(test_customer.id)}, headers=auth_headers)
        assert response.status_code == 201
        entry_id = response.json()["id"]

        duplicate = client.post("/pipeline", json={"customer_id": str(test_customer.id)}, headers=auth_headers)
        assert duplicate.status_code == 409

        update = client.patch(f"/pipeline/{entry_id}", json={"status": "contacted"}, headers=auth_headers)
        assert update.status_code == 200
        assert update.json()["status"] == "contacted"

        listing = client.get("/pipeline", params={"status": "contacted"}, headers=auth_headers)
        data = listing.json()
        assert data["total"] == 1
        assert data["entries"][0]["customer"]["email"] == "john.doe@example.com"

        assert client.get("/pipeline", params={"status": "new"}, headers=auth_headers).json()["total"] == 0

        removed = client.delete(f"/pipeline/{entry_id}", headers=auth_headers)
        assert removed.json() == {"success": True}

    def test_invalid_status(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        response = client.get("/pipeline", params={"status": "maybe"}, headers=auth_headers)
        assert response.status_code == 422

    def test_unknown_entry(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.patch(f"/pipeline/{uuid4()}", json={"notes": "x"}, headers=auth_headers)
        assert response.status_code == 404
