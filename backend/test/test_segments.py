"""
Tests for Customer Segments
"""

from datetime import datetime, timedelta

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.services.segment_service import SegmentService, segment_query


def _add_customers(db: Session, course: Course):
    now = datetime.utcnow()
    customers = [
        Customer(
            course_id=course.id,
            email="weekly.local@example.com",
            booking_source="golfnow",
            is_local=True,
            play_frequency="weekly",
            member_elsewhere=False,
            visit_count=4,
            membership_score=80,
            last_visit_at=now - timedelta(days=3),
        ),
        Customer(
            course_id=course.id,
            email="visitor@example.com",
            booking_source="website",
            is_local=False,
            play_frequency="rarely",
            visit_count=1,
            membership_score=20,
            last_visit_at=now - timedelta(days=90),
        ),
        Customer(
            course_id=course.id,
            email="optout@example.com",
            booking_source="golfnow",
            is_local=True,
            visit_count=2,
            membership_score=55,
            opted_out_of_email=True,
            source="golfnow_import",
        ),
    ]
    db.add_all(customers)
    db.commit()
    return customers


def _emails(query):
    return sorted(customer.email for customer in query.all())


class TestSegmentFilters:
    def test_empty_filters_exclude_opted_out(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        assert _emails(segment_query(db, test_course.id, {})) == ["visitor@example.com", "weekly.local@example.com"]

    def test_include_opted_out(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        assert segment_query(db, test_course.id, {"exclude_opted_out": False}).count() == 3

    def test_list_filters(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        filters = {"booking_source": ["golfnow"], "exclude_opted_out": False}
        assert _emails(segment_query(db, test_course.id, filters)) == ["optout@example.com", "weekly.local@example.com"]
        imported = {"source": ["golfnow_import"], "exclude_opted_out": False}
        assert _emails(segment_query(db, test_course.id, imported)) == ["optout@example.com"]

    def test_bool_and_threshold_filters(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        assert _emails(segment_query(db, test_course.id, {"is_local": False})) == ["visitor@example.com"]
        assert _emails(segment_query(db, test_course.id, {"min_score": 50, "min_visits": 3})) == [
            "weekly.local@example.com"
        ]
        assert _emails(segment_query(db, test_course.id, {"member_elsewhere": False})) == ["weekly.local@example.com"]

    def test_recency(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        assert _emails(segment_query(db, test_course.id, {"max_days_since_visit": 30})) == ["weekly.local@example.com"]

    def test_course_scoped(self, db: Session, test_course: Course, other_course: Course):
        _add_customers(db, test_course)
        assert segment_query(db, other_course.id, {}).count() == 0


class TestSegmentService:
    def test_list_with_counts(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        SegmentService.create_segment(db, test_course.id, "Locals", {"is_local": True})

        rows = SegmentService.list_segments(db, test_course.id)

        assert [(segment.name, count) for segment, count in rows] == [("Locals", 1)]

    def test_members_ordered_by_score(self, db: Session, test_course: Course):
        _add_customers(db, test_course)
        segment = SegmentService.create_segment(db, test_course.id, "Everyone", {"exclude_opted_out": False})

        members, total = SegmentService.members(db, test_course.id, segment.id, limit=2)

        assert total == 3
        assert [m.membership_score for m in members] == [80, 55]


class TestSegmentRoutes:
    def test_create_preview_members_export(self, client: TestClient, db: Session, test_course: Course, auth_headers):
        _add_customers(db, test_course)

        preview = client.post("/segments/preview", json={"booking_source": ["golfnow"]}, headers=auth_headers)
        assert preview.json() == {"customer_count": 1}

        response = client.post(
            "/segments",
            json={"name": "GolfNow regulars", "filters": {"booking_source": ["golfnow"], "min_visits": 2}},
            headers=auth_headers,
        )
        assert response.status_code == 201
        segment = response.json()
        assert segment["filters"] == {"booking_source": ["golfnow"], "min_visits": 2, "exclude_opted_out": True}

        listing = client.get("/segments", headers=auth_headers)
        assert listing.json()["segments"][0]["customer_count"] == 1

        members = client.get(f"/segments/{segment['id']}/customers", headers=auth_headers)
        assert members.json()["total"] == 1
        assert members.json()["customers"][0]["email"] == "weekly.local@example.com"

        export = client.get(f"/segments/{segment['id']}/export", headers=auth_headers)
        assert export.status_code == 200
        assert "segment-" in export.headers["content-disposition"]
        assert "weekly.local@example.com" in export.text

    def test_update_and_delete(self, client: TestClient, test_course: Course, auth_headers: dict):
        created = client.post("/segments", json={"name": "Temp"}, headers=auth_headers).json()

        updated = client.patch(f"/segments/{created['id']}", json={"name": "Renamed"}, headers=auth_headers)
        assert updated.json()["name"] == "Renamed"

        assert client.delete(f"/segments/{created['id']}", headers=auth_headers).json() == {"success": True}
        assert client.get(f"/segments/{created['id']}", headers=auth_headers).status_code == 404

    def test_invalid_filter_value(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post("/segments/preview", json={"play_frequency": ["daily"]}, headers=auth_headers)
        assert response.status_code == 422
