"""
Tests for Staff API Routes
Customers, prospects, locations, tags, A/B tests, revenue and analytics
"""

from uuid import UUID, uuid4

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from golfcapture.models.ab_test import ABTestResult
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.email import EmailQueueEntry, EmailStatus
from golfcapture.models.location import Location
from golfcapture.models.tag import Tag
from golfcapture.services.ab_test_service import ABTestService
from golfcapture.services.capture_service import submit_capture


class TestAppEndpoints:
    def test_root(self, client: TestClient):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, client: TestClient):
        assert client.get("/health").json()["status"] == "healthy"

    def test_api_info(self, client: TestClient):
        data = client.get("/api/info").json()
        assert data["features"]["qr_capture"] is True
        assert data["features"]["sms_alerts"] is False

    def test_staff_routes_require_token(self, client: TestClient):
        for path in ("/customers", "/prospects", "/locations", "/analytics", "/revenue/summary"):
            assert client.get(path).status_code == 401


class TestCustomerRoutes:
    def test_list_with_capture_counts(
        self, client: TestClient, db: Session, test_course: Course, test_customer: Customer, auth_headers: dict
    ):
        submit_capture(
            db,
            {
                "first_name": "Pat",
                "last_name": "Green",
                "email": "pat.green@example.com",
                "phone": "8435550300",
                "booking_source": "website",
                "is_local": False,
            },
        )

        response = client.get("/customers", headers=auth_headers)
        assert response.status_code == 200

        data = response.json()
        assert data["total"] == 2
        counts = {c["email"]: c["capture_count"] for c in data["customers"]}
        assert counts == {"pat.green@example.com": 1, "john.doe@example.com": 0}

    def test_list_filters(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        assert client.get("/customers", params={"search": "doe"}, headers=auth_headers).json()["total"] == 1
        assert client.get("/customers", params={"is_local": "false"}, headers=auth_headers).json()["total"] == 0
        assert client.get("/customers", params={"min_score": 60}, headers=auth_headers).json()["total"] == 0

    def test_detail(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        response = client.get(f"/customers/{test_customer.id}", headers=auth_headers)
        assert response.status_code == 200

        data = response.json()
        assert data["email"] == "john.doe@example.com"
        assert data["captures"] == []
        assert data["pipeline_entry"] is None

    def test_detail_other_course_hidden(
        self, client: TestClient, db: Session, other_course: Course, auth_headers: dict
    ):
        stranger = Customer(course_id=other_course.id, email="stranger@example.com")
        db.add(stranger)
        db.commit()

        assert client.get(f"/customers/{stranger.id}", headers=auth_headers).status_code == 404

    def test_patch_rescores(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        response = client.patch(
            f"/customers/{test_customer.id}",
            json={"play_frequency": "weekly", "member_elsewhere": False, "phone": "(843) 555-4321"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        data = response.json()
        assert data["phone"] == "8435554321"
        # local 30 + weekly 25 + not a member elsewhere 15 + contact 5 + zip 5
        assert data["membership_score"] == 80
        assert data["is_membership_prospect"] is True

    def test_patch_email_owned_by_another(
        self, client: TestClient, db: Session, test_course: Course, test_customer: Customer, auth_headers: dict
    ):
        db.add(Customer(course_id=test_course.id, email="taken@example.com"))
        db.commit()

        response = client.patch(
            f"/customers/{test_customer.id}", json={"email": "Taken@Example.com"}, headers=auth_headers
        )
        assert response.status_code == 409
        assert response.json()["reason"] == "duplicate_email"

    def test_recapture(self, client: TestClient, test_customer: Customer, auth_headers: dict):
        response = client.post(
            f"/customers/{test_customer.id}/recapture",
            json={"first_name": "Johnny", "play_frequency": "weekly"},
            headers=auth_headers,
        )
        assert response.status_code == 201

        data = response.json()
        assert data["is_new_customer"] is False
        assert data["visit_count"] == 2

        detail = client.get(f"/customers/{test_customer.id}", headers=auth_headers).json()
        assert detail["first_name"] == "Johnny"
        assert len(detail["captures"]) == 1

    def test_email_preference(
        self,
        client: TestClient,
        db: Session,
        test_course: Course,
        test_customer: Customer,
        email_templates: dict,
        auth_headers: dict,
    ):
        db.add(
            EmailQueueEntry(
                course_id=test_course.id,
                customer_id=test_customer.id,
                template_id=email_templates["followup_local"].id,
                to_email=test_customer.email,
                subject="Hi",
                body_html="<p>Hi</p>",
                status=EmailStatus.PENDING,
            )
        )
        db.commit()

        response = client.put(
            f"/customers/{test_customer.id}/email-preference", json={"opted_out": True}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json() == {
            "customer_id": str(test_customer.id),
            "opted_out_of_email": True,
            "cancelled_emails": 1,
        }

    def test_tagging(self, client: TestClient, db: Session, test_customer: Customer, auth_headers: dict):
        tag = client.post("/tags", json={"name": "VIP", "color": "#FFD700"}, headers=auth_headers).json()

        first = client.post(f"/customers/{test_customer.id}/tags", json={"tag_id": tag["id"]}, headers=auth_headers)
        again = client.post(f"/customers/{test_customer.id}/tags", json={"tag_id": tag["id"]}, headers=auth_headers)
        assert first.json()["added"] is True
        assert again.json()["added"] is False

        tagged = client.get("/customers", params={"tag_id": tag["id"]}, headers=auth_headers).json()
        assert tagged["total"] == 1

        tags = client.get("/tags", headers=auth_headers).json()["tags"]
        assert tags[0]["customer_count"] == 1

        removed = client.delete(f"/customers/{test_customer.id}/tags/{tag['id']}", headers=auth_headers)
        assert removed.status_code == 200
        assert client.get("/tags", headers=auth_headers).json()["tags"][0]["customer_count"] == 0


class TestTagRoutes:
    def test_duplicate_name(self, client: TestClient, db: Session, test_course: Course, auth_headers: dict):
        db.add(Tag(course_id=test_course.id, name="Hot Lead"))
        db.commit()

        response = client.post("/tags", json={"name": "Hot Lead"}, headers=auth_headers)
        assert response.status_code == 409

    def test_invalid_color(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post("/tags", json={"name": "Red", "color": "red"}, headers=auth_headers)
        assert response.status_code == 422


class TestProspectRoutes:
    def _customers(self, db: Session, course: Course):
        db.add_all(
            [
                Customer(course_id=course.id, email="hot@example.com", is_local=True, membership_score=85),
                Customer(course_id=course.id, email="warm@example.com", is_local=True, membership_score=55),
                Customer(course_id=course.id, email="away@example.com", is_local=False, membership_score=70),
            ]
        )
        db.commit()

    def test_browse_defaults(self, client: TestClient, db: Session, test_course: Course, auth_headers: dict):
        self._customers(db, test_course)

        data = client.get("/prospects", headers=auth_headers).json()

        assert data["min_score"] == 50
        assert [p["email"] for p in data["prospects"]] == ["hot@example.com", "warm@example.com"]

    def test_browse_without_locality(self, client: TestClient, db: Session, test_course: Course, auth_headers: dict):
        self._customers(db, test_course)

        params = {"min_score": 60, "require_local": "false"}
        data = client.get("/prospects", params=params, headers=auth_headers).json()

        assert [p["email"] for p in data["prospects"]] == ["hot@example.com", "away@example.com"]


class TestLocationRoutes:
    def test_create_list_update(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post(
            "/locations",
            json={
                "name": "Halfway House",
                "placement_type": "turn",
                "reward_type": "food_bev_5",
                "reward_description": "$5 Food & Bev Credit",
                "reward_emoji": "🍔",
            },
            headers=auth_headers,
        )
        assert response.status_code == 201
        location_id = response.json()["id"]

        listing = client.get("/locations", headers=auth_headers).json()["locations"]
        assert listing[0]["total_captures"] == 0

        update = client.patch(f"/locations/{location_id}", json={"is_active": False}, headers=auth_headers)
        assert update.json()["is_active"] is False

    def test_capture_counts(
        self, client: TestClient, db: Session, test_course: Course, test_location: Location, auth_headers: dict
    ):
        submit_capture(
            db,
            {
                "first_name": "Lee",
                "last_name": "Links",
                "email": "lee@example.com",
                "phone": "8435550400",
                "booking_source": "walkin",
                "is_local": False,
                "location_id": str(test_location.id),
            },
        )

        listing = client.get("/locations", headers=auth_headers).json()["locations"]
        assert listing[0]["total_captures"] == 1
        assert listing[0]["captures_last_7_days"] == 1

    def test_qr_code(self, client: TestClient, test_location: Location, auth_headers: dict):
        response = client.get(f"/locations/{test_location.id}/qr", headers=auth_headers)
        assert response.status_code == 200

        data = response.json()
        assert data["capture_url"] == f"http://localhost:3000/capture?location={test_location.id}"
        assert data["qr_image_url"].startswith("https://api.qrserver.com/v1/create-qr-code/?size=300x300&data=")

    def test_unknown_location(self, client: TestClient, test_course: Course, auth_headers: dict):
        assert client.get(f"/locations/{uuid4()}/qr", headers=auth_headers).status_code == 404


class TestABTestRoutes:
    def _payload(self, location: Location) -> dict:
        return {
            "location_id": str(location.id),
            "name": "Beer vs soft drink",
            "variant_a_reward_type": "free_beer",
            "variant_a_description": "Free beer",
            "variant_b_reward_type": "free_soft_drink",
            "variant_b_description": "Free soft drink",
        }

    def test_new_test_ends_running_one(
        self, client: TestClient, db: Session, test_location: Location, auth_headers: dict
    ):
        first = client.post("/ab-tests", json=self._payload(test_location), headers=auth_headers).json()
        second = client.post("/ab-tests", json=self._payload(test_location), headers=auth_headers)
        assert second.status_code == 201

        tests = {t["id"]: t for t in client.get("/ab-tests", headers=auth_headers).json()["tests"]}
        assert tests[first["id"]]["is_active"] is False
        assert tests[first["id"]]["ended_at"] is not None
        assert tests[second.json()["id"]]["is_active"] is True

    def test_results_and_end(
        self, client: TestClient, db: Session, test_course: Course, test_location: Location, auth_headers: dict
    ):
        test_id = client.post("/ab-tests", json=self._payload(test_location), headers=auth_headers).json()["id"]
        stats = ABTestService.variant_stats(db, UUID(test_id))
        assert stats == {
            "A": {"captures": 0, "redemptions": 0, "redemption_rate": 0.0},
            "B": {"captures": 0, "redemptions": 0, "redemption_rate": 0.0},
        }

        ended = client.post(f"/ab-tests/{test_id}/end", headers=auth_headers)
        assert ended.json()["is_active"] is False
        assert db.query(ABTestResult).count() == 0

    def test_list_with_recorded_captures(
        self, client: TestClient, test_location: Location, capture_payload: dict, auth_headers: dict
    ):
        test_id = client.post("/ab-tests", json=self._payload(test_location), headers=auth_headers).json()["id"]

        codes = []
        for email, phone in (("first.golfer@example.com", "8435550301"), ("second.golfer@example.com", "8435550302")):
            payload = {**capture_payload, "email": email, "phone": phone, "locationId": str(test_location.id)}
            response = client.post("/capture", json=payload)
            assert response.status_code == 201
            assert response.json()["reward_type"] in ("free_beer", "free_soft_drink")
            codes.append(response.json()["reward_code"])
        assert client.post(f"/rewards/{codes[0]}/redeem", json={}, headers=auth_headers).status_code == 200

        response = client.get("/ab-tests", headers=auth_headers)
        assert response.status_code == 200

        [listed] = response.json()["tests"]
        assert listed["id"] == test_id
        results = listed["variant_results"]
        assert set(results) == {"A", "B"}
        assert sum(variant["captures"] for variant in results.values()) == 2
        assert sum(variant["redemptions"] for variant in results.values()) == 1

    def test_location_from_other_course(
        self, client: TestClient, db: Session, other_course: Course, test_course: Course, auth_headers: dict
    ):
        foreign = Location(course_id=other_course.id, name="Range", placement_type="other")
        db.add(foreign)
        db.commit()

        response = client.post("/ab-tests", json=self._payload(foreign), headers=auth_headers)
        assert response.status_code == 404


class TestRevenueRoutes:
    def test_record_and_summarize(
        self, client: TestClient, test_customer: Customer, test_location: Location, auth_headers: dict
    ):
        for payload in (
            {
                "event_type": "membership",
                "amount": "2500.00",
                "customer_id": str(test_customer.id),
                "attributed_location_id": str(test_location.id),
            },
            {"event_type": "green_fee", "amount": "65.50", "attributed_location_id": str(test_location.id)},
            {"event_type": "green_fee", "amount": "45.00", "event_date": "2026-04-01"},
        ):
            assert client.post("/revenue", json=payload, headers=auth_headers).status_code == 201

        summary = client.get("/revenue/summary", headers=auth_headers).json()
        assert float(summary["total"]) == 2610.50
        assert summary["by_type"]["green_fee"]["count"] == 2
        assert float(summary["by_type"]["green_fee"]["total"]) == 110.50
        assert summary["by_location"][0]["location"] == "Bar Coaster"
        assert summary["by_location"][0]["count"] == 2

        april = client.get(
            "/revenue", params={"start_date": "2026-04-01", "end_date": "2026-04-30"}, headers=auth_headers
        ).json()
        assert len(april["events"]) == 1

    def test_recorded_by_staff(self, client: TestClient, test_admin, test_course: Course, auth_headers: dict):
        response = client.post("/revenue", json={"event_type": "pro_shop", "amount": "10.00"}, headers=auth_headers)
        assert response.json()["recorded_by"] == str(test_admin.id)

    def test_amount_must_be_positive(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post("/revenue", json={"event_type": "pro_shop", "amount": "0"}, headers=auth_headers)
        assert response.status_code == 422

    def test_unknown_customer(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post(
            "/revenue",
            json={"event_type": "food_bev", "amount": "80.00", "customer_id": str(uuid4())},
            headers=auth_headers,
        )
        assert response.status_code == 404


class TestAnalyticsRoutes:
    def test_snapshot(
        self, client: TestClient, db: Session, test_course: Course, test_location: Location, auth_headers: dict
    ):
        result = submit_capture(
            db,
            {
                "first_name": "Sam",
                "last_name": "Sand",
                "email": "sam@example.com",
                "phone": "8435550500",
                "booking_source": "golfnow",
                "is_local": True,
                "play_frequency": "weekly",
                "member_elsewhere": False,
                "location_id": str(test_location.id),
            },
        )
        submit_capture(
            db,
            {
                "first_name": "Vi",
                "last_name": "Sitor",
                "email": "vi@example.com",
                "phone": "8435550501",
                "booking_source": "website",
                "is_local": False,
            },
        )
        client.post(f"/rewards/{result['reward_code']}/redeem", headers=auth_headers)

        data = client.get("/analytics", headers=auth_headers).json()

        assert data["total_customers"] == 2
        assert data["total_captures"] == 2
        assert data["captures_today"] == 2
        assert data["redemption_rate"] == 50
        assert data["prospects_count"] == 1
        assert data["booking_sources"] == {"golfnow": 1, "website": 1}
        assert data["local_vs_visitor"] == {"local": 1, "visitor": 1}
        assert data["captures_by_location"] == [{"name": "Bar Coaster", "count": 1}]
        assert data["play_frequency"] == {"weekly": 1}
        assert data["pipeline"]["new"] == 1
        assert data["pending_emails"] == 0

    def test_empty_course(self, client: TestClient, test_course: Course, auth_headers: dict):
        data = client.get("/analytics", headers=auth_headers).json()
        assert data["redemption_rate"] == 0
        assert data["captures_by_location"] == []
