"""
Tests for CSV Import Merging
"""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from golfcapture.exceptions import ValidationError
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.import_batch import ImportBatch, ImportRow, ImportRowAction, ImportStatus
from golfcapture.services import import_service
from golfcapture.services.import_service import import_csv, import_rows, map_row, parse_bool, parse_csv

GOLFNOW_CSV = (
    "First Name,Last Name,Email,Phone,Zip\n"
    "John,Doe,JOHN.DOE@example.com,,\n"
    "Jane,Roe,jane.roe@example.com,(843) 555-2222,29577\n"
    ",,,,\n"
    "No,Contact,,,29579\n"
)


class TestParsing:
    def test_parse_csv_trims_and_drops_empty_rows(self):
        rows = parse_csv(" First Name , Email \n  Ann ,  ann@example.com \n,\n")
        assert rows == [{"First Name": "Ann", "Email": "ann@example.com"}]

    def test_parse_csv_strips_bom(self):
        rows = parse_csv("\ufeffemail\nbom@example.com\n".encode("utf-8"))
        assert rows == [{"email": "bom@example.com"}]

    def test_parse_csv_rejects_non_utf8(self):
        with pytest.raises(ValidationError):
            parse_csv("email\ncaf\xe9@example.com\n".encode("latin-1"))

    def test_parse_bool(self):
        assert parse_bool("Yes") is True
        assert parse_bool("0") is False
        assert parse_bool("maybe") is None
        assert parse_bool(None) is None

    def test_alias_order_first_non_empty_wins(self):
        row = {"Phone": "", "MobilePhone": "843-555-9999", "HomePhone": "843-555-0000"}
        assert map_row("clubessential", row)["phone"] == "843-555-9999"

    def test_generic_enums_validated(self):
        mapped = map_row("generic", {"email": "a@b.com", "booking_source": "Website", "play_frequency": "daily"})
        assert mapped["booking_source"] == "website"
        assert mapped["play_frequency"] is None


class TestImportRows:
    """Row-by-row merge semantics"""

    def test_golfnow_import(self, db: Session, test_course: Course, test_customer: Customer):
        result = import_csv(db, test_course.id, "golfnow", GOLFNOW_CSV.encode("utf-8"), filename="golfnow.csv")

        assert result["total_rows"] == 3
        assert result["matched"] == 1
        assert result["created"] == 1
        assert result["skipped"] == 1
        assert result["error_count"] == 0

        jane = db.query(Customer).filter(Customer.email == "jane.roe@example.com").one()
        assert jane.phone == "8435552222"
        assert jane.visit_count == 0
        assert jane.source == "golfnow_import"

        batch = db.query(ImportBatch).one()
        assert batch.status == ImportStatus.COMPLETED
        assert batch.filename == "golfnow.csv"
        assert batch.new_customers == 1
        assert batch.completed_at is not None

        skipped = db.query(ImportRow).filter(ImportRow.action == ImportRowAction.SKIPPED).one()
        assert skipped.error_message == "No email or phone"

    def test_match_never_overwrites_or_counts_visit(self, db: Session, test_course: Course, test_customer: Customer):
        rows = [{"first_name": "Johnny", "email": "john.doe@example.com", "play_frequency": "weekly"}]
        import_rows(db, test_course.id, "generic", rows)

        db.refresh(test_customer)
        assert test_customer.first_name == "John"
        assert test_customer.play_frequency == "monthly"
        assert test_customer.visit_count == 1

        audit = db.query(ImportRow).one()
        assert audit.action == ImportRowAction.MATCHED
        assert audit.match_type == "email"

    def test_match_fills_blank_fields(self, db: Session, test_course: Course, test_customer: Customer):
        test_customer.zip = None
        db.commit()

        import_rows(db, test_course.id, "golfnow", [{"Phone": "843.555.1234", "Zip": "29588"}])

        db.refresh(test_customer)
        assert test_customer.zip == "29588"

    def test_unknown_source_writes_nothing(self, db: Session, test_course: Course):
        with pytest.raises(ValidationError) as exc_info:
            import_rows(db, test_course.id, "teesheet", [{"email": "a@b.com"}])

        assert exc_info.value.field == "source"
        assert db.query(ImportBatch).count() == 0

    def test_row_error_recorded_and_import_continues(self, db: Session, test_course: Course, mocker):
        real_merge = import_service._merge_row

        def failing_merge(db, batch, source, row_number, row):
            if row_number == 1:
                raise RuntimeError("bad row")
            return real_merge(db, batch, source, row_number, row)

        mocker.patch("golfcapture.services.import_service._merge_row", side_effect=failing_merge)

        result = import_rows(
            db, test_course.id, "generic", [{"email": "first@example.com"}, {"email": "second@example.com"}]
        )

        assert result["error_count"] == 1
        assert result["created"] == 1
        batch = db.query(ImportBatch).one()
        assert batch.errors == [{"row": 1, "error": "bad row"}]
        error_row = db.query(ImportRow).filter(ImportRow.action == ImportRowAction.ERROR).one()
        assert error_row.error_message == "bad row"

    def test_duplicate_rows_in_one_file_create_one_customer(self, db: Session, test_course: Course):
        rows = [{"email": "dup@example.com"}, {"email": "DUP@example.com", "phone": "8435557777"}]
        result = import_rows(db, test_course.id, "generic", rows)

        assert result["created"] == 1
        assert result["matched"] == 1
        customer = db.query(Customer).one()
        assert customer.phone == "8435557777"


class TestImportRoutes:
    def test_upload(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.post(
            "/imports",
            data={"source": "golfnow"},
            files={"file": ("golfnow.csv", GOLFNOW_CSV.encode("utf-8"), "text/csv")},
            headers=auth_headers,
        )
        assert response.status_code == 201

        data = response.json()
        assert data["created"] == 2
        assert data["skipped"] == 1

        history = client.get("/imports", headers=auth_headers)
        assert history.status_code == 200
        assert [batch["id"] for batch in history.json()["imports"]] == [data["import_id"]]

        detail = client.get(f"/imports/{data['import_id']}", headers=auth_headers)
        assert detail.status_code == 200
        assert detail.json()["filename"] == "golfnow.csv"
        assert detail.json()["status"] == "completed"
        assert [row["action"] for row in detail.json()["rows"]] == ["created", "created", "skipped"]

    def test_unknown_import(self, client: TestClient, test_course: Course, auth_headers: dict):
        response = client.get(f"/imports/{uuid4()}", headers=auth_headers)
        assert response.status_code == 404

    def test_upload_requires_auth(self, client: TestClient, test_course: Course):
        response = client.post(
            "/imports",
            data={"source": "golfnow"},
            files={"file": ("golfnow.csv", b"Email\na@b.com\n", "text/csv")},
        )
        assert response.status_code == 401
