"""
Pytest Configuration and Fixtures
"""

import os
from typing import Generator

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-golfcapture")
os.environ.setdefault("EMAIL_WORKER_ENABLED", "false")
os.environ.setdefault("SENDGRID_API_KEY", "")
os.environ.setdefault("TWILIO_ACCOUNT_SID", "")
os.environ.setdefault("DEBUG", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import golfcapture.database as app_database
import golfcapture.models  # noqa: F401
from golfcapture.config import settings
from golfcapture.database import Base, get_db
from golfcapture.main import app
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.email import EmailTemplate, EmailTemplateType
from golfcapture.models.location import Location
from golfcapture.models.staff_user import StaffRole, StaffUser
from golfcapture.services.scoring import apply_membership_score
from golfcapture.utils.auth import create_access_token, get_password_hash

# In-memory SQLite shared across connections
engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Point the app's lazy engine/session factory at the test database
app_database._engine = engine
app_database._SessionLocal = TestingSessionLocal

ADMIN_PASSWORD = "adminpassword123"
STAFF_PASSWORD = "staffpassword123"


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Fresh schema per test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.rollback()
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database override"""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_course(db: Session) -> Course:
    """The default course"""
    course = Course(
        name="Crescent Pointe",
        slug=settings.DEFAULT_COURSE_SLUG,
        city="Myrtle Beach",
        state="SC",
        zip="29579",
        reward_code_prefix="CP",
        manager_name="Pat Manager",
        manager_phone="8435550100",
    )
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def other_course(db: Session) -> Course:
    course = Course(name="Tidewater", slug="tidewater", city="North Myrtle Beach", state="SC", reward_code_prefix="TW")
    db.add(course)
    db.commit()
    db.refresh(course)
    return course


@pytest.fixture
def test_location(db: Session, test_course: Course) -> Location:
    location = Location(
        course_id=test_course.id,
        name="Bar Coaster",
        placement_type="coaster",
        reward_type="free_beer",
        reward_description="Free beer after your round",
        reward_emoji="🍺",
    )
    db.add(location)
    db.commit()
    db.refresh(location)
    return location


@pytest.fixture
def test_customer(db: Session, test_course: Course) -> Customer:
    """A customer captured once before"""
    customer = Customer(
        course_id=test_course.id,
        first_name="John",
        last_name="Doe",
        email="john.doe@example.com",
        phone="8435551234",
        zip="29579",
        booking_source="golfnow",
        is_local=True,
        play_frequency="monthly",
        member_elsewhere=True,
        visit_count=1,
    )
    apply_membership_score(customer)
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return customer


@pytest.fixture
def email_templates(db: Session, test_course: Course) -> dict:
    """Active follow-up templates keyed by type"""
    templates = {}
    for template_type, delay_hours in (
        (EmailTemplateType.SAME_DAY_THANKS, 0),
        (EmailTemplateType.FOLLOWUP_LOCAL, 72),
        (EmailTemplateType.FOLLOWUP_VISITOR, 72),
        (EmailTemplateType.REPEAT_VISITOR_3, 0),
    ):
        template = EmailTemplate(
            course_id=test_course.id,
            type=template_type.value,
            name=template_type.value.replace("_", " ").title(),
            subject="Hi {{first_name}} from {{course_name}}",
            body_html="<p>Code {{reward_code}}, visit {{visit_count}}</p>",
            body_text="Code {{reward_code}}, visit {{visit_count}}",
            delay_hours=delay_hours,
            is_active=True,
        )
        db.add(template)
        templates[template_type.value] = template
    db.commit()
    return templates


def _make_staff(db: Session, course: Course, email: str, password: str, role: StaffRole) -> StaffUser:
    user = StaffUser(
        course_id=course.id,
        email=email,
        name=email.split("@")[0].replace(".", " ").title(),
        hashed_password=get_password_hash(password),
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def test_admin(db: Session, test_course: Course) -> StaffUser:
    return _make_staff(db, test_course, "gm.admin@crescentpointegolf.com", ADMIN_PASSWORD, StaffRole.ADMIN)


@pytest.fixture
def test_staff(db: Session, test_course: Course) -> StaffUser:
    return _make_staff(db, test_course, "bar.staff@crescentpointegolf.com", STAFF_PASSWORD, StaffRole.STAFF)


@pytest.fixture
def auth_headers(test_admin: StaffUser) -> dict:
    """Bearer headers for the course admin"""
    access_token = create_access_token(data={"sub": str(test_admin.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def staff_headers(test_staff: StaffUser) -> dict:
    """Bearer headers for a non-admin staff member"""
    access_token = create_access_token(data={"sub": str(test_staff.id)})
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def capture_payload(faker) -> dict:
    """A valid public form submission for a local weekly golfer"""
    return {
        "firstName": faker.first_name(),
        "lastName": faker.last_name(),
        "email": "Golfer.One@Example.com ",
        "phone": "(843) 555-0199",
        "zip": "29579",
        "bookingSource": "website",
        "isLocal": True,
        "playFrequency": "weekly",
        "memberElsewhere": False,
        "firstTime": True,
    }


@pytest.fixture
def mock_sendgrid(mocker):
    """Mock SendGrid client for queue processing"""
    mock_service = mocker.patch("golfcapture.services.email_service.SendGridService")
    mock_instance = mock_service.return_value
    mock_instance.send_email = mocker.AsyncMock(return_value={"success": True, "message_id": "sg_msg_123"})
    return mock_instance
