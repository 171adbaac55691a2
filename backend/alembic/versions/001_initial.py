"""
Initial migration - Create all tables

Revision ID: 001_initial
Create Date: 2026-09-01 00:00:00.000000
"""

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# Revision identifiers
revision = "001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create all tables"""

    # Create courses table
    op.create_table(
        "courses",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(100), unique=True, nullable=False),
        sa.Column("address", sa.String(500)),
        sa.Column("city", sa.String(100)),
        sa.Column("state", sa.String(50)),
        sa.Column("zip", sa.String(10)),
        sa.Column("timezone", sa.String(50), default="America/New_York"),
        sa.Column("reward_code_prefix", sa.String(2), nullable=False, server_default="CP"),
        sa.Column("manager_name", sa.String(255)),
        sa.Column("manager_phone", sa.String(20)),
        sa.Column("settings", postgresql.JSON(), default={}),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
    )
    op.create_index("ix_courses_slug", "courses", ["slug"])

    # Create staff_users table
    op.create_table(
        "staff_users",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True)),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("role", sa.Enum("admin", "staff", name="staffrole"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, default=True),
        sa.Column("last_login", sa.DateTime()),
        sa.Column("failed_login_attempts", sa.Integer(), default=0),
        sa.Column("locked_until", sa.DateTime()),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_staff_users_email", "staff_users", ["email"])
    op.create_index("ix_staff_users_course_id", "staff_users", ["course_id"])

    # Create locations table
    op.create_table(
        "locations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(255)),
        sa.Column("placement_type", sa.String(50)),
        sa.Column("is_active", sa.Boolean(), default=True),
        sa.Column("reward_type", sa.String(100), default="free_beer"),
        sa.Column("reward_description", sa.String(255), default="Free beer after your round"),
        sa.Column("reward_emoji", sa.String(10), default="🍺"),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_locations_course_id", "locations", ["course_id"])

    # Create customers table
    op.create_table(
        "customers",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(20)),
        sa.Column("zip", sa.String(10)),
        sa.Column("booking_source", sa.String(50)),
        sa.Column("is_local", sa.Boolean()),
        sa.Column("play_frequency", sa.String(50)),
        sa.Column("member_elsewhere", sa.Boolean()),
        sa.Column("first_time_visitor", sa.Boolean()),
        sa.Column("opted_out_of_email", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("visit_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_visit_at", sa.DateTime()),
        sa.Column("membership_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_membership_prospect", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("source", sa.String(50), nullable=False, server_default="capture"),
        sa.Column("source_id", sa.String(255)),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("course_id", "email", name="unique_email_per_course"),
        sa.UniqueConstraint("course_id", "phone", name="unique_phone_per_course"),
    )

    # Create indexes for customers
    op.create_index("ix_customers_course_id", "customers", ["course_id"])
    op.create_index("ix_customers_email", "customers", ["email"])
    op.create_index("ix_customers_phone", "customers", ["phone"])
    op.create_index("ix_customers_membership_score", "customers", ["membership_score"])
    op.create_index("ix_customers_is_membership_prospect", "customers", ["is_membership_prospect"])
    op.create_index("ix_customers_created_at", "customers", ["created_at"])

    # Create ab_tests table
    op.create_table(
        "ab_tests",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("location_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("variant_a_reward_type", sa.String(100), nullable=False),
        sa.Column("variant_a_description", sa.Text(), nullable=False),
        sa.Column("variant_a_emoji", sa.String(10)),
        sa.Column("variant_b_reward_type", sa.String(100), nullable=False),
        sa.Column("variant_b_description", sa.Text(), nullable=False),
        sa.Column("variant_b_emoji", sa.String(10)),
        sa.Column("is_active", sa.Boolean(), default=True),
        sa.Column("started_at", sa.DateTime()),
        sa.Column("ended_at", sa.DateTime()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_ab_tests_course_id", "ab_tests", ["course_id"])
    op.create_index("ix_ab_tests_location_id", "ab_tests", ["location_id"])
    op.create_index("ix_ab_tests_is_active", "ab_tests", ["is_active"])

    # Create captures table
    op.create_table(
        "captures",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True)),
        sa.Column("location_id", postgresql.UUID(as_uuid=True)),
        sa.Column("form_data", postgresql.JSON(), nullable=False),
        sa.Column("reward_code", sa.String(20), nullable=False, unique=True),
        sa.Column("reward_type", sa.String(100)),
        sa.Column("reward_description", sa.String(255)),
        sa.Column("reward_redeemed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("reward_redeemed_at", sa.DateTime()),
        sa.Column("reward_redeemed_by", sa.String(100)),
        sa.Column("ab_test_id", postgresql.UUID(as_uuid=True)),
        sa.Column("ab_variant", sa.String(1)),
        sa.Column("ip_address", sa.String(45)),
        sa.Column("user_agent", sa.Text()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["location_id"], ["locations.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["ab_test_id"], ["ab_tests.id"], ondelete="SET NULL"),
    )

    # Create indexes for captures
    op.create_index("ix_captures_course_id", "captures", ["course_id"])
    op.create_index("ix_captures_customer_id", "captures", ["customer_id"])
    op.create_index("ix_captures_location_id", "captures", ["location_id"])
    op.create_index("ix_captures_reward_code", "captures", ["reward_code"])
    op.create_index("ix_captures_ab_test_id", "captures", ["ab_test_id"])
    op.create_index("ix_captures_created_at", "captures", ["created_at"])

    # Create ab_test_results table
    op.create_table(
        "ab_test_results",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("ab_test_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("capture_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("variant", sa.String(1), nullable=False),
        sa.Column("redeemed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["ab_test_id"], ["ab_tests.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["capture_id"], ["captures.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_ab_test_results_ab_test_id", "ab_test_results", ["ab_test_id"])
    op.create_index("ix_ab_test_results_capture_id", "ab_test_results", ["capture_id"])

    # Create imports table
    op.create_table(
        "imports",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("source", sa.String(50), nullable=False),
        sa.Column("filename", sa.String(255)),
        sa.Column("file_size", sa.Integer()),
        sa.Column("total_rows", sa.Integer(), default=0),
        sa.Column("processed_rows", sa.Integer(), default=0),
        sa.Column("new_customers", sa.Integer(), default=0),
        sa.Column("matched_customers", sa.Integer(), default=0),
        sa.Column("skipped_rows", sa.Integer(), default=0),
        sa.Column("error_rows", sa.Integer(), default=0),
        sa.Column("errors", postgresql.JSON(), default=[]),
        sa.Column(
            "status",
            sa.Enum("pending", "processing", "completed", "failed", name="importstatus"),
            nullable=False,
        ),
        sa.Column("started_at", sa.DateTime()),
        sa.Column("completed_at", sa.DateTime()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_imports_course_id", "imports", ["course_id"])
    op.create_index("ix_imports_created_at", "imports", ["created_at"])

    # Create import_rows table
    op.create_table(
        "import_rows",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("import_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True)),
        sa.Column("row_number", sa.Integer(), nullable=False),
        sa.Column("raw_data", postgresql.JSON(), nullable=False),
        sa.Column(
            "action",
            sa.Enum("created", "matched", "skipped", "error", name="importrowaction"),
            nullable=False,
        ),
        sa.Column("match_type", sa.String(50)),
        sa.Column("error_message", sa.Text()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["import_id"], ["imports.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_import_rows_import_id", "import_rows", ["import_id"])

    # Create prospect_pipeline table
    op.create_table(
        "prospect_pipeline",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column(
            "status",
            sa.Enum("new", "contacted", "tour_scheduled", "joined", "passed", name="pipelinestatus"),
            nullable=False,
        ),
        sa.Column("assigned_to", sa.String(255)),
        sa.Column("notes", sa.Text()),
        sa.Column("last_activity_at", sa.DateTime()),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_prospect_pipeline_course_id", "prospect_pipeline", ["course_id"])
    op.create_index("ix_prospect_pipeline_status", "prospect_pipeline", ["status"])

    # Create email_templates table
    op.create_table(
        "email_templates",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("body_html", sa.Text(), nullable=False),
        sa.Column("body_text", sa.Text()),
        sa.Column("delay_hours", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_email_templates_course_id", "email_templates", ["course_id"])
    op.create_index("ix_email_templates_type", "email_templates", ["type"])

    # Create email_queue table
    op.create_table(
        "email_queue",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("template_id", postgresql.UUID(as_uuid=True)),
        sa.Column("to_email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(500), nullable=False),
        sa.Column("body_html", sa.Text(), nullable=False),
        sa.Column("body_text", sa.Text()),
        sa.Column("scheduled_for", sa.DateTime(), nullable=False),
        sa.Column(
            "status",
            sa.Enum("pending", "sending", "sent", "failed", "cancelled", name="emailstatus"),
            nullable=False,
        ),
        sa.Column("sent_at", sa.DateTime()),
        sa.Column("provider_message_id", sa.String(255)),
        sa.Column("error_message", sa.Text()),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["template_id"], ["email_templates.id"], ondelete="SET NULL"),
    )

    # Create indexes for email_queue
    op.create_index("ix_email_queue_course_id", "email_queue", ["course_id"])
    op.create_index("ix_email_queue_customer_id", "email_queue", ["customer_id"])
    op.create_index("ix_email_queue_scheduled_for", "email_queue", ["scheduled_for"])
    op.create_index("ix_email_queue_status", "email_queue", ["status"])

    # Create customer_segments table
    op.create_table(
        "customer_segments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text()),
        sa.Column("filters", postgresql.JSON(), nullable=False),
        sa.Column("created_by", postgresql.UUID(as_uuid=True)),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("updated_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["created_by"], ["staff_users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_customer_segments_course_id", "customer_segments", ["course_id"])

    # Create tags and customer_tags tables
    op.create_table(
        "tags",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("color", sa.String(7)),
        sa.Column("description", sa.String(255)),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("course_id", "name", name="unique_tag_name_per_course"),
    )
    op.create_index("ix_tags_course_id", "tags", ["course_id"])

    op.create_table(
        "customer_tags",
        sa.Column("customer_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("tag_id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime()),
        sa.Column("created_by", sa.String(100)),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
    )

    # Create revenue_events table
    op.create_table(
        "revenue_events",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("course_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("customer_id", postgresql.UUID(as_uuid=True)),
        sa.Column(
            "event_type",
            sa.Enum("membership", "green_fee", "pro_shop", "food_bev", name="revenueeventtype"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(10, 2), nullable=False),
        sa.Column("source", sa.String(100)),
        sa.Column("attributed_location_id", postgresql.UUID(as_uuid=True)),
        sa.Column("notes", sa.Text()),
        sa.Column("recorded_by", postgresql.UUID(as_uuid=True)),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime()),
        sa.ForeignKeyConstraint(["course_id"], ["courses.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["attributed_location_id"], ["locations.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["recorded_by"], ["staff_users.id"], ondelete="SET NULL"),
    )
    op.create_index("ix_revenue_events_course_id", "revenue_events", ["course_id"])
    op.create_index("ix_revenue_events_customer_id", "revenue_events", ["customer_id"])
    op.create_index("ix_revenue_events_event_type", "revenue_events", ["event_type"])
    op.create_index("ix_revenue_events_event_date", "revenue_events", ["event_date"])


def downgrade() -> None:
    """Drop all tables"""
    op.drop_table("revenue_events")
    op.drop_table("customer_tags")
    op.drop_table("tags")
    op.drop_table("customer_segments")
    op.drop_table("email_queue")
    op.drop_table("email_templates")
    op.drop_table("prospect_pipeline")
    op.drop_table("import_rows")
    op.drop_table("imports")
    op.drop_table("ab_test_results")
    op.drop_table("captures")
    op.drop_table("ab_tests")
    op.drop_table("customers")
    op.drop_table("locations")
    op.drop_table("staff_users")
    op.drop_table("courses")

    # Drop enums
    op.execute("DROP TYPE IF EXISTS revenueeventtype")
    op.execute("DROP TYPE IF EXISTS emailstatus")
    op.execute("DROP TYPE IF EXISTS pipelinestatus")
    op.execute("DROP TYPE IF EXISTS importrowaction")
    op.execute("DROP TYPE IF EXISTS importstatus")
    op.execute("DROP TYPE IF EXISTS staffrole")
