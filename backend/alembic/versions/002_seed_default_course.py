"""
Seed the default course with QR locations, tags and follow-up email templates

Revision ID: 002_seed_default_course
Revises: 001_initial
Create Date: 2026-09-01 00:10:00.000000
"""

import uuid
from datetime import datetime

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# Revision identifiers
revision = "002_seed_default_course"
down_revision = "001_initial"
branch_labels = None
depends_on = None

COURSE_SLUG = "crescent-pointe"

courses = sa.table(
    "courses",
    sa.column("id", postgresql.UUID(as_uuid=True)),
    sa.column("name", sa.String),
    sa.column("slug", sa.String),
    sa.column("city", sa.String),
    sa.column("state", sa.String),
    sa.column("zip", sa.String),
    sa.column("timezone", sa.String),
    sa.column("reward_code_prefix", sa.String),
    sa.column("settings", postgresql.JSON),
    sa.column("created_at", sa.DateTime),
    sa.column("updated_at", sa.DateTime),
)

locations = sa.table(
    "locations",
    sa.column("id", postgresql.UUID(as_uuid=True)),
    sa.column("course_id", postgresql.UUID(as_uuid=True)),
    sa.column("name", sa.String),
    sa.column("placement_type", sa.String),
    sa.column("description", sa.String),
    sa.column("is_active", sa.Boolean),
    sa.column("reward_type", sa.String),
    sa.column("reward_description", sa.String),
    sa.column("reward_emoji", sa.String),
    sa.column("created_at", sa.DateTime),
    sa.column("updated_at", sa.DateTime),
)

tags = sa.table(
    "tags",
    sa.column("id", postgresql.UUID(as_uuid=True)),
    sa.column("course_id", postgresql.UUID(as_uuid=True)),
    sa.column("name", sa.String),
    sa.column("color", sa.String),
    sa.column("description", sa.String),
    sa.column("created_at", sa.DateTime),
)

email_templates = sa.table(
    "email_templates",
    sa.column("id", postgresql.UUID(as_uuid=True)),
    sa.column("course_id", postgresql.UUID(as_uuid=True)),
    sa.column("type", sa.String),
    sa.column("name", sa.String),
    sa.column("subject", sa.String),
    sa.column("body_html", sa.Text),
    sa.column("body_text", sa.Text),
    sa.column("delay_hours", sa.Integer),
    sa.column("is_active", sa.Boolean),
    sa.column("created_at", sa.DateTime),
    sa.column("updated_at", sa.DateTime),
)

LOCATIONS = [
    ("Cart", "cart", "QR code on the golf cart steering wheel or dash"),
    ("Bar Coaster", "coaster", "QR code printed on bar drink coasters"),
    ("Turn Station", "turn", "QR code at the turn station between holes 9 and 10"),
    ("Restaurant Table", "table_tent", "Table tent in the restaurant"),
]

TAGS = [
    ("Membership Prospect", "#10B981", "High potential membership candidate"),
    ("VIP", "#F59E0B", "High-value customer"),
    ("Do Not Contact", "#EF4444", "Customer asked not to receive marketing"),
]

TEMPLATES = [
    (
        "same_day_thanks",
        "Same-Day Thank You",
        "Thanks for visiting {{course_name}}, {{first_name}}!",
        "<h2>Thanks for stopping by, {{first_name}}!</h2>"
        "<p>We hope you enjoyed your day at {{course_name}}.</p>"
        "<p>Your reward code: <strong>{{reward_code}}</strong></p>"
        "<p>See you again soon!</p><p>- The {{course_name}} Team</p>",
        "Thanks for stopping by, {{first_name}}! We hope you enjoyed your day at {{course_name}}. "
        "Your reward code: {{reward_code}}. See you again soon! - The {{course_name}} Team",
        0,
    ),
    (
        "followup_local",
        "Local Follow-Up (3 days)",
        "{{first_name}}, your next round is waiting!",
        "<h2>Hey {{first_name}},</h2>"
        "<p>Great having you at {{course_name}}! As a local golfer, a membership could save you "
        "money on every round.</p><p>Visits so far: {{visit_count}}</p>"
        "<p>Reply to this email or call the pro shop to learn more.</p><p>- The {{course_name}} Team</p>",
        "Hey {{first_name}}, great having you at {{course_name}}! As a local golfer, a membership could "
        "save you money on every round. Visits so far: {{visit_count}}. Reply or call the pro shop to learn "
        "more. - The {{course_name}} Team",
        72,
    ),
    (
        "followup_visitor",
        "Visitor Follow-Up (3 days)",
        "{{first_name}}, come back and see us!",
        "<h2>Hi {{first_name}},</h2>"
        "<p>We loved having you at {{course_name}}. Planning another trip to the area? "
        "We'd love to have you back on the course.</p><p>- The {{course_name}} Team</p>",
        "Hi {{first_name}}, we loved having you at {{course_name}}. Planning another trip to the area? "
        "We'd love to have you back on the course. - The {{course_name}} Team",
        72,
    ),
    (
        "repeat_visitor_3",
        "Repeat Visitor (3rd Visit)",
        "{{first_name}}, you're becoming a regular!",
        "<h2>{{first_name}}, {{visit_count}} visits and counting!</h2>"
        "<p>You're becoming one of our regulars at {{course_name}}.</p>"
        "<p>Members enjoy priority tee times and pro shop discounts. Let's find the right membership "
        "for you.</p><p>- The {{course_name}} Team</p>",
        "{{first_name}}, {{visit_count}} visits and counting! Members enjoy priority tee times and pro shop "
        "discounts. Let's find the right membership for you. - The {{course_name}} Team",
        0,
    ),
]


def upgrade() -> None:
    """Insert the default course and its starter data"""
    now = datetime.utcnow()
    course_id = uuid.uuid4()

    op.bulk_insert(
        courses,
        [
            {
                "id": course_id,
                "name": "Crescent Pointe",
                "slug": COURSE_SLUG,
                "city": "Myrtle Beach",
                "state": "SC",
                "zip": "29579",
                "timezone": "America/New_York",
                "reward_code_prefix": "CP",
                "settings": {},
                "created_at": now,
                "updated_at": now,
            }
        ],
    )

    op.bulk_insert(
        locations,
        [
            {
                "id": uuid.uuid4(),
                "course_id": course_id,
                "name": name,
                "placement_type": placement_type,
                "description": description,
                "is_active": True,
                "reward_type": "free_beer",
                "reward_description": "Free beer after your round",
                "reward_emoji": "🍺",
                "created_at": now,
                "updated_at": now,
            }
            for name, placement_type, description in LOCATIONS
        ],
    )

    op.bulk_insert(
        tags,
        [
            {
                "id": uuid.uuid4(),
                "course_id": course_id,
                "name": name,
                "color": color,
                "description": description,
                "created_at": now,
            }
            for name, color, description in TAGS
        ],
    )

    op.bulk_insert(
        email_templates,
        [
            {
                "id": uuid.uuid4(),
                "course_id": course_id,
                "type": template_type,
                "name": name,
                "subject": subject,
                "body_html": body_html,
                "body_text": body_text,
                "delay_hours": delay_hours,
                "is_active": True,
                "created_at": now,
                "updated_at": now,
            }
            for template_type, name, subject, body_html, body_text, delay_hours in TEMPLATES
        ],
    )


def downgrade() -> None:
    """Remove the default course; its rows cascade"""
    op.execute(sa.text("DELETE FROM courses WHERE slug = :slug").bindparams(slug=COURSE_SLUG))
