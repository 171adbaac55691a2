"""
Database Models Package
Exports all SQLAlchemy models
"""

from golfcapture.models.ab_test import ABTest, ABTestResult
from golfcapture.models.capture import Capture
from golfcapture.models.course import Course
from golfcapture.models.customer import Customer
from golfcapture.models.email import EmailQueueEntry, EmailTemplate
from golfcapture.models.import_batch import ImportBatch, ImportRow
from golfcapture.models.location import Location
from golfcapture.models.pipeline import ProspectPipelineEntry
from golfcapture.models.revenue import RevenueEvent
from golfcapture.models.segment import CustomerSegment
from golfcapture.models.staff_user import StaffUser
from golfcapture.models.tag import Tag, customer_tags

__all__ = [
    "ABTest",
    "ABTestResult",
    "Capture",
    "Course",
    "Customer",
    "CustomerSegment",
    "EmailQueueEntry",
    "EmailTemplate",
    "ImportBatch",
    "ImportRow",
    "Location",
    "ProspectPipelineEntry",
    "RevenueEvent",
    "StaffUser",
    "Tag",
    "customer_tags",
]
