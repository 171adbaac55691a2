"""
Pydantic Schemas Package
Exports all request/response schemas
"""

from golfcapture.schemas.ab_test import ABTestCreate, ABTestList, ABTestResponse, ABTestWithResults
from golfcapture.schemas.analytics import AnalyticsSnapshot
from golfcapture.schemas.capture import CaptureRequest, CaptureResponse, RedeemRequest, RewardStatus
from golfcapture.schemas.customer import (
    CustomerDetail,
    CustomerList,
    CustomerResponse,
    CustomerUpdate,
    ProspectList,
    RecaptureRequest,
)
from golfcapture.schemas.email import (
    EmailTemplateCreate,
    EmailTemplateResponse,
    EmailTemplateUpdate,
    SegmentCampaignRequest,
)
from golfcapture.schemas.import_batch import ImportBatchDetail, ImportList, ImportResult
from golfcapture.schemas.location import LocationCreate, LocationList, LocationResponse, LocationUpdate, QRCodeInfo
from golfcapture.schemas.pipeline import PipelineEntryCreate, PipelineEntryResponse, PipelineEntryUpdate, PipelineList
from golfcapture.schemas.revenue import RevenueEventCreate, RevenueEventResponse, RevenueSummary
from golfcapture.schemas.segment import SegmentCreate, SegmentFilters, SegmentResponse, SegmentUpdate
from golfcapture.schemas.staff import LoginRequest, StaffCreate, StaffResponse, Token
from golfcapture.schemas.tag import TagCreate, TagList, TagResponse

__all__ = [
    # A/B tests
    "ABTestCreate",
    "ABTestList",
    "ABTestResponse",
    "ABTestWithResults",
    # Analytics
    "AnalyticsSnapshot",
    # Capture
    "CaptureRequest",
    "CaptureResponse",
    "RedeemRequest",
    "RewardStatus",
    # Customer
    "CustomerDetail",
    "CustomerList",
    "CustomerResponse",
    "CustomerUpdate",
    "ProspectList",
    "RecaptureRequest",
    # Email
    "EmailTemplateCreate",
    "EmailTemplateResponse",
    "EmailTemplateUpdate",
    "SegmentCampaignRequest",
    # Imports
    "ImportBatchDetail",
    "ImportList",
    "ImportResult",
    # Locations
    "LocationCreate",
    "LocationList",
    "LocationResponse",
    "LocationUpdate",
    "QRCodeInfo",
    # Pipeline
    "PipelineEntryCreate",
    "PipelineEntryResponse",
    "PipelineEntryUpdate",
    "PipelineList",
    # Revenue
    "RevenueEventCreate",
    "RevenueEventResponse",
    "RevenueSummary",
    # Segments
    "SegmentCreate",
    "SegmentFilters",
    "SegmentResponse",
    "SegmentUpdate",
    # Staff
    "LoginRequest",
    "StaffCreate",
    "StaffResponse",
    "Token",
    # Tags
    "TagCreate",
    "TagList",
    "TagResponse",
]
