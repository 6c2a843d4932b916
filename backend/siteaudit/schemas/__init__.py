"""
Pydantic schemas for SiteAudit API.
"""
from siteaudit.schemas.common import (
    BaseSchema,
    ErrorResponse,
)
from siteaudit.schemas.audit import (
    CategoryDiffResponse,
    CategoryInput,
    CategoryResponse,
    CheckInput,
    CompareRequest,
    CompareResponse,
    ScoreRequest,
    ScoringConfigResponse,
    SnapshotInput,
    SnapshotResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "ErrorResponse",
    # Audit
    "CategoryDiffResponse",
    "CategoryInput",
    "CategoryResponse",
    "CheckInput",
    "CompareRequest",
    "CompareResponse",
    "ScoreRequest",
    "ScoringConfigResponse",
    "SnapshotInput",
    "SnapshotResponse",
]
