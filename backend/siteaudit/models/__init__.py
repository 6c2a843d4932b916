"""
In-memory audit models for SiteAudit.
"""
from siteaudit.models.audit import (
    AuditSnapshot,
    Category,
    ChangeType,
    Check,
    CheckSeverity,
    CheckStatus,
)

__all__ = [
    "AuditSnapshot",
    "Category",
    "ChangeType",
    "Check",
    "CheckSeverity",
    "CheckStatus",
]
