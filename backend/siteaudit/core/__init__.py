"""
Core utilities for SiteAudit.
"""
from siteaudit.core.exceptions import (
    AuditDataError,
    BadRequestError,
    DuplicateCategoryError,
    DuplicateCheckError,
    InvalidCheckError,
    ScoringConfigError,
)
from siteaudit.core.logging_config import configure_logging

__all__ = [
    "AuditDataError",
    "BadRequestError",
    "DuplicateCategoryError",
    "DuplicateCheckError",
    "InvalidCheckError",
    "ScoringConfigError",
    "configure_logging",
]
