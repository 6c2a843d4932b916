"""
Exceptions for SiteAudit.

Domain errors are raised by the scoring and diff services; the HTTP
exceptions are raised by the API layer.
"""
from fastapi import HTTPException, status


class AuditDataError(ValueError):
    """Check or category data handed to the core is malformed."""


class InvalidCheckError(AuditDataError):
    """A check carries an unknown status or severity, or no id."""


class DuplicateCheckError(AuditDataError):
    """A check id appears more than once within one category."""


class DuplicateCategoryError(AuditDataError):
    """A category name appears more than once within one snapshot."""


class ScoringConfigError(ValueError):
    """A penalty or weight table is unusable."""


class BadRequestError(HTTPException):
    """Bad request exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
