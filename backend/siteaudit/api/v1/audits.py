"""
Audit endpoints.
"""
import logging

from fastapi import APIRouter, status

from siteaudit.config import settings
from siteaudit.core.exceptions import AuditDataError, BadRequestError
from siteaudit.models.audit import AuditSnapshot
from siteaudit.schemas.audit import (
    CompareRequest,
    CompareResponse,
    ScoreRequest,
    ScoringConfigResponse,
    SnapshotInput,
    SnapshotResponse,
)
from siteaudit.schemas.common import ErrorResponse
from siteaudit.services.audit_diff import compare_snapshots
from siteaudit.services.scoring import score_category
from siteaudit.services.snapshots import build_snapshot

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/audits", tags=["Audits"])


def _to_snapshot(data: ScoreRequest) -> AuditSnapshot:
    categories = [
        score_category(c.name, c.label, [check.to_check() for check in c.checks])
        for c in data.categories
    ]
    if isinstance(data, SnapshotInput):
        return build_snapshot(
            data.url,
            categories,
            created_at=data.created_at,
            snapshot_id=data.id,
        )
    return build_snapshot(data.url, categories)


@router.post(
    "/score",
    response_model=SnapshotResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def score_audit(data: ScoreRequest) -> SnapshotResponse:
    """Score a set of categories and return the resulting snapshot."""
    try:
        snapshot = _to_snapshot(data)
    except AuditDataError as e:
        raise BadRequestError(str(e))

    return SnapshotResponse.from_snapshot(snapshot)


@router.post(
    "/compare",
    response_model=CompareResponse,
    responses={400: {"model": ErrorResponse}},
)
async def compare_audits(data: CompareRequest) -> CompareResponse:
    """Compare two snapshots of the same site, earlier snapshot first."""
    try:
        first = _to_snapshot(data.first)
        second = _to_snapshot(data.second)
    except AuditDataError as e:
        raise BadRequestError(str(e))

    if first.site != second.site:
        raise BadRequestError(
            f"Cannot compare snapshots of different sites ({first.site} vs {second.site})"
        )

    comparison = compare_snapshots(first, second)
    return CompareResponse.model_validate(comparison)


@router.get("/scoring-config", response_model=ScoringConfigResponse)
async def get_scoring_config() -> ScoringConfigResponse:
    """Return the category weights and severity penalties in use."""
    return ScoringConfigResponse(
        category_weights=settings.CATEGORY_WEIGHTS,
        severity_penalties=settings.SEVERITY_PENALTIES,
    )
