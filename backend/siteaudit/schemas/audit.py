"""
Audit schemas.
"""
from datetime import datetime

from pydantic import Field

from siteaudit.models.audit import (
    AuditSnapshot,
    Category,
    ChangeType,
    Check,
    CheckSeverity,
    CheckStatus,
)
from siteaudit.schemas.common import BaseSchema
from siteaudit.services.scoring import is_uninformative


class CheckInput(BaseSchema):
    """A check verdict as emitted by an analyzer."""

    id: str = Field(..., min_length=1, description="Stable check id, unique within its category")
    status: CheckStatus
    severity: CheckSeverity
    title: str
    description: str = ""
    recommendation: str | None = None
    code_snippet: str | None = None
    value: str | None = None
    expected: str | None = None
    learn_more_url: str | None = None

    def to_check(self) -> Check:
        return Check(**self.model_dump())


class CategoryInput(BaseSchema):
    """A category of checks. Any score sent by the client is ignored."""

    name: str = Field(..., min_length=1, examples=["on-page"])
    label: str = Field(..., examples=["On-Page SEO"])
    checks: list[CheckInput] = Field(default_factory=list)


class ScoreRequest(BaseSchema):
    """Request to score a freshly produced set of categories."""

    url: str = Field(..., min_length=1, examples=["https://example.com"])
    categories: list[CategoryInput] = Field(default_factory=list)


class SnapshotInput(ScoreRequest):
    """A previously produced audit snapshot."""

    id: str | None = None
    created_at: datetime


class CompareRequest(BaseSchema):
    """Two snapshots of the same site, in any order."""

    first: SnapshotInput
    second: SnapshotInput


class CheckResponse(BaseSchema):
    id: str
    status: CheckStatus
    severity: CheckSeverity
    title: str
    description: str
    recommendation: str | None = None
    code_snippet: str | None = None
    value: str | None = None
    expected: str | None = None
    learn_more_url: str | None = None


class CategoryScoreResponse(BaseSchema):
    """Score and counters of one category."""

    name: str
    label: str
    score: int
    pass_count: int
    fail_count: int
    warning_count: int
    total_checks: int


class CategoryResponse(CategoryScoreResponse):
    """Category with its checks and whether it counted toward the overall score."""

    uninformative: bool
    checks: list[CheckResponse]

    @classmethod
    def from_category(cls, category: Category) -> "CategoryResponse":
        return cls(
            name=category.name,
            label=category.label,
            score=category.score,
            pass_count=category.pass_count,
            fail_count=category.fail_count,
            warning_count=category.warning_count,
            total_checks=category.total_checks,
            uninformative=is_uninformative(category),
            checks=[CheckResponse.model_validate(check) for check in category.checks],
        )


class SnapshotHeaderResponse(BaseSchema):
    id: str
    site: str
    url: str
    created_at: datetime
    score: int
    issues_count: int


class SnapshotResponse(SnapshotHeaderResponse):
    """A scored audit snapshot."""

    categories: list[CategoryResponse]

    @classmethod
    def from_snapshot(cls, snapshot: AuditSnapshot) -> "SnapshotResponse":
        return cls(
            id=snapshot.id,
            site=snapshot.site,
            url=snapshot.url,
            created_at=snapshot.created_at,
            score=snapshot.score,
            issues_count=snapshot.issues_count,
            categories=[CategoryResponse.from_category(c) for c in snapshot.categories],
        )


class CheckDiffResponse(BaseSchema):
    id: str
    title: str
    description: str
    before_status: CheckStatus | None
    after_status: CheckStatus | None
    change: ChangeType
    recommendation: str | None = None
    code_snippet: str | None = None
    before_severity: CheckSeverity | None = None
    after_severity: CheckSeverity | None = None


class CategoryDiffResponse(BaseSchema):
    """One category compared across two snapshots."""

    name: str
    label: str
    before: CategoryScoreResponse
    after: CategoryScoreResponse
    score_delta: int
    fixed_count: int
    regressed_count: int
    changed_count: int
    has_changes: bool
    checks: list[CheckDiffResponse]


class DiffSummaryResponse(BaseSchema):
    total_fixed: int
    total_regressed: int
    total_changed: int
    total_new: int
    total_removed: int
    score_delta: int
    issues_delta: int


class CompareResponse(BaseSchema):
    """Comparison of two snapshots, earlier snapshot first."""

    before: SnapshotHeaderResponse
    after: SnapshotHeaderResponse
    summary: DiffSummaryResponse
    categories: list[CategoryDiffResponse]


class ScoringConfigResponse(BaseSchema):
    """Weights and penalties currently used for scoring."""

    category_weights: dict[str, float]
    severity_penalties: dict[str, int]
