"""
Audit models for check verdicts, categories and snapshots.

These are plain in-memory records. They are immutable once built: scores and
counters on a Category are produced by the scorer, never assigned by hand.
"""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum as PyEnum
from typing import Any

from siteaudit.core.exceptions import (
    DuplicateCategoryError,
    DuplicateCheckError,
    InvalidCheckError,
)


class CheckStatus(str, PyEnum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    INFO = "info"


class CheckSeverity(str, PyEnum):
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"
    INFO = "info"


class ChangeType(str, PyEnum):
    FIXED = "fixed"
    REGRESSED = "regressed"
    CHANGED = "changed"
    NEW = "new"
    REMOVED = "removed"
    UNCHANGED = "unchanged"


@dataclass(frozen=True)
class Check:
    """A single pass/fail/warning/info verdict produced by an analyzer."""

    id: str
    status: CheckStatus
    severity: CheckSeverity
    title: str
    description: str = ""
    recommendation: str | None = None
    code_snippet: str | None = None
    value: str | None = None
    expected: str | None = None
    learn_more_url: str | None = None

    def __post_init__(self):
        if not self.id:
            raise InvalidCheckError("Check id must be a non-empty string")
        try:
            object.__setattr__(self, "status", CheckStatus(self.status))
        except ValueError:
            raise InvalidCheckError(
                f"Check {self.id!r} has unknown status {self.status!r}"
            ) from None
        try:
            object.__setattr__(self, "severity", CheckSeverity(self.severity))
        except ValueError:
            raise InvalidCheckError(
                f"Check {self.id!r} has unknown severity {self.severity!r}"
            ) from None

    @property
    def is_issue(self) -> bool:
        return self.status in (CheckStatus.FAIL, CheckStatus.WARNING)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["severity"] = self.severity.value
        return data


@dataclass(frozen=True)
class Category:
    """A named group of checks with its derived score and counters.

    Build instances with ``siteaudit.services.scoring.score_category`` so
    the score always matches the checks it was computed from. Check ids
    must be unique within a category.
    """

    name: str
    label: str
    score: int
    checks: tuple[Check, ...] = ()
    pass_count: int = 0
    fail_count: int = 0
    warning_count: int = 0

    def __post_init__(self):
        object.__setattr__(self, "checks", tuple(self.checks))
        seen: set[str] = set()
        for check in self.checks:
            if check.id in seen:
                raise DuplicateCheckError(
                    f"Category {self.name!r} contains check {check.id!r} more than once"
                )
            seen.add(check.id)

    @classmethod
    def empty(cls, name: str, label: str) -> "Category":
        """Placeholder for a category missing from one side of a diff."""
        return cls(name=name, label=label, score=0)

    @property
    def total_checks(self) -> int:
        return len(self.checks)

    def check_map(self) -> dict[str, Check]:
        return {check.id: check for check in self.checks}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "score": self.score,
            "pass_count": self.pass_count,
            "fail_count": self.fail_count,
            "warning_count": self.warning_count,
            "checks": [check.to_dict() for check in self.checks],
        }


@dataclass(frozen=True)
class AuditSnapshot:
    """One complete audit of one site at one point in time."""

    id: str
    site: str
    url: str
    created_at: datetime
    score: int
    categories: tuple[Category, ...] = field(default_factory=tuple)
    issues_count: int = 0

    def __post_init__(self):
        seen: set[str] = set()
        for category in self.categories:
            if category.name in seen:
                raise DuplicateCategoryError(
                    f"Snapshot {self.id!r} contains category {category.name!r} more than once"
                )
            seen.add(category.name)

    def category_map(self) -> dict[str, Category]:
        return {category.name: category for category in self.categories}

    def get_category(self, name: str) -> Category | None:
        return self.category_map().get(name)

    def __repr__(self) -> str:
        return f"<AuditSnapshot {self.id} {self.site} ({self.score})>"
