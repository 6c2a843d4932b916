"""
Audit Diff Service

Compares two audit snapshots of the same site and classifies every check:

- fixed:     fail -> pass
- regressed: pass -> fail
- changed:   any other status change (e.g. fail -> warning)
- new:       only in the later snapshot
- removed:   only in the earlier snapshot
- unchanged: same status in both

Categories are joined by name and checks by id. Neither snapshot is modified.
"""

import logging
from dataclasses import dataclass, field

from siteaudit.models.audit import (
    AuditSnapshot,
    Category,
    ChangeType,
    Check,
    CheckSeverity,
    CheckStatus,
)

logger = logging.getLogger(__name__)

CHANGE_PRIORITY = {
    ChangeType.FIXED: 0,
    ChangeType.REGRESSED: 1,
    ChangeType.CHANGED: 2,
    ChangeType.NEW: 3,
    ChangeType.REMOVED: 4,
    ChangeType.UNCHANGED: 5,
}


@dataclass(frozen=True)
class CheckDiff:
    """Transition of one check between two snapshots."""
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


@dataclass(frozen=True)
class CategoryDiff:
    """Both sides of one category plus its sorted check transitions."""
    name: str
    label: str
    before: Category
    after: Category
    checks: list[CheckDiff] = field(default_factory=list)

    @property
    def score_delta(self) -> int:
        return self.after.score - self.before.score

    def count(self, change: ChangeType) -> int:
        return sum(1 for check in self.checks if check.change == change)

    @property
    def fixed_count(self) -> int:
        return self.count(ChangeType.FIXED)

    @property
    def regressed_count(self) -> int:
        return self.count(ChangeType.REGRESSED)

    @property
    def changed_count(self) -> int:
        # New checks are reported alongside changed ones
        return self.count(ChangeType.CHANGED) + self.count(ChangeType.NEW)

    @property
    def has_changes(self) -> bool:
        return self.fixed_count > 0 or self.regressed_count > 0 or self.changed_count > 0


@dataclass(frozen=True)
class DiffSummary:
    """Totals across all category diffs of one comparison."""
    total_fixed: int
    total_regressed: int
    total_changed: int
    total_new: int
    total_removed: int
    score_delta: int
    issues_delta: int


@dataclass(frozen=True)
class SnapshotComparison:
    before: AuditSnapshot
    after: AuditSnapshot
    categories: list[CategoryDiff]
    summary: DiffSummary


def classify_change(before: Check | None, after: Check | None) -> ChangeType:
    """Classify the transition of a single check id."""
    if before is None and after is None:
        raise ValueError("At least one side of a check transition is required")
    if before is None:
        return ChangeType.NEW
    if after is None:
        return ChangeType.REMOVED
    if before.status == after.status:
        return ChangeType.UNCHANGED
    if before.status == CheckStatus.FAIL and after.status == CheckStatus.PASS:
        return ChangeType.FIXED
    if before.status == CheckStatus.PASS and after.status == CheckStatus.FAIL:
        return ChangeType.REGRESSED
    return ChangeType.CHANGED


def _union_keys(*mappings: dict) -> list:
    # Preserves first-seen order across mappings
    return list(dict.fromkeys(key for mapping in mappings for key in mapping))


def _prefer_after(before: Check | None, after: Check | None, attr: str) -> str | None:
    value = getattr(after, attr) if after is not None else None
    if value is None and before is not None:
        value = getattr(before, attr)
    return value


def _diff_check(check_id: str, before: Check | None, after: Check | None) -> CheckDiff:
    current = after if after is not None else before
    return CheckDiff(
        id=check_id,
        title=current.title,
        description=current.description,
        before_status=before.status if before else None,
        after_status=after.status if after else None,
        change=classify_change(before, after),
        recommendation=_prefer_after(before, after, "recommendation"),
        code_snippet=_prefer_after(before, after, "code_snippet"),
        before_severity=before.severity if before else None,
        after_severity=after.severity if after else None,
    )


def diff_categories(name: str, before: Category | None, after: Category | None) -> CategoryDiff:
    """Diff one category; a missing side is treated as an empty category."""
    if before is None and after is None:
        raise ValueError(f"Category {name!r} is missing from both snapshots")

    label = (after or before).label
    before = before or Category.empty(name, label)
    after = after or Category.empty(name, label)

    before_checks = before.check_map()
    after_checks = after.check_map()

    checks = [
        _diff_check(check_id, before_checks.get(check_id), after_checks.get(check_id))
        for check_id in _union_keys(before_checks, after_checks)
    ]
    # sorted() is stable, so ties keep their input order
    checks = sorted(checks, key=lambda c: CHANGE_PRIORITY[c.change])

    return CategoryDiff(name=name, label=label, before=before, after=after, checks=checks)


def compute_diffs(before: AuditSnapshot, after: AuditSnapshot) -> list[CategoryDiff]:
    """Diff two snapshots category by category.

    ``before`` must be the chronologically earlier snapshot; use
    ``order_snapshots`` when that is not already known.
    """
    before_categories = before.category_map()
    after_categories = after.category_map()

    diffs = [
        diff_categories(name, before_categories.get(name), after_categories.get(name))
        for name in _union_keys(before_categories, after_categories)
    ]

    logger.debug(f"Diffed snapshots {before.id} -> {after.id}: {len(diffs)} categories")
    return diffs


def order_snapshots(first: AuditSnapshot, second: AuditSnapshot) -> tuple[AuditSnapshot, AuditSnapshot]:
    """Return ``(before, after)`` by creation time; ties keep argument order."""
    if first.created_at <= second.created_at:
        return first, second
    return second, first


def summarize_diffs(
    before: AuditSnapshot,
    after: AuditSnapshot,
    diffs: list[CategoryDiff],
) -> DiffSummary:
    """Aggregate per-category transitions into comparison totals."""
    totals = {change: sum(d.count(change) for d in diffs) for change in ChangeType}

    return DiffSummary(
        total_fixed=totals[ChangeType.FIXED],
        total_regressed=totals[ChangeType.REGRESSED],
        total_changed=totals[ChangeType.CHANGED],
        total_new=totals[ChangeType.NEW],
        total_removed=totals[ChangeType.REMOVED],
        score_delta=after.score - before.score,
        issues_delta=after.issues_count - before.issues_count,
    )


def compare_snapshots(first: AuditSnapshot, second: AuditSnapshot) -> SnapshotComparison:
    """Order two snapshots, diff them and summarize the result."""
    before, after = order_snapshots(first, second)
    diffs = compute_diffs(before, after)
    summary = summarize_diffs(before, after, diffs)

    logger.info(
        f"Compared {before.site} snapshots {before.id} -> {after.id}: "
        f"{summary.total_fixed} fixed, {summary.total_regressed} regressed, "
        f"score {summary.score_delta:+d}"
    )

    return SnapshotComparison(before=before, after=after, categories=diffs, summary=summary)
