"""
Scoring Service

Severity-weighted scoring for audit categories and the weighted overall score.

Category score:
- Starts at 100
- Failing check deducts the full severity penalty
- Warning deducts half the penalty (rounded down)
- Pass and info checks deduct nothing
- Clamped to 0-100

Overall score:
- Weighted mean of category scores, normalized over the weights in play
- Categories with only info checks (data source unavailable) are left out
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Mapping

from siteaudit.config import settings
from siteaudit.core.exceptions import (
    DuplicateCategoryError,
    ScoringConfigError,
)
from siteaudit.models.audit import Category, Check, CheckSeverity, CheckStatus

logger = logging.getLogger(__name__)

MAX_SCORE = 100
MIN_SCORE = 0


@dataclass(frozen=True)
class CategoryScore:
    """Result of scoring one category's checks."""
    score: int
    pass_count: int
    fail_count: int
    warning_count: int


def build_penalties(table: Mapping[str, int]) -> dict[CheckSeverity, int]:
    """Validate a severity -> penalty table and key it by CheckSeverity."""
    penalties: dict[CheckSeverity, int] = {}
    for key, value in table.items():
        try:
            severity = CheckSeverity(key)
        except ValueError:
            raise ScoringConfigError(f"Unknown severity in penalty table: {key!r}") from None
        if isinstance(value, bool) or not isinstance(value, int):
            raise ScoringConfigError(f"Penalty for {severity.value} must be an integer, got {value!r}")
        if value < 0:
            raise ScoringConfigError(f"Penalty for {severity.value} must not be negative")
        penalties[severity] = value

    missing = [s.value for s in CheckSeverity if s not in penalties]
    if missing:
        raise ScoringConfigError(f"Penalty table is missing severities: {', '.join(missing)}")
    return penalties


def build_weights(table: Mapping[str, float]) -> dict[str, float]:
    """Validate a category name -> weight table."""
    weights: dict[str, float] = {}
    for name, value in table.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ScoringConfigError(f"Weight for {name!r} must be a number, got {value!r}")
        if value < 0 or not math.isfinite(value):
            raise ScoringConfigError(f"Weight for {name!r} must be a finite non-negative number")
        weights[name] = float(value)
    return weights


def _check_penalty(check: Check, penalties: Mapping[CheckSeverity, int]) -> int:
    if check.status == CheckStatus.FAIL:
        return penalties[check.severity]
    if check.status == CheckStatus.WARNING:
        return penalties[check.severity] // 2
    return 0


def score_checks(
    checks: Iterable[Check],
    penalties: Mapping[str, int] | None = None,
) -> CategoryScore:
    """Reduce a list of checks to a score and pass/fail/warning counters.

    An empty list scores 100: nothing was evaluated, which callers must not
    read as "nothing failed".
    """
    table = build_penalties(settings.SEVERITY_PENALTIES if penalties is None else penalties)
    checks = list(checks)

    counts = Counter(check.status for check in checks)
    total_penalty = sum(_check_penalty(check, table) for check in checks)

    return CategoryScore(
        score=max(MIN_SCORE, min(MAX_SCORE, MAX_SCORE - total_penalty)),
        pass_count=counts[CheckStatus.PASS],
        fail_count=counts[CheckStatus.FAIL],
        warning_count=counts[CheckStatus.WARNING],
    )


def score_category(
    name: str,
    label: str,
    checks: Iterable[Check],
    penalties: Mapping[str, int] | None = None,
) -> Category:
    """Build a Category whose score and counters are derived from its checks."""
    checks = tuple(checks)
    result = score_checks(checks, penalties)
    logger.debug(
        f"Scored category {name}: {result.score} "
        f"({result.pass_count} pass, {result.fail_count} fail, {result.warning_count} warning)"
    )

    return Category(
        name=name,
        label=label,
        score=result.score,
        checks=checks,
        pass_count=result.pass_count,
        fail_count=result.fail_count,
        warning_count=result.warning_count,
    )


def is_uninformative(category: Category) -> bool:
    """True when no check in the category carries a real verdict.

    A category with no checks at all counts as uninformative too.
    """
    return all(check.status == CheckStatus.INFO for check in category.checks)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_overall_score(
    categories: Iterable[Category],
    weights: Mapping[str, float] | None = None,
) -> int:
    """Combine category scores into one weighted 0-100 score.

    Returns 0 when no category is both informative and weighted. Use
    ``is_uninformative`` on the inputs to tell that apart from a real 0.
    """
    table = build_weights(settings.CATEGORY_WEIGHTS if weights is None else weights)

    total_weight = 0.0
    weighted_sum = 0.0
    seen: set[str] = set()

    for category in categories:
        if category.name in seen:
            raise DuplicateCategoryError(f"Category {category.name!r} given more than once")
        seen.add(category.name)

        if is_uninformative(category):
            logger.info(f"Skipping uninformative category {category.name} in overall score")
            continue

        weight = table.get(category.name, 0.0)
        total_weight += weight
        weighted_sum += category.score * weight

    if total_weight == 0:
        logger.warning("No informative weighted categories; overall score is 0")
        return 0

    return _round_half_up(weighted_sum / total_weight)
