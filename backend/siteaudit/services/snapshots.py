"""
Snapshot Service

Assembles scored categories into immutable audit snapshots, converts them to
and from their stored dict form, and answers history questions (which
snapshots of a site can be compared, score trend).
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Iterable, Mapping
from urllib.parse import urlparse

from siteaudit.config import settings
from siteaudit.core.exceptions import AuditDataError
from siteaudit.models.audit import AuditSnapshot, Category, Check
from siteaudit.services.scoring import calculate_overall_score, score_category

logger = logging.getLogger(__name__)

CHECK_FIELDS = (
    "id",
    "status",
    "severity",
    "title",
    "description",
    "recommendation",
    "code_snippet",
    "value",
    "expected",
    "learn_more_url",
)


def normalize_site(url: str) -> str:
    """Reduce a URL to the host used to group snapshots, without ``www.``."""
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    host = urlparse(url).hostname or ""
    if host.startswith("www."):
        host = host[4:]
    if not host:
        raise AuditDataError(f"Cannot determine site from URL {url!r}")
    return host


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def build_snapshot(
    url: str,
    categories: Iterable[Category],
    created_at: datetime | None = None,
    snapshot_id: str | None = None,
    penalties: Mapping[str, int] | None = None,
    weights: Mapping[str, float] | None = None,
) -> AuditSnapshot:
    """Wrap categories into a snapshot with its derived overall score.

    Every category is rescored from its checks, so a hand-built Category
    cannot carry a score or counters its checks do not support.
    """
    categories = tuple(
        score_category(category.name, category.label, category.checks, penalties)
        for category in categories
    )

    snapshot = AuditSnapshot(
        id=snapshot_id or uuid.uuid4().hex,
        site=normalize_site(url),
        url=url,
        created_at=_as_utc(created_at or datetime.now(timezone.utc)),
        score=calculate_overall_score(categories, weights),
        categories=categories,
        issues_count=sum(check.is_issue for c in categories for check in c.checks),
    )

    logger.info(
        f"Built snapshot {snapshot.id} for {snapshot.site}: score={snapshot.score}, "
        f"{len(categories)} categories, {snapshot.issues_count} issues"
    )
    return snapshot


def snapshot_to_dict(snapshot: AuditSnapshot) -> dict[str, Any]:
    """Serialize a snapshot into its storable form."""
    return {
        "id": snapshot.id,
        "site": snapshot.site,
        "url": snapshot.url,
        "created_at": snapshot.created_at.isoformat(),
        "score": snapshot.score,
        "issues_count": snapshot.issues_count,
        "categories": [category.to_dict() for category in snapshot.categories],
    }


def _check_from_dict(data: Mapping[str, Any]) -> Check:
    try:
        return Check(**{key: data[key] for key in CHECK_FIELDS if key in data})
    except TypeError as e:
        raise AuditDataError(f"Malformed check record: {e}") from None


def snapshot_from_dict(
    data: Mapping[str, Any],
    penalties: Mapping[str, int] | None = None,
    weights: Mapping[str, float] | None = None,
) -> AuditSnapshot:
    """Rebuild a stored snapshot.

    Stored scores and counters are ignored: category scores are recomputed
    from the checks and the overall score from the categories.
    """
    try:
        raw_categories = data["categories"]
        url = data["url"]
        created_at = data["created_at"]
    except KeyError as e:
        raise AuditDataError(f"Snapshot record is missing {e.args[0]!r}") from None

    if isinstance(created_at, str):
        try:
            created_at = datetime.fromisoformat(created_at)
        except ValueError:
            raise AuditDataError(f"Snapshot record has malformed created_at {created_at!r}") from None
    elif not isinstance(created_at, datetime):
        raise AuditDataError(f"Snapshot record created_at must be a datetime, got {created_at!r}")

    categories = []
    for raw in raw_categories:
        if "name" not in raw:
            raise AuditDataError("Category record is missing 'name'")
        checks = [_check_from_dict(check) for check in raw.get("checks", [])]
        categories.append(score_category(raw["name"], raw.get("label", raw["name"]), checks, penalties))

    return build_snapshot(
        url,
        categories,
        created_at=created_at,
        snapshot_id=data.get("id"),
        penalties=penalties,
        weights=weights,
    )


def comparable_snapshots(snapshots: Iterable[AuditSnapshot], site: str) -> list[AuditSnapshot]:
    """Snapshots belonging to ``site``, oldest first."""
    site = normalize_site(site)
    return sorted(
        (s for s in snapshots if s.site == site),
        key=lambda s: s.created_at,
    )


def latest_pair(
    snapshots: Iterable[AuditSnapshot],
    site: str,
) -> tuple[AuditSnapshot, AuditSnapshot] | None:
    """The two most recent snapshots of a site as ``(before, after)``."""
    history = comparable_snapshots(snapshots, site)
    if len(history) < 2:
        return None
    return history[-2], history[-1]


def score_trend(
    snapshots: Iterable[AuditSnapshot],
    limit: int | None = None,
) -> list[tuple[datetime, int]]:
    """``(created_at, score)`` of the last ``limit`` scored snapshots, oldest first.

    Snapshots with a score of 0 carry no usable data and are skipped.
    """
    limit = settings.SCORE_TREND_LIMIT if limit is None else limit
    if limit <= 0:
        return []

    scored = sorted(
        (s for s in snapshots if s.score > 0),
        key=lambda s: s.created_at,
    )
    return [(s.created_at, s.score) for s in scored[-limit:]]
