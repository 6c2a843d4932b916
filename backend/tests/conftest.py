"""
Pytest configuration and fixtures for SiteAudit tests.
"""
from datetime import datetime, timezone
from typing import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from siteaudit.models.audit import AuditSnapshot, Category, Check
from siteaudit.services.scoring import score_category
from siteaudit.services.snapshots import build_snapshot


# ============================================================================
# Model Factories
# ============================================================================

@pytest.fixture
def make_check() -> Callable[..., Check]:
    """Factory for checks with sensible defaults."""
    def _make(check_id: str, status: str = "pass", severity: str = "minor", **kwargs) -> Check:
        return Check(
            id=check_id,
            status=status,
            severity=severity,
            title=kwargs.pop("title", check_id.replace("-", " ").title()),
            description=kwargs.pop("description", f"{check_id} check"),
            **kwargs,
        )
    return _make


@pytest.fixture
def make_category(make_check) -> Callable[..., Category]:
    """Factory for scored categories from (id, status, severity) tuples."""
    def _make(name: str, checks: list[tuple[str, str, str]], label: str | None = None) -> Category:
        return score_category(
            name,
            label or name.replace("-", " ").title(),
            [make_check(check_id, status, severity) for check_id, status, severity in checks],
        )
    return _make


# ============================================================================
# Snapshot Fixtures
# ============================================================================

@pytest.fixture
def before_time() -> datetime:
    return datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def after_time() -> datetime:
    return datetime(2026, 2, 10, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def before_snapshot(make_category, before_time) -> AuditSnapshot:
    """Earlier audit of example.com."""
    return build_snapshot(
        "https://www.example.com",
        [
            make_category("on-page", [
                ("title-tag", "fail", "critical"),
                ("meta-description", "pass", "major"),
                ("h1-tag", "warning", "minor"),
                ("canonical", "pass", "minor"),
            ]),
            make_category("accessibility", [
                ("img-alt", "pass", "major"),
                ("form-labels", "fail", "minor"),
            ]),
            make_category("performance", [
                ("psi-unavailable", "info", "info"),
            ]),
        ],
        created_at=before_time,
        snapshot_id="before",
    )


@pytest.fixture
def after_snapshot(make_category, after_time) -> AuditSnapshot:
    """Later audit of example.com."""
    return build_snapshot(
        "https://example.com/",
        [
            make_category("on-page", [
                ("title-tag", "pass", "critical"),
                ("meta-description", "fail", "major"),
                ("h1-tag", "fail", "minor"),
                ("og-tags", "warning", "minor"),
            ]),
            make_category("accessibility", [
                ("img-alt", "pass", "major"),
                ("form-labels", "fail", "minor"),
            ]),
            make_category("security", [
                ("https", "pass", "critical"),
            ]),
        ],
        created_at=after_time,
        snapshot_id="after",
    )


@pytest.fixture
def sample_snapshot_payload() -> dict:
    """Snapshot request body as sent by an audit producer."""
    return {
        "url": "https://example.com",
        "categories": [
            {
                "name": "on-page",
                "label": "On-Page SEO",
                "checks": [
                    {
                        "id": "title-tag",
                        "status": "fail",
                        "severity": "critical",
                        "title": "Title Tag",
                        "description": "Page has a title tag",
                        "recommendation": "Add a <title> element.",
                        "code_snippet": "<title>Example</title>",
                    },
                    {
                        "id": "meta-description",
                        "status": "pass",
                        "severity": "major",
                        "title": "Meta Description",
                    },
                ],
            },
            {
                "name": "performance",
                "label": "Performance",
                "checks": [
                    {
                        "id": "psi-unavailable",
                        "status": "info",
                        "severity": "info",
                        "title": "PageSpeed Insights",
                        "value": "unavailable",
                    },
                ],
            },
        ],
    }


# ============================================================================
# FastAPI App Fixtures
# ============================================================================

@pytest.fixture(scope="function")
def app() -> FastAPI:
    """Create test FastAPI application."""
    from siteaudit.main import app as main_app

    return main_app


@pytest_asyncio.fixture(scope="function")
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
