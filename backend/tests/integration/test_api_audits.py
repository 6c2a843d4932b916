"""
Integration tests for Audits API endpoints.
"""
import copy

import pytest
from fastapi import status


def _snapshot_body(payload: dict, created_at: str, snapshot_id: str) -> dict:
    body = copy.deepcopy(payload)
    body["created_at"] = created_at
    body["id"] = snapshot_id
    return body


class TestHealth:
    """Test health endpoints."""

    @pytest.mark.asyncio
    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_api_health(self, async_client):
        response = await async_client.get("/api/v1/health")

        assert response.status_code == status.HTTP_200_OK


class TestScoreAudit:
    """Test scoring a fresh set of categories."""

    @pytest.mark.asyncio
    async def test_score_snapshot(self, async_client, sample_snapshot_payload):
        response = await async_client.post("/api/v1/audits/score", json=sample_snapshot_payload)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["site"] == "example.com"
        # Performance is uninformative, so only on-page counts
        assert data["score"] == 85
        assert data["issues_count"] == 1

        on_page, performance = data["categories"]
        assert on_page["score"] == 85
        assert on_page["pass_count"] == 1
        assert on_page["fail_count"] == 1
        assert on_page["uninformative"] is False
        assert on_page["checks"][0]["code_snippet"] == "<title>Example</title>"
        assert performance["score"] == 100
        assert performance["uninformative"] is True
        assert performance["checks"][0]["value"] == "unavailable"

    @pytest.mark.asyncio
    async def test_client_scores_are_ignored(self, async_client, sample_snapshot_payload):
        """Scores are always derived from the checks."""
        sample_snapshot_payload["categories"][0]["score"] = 100

        response = await async_client.post("/api/v1/audits/score", json=sample_snapshot_payload)

        assert response.json()["categories"][0]["score"] == 85

    @pytest.mark.asyncio
    async def test_unknown_severity_is_422(self, async_client, sample_snapshot_payload):
        sample_snapshot_payload["categories"][0]["checks"][0]["severity"] = "blocker"

        response = await async_client.post("/api/v1/audits/score", json=sample_snapshot_payload)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    @pytest.mark.asyncio
    async def test_duplicate_check_id_is_400(self, async_client, sample_snapshot_payload):
        checks = sample_snapshot_payload["categories"][0]["checks"]
        checks.append(dict(checks[0]))

        response = await async_client.post("/api/v1/audits/score", json=sample_snapshot_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "title-tag" in response.json()["detail"]

    @pytest.mark.asyncio
    async def test_duplicate_category_is_400(self, async_client, sample_snapshot_payload):
        categories = sample_snapshot_payload["categories"]
        categories.append(copy.deepcopy(categories[0]))

        response = await async_client.post("/api/v1/audits/score", json=sample_snapshot_payload)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCompareAudits:
    """Test comparing two snapshots."""

    @pytest.fixture
    def compare_body(self, sample_snapshot_payload) -> dict:
        earlier = _snapshot_body(sample_snapshot_payload, "2026-01-10T12:00:00Z", "earlier")
        later = _snapshot_body(sample_snapshot_payload, "2026-02-10T12:00:00Z", "later")
        later["categories"][0]["checks"][0]["status"] = "pass"
        # Sent newest first on purpose
        return {"first": later, "second": earlier}

    @pytest.mark.asyncio
    async def test_compare_orders_and_diffs(self, async_client, compare_body):
        response = await async_client.post("/api/v1/audits/compare", json=compare_body)

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["before"]["id"] == "earlier"
        assert data["after"]["id"] == "later"
        assert data["summary"]["total_fixed"] == 1
        assert data["summary"]["total_regressed"] == 0
        assert data["summary"]["score_delta"] == 15
        assert data["summary"]["issues_delta"] == -1

        on_page = data["categories"][0]
        assert on_page["name"] == "on-page"
        assert on_page["before"]["score"] == 85
        assert on_page["after"]["score"] == 100
        assert on_page["checks"][0]["id"] == "title-tag"
        assert on_page["checks"][0]["change"] == "fixed"
        assert on_page["checks"][0]["before_status"] == "fail"
        assert on_page["checks"][0]["after_status"] == "pass"

    @pytest.mark.asyncio
    async def test_compare_different_sites_is_400(self, async_client, compare_body):
        compare_body["second"]["url"] = "https://another-site.org"

        response = await async_client.post("/api/v1/audits/compare", json=compare_body)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.asyncio
    async def test_compare_requires_created_at(self, async_client, compare_body):
        del compare_body["first"]["created_at"]

        response = await async_client.post("/api/v1/audits/compare", json=compare_body)

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestScoringConfig:
    """Test scoring configuration endpoint."""

    @pytest.mark.asyncio
    async def test_scoring_config(self, async_client):
        response = await async_client.get("/api/v1/audits/scoring-config")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["severity_penalties"] == {"critical": 15, "major": 10, "minor": 5, "info": 0}
        assert data["category_weights"]["on-page"] == 0.20
