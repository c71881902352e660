"""
End-to-end audits through the real fetcher, with aiohttp traffic served by
aioresponses from the canned site content in conftest.
"""

import json

import pytest
from aioresponses import aioresponses

from axaudit import audit, batch_audit
from axaudit.checks import check_ids, default_checks
from axaudit.reporter import render_json

HOME = "https://example.com/"
EMPTY_HOME = "https://empty.example/"


def serve(m, site):
    """Register every FakeSite route with aioresponses."""
    for url, response in site.routes.items():
        m.get(url, status=response.status, body=response.body, headers=response.headers)


def serve_empty(m, base):
    m.get(base, status=404, body="")
    for path in (
        "llms.txt",
        "llms-full.txt",
        "robots.txt",
        ".well-known/agent.json",
        ".well-known/mcp.json",
        ".well-known/security.txt",
        ".well-known/openapi.json",
    ):
        m.get(base + path, status=404, body="Not Found")


@pytest.mark.integration
class TestAuditEndToEnd:
    @pytest.mark.asyncio
    async def test_fully_configured_site(self, full_site):
        with aioresponses() as m:
            serve(m, full_site)
            report = await audit(HOME)

            for key, calls in m.requests.items():
                assert len(calls) == 1, f"{key} was fetched {len(calls)} times"

        assert [r.id for r in report.results] == check_ids(default_checks())
        assert {r.id: r.score for r in report.results} == {r.id: 100 for r in report.results}
        assert report.overall_score == 100
        assert report.grade.label == "Excellent"

    @pytest.mark.asyncio
    async def test_empty_site(self):
        with aioresponses() as m:
            serve_empty(m, EMPTY_HOME)
            report = await audit(EMPTY_HOME)

        scores = {r.id: r.score for r in report.results}
        assert scores["llms-txt"] == 0
        assert scores["structured-data"] == 0
        assert scores["meta-tags"] == 0
        assert scores["http-headers"] == 60
        assert report.overall_score < 50
        assert report.grade.label == "Poor"

    @pytest.mark.asyncio
    async def test_json_report_round_trips_through_the_pipeline(self, full_site):
        with aioresponses() as m:
            serve(m, full_site)
            report = await audit(HOME, checks=["llms-txt", "openapi"])

        data = json.loads(render_json(report))
        assert data["url"] == HOME
        assert [r["id"] for r in data["results"]] == ["llms-txt", "openapi"]
        assert data["overallScore"] == 100

    @pytest.mark.asyncio
    async def test_batch_over_two_sites(self, full_site):
        with aioresponses() as m:
            serve(m, full_site)
            serve_empty(m, EMPTY_HOME)
            batch = await batch_audit([HOME, EMPTY_HOME])

        assert [r.url for r in batch.reports] == [HOME, EMPTY_HOME]
        assert batch.summary.total == 2
        assert batch.summary.passed == 1
        assert batch.summary.failed == 1
        assert batch.reports[0].overall_score == 100
