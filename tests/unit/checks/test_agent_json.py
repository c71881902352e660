"""Tests for the A2A agent card check."""

import json

import pytest

from axaudit.checks.agent_json import AgentJsonCheck
from axaudit.protocols import FindingStatus

from tests.helpers import make_response

PATH = "/.well-known/agent.json"


@pytest.mark.unit
class TestAgentJsonCheck:
    @pytest.mark.asyncio
    async def test_missing_file_scores_zero(self, site):
        result = await AgentJsonCheck().run(site.context())

        assert result.score == 0
        assert result.findings[0].message == "/.well-known/agent.json not found"

    @pytest.mark.asyncio
    async def test_complete_card(self, site, good_agent_json):
        site.add(PATH, make_response(good_agent_json))

        result = await AgentJsonCheck().run(site.context())

        assert result.score == 100
        assert all(f.status is FindingStatus.PASS for f in result.findings)

    @pytest.mark.asyncio
    async def test_invalid_json_scores_ten(self, site):
        site.add(PATH, make_response("{not json"))

        result = await AgentJsonCheck().run(site.context())

        assert result.score == 10
        assert result.findings[-1].status is FindingStatus.FAIL
        assert result.findings[-1].message == "Invalid JSON"

    @pytest.mark.asyncio
    async def test_empty_object(self, site):
        site.add(PATH, make_response("{}"))

        result = await AgentJsonCheck().run(site.context())

        # four required fields (-60), protocolVersion (-5), optional fields (-5)
        assert result.score == 30
        failed = [f.message for f in result.findings if f.status is FindingStatus.FAIL]
        assert len(failed) == 4

    @pytest.mark.asyncio
    async def test_non_object_json_is_treated_as_empty(self, site):
        site.add(PATH, make_response("[1, 2, 3]"))

        result = await AgentJsonCheck().run(site.context())

        assert result.score == 30

    @pytest.mark.asyncio
    async def test_empty_skills(self, site):
        card = {"name": "A", "description": "B", "url": "https://example.com", "skills": []}
        site.add(PATH, make_response(json.dumps(card)))

        result = await AgentJsonCheck().run(site.context())

        # empty skills (-10), protocolVersion (-5), optional fields (-5)
        assert result.score == 80

    @pytest.mark.asyncio
    async def test_some_optional_fields(self, site):
        card = {
            "name": "A",
            "description": "B",
            "url": "https://example.com",
            "skills": [{"id": "x"}],
            "protocolVersion": "0.2.0",
            "capabilities": {},
        }
        site.add(PATH, make_response(json.dumps(card)))

        result = await AgentJsonCheck().run(site.context())

        assert result.score == 100
        assert result.findings[-1].message == "1/3 optional fields present"
