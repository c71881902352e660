"""Tests for the MCP discovery check."""

import json

import pytest

from axaudit.checks.mcp import McpCheck
from axaudit.protocols import FindingStatus

from tests.helpers import make_response

PATH = "/.well-known/mcp.json"
CORS = {"access-control-allow-origin": "*"}


@pytest.mark.unit
class TestMcpCheck:
    @pytest.mark.asyncio
    async def test_missing_file_scores_zero(self, site):
        result = await McpCheck().run(site.context())

        assert result.score == 0
        assert result.findings[0].status is FindingStatus.FAIL

    @pytest.mark.asyncio
    async def test_complete_server_with_cors(self, site, good_mcp_json):
        site.add(PATH, make_response(good_mcp_json, headers=CORS))

        result = await McpCheck().run(site.context())

        assert result.score == 100
        assert any(f.message == "1 prompt(s) defined" for f in result.findings)
        assert result.findings[-1].message == "CORS enabled on MCP endpoint"

    @pytest.mark.asyncio
    async def test_missing_cors_header(self, site, good_mcp_json):
        site.add(PATH, make_response(good_mcp_json))

        result = await McpCheck().run(site.context())

        assert result.score == 90
        assert result.findings[-1].status is FindingStatus.WARN

    @pytest.mark.asyncio
    async def test_empty_object(self, site):
        site.add(PATH, make_response("{}"))

        result = await McpCheck().run(site.context())

        # name -10, description -5, tools -15, resources -5, version -5, CORS -10
        assert result.score == 50

    @pytest.mark.asyncio
    async def test_partially_described_tools(self, site):
        server = {
            "name": "x",
            "description": "y",
            "version": "1.0",
            "tools": [{"name": "a", "description": "does a"}, {"name": "b"}],
            "resources": [{"uri": "r://1"}],
            "authentication": {"type": "oauth2"},
        }
        site.add(PATH, make_response(json.dumps(server), headers=CORS))

        result = await McpCheck().run(site.context())

        assert result.score == 95
        assert any(f.message == "1/2 tools have descriptions" for f in result.findings)
        assert any(f.message == "Authentication configuration present" for f in result.findings)

    @pytest.mark.asyncio
    async def test_undescribed_tools(self, site):
        server = {
            "name": "x",
            "description": "y",
            "version": "1.0",
            "tools": [{"name": "a"}],
            "resources": [{"uri": "r://1"}],
        }
        site.add(PATH, make_response(json.dumps(server), headers=CORS))

        result = await McpCheck().run(site.context())

        assert result.score == 90

    @pytest.mark.asyncio
    async def test_invalid_json_scores_ten(self, site):
        site.add(PATH, make_response("<html>"))

        result = await McpCheck().run(site.context())

        assert result.score == 10
