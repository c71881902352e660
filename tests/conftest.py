"""
Shared test configuration for ax-audit.

Provides canned site content, a route-based fake fetch for exercising checks
without a network, and task cleanup for the async tests.
"""

# Standard library imports
import asyncio
import json
from typing import AsyncGenerator

# Third-party imports
import pytest
import pytest_asyncio

from tests.helpers import FakeSite, make_response

BASE_URL = "https://example.com"

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests across modules")


# ============================================================================
# Core Test Fixtures
# ============================================================================


@pytest_asyncio.fixture(autouse=True)
async def cleanup_tasks() -> AsyncGenerator[None, None]:
    """Cancel any task a test leaves behind so pending fetches cannot leak between tests."""
    tasks_before = asyncio.all_tasks()
    yield
    new_tasks = asyncio.all_tasks() - tasks_before

    for task in new_tasks:
        if not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass


@pytest.fixture
def site() -> FakeSite:
    """An empty fake site: every path answers 404 until routes are added."""
    return FakeSite(BASE_URL)


# ============================================================================
# Sample Content Fixtures
# ============================================================================


@pytest.fixture
def good_llms_txt() -> str:
    return (
        "# Example Site\n"
        "\n"
        "> Example Site publishes guides and an API for building things.\n"
        "\n"
        "## Docs\n"
        "\n"
        "- [Getting started](https://example.com/docs/start): first steps\n"
        "- [API reference](https://example.com/docs/api): endpoints\n"
    )


@pytest.fixture
def good_robots_txt() -> str:
    bots = [
        "GPTBot",
        "ClaudeBot",
        "ChatGPT-User",
        "Claude-SearchBot",
        "Google-Extended",
        "PerplexityBot",
        "OAI-SearchBot",
        "Claude-User",
        "Perplexity-User",
        "CCBot",
        "Amazonbot",
    ]
    groups = "\n\n".join(f"User-agent: {bot}\nAllow: /" for bot in bots)
    return f"{groups}\n\nUser-agent: *\nAllow: /\n\nSitemap: https://example.com/sitemap.xml\n"


@pytest.fixture
def good_agent_json() -> str:
    return json.dumps(
        {
            "name": "Example Agent",
            "description": "Answers questions about Example Site",
            "url": "https://example.com",
            "protocolVersion": "0.2.0",
            "skills": [{"id": "search", "name": "Search"}],
            "capabilities": {"streaming": False},
            "authentication": {"schemes": ["none"]},
            "documentationUrl": "https://example.com/docs",
        }
    )


@pytest.fixture
def good_mcp_json() -> str:
    return json.dumps(
        {
            "name": "example-mcp",
            "description": "MCP server for Example Site",
            "protocolVersion": "2024-11-05",
            "tools": [
                {"name": "search", "description": "Search the docs"},
                {"name": "fetch", "description": "Fetch a page"},
            ],
            "resources": [{"uri": "docs://index"}],
            "prompts": [{"name": "summarize"}],
        }
    )


@pytest.fixture
def good_security_txt() -> str:
    return (
        "Contact: mailto:security@example.com\n"
        "Expires: 2099-12-31T23:59:59.000Z\n"
        "Preferred-Languages: en\n"
        "Canonical: https://example.com/.well-known/security.txt\n"
    )


@pytest.fixture
def good_openapi_json() -> str:
    return json.dumps(
        {
            "openapi": "3.1.0",
            "info": {"title": "Example API", "description": "Public API", "version": "1.0"},
            "paths": {"/items": {"get": {}}},
            "servers": [{"url": "https://api.example.com"}],
        }
    )


@pytest.fixture
def good_homepage() -> str:
    json_ld = json.dumps(
        {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebSite", "name": "Example"},
                {"@type": "Organization", "name": "Example Inc"},
                {"@type": "BreadcrumbList", "itemListElement": []},
            ],
        }
    )
    return f"""<!DOCTYPE html>
<html>
<head>
  <title>Example</title>
  <meta name="ai:summary" content="Example Site">
  <meta name="ai:content_type" content="website">
  <meta name="ai:author" content="Example Inc">
  <meta property="og:title" content="Example">
  <link rel="alternate" type="text/plain" href="/llms.txt">
  <link rel="alternate" type="application/json" href="/.well-known/agent.json">
  <link rel="me" href="https://github.com/example">
  <script type="application/ld+json">{json_ld}</script>
</head>
<body><h1>Example</h1></body>
</html>"""


@pytest.fixture
def secure_headers() -> dict:
    return {
        "content-type": "text/html",
        "strict-transport-security": "max-age=63072000",
        "x-content-type-options": "nosniff",
        "x-frame-options": "DENY",
        "referrer-policy": "strict-origin",
        "permissions-policy": "camera=()",
        "content-security-policy": "default-src 'self'",
        "x-xss-protection": "0",
        "link": '</llms.txt>; rel="alternate", </.well-known/agent.json>; rel="alternate"',
    }


@pytest.fixture
def full_site(
    site,
    good_homepage,
    secure_headers,
    good_llms_txt,
    good_robots_txt,
    good_agent_json,
    good_mcp_json,
    good_security_txt,
    good_openapi_json,
) -> FakeSite:
    """A fake site that satisfies every built-in check."""
    cors = {"access-control-allow-origin": "*"}
    site.add("/", make_response(good_homepage, headers=secure_headers))
    site.add("/llms.txt", make_response(good_llms_txt, headers={"x-robots-tag": "noindex"}))
    site.add("/llms-full.txt", make_response(good_llms_txt * 3))
    site.add("/robots.txt", make_response(good_robots_txt))
    site.add("/.well-known/agent.json", make_response(good_agent_json, headers=cors))
    site.add("/.well-known/mcp.json", make_response(good_mcp_json, headers=cors))
    site.add("/.well-known/security.txt", make_response(good_security_txt))
    site.add("/.well-known/openapi.json", make_response(good_openapi_json))
    return site
