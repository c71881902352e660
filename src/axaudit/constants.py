"""
Static rubric data shared by the fetcher, the checks and the scorer.
"""

from __future__ import annotations

from typing import Dict, List

from axaudit import __version__
from axaudit.protocols import Grade, SecurityHeader

VERSION: str = __version__
USER_AGENT = f"ax-audit/{VERSION} (https://github.com/lucioduran/ax-audit)"
ACCEPT = "text/html, application/json, text/plain, */*"

DEFAULT_TIMEOUT_MS = 10_000
PASS_THRESHOLD = 70
DEFAULT_CHECK_WEIGHT = 10

AI_CRAWLERS: Dict[str, List[str]] = {
    "training": [
        "GPTBot",
        "ClaudeBot",
        "Claude-Web",
        "Anthropic-AI",
        "Google-Extended",
        "CCBot",
        "Bytespider",
        "Meta-ExternalAgent",
        "Meta-ExternalFetcher",
        "Cohere-AI",
        "cohere-training-data-crawler",
        "Applebot-Extended",
        "Amazonbot",
        "AI2Bot",
        "AI2Bot-Dolma",
        "DeepSeek-AI",
        "PanguBot",
        "Diffbot",
    ],
    "search": [
        "OAI-SearchBot",
        "ChatGPT-User",
        "Claude-SearchBot",
        "Claude-User",
        "PerplexityBot",
        "Perplexity-User",
        "DuckAssistBot",
        "YouBot",
        "Petalbot",
        "Google-CloudVertexBot",
        "Gemini",
    ],
    "fetching": [
        "FirecrawlAgent",
        "Facebookbot",
    ],
}

ALL_AI_CRAWLERS: List[str] = [*AI_CRAWLERS["training"], *AI_CRAWLERS["search"], *AI_CRAWLERS["fetching"]]

CORE_AI_CRAWLERS: List[str] = [
    "GPTBot",
    "ClaudeBot",
    "ChatGPT-User",
    "Claude-SearchBot",
    "Google-Extended",
    "PerplexityBot",
]

# Fallback weights for checks whose meta does not declare one.
CHECK_WEIGHTS: Dict[str, int] = {
    "llms-txt": 15,
    "robots-txt": 15,
    "structured-data": 15,
    "http-headers": 15,
    "agent-json": 10,
    "mcp": 10,
    "security-txt": 10,
    "meta-tags": 10,
    "openapi": 10,
}

GRADES: List[Grade] = [
    Grade(min=90, label="Excellent", color="green"),
    Grade(min=70, label="Good", color="yellow"),
    Grade(min=50, label="Fair", color="orange"),
    Grade(min=0, label="Poor", color="red"),
]

AGENT_JSON_REQUIRED_FIELDS: List[str] = ["name", "description", "url", "skills"]

SECURITY_TXT_REQUIRED_FIELDS: List[str] = ["Contact", "Expires"]

SECURITY_HEADERS: List[SecurityHeader] = [
    SecurityHeader(name="strict-transport-security", label="Strict-Transport-Security", critical=True),
    SecurityHeader(name="x-content-type-options", label="X-Content-Type-Options", critical=True),
    SecurityHeader(name="x-frame-options", label="X-Frame-Options", critical=False),
    SecurityHeader(name="x-xss-protection", label="X-XSS-Protection", critical=False),
    SecurityHeader(name="referrer-policy", label="Referrer-Policy", critical=False),
    SecurityHeader(name="permissions-policy", label="Permissions-Policy", critical=False),
    SecurityHeader(name="content-security-policy", label="Content-Security-Policy", critical=False),
]
