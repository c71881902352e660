"""Checks AI meta tags, rel="alternate" discovery links and rel="me" identity links."""

from __future__ import annotations

import re
import time
from typing import List

from bs4 import BeautifulSoup, Tag

from axaudit.checks.base import BaseCheck, build_result
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

AI_META_NAMES = ("ai:summary", "ai:content_type", "ai:author", "ai:api", "ai:agent_card")
OPEN_GRAPH = re.compile(r"^og:", re.IGNORECASE)


def rel_values(tag: Tag) -> List[str]:
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return [value.lower() for value in rel]


def has_alternate_link(soup: BeautifulSoup, target: str) -> bool:
    for tag in soup.find_all(href=True):
        if "alternate" in rel_values(tag) and target in tag["href"].lower():
            return True
    return False


class MetaTagsCheck(BaseCheck):
    meta = CheckMeta(
        id="meta-tags",
        name="Meta Tags",
        description='Checks AI meta tags, rel="alternate", and rel="me" links',
        weight=8,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        if not ctx.html:
            findings.append(self.failed("Could not fetch homepage HTML"))
            return build_result(self.meta, 0, findings, start)

        soup = BeautifulSoup(ctx.html, "html.parser")

        declared = {
            str(tag.get("name", "")).lower() for tag in soup.find_all("meta") if tag.get("name")
        }
        found_ai = [name for name in AI_META_NAMES if name in declared]
        summary = f"{len(found_ai)}/{len(AI_META_NAMES)} AI meta tags found"
        if len(found_ai) >= 3:
            findings.append(self.passed(summary, detail=", ".join(found_ai)))
        elif found_ai:
            findings.append(
                self.warned(
                    summary,
                    detail=", ".join(found_ai),
                    hint=(
                        'Add more AI meta tags to your <head>: <meta name="ai:summary" content="...">, '
                        '<meta name="ai:content_type" content="...">, <meta name="ai:author" content="...">.'
                    ),
                )
            )
            score -= 15
        else:
            findings.append(
                self.warned(
                    "No AI meta tags (ai:*) found",
                    hint=(
                        'Add AI meta tags to your HTML <head>: <meta name="ai:summary" content="Brief description">, '
                        '<meta name="ai:content_type" content="website">, <meta name="ai:author" content="Your Name">.'
                    ),
                )
            )
            score -= 25

        if has_alternate_link(soup, "llms.txt"):
            findings.append(self.passed('rel="alternate" link to llms.txt present'))
        else:
            findings.append(
                self.warned(
                    'No rel="alternate" link to llms.txt in HTML',
                    hint='Add to your <head>: <link rel="alternate" type="text/plain" href="/llms.txt">',
                )
            )
            score -= 15

        if has_alternate_link(soup, "agent.json"):
            findings.append(self.passed('rel="alternate" link to agent.json present'))
        else:
            findings.append(
                self.warned(
                    'No rel="alternate" link to agent.json in HTML',
                    hint=(
                        'Add to your <head>: <link rel="alternate" type="application/json" '
                        'href="/.well-known/agent.json">'
                    ),
                )
            )
            score -= 10

        rel_me = [tag for tag in soup.find_all(rel=True) if "me" in rel_values(tag)]
        if rel_me:
            findings.append(self.passed(f'{len(rel_me)} rel="me" identity link(s) found'))
        else:
            findings.append(
                self.warned(
                    'No rel="me" identity links found',
                    hint='Add rel="me" links to verify your identity: <link rel="me" href="https://github.com/yourname">.',
                )
            )
            score -= 10

        if soup.find("meta", attrs={"property": OPEN_GRAPH}):
            findings.append(self.passed("OpenGraph meta tags present"))
        else:
            findings.append(
                self.warned(
                    "No OpenGraph meta tags found",
                    hint='Add OpenGraph meta tags: <meta property="og:title" content="...">, <meta property="og:url" content="...">.',
                )
            )
            score -= 10

        return build_result(self.meta, score, findings, start)
