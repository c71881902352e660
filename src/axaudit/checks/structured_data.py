"""Checks JSON-LD structured data embedded in the homepage."""

from __future__ import annotations

import html
import json
import time
from typing import Any, List, Set

from bs4 import BeautifulSoup

from axaudit.checks.base import BaseCheck, build_result
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

SCHEMA_ORG_CONTEXTS = ("https://schema.org", "https://schema.org/", "http://schema.org")
KEY_TYPES = ("Person", "Organization", "WebSite", "WebPage", "ProfilePage")


def extract_json_ld(page: str) -> List[str]:
    """Return the raw text of every `application/ld+json` script block."""
    soup = BeautifulSoup(page, "html.parser")
    blocks = []
    for script in soup.find_all("script", type="application/ld+json"):
        blocks.append(html.unescape(script.string or ""))
    return blocks


def collect_types(obj: Any, types: Set[str]) -> None:
    """Gather every @type found at the top level, inside @graph, or across arrays."""
    if isinstance(obj, list):
        for item in obj:
            collect_types(item, types)
        return
    if not isinstance(obj, dict):
        return

    declared = obj.get("@type")
    if isinstance(declared, list):
        types.update(t for t in declared if isinstance(t, str))
    elif isinstance(declared, str):
        types.add(declared)

    graph = obj.get("@graph")
    if isinstance(graph, list):
        for item in graph:
            collect_types(item, types)


class StructuredDataCheck(BaseCheck):
    meta = CheckMeta(
        id="structured-data",
        name="Structured Data",
        description="Checks JSON-LD structured data on homepage",
        weight=15,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        if not ctx.html:
            findings.append(self.failed("Could not fetch homepage HTML"))
            return build_result(self.meta, 0, findings, start)

        blocks = extract_json_ld(ctx.html)
        if not blocks:
            findings.append(
                self.failed(
                    "No JSON-LD structured data found",
                    hint=(
                        'Add a <script type="application/ld+json"> block to your homepage describing '
                        "your site with schema.org types such as WebSite and Organization."
                    ),
                )
            )
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed(f"{len(blocks)} JSON-LD block(s) found"))

        parsed: list[Any] = []
        for raw in blocks:
            try:
                parsed.append(json.loads(raw))
            except json.JSONDecodeError:
                findings.append(self.warned("Invalid JSON in a JSON-LD block"))
                score -= 10

        if not parsed:
            findings.append(self.failed("All JSON-LD blocks have invalid JSON"))
            return build_result(self.meta, 10, findings, start)

        documents = [doc for doc in parsed if isinstance(doc, dict)]

        if any(doc.get("@context") in SCHEMA_ORG_CONTEXTS for doc in documents):
            findings.append(self.passed("@context references schema.org"))
        else:
            findings.append(
                self.warned(
                    "No @context referencing schema.org",
                    hint='Set "@context": "https://schema.org" on your JSON-LD blocks.',
                )
            )
            score -= 15

        if any(isinstance(doc.get("@graph"), list) for doc in documents):
            findings.append(self.passed("@graph array present (multi-entity structured data)"))
        else:
            findings.append(self.warned("No @graph array (single-entity only)"))
            score -= 5

        types: Set[str] = set()
        for doc in parsed:
            collect_types(doc, types)

        found = [name for name in KEY_TYPES if name in types]
        if len(found) >= 2:
            findings.append(self.passed(f"Key types found: {', '.join(found)}"))
        elif len(found) == 1:
            missing = [name for name in KEY_TYPES if name not in types]
            findings.append(
                self.warned(
                    f"Only 1 key type found: {found[0]}",
                    detail=f"Consider adding: {', '.join(missing)}",
                )
            )
            score -= 10
        else:
            findings.append(self.warned("No key entity types (Person, Organization, WebSite, etc.)"))
            score -= 15

        if "BreadcrumbList" in types:
            findings.append(self.passed("BreadcrumbList present"))
        else:
            findings.append(self.warned("No BreadcrumbList found"))
            score -= 5

        return build_result(self.meta, score, findings, start)
