"""Checks /llms.txt presence and llmstxt.org compliance."""

from __future__ import annotations

import re
import time

from axaudit.checks.base import BaseCheck, build_result, http_detail
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

MARKDOWN_LINK = re.compile(r"\[([^\]]+)\]\((https?://[^)]+)\)")


class LlmsTxtCheck(BaseCheck):
    meta = CheckMeta(
        id="llms-txt",
        name="LLMs.txt",
        description="Checks /llms.txt presence and llmstxt.org compliance",
        weight=15,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/llms.txt")
        if not res.ok:
            findings.append(
                self.failed(
                    "/llms.txt not found",
                    detail=http_detail(res),
                    hint=(
                        "Create a /llms.txt file at your site root following the llmstxt.org specification. "
                        'It should be a Markdown file starting with "# Your Site Name" and include a '
                        "description, sections, and links."
                    ),
                )
            )
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/llms.txt exists"))
        text = res.body
        lines = [line.strip() for line in text.split("\n") if line.strip()]

        if not lines or not lines[0].startswith("# "):
            findings.append(
                self.warned(
                    'Missing H1 heading (first line should start with "# ")',
                    hint="Add an H1 heading as the first line of your llms.txt file, e.g.: # Your Site Name",
                )
            )
            score -= 15
        else:
            findings.append(self.passed(f'H1 heading: "{lines[0][2:]}"'))

        if any(line.startswith("> ") for line in lines):
            findings.append(self.passed("Blockquote description present"))
        else:
            findings.append(
                self.warned(
                    'No blockquote description found ("> ...")',
                    hint="Add a blockquote description after the H1 heading, e.g.: > A brief summary of your site.",
                )
            )
            score -= 10

        sections = [line for line in lines if line.startswith("## ")]
        if sections:
            findings.append(self.passed(f"{len(sections)} section heading(s) found"))
        else:
            findings.append(
                self.warned(
                    "No section headings found (## ...)",
                    hint="Organize your llms.txt content with ## section headings (e.g., ## About, ## API).",
                )
            )
            score -= 10

        links = MARKDOWN_LINK.findall(text)
        if links:
            findings.append(self.passed(f"{len(links)} link(s) found"))
        else:
            findings.append(
                self.warned(
                    "No Markdown links found",
                    hint="Add Markdown links to relevant pages: [Page Title](https://example.com/page).",
                )
            )
            score -= 10

        if len(text) < 100:
            findings.append(
                self.warned(
                    "Content appears minimal (< 100 characters)",
                    hint="Expand your llms.txt with more descriptive content about your site and its resources.",
                )
            )
            score -= 10

        full = await ctx.fetch(f"{ctx.url}/llms-full.txt")
        if full.ok:
            findings.append(self.passed("/llms-full.txt also available (bonus)"))
            score = min(100, score + 10)
        else:
            findings.append(
                self.warned(
                    "/llms-full.txt not found (optional but recommended)",
                    hint="Create a /llms-full.txt with expanded content: full documentation and API details.",
                )
            )

        return build_result(self.meta, score, findings, start)
