"""Checks security headers, AI discovery Link headers and CORS on well-known resources."""

from __future__ import annotations

import re
import time

from axaudit.checks.base import BaseCheck, build_result
from axaudit.constants import SECURITY_HEADERS
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding

LLMS_LINK = re.compile(r"llms\.txt", re.IGNORECASE)
AGENT_LINK = re.compile(r"agent\.json", re.IGNORECASE)


class HttpHeadersCheck(BaseCheck):
    meta = CheckMeta(
        id="http-headers",
        name="HTTP Headers",
        description="Checks security headers, AI discovery Link headers, and CORS",
        weight=15,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        headers = ctx.headers
        if not headers:
            findings.append(self.failed("Could not fetch homepage headers"))
            return build_result(self.meta, 0, findings, start)

        present = 0
        for header in SECURITY_HEADERS:
            if headers.get(header.name):
                present += 1
            elif header.critical:
                findings.append(
                    self.failed(
                        f"Missing critical header: {header.label}",
                        hint=f"Send the {header.label} header on every response.",
                    )
                )
                score -= 10

        total = len(SECURITY_HEADERS)
        if present == total:
            findings.append(self.passed(f"All {total} security headers present"))
        elif present >= 4:
            findings.append(self.passed(f"{present}/{total} security headers present"))
        else:
            findings.append(self.warned(f"Only {present}/{total} security headers present"))
            score -= 5

        link = headers.get("link", "")
        has_llms = bool(LLMS_LINK.search(link))
        has_agent = bool(AGENT_LINK.search(link))
        if has_llms and has_agent:
            findings.append(self.passed("Link header references both llms.txt and agent.json"))
        elif has_llms:
            findings.append(self.passed("Link header references llms.txt"))
            findings.append(self.warned("Link header does not reference agent.json"))
            score -= 5
        elif has_agent:
            findings.append(self.passed("Link header references agent.json"))
            findings.append(self.warned("Link header does not reference llms.txt"))
            score -= 5
        elif link:
            findings.append(self.warned("Link header present but does not reference AI discovery files"))
            score -= 15
        else:
            findings.append(
                self.warned(
                    "No Link header for AI discovery (llms.txt, agent.json)",
                    hint='Add a header such as: Link: </llms.txt>; rel="alternate"; type="text/plain"',
                )
            )
            score -= 15

        agent = await ctx.fetch(f"{ctx.url}/.well-known/agent.json")
        if agent.ok:
            if agent.headers.get("access-control-allow-origin"):
                findings.append(self.passed("CORS enabled on .well-known resources"))
            else:
                findings.append(
                    self.warned(
                        "No CORS headers on .well-known resources",
                        hint="Serve /.well-known/* with Access-Control-Allow-Origin: *",
                    )
                )
                score -= 10

        llms = await ctx.fetch(f"{ctx.url}/llms.txt")
        if llms.ok and "noindex" in llms.headers.get("x-robots-tag", ""):
            findings.append(
                self.passed("X-Robots-Tag: noindex on /llms.txt (prevents search indexing of raw text)")
            )

        return build_result(self.meta, score, findings, start)
