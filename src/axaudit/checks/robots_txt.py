"""Checks AI crawler configuration in /robots.txt."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import List

from axaudit.checks.base import BaseCheck, build_result
from axaudit.constants import ALL_AI_CRAWLERS, CORE_AI_CRAWLERS
from axaudit.protocols import CheckContext, CheckMeta, CheckResult, Finding, FindingStatus

USER_AGENT_LINE = re.compile(r"^User-agent:\s*(.+)", re.IGNORECASE)
DISALLOW_ROOT = re.compile(r"^Disallow:\s*/\s*$", re.IGNORECASE)
SITEMAP_LINE = re.compile(r"^Sitemap:", re.IGNORECASE | re.MULTILINE)


@dataclass
class BotEntry:
    name: str
    disallowed: bool = False


def parse_user_agents(text: str) -> List[BotEntry]:
    """One entry per User-agent line; an entry is disallowed when its group has `Disallow: /`."""
    entries: List[BotEntry] = []
    current: BotEntry | None = None
    for line in text.split("\n"):
        trimmed = line.strip()
        match = USER_AGENT_LINE.match(trimmed)
        if match:
            current = BotEntry(name=match.group(1).strip())
            entries.append(current)
        elif current is not None and DISALLOW_ROOT.match(trimmed):
            current.disallowed = True
    return entries


class RobotsTxtCheck(BaseCheck):
    meta = CheckMeta(
        id="robots-txt",
        name="Robots.txt",
        description="Checks AI crawler configuration in robots.txt",
        weight=15,
    )

    async def run(self, ctx: CheckContext) -> CheckResult:
        start = time.perf_counter()
        findings: list[Finding] = []
        score = 100

        res = await ctx.fetch(f"{ctx.url}/robots.txt")
        if not res.ok:
            findings.append(self.failed("/robots.txt not found"))
            return build_result(self.meta, 0, findings, start)

        findings.append(self.passed("/robots.txt exists"))
        text = res.body
        entries = parse_user_agents(text)
        configured = {entry.name.lower() for entry in entries}

        core_configured = [bot for bot in CORE_AI_CRAWLERS if bot.lower() in configured]
        core_missing = [bot for bot in CORE_AI_CRAWLERS if bot.lower() not in configured]

        if len(core_configured) == len(CORE_AI_CRAWLERS):
            findings.append(self.passed(f"All {len(CORE_AI_CRAWLERS)} core AI crawlers explicitly configured"))
        elif core_configured:
            findings.append(
                self.warned(
                    f"{len(core_configured)}/{len(CORE_AI_CRAWLERS)} core AI crawlers configured",
                    detail=f"Missing: {', '.join(core_missing)}",
                )
            )
            score -= round(len(core_missing) / len(CORE_AI_CRAWLERS) * 30)
        else:
            findings.append(
                self.failed(
                    "No core AI crawlers explicitly configured",
                    detail=f"Expected: {', '.join(CORE_AI_CRAWLERS)}",
                )
            )
            score -= 40

        known = {bot.lower() for bot in ALL_AI_CRAWLERS}
        blocked = [entry for entry in entries if entry.disallowed and entry.name.lower() in known]
        if blocked:
            findings.append(
                self.warned(
                    f"{len(blocked)} AI crawler(s) explicitly blocked",
                    detail=", ".join(entry.name for entry in blocked),
                )
            )
            score -= len(blocked) * 3

        if SITEMAP_LINE.search(text):
            findings.append(self.passed("Sitemap directive present"))
        else:
            findings.append(self.warned("No Sitemap directive found"))
            score -= 5

        total_configured = [bot for bot in ALL_AI_CRAWLERS if bot.lower() in configured]
        findings.append(
            Finding(
                status=FindingStatus.PASS if len(total_configured) >= 10 else FindingStatus.WARN,
                message=f"{len(total_configured)}/{len(ALL_AI_CRAWLERS)} known AI crawlers have explicit rules",
            )
        )

        return build_result(self.meta, score, findings, start)
